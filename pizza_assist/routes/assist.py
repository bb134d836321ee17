"""
Assist Routes for Pizza Assist
==============================

This module contains the customer-facing assist endpoints: menu typeahead
search and natural-language cart planning.

Endpoints:
----------
- GET /assist/search?q=...: Search specials and toppings
- POST /assist/cart: Translate an utterance into a CartPlan

Both endpoints are anonymous. They are mounted under /api by main.py.

Cart Planning Flow:
-------------------
1. The menu snapshot is read fresh from the catalog (threadpool)
2. The planner builds the prompt and awaits the plan gateway
3. The model output is parsed, size-patched and validated
4. The validated CartPlan is returned; the caller applies it to its cart

Error Mapping:
--------------
- Catalog unreachable: 503
- Plan gateway non-success status: 400 with the upstream status
  (the upstream body is logged, never returned)
- Any other exception while planning: 500
- Malformed model output is not an error: 200 with an empty plan

Rate Limiting:
--------------
Both endpoints are rate limited per client address (default: 30/minute)
to manage LLM API costs.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_assist
from ..db import get_db
from ..errors import CatalogUnavailableError, PlanGatewayError
from ..llm_client import PlanGateway, get_plan_gateway
from ..menu_snapshot import load_menu_snapshot
from ..planning import build_cart_plan
from ..schemas import CartPlan, CartRequest, SearchResult
from ..search_index import search_menu


logger = logging.getLogger(__name__)

# Router definition
assist_router = APIRouter(prefix="/assist", tags=["Assist"])

# Shared with main.py, which registers it on app.state
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


# =============================================================================
# Search Endpoint
# =============================================================================

@assist_router.get("/search", response_model=List[SearchResult])
@limiter.limit(get_rate_limit_assist)
def search(
    request: Request,
    q: str = Query("", description="Search text (at least 2 characters)"),
    db: Session = Depends(get_db),
) -> List[SearchResult]:
    """
    Search specials (name or description) and toppings (name).

    Specials come first and carry per-size prices. Queries shorter than
    two characters return an empty list.
    """
    try:
        return search_menu(db, q)
    except CatalogUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc))


# =============================================================================
# Cart Planning Endpoint
# =============================================================================

@assist_router.post("/cart", response_model=CartPlan)
@limiter.limit(get_rate_limit_assist)
async def plan_cart(
    request: Request,
    cart_request: CartRequest,
    db: Session = Depends(get_db),
    gateway: PlanGateway = Depends(get_plan_gateway),
) -> CartPlan:
    """
    Translate a free-text order into an ordered list of cart actions.

    The returned plan only references specials and toppings that exist in
    the catalog, with sizes inside the valid range.
    """
    request_id = getattr(request.state, "request_id", None)

    try:
        snapshot = await run_in_threadpool(load_menu_snapshot, db)
    except CatalogUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc))

    try:
        return await build_cart_plan(cart_request, snapshot, gateway)
    except PlanGatewayError as exc:
        logger.error(
            "Plan gateway returned %s [%s]: %s", exc.status_code, request_id, exc.body
        )
        raise HTTPException(
            status_code=400,
            detail={"error": "Plan gateway request failed", "status": exc.status_code},
        )
    except Exception:
        logger.exception("Exception calling plan gateway [%s]", request_id)
        raise HTTPException(
            status_code=500,
            detail={"error": "Exception calling plan gateway"},
        )
