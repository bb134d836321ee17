"""
Routes Package for Pizza Assist
===============================

API route definitions. Each module defines a FastAPI APIRouter:

- assist.py: Menu search and cart planning (GET /assist/search, POST /assist/cart)

Routers are registered in main.py under the /api prefix:

    assist_router = APIRouter(prefix="/assist", tags=["Assist"])
"""

from .assist import assist_router, limiter

__all__ = ["assist_router", "limiter"]
