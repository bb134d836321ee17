"""
Menu search for the assist typeahead.

Substring search over specials (name or description) and toppings (name),
returning SearchResult entries enriched with per-size prices for specials.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import DEFAULT_SIZE_RANGE, MIN_SEARCH_QUERY_LENGTH, SizeRange
from .errors import CatalogUnavailableError
from .models import Special, Topping
from .schemas.search import SearchResult

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _like_pattern(query: str) -> str:
    """Build a %query% pattern that matches LIKE wildcards literally."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def size_prices(base_price: float, sizes: SizeRange) -> Dict[int, float]:
    """
    Price of a special at the min, default and max sizes.

    price(S) = base_price * S / default. Computed in Decimal so the default
    size maps back to exactly base_price.
    """
    base = Decimal(str(base_price))
    return {
        size: float(base * size / sizes.default)
        for size in (sizes.min, sizes.default, sizes.max)
    }


def search_menu(
    db: Session,
    query: Optional[str],
    sizes: Optional[SizeRange] = None,
) -> List[SearchResult]:
    """
    Search specials and toppings by case-insensitive substring.

    Args:
        db: Database session
        query: Raw query text (trimmed before use)
        sizes: Size range used for special size prices

    Returns:
        Matching specials followed by matching toppings, each in catalog order.
        Queries shorter than MIN_SEARCH_QUERY_LENGTH return [] without
        touching the database.

    Raises:
        CatalogUnavailableError: if the catalog cannot be queried
    """
    q = (query or "").strip()
    if len(q) < MIN_SEARCH_QUERY_LENGTH:
        return []

    sizes = sizes or DEFAULT_SIZE_RANGE
    pattern = _like_pattern(q)

    try:
        specials = (
            db.query(Special)
            .filter(or_(
                Special.name.ilike(pattern, escape=LIKE_ESCAPE),
                Special.description.ilike(pattern, escape=LIKE_ESCAPE),
            ))
            .order_by(Special.id.asc())
            .all()
        )
        toppings = (
            db.query(Topping)
            .filter(Topping.name.ilike(pattern, escape=LIKE_ESCAPE))
            .order_by(Topping.id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        logger.error("Menu search failed for %r: %s", q, exc)
        raise CatalogUnavailableError("Menu catalog is unavailable") from exc

    results = [
        SearchResult(
            id=s.id,
            name=s.name,
            kind="special",
            description=s.description,
            price=s.base_price,
            size_prices=size_prices(s.base_price, sizes),
        )
        for s in specials
    ]
    results.extend(
        SearchResult(id=t.id, name=t.name, kind="topping", price=t.price)
        for t in toppings
    )

    logger.debug(
        "Search %r: %d specials, %d toppings", q, len(specials), len(toppings)
    )
    return results
