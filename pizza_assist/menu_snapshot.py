"""
Menu snapshot: the read-only view of the catalog a single request plans against.

A snapshot is taken fresh from the database for every cart request and is
never mutated afterwards. The prompt builder serializes it for the model and
the plan validator checks every referenced id against it, so both sides of
the round-trip agree on exactly one menu.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import DEFAULT_SIZE_RANGE, SizeRange
from .errors import CatalogUnavailableError
from .models import Special, Topping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialEntry:
    id: int
    name: str
    description: str
    base_price: float


@dataclass(frozen=True)
class ToppingEntry:
    id: int
    name: str
    price: float


@dataclass(frozen=True)
class MenuSnapshot:
    """
    Specials, toppings and the size range visible to the planner.

    Entries keep catalog (id) order, which is also the order used in the
    prompt and in search results.
    """
    sizes: SizeRange
    specials: Tuple[SpecialEntry, ...] = ()
    toppings: Tuple[ToppingEntry, ...] = ()

    @property
    def special_ids(self) -> FrozenSet[int]:
        return frozenset(s.id for s in self.specials)

    @property
    def topping_ids(self) -> FrozenSet[int]:
        return frozenset(t.id for t in self.toppings)

    def to_prompt_dict(self) -> Dict[str, Any]:
        """Shape of the MENU block embedded in the planner prompt."""
        return {
            "sizes": {
                "min": self.sizes.min,
                "max": self.sizes.max,
                "default": self.sizes.default,
            },
            "specials": [
                {
                    "id": s.id,
                    "name": s.name,
                    "description": s.description,
                    "basePrice": s.base_price,
                }
                for s in self.specials
            ],
            "toppings": [
                {"id": t.id, "name": t.name, "price": t.price}
                for t in self.toppings
            ],
        }


def load_menu_snapshot(db: Session, sizes: Optional[SizeRange] = None) -> MenuSnapshot:
    """
    Read every special and topping from the catalog.

    Args:
        db: Database session
        sizes: Size range to attach (defaults to the configured range)

    Raises:
        CatalogUnavailableError: if the catalog cannot be queried
    """
    try:
        specials = db.query(Special).order_by(Special.id.asc()).all()
        toppings = db.query(Topping).order_by(Topping.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.error("Failed to load menu snapshot: %s", exc)
        raise CatalogUnavailableError("Menu catalog is unavailable") from exc

    snapshot = MenuSnapshot(
        sizes=sizes or DEFAULT_SIZE_RANGE,
        specials=tuple(
            SpecialEntry(
                id=s.id,
                name=s.name,
                description=s.description or "",
                base_price=s.base_price,
            )
            for s in specials
        ),
        toppings=tuple(
            ToppingEntry(id=t.id, name=t.name, price=t.price)
            for t in toppings
        ),
    )
    logger.debug(
        "Loaded menu snapshot: %d specials, %d toppings",
        len(snapshot.specials), len(snapshot.toppings),
    )
    return snapshot
