"""
Search Schemas for Pizza Assist
===============================

Response model for GET /api/assist/search.

A result is either a special or a topping; ``kind`` says which optional fields
are populated:

- special: ``description``, ``price`` (base price at the default size) and
  ``sizePrices`` (price at the min, default and max sizes)
- topping: ``price`` only; toppings are not scaled by size

Example:
    [
        {"id": 8, "name": "Margherita", "kind": "special",
         "description": "Traditional Italian pizza with tomatoes and basil",
         "price": 9.99, "sizePrices": {"9": 7.4925, "12": 9.99, "17": 14.1525}},
        {"id": 18, "name": "Basil", "kind": "topping",
         "description": null, "price": 1.5, "sizePrices": null}
    ]
"""

from typing import Dict, Literal, Optional

from .cart import CamelModel


class SearchResult(CamelModel):
    """
    A menu entry matching a search query.

    Attributes:
        id: Special or topping id (unique within its kind)
        name: Display name
        kind: "special" or "topping"
        description: Special description (None for toppings)
        price: Base price for specials, price for toppings
        size_prices: Size (inches) to price, specials only
    """
    id: int
    name: str
    kind: Literal["special", "topping"]
    description: Optional[str] = None
    price: Optional[float] = None
    size_prices: Optional[Dict[int, float]] = None
