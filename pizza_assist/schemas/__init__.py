"""
Schemas Package for Pizza Assist
================================

Pydantic models used for API request validation and response serialization.

Schema Organization:
--------------------
- **cart.py**: CartRequest, CartSummaryItem, CartPlan and the CartAction union
- **search.py**: SearchResult

Usage:
------
    from pizza_assist.schemas import CartPlan, AddPizzaAction, SearchResult
"""

from .cart import (
    CamelModel,
    AddPizzaAction,
    ClearCartAction,
    UpdateSizeAction,
    AddToppingsAction,
    RemoveToppingsAction,
    SetToppingsAction,
    CartAction,
    EDIT_ACTION_TYPES,
    CartPlan,
    CartSummaryItem,
    CartRequest,
)
from .search import SearchResult

__all__ = [
    "CamelModel",
    "AddPizzaAction",
    "ClearCartAction",
    "UpdateSizeAction",
    "AddToppingsAction",
    "RemoveToppingsAction",
    "SetToppingsAction",
    "CartAction",
    "EDIT_ACTION_TYPES",
    "CartPlan",
    "CartSummaryItem",
    "CartRequest",
    "SearchResult",
]
