"""
Cart Planning Schemas for Pizza Assist
======================================

This module defines the Pydantic models for the cart-planning endpoint: the
inbound CartRequest and the outbound CartPlan.

Endpoint Coverage:
------------------
- POST /api/assist/cart: Translate an utterance into a CartPlan

Key Concepts:
-------------
1. **Actions**: A CartPlan is an ordered list of CartAction values. CartAction
   is a closed tagged union discriminated by ``type``:

   - ``add_pizza``: add ``quantity`` pizzas of a special at ``size`` inches
     with extra ``toppingIds``
   - ``clear_cart``: empty the cart (no payload)

   The edit variants (``update_size``, ``add_toppings``, ``remove_toppings``,
   ``set_toppings``) address an existing cart line by ``targetIdx``. The
   planner prompt never asks for them; they are accepted and validated if the
   model emits them.

2. **Plans, not mutations**: The service never touches the cart. The caller
   applies the actions in order against its own cart engine.

3. **Cart summary**: A request may describe the caller's current cart. It is
   advisory context for the planner and is never modified.

Wire Format:
------------
Field names are camelCase on the wire (``specialId``, ``toppingIds``,
``targetIdx``) and snake_case in Python. Both spellings are accepted on input.

    {"actions": [
        {"type": "add_pizza", "specialId": 1, "quantity": 1, "size": 12, "toppingIds": [7]},
        {"type": "clear_cart"}
    ]}

Validation:
-----------
Action models carry no range constraints: a model that answers with
``quantity: 0`` still produces a well-formed action, which the plan validator
then floors to 1. Range and referential invariants are enforced by
``pizza_assist.planning.plan_validator``, not here.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import ANONYMOUS_USER_ID, MAX_MESSAGE_LENGTH, PIZZA_DEFAULT_SIZE


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Cart Actions
# =============================================================================

class AddPizzaAction(CamelModel):
    """
    Add one or more pizzas of a special.

    Attributes:
        special_id: Id of the special (null when the model could not pick one)
        quantity: Number of identical pizzas
        size: Size in inches
        topping_ids: Extra topping ids, applied to every pizza of the action
    """
    type: Literal["add_pizza"] = "add_pizza"
    special_id: Optional[int] = None
    quantity: int = 1
    size: int = PIZZA_DEFAULT_SIZE
    topping_ids: List[int] = Field(default_factory=list)


class ClearCartAction(CamelModel):
    """Remove everything from the cart."""
    type: Literal["clear_cart"] = "clear_cart"


class UpdateSizeAction(CamelModel):
    """Change the size of the cart line at target_idx."""
    type: Literal["update_size"] = "update_size"
    target_idx: Optional[int] = None
    new_size: Optional[int] = None


class AddToppingsAction(CamelModel):
    """Add toppings to the cart line at target_idx."""
    type: Literal["add_toppings"] = "add_toppings"
    target_idx: Optional[int] = None
    add_topping_ids: List[int] = Field(default_factory=list)


class RemoveToppingsAction(CamelModel):
    """Remove toppings from the cart line at target_idx."""
    type: Literal["remove_toppings"] = "remove_toppings"
    target_idx: Optional[int] = None
    remove_topping_ids: List[int] = Field(default_factory=list)


class SetToppingsAction(CamelModel):
    """Replace all toppings of the cart line at target_idx."""
    type: Literal["set_toppings"] = "set_toppings"
    target_idx: Optional[int] = None
    set_topping_ids: List[int] = Field(default_factory=list)


CartAction = Annotated[
    Union[
        AddPizzaAction,
        ClearCartAction,
        UpdateSizeAction,
        AddToppingsAction,
        RemoveToppingsAction,
        SetToppingsAction,
    ],
    Field(discriminator="type"),
]

EDIT_ACTION_TYPES = (
    UpdateSizeAction,
    AddToppingsAction,
    RemoveToppingsAction,
    SetToppingsAction,
)


class CartPlan(CamelModel):
    """
    Ordered list of cart actions produced from one utterance.

    An empty list means no actionable intent was recognized.
    """
    actions: List[CartAction] = Field(default_factory=list)


# =============================================================================
# Requests
# =============================================================================

class CartSummaryItem(CamelModel):
    """
    One line of the caller's current cart, for edit-style requests.

    Attributes:
        idx: Position the caller uses to address this line
        special_id: Special on this line
        size: Current size in inches
        topping_ids: Current extra toppings
        label: Optional human-readable label ("Large pepperoni")
    """
    idx: int
    special_id: int
    size: int
    topping_ids: List[int] = Field(default_factory=list)
    label: Optional[str] = None


class CartRequest(CamelModel):
    """
    Request body for POST /api/assist/cart.

    Attributes:
        utterance: Free-text order ("two large pepperoni, extra cheese")
        user_id: Caller identity (anonymous demo identity by default)
        cart: Optional summary of the caller's current cart
    """
    utterance: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    user_id: str = ANONYMOUS_USER_ID
    cart: Optional[List[CartSummaryItem]] = None
