"""
Plan validator: the last gate before a plan leaves the service.

Every action is checked against the menu snapshot the plan was built from:

- add_pizza: size clamped into [min, max], quantity floored to 1, unknown or
  null specialId drops the action, toppingIds filtered to known ids and
  de-duplicated (first occurrence wins).
- clear_cart: passed through.
- Edit actions (update_size, add_toppings, remove_toppings, set_toppings):
  dropped when targetIdx does not address a cart line; sizes clamped and
  topping lists filtered like add_pizza. add/remove with nothing left to do
  are dropped.

Order is preserved and invalid actions are removed in place. Validating an
already-validated plan returns an equal plan.
"""

import logging
from typing import FrozenSet, Iterable, List, Optional, Sequence

from ..menu_snapshot import MenuSnapshot
from ..schemas.cart import (
    AddPizzaAction,
    AddToppingsAction,
    CartPlan,
    CartSummaryItem,
    ClearCartAction,
    RemoveToppingsAction,
    SetToppingsAction,
    UpdateSizeAction,
)

logger = logging.getLogger(__name__)


def _known_toppings(topping_ids: Iterable[int], known: FrozenSet[int]) -> List[int]:
    """Keep known ids in their original order, each once."""
    seen = set()
    out = []
    for topping_id in topping_ids:
        if topping_id in known and topping_id not in seen:
            seen.add(topping_id)
            out.append(topping_id)
    return out


def _valid_target(target_idx: Optional[int], cart_indexes: Optional[FrozenSet[int]]) -> bool:
    if target_idx is None or target_idx < 0:
        return False
    return cart_indexes is None or target_idx in cart_indexes


def validate_plan(
    plan: CartPlan,
    snapshot: MenuSnapshot,
    cart: Optional[Sequence[CartSummaryItem]] = None,
) -> CartPlan:
    """
    Clamp and filter a parsed plan against the menu snapshot.

    Args:
        plan: Parsed (and size-patched) plan
        snapshot: The menu the prompt was built from
        cart: Caller's cart summary, used to check edit targets

    Returns:
        A plan whose every action references only snapshot ids and in-range sizes.
    """
    sizes = snapshot.sizes
    special_ids = snapshot.special_ids
    topping_ids = snapshot.topping_ids
    cart_indexes = frozenset(item.idx for item in cart) if cart is not None else None

    actions = []
    for action in plan.actions:
        if isinstance(action, AddPizzaAction):
            if action.special_id is None or action.special_id not in special_ids:
                logger.warning("Dropping add_pizza with unknown specialId %s", action.special_id)
                continue
            actions.append(AddPizzaAction(
                special_id=action.special_id,
                quantity=max(1, action.quantity),
                size=sizes.clamp(action.size),
                topping_ids=_known_toppings(action.topping_ids, topping_ids),
            ))

        elif isinstance(action, ClearCartAction):
            actions.append(action)

        elif not _valid_target(getattr(action, "target_idx", None), cart_indexes):
            logger.warning(
                "Dropping %s with invalid targetIdx %s",
                action.type, getattr(action, "target_idx", None),
            )

        elif isinstance(action, UpdateSizeAction):
            if action.new_size is None:
                logger.warning("Dropping update_size without newSize")
                continue
            actions.append(UpdateSizeAction(
                target_idx=action.target_idx,
                new_size=sizes.clamp(action.new_size),
            ))

        elif isinstance(action, AddToppingsAction):
            kept = _known_toppings(action.add_topping_ids, topping_ids)
            if kept:
                actions.append(AddToppingsAction(target_idx=action.target_idx, add_topping_ids=kept))

        elif isinstance(action, RemoveToppingsAction):
            kept = _known_toppings(action.remove_topping_ids, topping_ids)
            if kept:
                actions.append(RemoveToppingsAction(target_idx=action.target_idx, remove_topping_ids=kept))

        elif isinstance(action, SetToppingsAction):
            # An empty list is a valid "no toppings" request
            actions.append(SetToppingsAction(
                target_idx=action.target_idx,
                set_topping_ids=_known_toppings(action.set_topping_ids, topping_ids),
            ))

    if len(actions) != len(plan.actions):
        logger.info("Validator kept %d of %d action(s)", len(actions), len(plan.actions))
    return CartPlan(actions=actions)
