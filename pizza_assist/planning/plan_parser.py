"""
Plan parser: model output text -> CartPlan.

The model is asked for a single JSON object but is not trusted to produce one.
Parsing runs in two phases:

1. The JSON is loaded into permissive draft models. Field names are matched
   case-insensitively and without underscores ("specialId", "SpecialID" and
   "special_id" are the same field); unknown fields are ignored.
2. Each draft is projected into the strict CartAction variant named by its
   ``type``. Unknown types are dropped one by one.

Any structural failure (not JSON, not an object, ``actions`` not a list,
wrongly typed fields, nesting too deep to decode) yields an empty CartPlan.
The parser never raises.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import PIZZA_DEFAULT_SIZE
from ..schemas.cart import (
    AddPizzaAction,
    AddToppingsAction,
    CartPlan,
    ClearCartAction,
    RemoveToppingsAction,
    SetToppingsAction,
    UpdateSizeAction,
)

logger = logging.getLogger(__name__)


class DraftAction(BaseModel):
    """Loosely-typed action as the model wrote it."""
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    special_id: Optional[int] = None
    quantity: Optional[int] = None
    size: Optional[int] = None
    topping_ids: Optional[List[int]] = None
    target_idx: Optional[int] = None
    new_size: Optional[int] = None
    add_topping_ids: Optional[List[int]] = None
    remove_topping_ids: Optional[List[int]] = None
    set_topping_ids: Optional[List[int]] = None


class DraftPlan(BaseModel):
    model_config = ConfigDict(extra="ignore")

    actions: Optional[List[DraftAction]] = None


# Lookup key (lowercase, no underscores) -> DraftAction / DraftPlan field name
_FIELD_KEYS = {
    name.replace("_", ""): name
    for name in list(DraftAction.model_fields) + list(DraftPlan.model_fields)
}


def _normalize_keys(value: Any) -> Any:
    """Rename known keys to their snake_case field names, recursively."""
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                continue
            name = _FIELD_KEYS.get(key.replace("_", "").lower())
            if name is not None:
                out[name] = _normalize_keys(item)
        return out
    if isinstance(value, list):
        return [_normalize_keys(item) for item in value]
    return value


def _project(draft: DraftAction, default_size: int):
    """Strict action for a draft, or None when its type is unknown."""
    action_type = (draft.type or "").strip().lower()

    if action_type == "add_pizza":
        return AddPizzaAction(
            special_id=draft.special_id,
            quantity=draft.quantity if draft.quantity is not None else 1,
            size=draft.size if draft.size is not None else default_size,
            topping_ids=draft.topping_ids or [],
        )
    if action_type == "clear_cart":
        return ClearCartAction()
    if action_type == "update_size":
        return UpdateSizeAction(target_idx=draft.target_idx, new_size=draft.new_size)
    if action_type == "add_toppings":
        return AddToppingsAction(
            target_idx=draft.target_idx,
            add_topping_ids=draft.add_topping_ids or [],
        )
    if action_type == "remove_toppings":
        return RemoveToppingsAction(
            target_idx=draft.target_idx,
            remove_topping_ids=draft.remove_topping_ids or [],
        )
    if action_type == "set_toppings":
        return SetToppingsAction(
            target_idx=draft.target_idx,
            set_topping_ids=draft.set_topping_ids or [],
        )
    return None


def parse_plan(raw_text: Optional[str], default_size: int = PIZZA_DEFAULT_SIZE) -> CartPlan:
    """
    Parse model output into a CartPlan.

    Args:
        raw_text: choices[0].message.content from the plan gateway
        default_size: Size used when an add_pizza action omits one

    Returns:
        The parsed plan, or an empty plan if the text is not a well-formed
        plan object.
    """
    if raw_text is None or not raw_text.strip():
        logger.error("Failed to parse LLM JSON: empty content")
        return CartPlan()

    try:
        payload = json.loads(raw_text)
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        draft = DraftPlan.model_validate(_normalize_keys(payload))
    except (ValueError, ValidationError, RecursionError) as exc:
        # json.JSONDecodeError is a ValueError; deeply nested arrays overflow the decoder
        logger.error("Failed to parse LLM JSON: %s; content: %s", exc, raw_text[:500])
        return CartPlan()

    actions = []
    for index, draft_action in enumerate(draft.actions or []):
        action = _project(draft_action, default_size)
        if action is None:
            logger.warning("Dropping action %d with unknown type %r", index, draft_action.type)
            continue
        actions.append(action)

    return CartPlan(actions=actions)
