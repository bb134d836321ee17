"""
Prompt builder for the cart planner.

Turns a menu snapshot and a customer utterance into the messages sent to the
plan gateway. The system instruction is a fixed rule set followed by the menu
serialized as compact JSON; the model is told to answer with a single JSON
object whose ids come only from that menu.

The builder is a pure function of its inputs: the same snapshot, utterance and
cart always yield byte-identical messages.
"""

import json
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from .menu_snapshot import MenuSnapshot
from .schemas.cart import CartSummaryItem


ACTION_SCHEMA = (
    '{"actions": [{"type": "add_pizza|clear_cart", "specialId": number?, '
    '"quantity": number, "size": number, "toppingIds": number[]?}] }'
)


def _rules(snapshot: MenuSnapshot) -> List[str]:
    sizes = snapshot.sizes
    return [
        "You are a strict pizza cart planner.",
        f"Only output a single JSON object matching this schema: {ACTION_SCHEMA}.",
        "Rules:",
        "- Choose specialId ONLY from the provided MENU JSON below.",
        "- Choose toppingIds ONLY from the provided MENU JSON below.",
        "- Select the special that best matches the user's request by name and description.",
        f"- Map size words to the integer size field: small = {sizes.min}, "
        f"medium = {sizes.default}, large = {sizes.max}.",
        "- Map size mentions like 12, 12\" or 12-inch to the integer size field.",
        f"- If size is not specified, use the default size ({sizes.default}).",
        "- Quantity defaults to 1 if not specified.",
        "- Do NOT invent items. Do NOT add unrelated toppings. Include toppings only if "
        "explicitly requested or clearly implied (e.g., 'extra cheese').",
        "- If the request is ambiguous between specials, prefer the one that explicitly "
        "contains the requested topping in its name/description, otherwise the most generic match.",
        f"- Valid size range is {sizes.min}-{sizes.max}. Clamp into range if needed.",
        "- If the user requests multiple pizzas (e.g., 'two pepperoni'), create one add_pizza "
        "action with quantity set accordingly.",
        "- If the user asks to clear, empty or reset the cart, emit a clear_cart action.",
        "- CURRENT CART, when present, only describes what is already ordered; do not repeat it.",
        "- Never include commentary or extra fields; only the JSON object is allowed.",
    ]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def serialize_menu(snapshot: MenuSnapshot) -> str:
    """Compact JSON of the sizes, specials and toppings in the snapshot."""
    return _compact_json(snapshot.to_prompt_dict())


def serialize_cart(cart: Sequence[CartSummaryItem]) -> str:
    """Compact JSON of the caller's cart summary, in camelCase."""
    return _compact_json([
        item.model_dump(by_alias=True, exclude_none=True) for item in cart
    ])


class PlannerPrompt(NamedTuple):
    """System instruction and user message for one planning request."""
    system_instruction: str
    user_message: str

    def as_messages(self) -> List[Dict[str, str]]:
        """Role-tagged chat messages, system first."""
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_message},
        ]


def build_prompt(
    snapshot: MenuSnapshot,
    utterance: str,
    cart: Optional[Sequence[CartSummaryItem]] = None,
) -> PlannerPrompt:
    """
    Build the planner prompt for an utterance.

    Args:
        snapshot: Menu the plan must be grounded in
        utterance: The customer's free-text request
        cart: Optional summary of the caller's current cart (advisory)

    Returns:
        PlannerPrompt(system_instruction, user_message)
    """
    system_instruction = "\n".join(_rules(snapshot)) + "\n\nMENU:\n" + serialize_menu(snapshot)

    if cart:
        user_message = f"CURRENT CART:\n{serialize_cart(cart)}\n\nREQUEST:\n{utterance}"
    else:
        user_message = utterance

    return PlannerPrompt(system_instruction, user_message)
