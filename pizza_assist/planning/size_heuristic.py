"""
Size Heuristic: deterministic size extraction from the raw utterance.

Models routinely leave ``size`` at the default even when the customer named a
size ("a 16\" pepperoni", "large veggie"). This module reads the size straight
from the text and patches add_pizza actions whose size looks unspecified.

Extraction order (the first rule that matches decides):
    1. Size words, looked up in the lowercased text in the order small,
       medium, large: small -> sizes.min, medium -> sizes.default,
       large -> sizes.max. Plain substring checks, so "smallish" counts.
    2. The first one- or two-digit number in the text, optionally followed by
       an inch marker (", in, inch, inches). It is used only if it lies in
       [min, max]; later numbers are never considered ("2 pizzas, 14 inch"
       -> None).

Both functions are independent of the parser and the gateway.
"""

import logging
import re
from typing import Optional

from ..config import DEFAULT_SIZE_RANGE, SizeRange
from ..errors import SizePatchError
from ..schemas.cart import AddPizzaAction, CartPlan

logger = logging.getLogger(__name__)


# =============================================================================
# Patterns
# =============================================================================

SIZE_WORDS = ("small", "medium", "large")

# "12", "12 inch", "12in", '12"', "12 inches"
SIZE_NUMBER_PATTERN = re.compile(r"\b(?P<number>\d{1,2})\s*(?P<unit>\"|inches|inch|in)?\b")


def _word_size(word: str, sizes: SizeRange) -> int:
    if word == "small":
        return sizes.min
    if word == "medium":
        return sizes.default
    return sizes.max


def extract_size(utterance: Optional[str], sizes: SizeRange = DEFAULT_SIZE_RANGE) -> Optional[int]:
    """
    Read a pizza size from free text.

    Args:
        utterance: The customer's request
        sizes: Valid size range

    Returns:
        The size in inches, or None when the text names no usable size.
    """
    if not utterance or not utterance.strip():
        return None
    text = utterance.lower()

    for word in SIZE_WORDS:
        if word in text:
            return _word_size(word, sizes)

    match = SIZE_NUMBER_PATTERN.search(text)
    if match is None:
        return None

    value = int(match.group("number"))
    return value if sizes.contains(value) else None


def _needs_size(action: AddPizzaAction, sizes: SizeRange) -> bool:
    """True when the action's size looks unspecified (non-positive or default)."""
    return action.size <= 0 or action.size == sizes.default


def apply_size_fallback(
    plan: CartPlan,
    utterance: Optional[str],
    sizes: Optional[SizeRange],
) -> CartPlan:
    """
    Overwrite unspecified add_pizza sizes with the size read from the utterance.

    Actions are never reordered or dropped. Returns the input plan unchanged
    when no action needs a size or the utterance names none.

    Raises:
        SizePatchError: if there is no size range to patch against or the
            patch fails unexpectedly
    """
    if sizes is None:
        raise SizePatchError("No size range available for the size fallback")

    try:
        candidates = [
            isinstance(action, AddPizzaAction) and _needs_size(action, sizes)
            for action in plan.actions
        ]
        if not any(candidates):
            return plan

        size = extract_size(utterance, sizes)
        if size is None:
            return plan

        actions = [
            action.model_copy(update={"size": size}) if patch else action
            for action, patch in zip(plan.actions, candidates)
        ]
    except (re.error, TypeError, ValueError) as exc:
        raise SizePatchError(f"Size fallback failed: {exc}") from exc

    logger.debug("Size fallback set size=%d on %d action(s)", size, sum(candidates))
    return CartPlan(actions=actions)
