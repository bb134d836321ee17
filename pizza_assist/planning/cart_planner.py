"""
Cart planner: utterance -> validated CartPlan.

Pipeline:
    build_prompt -> PlanGateway.complete -> parse_plan
        -> apply_size_fallback (best effort) -> validate_plan

Gateway errors propagate to the caller. Everything after the gateway has
answered is fail-soft: the caller always gets a well-formed plan.
"""

import logging

from ..errors import SizePatchError
from ..llm_client import PlanGateway
from ..menu_snapshot import MenuSnapshot
from ..prompt_builder import build_prompt
from ..schemas.cart import CartPlan, CartRequest
from .plan_parser import parse_plan
from .plan_validator import validate_plan
from .size_heuristic import apply_size_fallback

logger = logging.getLogger(__name__)


async def build_cart_plan(
    request: CartRequest,
    snapshot: MenuSnapshot,
    gateway: PlanGateway,
) -> CartPlan:
    """
    Plan the cart actions for one request.

    Args:
        request: Utterance and optional cart summary
        snapshot: Menu read for this request
        gateway: Plan gateway used to draft the plan

    Raises:
        PlanGatewayError: upstream answered with a non-success status
        PlanGatewayUnavailableError: upstream unreachable
    """
    prompt = build_prompt(snapshot, request.utterance, request.cart)
    content = await gateway.complete(prompt.as_messages())

    plan = parse_plan(content, default_size=snapshot.sizes.default)

    try:
        plan = apply_size_fallback(plan, request.utterance, snapshot.sizes)
    except SizePatchError as exc:
        logger.warning("Skipping size fallback: %s", exc)

    plan = validate_plan(plan, snapshot, request.cart)
    logger.info(
        "Planned %d action(s) for user %s", len(plan.actions), request.user_id
    )
    return plan
