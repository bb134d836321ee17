"""Cart planning pipeline: parse, size fallback, validate, orchestrate."""

from .cart_planner import build_cart_plan
from .plan_parser import parse_plan
from .plan_validator import validate_plan
from .size_heuristic import apply_size_fallback, extract_size

__all__ = [
    "apply_size_fallback",
    "build_cart_plan",
    "extract_size",
    "parse_plan",
    "validate_plan",
]
