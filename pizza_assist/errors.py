"""
Exception types raised by the pizza assist core.

Routes translate these into HTTP responses; everything else that can go wrong
while planning (malformed model output, unknown menu ids, out-of-range sizes)
is recovered locally and never raised.
"""

from typing import Optional


class PizzaAssistError(Exception):
    """Base class for pizza assist errors."""


class CatalogUnavailableError(PizzaAssistError):
    """Raised when the specials/toppings catalog cannot be read."""


class PlanGatewayError(PizzaAssistError):
    """Raised when the chat-completion endpoint answers with a non-success status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Plan gateway returned HTTP {status_code}")


class PlanGatewayUnavailableError(PizzaAssistError):
    """Raised when the chat-completion endpoint cannot be reached or times out."""


class SizePatchError(PizzaAssistError):
    """Raised when the size fallback cannot be applied to a parsed plan."""
