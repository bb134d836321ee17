"""
Plan gateway: the chat-completion endpoint that drafts cart plans.

Speaks the OpenAI chat-completions protocol through the openai SDK, so it
works against OpenAI itself or any compatible server (Ollama's /v1 API).
One request per plan, JSON-object output mode, no streaming and no retries.

Usage:
    from pizza_assist.config import get_llm_settings
    from pizza_assist.llm_client import PlanGateway

    gateway = PlanGateway(get_llm_settings())
    content = await gateway.complete(prompt.as_messages())
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from .config import LlmSettings, get_llm_settings
from .errors import PlanGatewayError, PlanGatewayUnavailableError

logger = logging.getLogger(__name__)


class PlanGateway:
    """
    Async client for the plan-drafting chat-completion endpoint.

    Args:
        settings: Provider, model, base URL and credential, resolved once at startup
        http_client: Optional httpx.AsyncClient (tests inject a MockTransport here)
    """

    def __init__(self, settings: LlmSettings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        if settings.provider == "openai" and not settings.api_key:
            logger.warning("OPENAI_API_KEY is not set; plan requests will be rejected upstream")

        self._client = AsyncOpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            max_retries=0,
            http_client=http_client,
        )

    @property
    def endpoint(self) -> str:
        """Full URL of the chat-completions endpoint (for diagnostics)."""
        return self.settings.base_url.rstrip("/") + "/chat/completions"

    async def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """
        Send the messages and return the text of the first choice.

        Returns:
            choices[0].message.content, or None if the response carries no choice

        Raises:
            PlanGatewayError: upstream answered with a non-success status
            PlanGatewayUnavailableError: upstream unreachable or timed out
        """
        request: Dict[str, Any] = {
            "model": self.settings.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
        }
        if self.settings.temperature is not None:
            request["temperature"] = self.settings.temperature

        logger.debug("Plan request to %s (model: %s)", self.endpoint, self.settings.model)

        try:
            completion = await self._client.chat.completions.create(**request)
        except APIStatusError as exc:
            body = exc.response.text if exc.response is not None else None
            logger.error("LLM error %s: %s", exc.status_code, body)
            raise PlanGatewayError(exc.status_code, body) from exc
        except APIConnectionError as exc:
            logger.error("Could not reach LLM at %s: %s", self.endpoint, exc)
            raise PlanGatewayUnavailableError(f"Could not reach {self.endpoint}") from exc

        choices = getattr(completion, "choices", None) or []
        if not choices:
            logger.warning("LLM response from %s carried no choices", self.endpoint)
            return None

        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)


@lru_cache(maxsize=1)
def get_plan_gateway() -> PlanGateway:
    """FastAPI dependency returning the process-wide PlanGateway."""
    settings = get_llm_settings()
    logger.info(
        "Plan gateway configured: provider=%s model=%s base_url=%s",
        settings.provider, settings.model, settings.base_url,
    )
    return PlanGateway(settings)
