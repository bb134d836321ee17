"""
Configuration Module for Pizza Assist
=====================================

This module centralizes all configuration settings, environment variables, and
constants used throughout the Pizza Assist service. Values are parsed and typed
at module load time so configuration errors surface at startup rather than in
the middle of a request.

Configuration Categories:
-------------------------
- **Database**: Connection URL for the specials/toppings catalog.

- **Pizza Sizes**: The valid size range (in inches) used for prompt grounding,
  size-price computation, the size heuristic, and clamping.

- **LLM Gateway**: Provider, model, base URL, and credential for the
  chat-completion endpoint that drafts cart plans. Resolved once into an
  immutable LlmSettings value that is handed to the gateway constructor.

- **Rate Limiting**: Request throttling for the assist endpoints.

- **Input Validation**: Maximum utterance length (manages LLM token usage).

- **CORS Settings**: Cross-Origin Resource Sharing for frontend integration.

Environment Variables:
----------------------
- DATABASE_URL: Catalog database URL (default: "sqlite:///./pizza_assist.db")
- PIZZA_MIN_SIZE / PIZZA_DEFAULT_SIZE / PIZZA_MAX_SIZE: Size range (9 / 12 / 17)
- LLM_PROVIDER: "openai" or "ollama" (default: "openai")
- LLM_MODEL: Model name (default: "gpt-4o-mini", "llama3.1" for ollama)
- OPENAI_API_KEY: Credential for the OpenAI provider
- OPENAI_BASE_URL: OpenAI-compatible base URL (default: "https://api.openai.com/v1")
- OLLAMA_BASE_URL: Ollama base URL (default: "http://localhost:11434/v1")
- LLM_TIMEOUT_SECONDS: Gateway request timeout (default: 30)
- LLM_TEMPERATURE: Sampling temperature (default: 0, empty string to omit)
- RATE_LIMIT_ASSIST: Assist endpoint rate limit (default: "30 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- MAX_MESSAGE_LENGTH: Max utterance length (default: 2000)
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from pizza_assist.config import (
        DEFAULT_SIZE_RANGE,
        MAX_MESSAGE_LENGTH,
        get_llm_settings,
    )
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


# =============================================================================
# Database Configuration
# =============================================================================

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pizza_assist.db")


# =============================================================================
# Pizza Size Configuration
# =============================================================================
# Sizes are whole inches. The default size is the one the base price refers to;
# other sizes are priced proportionally.


@dataclass(frozen=True)
class SizeRange:
    """Valid pizza-size range, in inches."""
    min: int
    default: int
    max: int

    def clamp(self, size: int) -> int:
        """Force a size into [min, max]."""
        return max(self.min, min(self.max, size))

    def contains(self, size: int) -> bool:
        return self.min <= size <= self.max


PIZZA_MIN_SIZE: int = int(os.getenv("PIZZA_MIN_SIZE", "9"))
PIZZA_DEFAULT_SIZE: int = int(os.getenv("PIZZA_DEFAULT_SIZE", "12"))
PIZZA_MAX_SIZE: int = int(os.getenv("PIZZA_MAX_SIZE", "17"))

if not (0 < PIZZA_MIN_SIZE <= PIZZA_DEFAULT_SIZE <= PIZZA_MAX_SIZE):
    raise ValueError(
        "Invalid pizza size range: expected 0 < min <= default <= max, got "
        f"min={PIZZA_MIN_SIZE}, default={PIZZA_DEFAULT_SIZE}, max={PIZZA_MAX_SIZE}"
    )

DEFAULT_SIZE_RANGE = SizeRange(
    min=PIZZA_MIN_SIZE,
    default=PIZZA_DEFAULT_SIZE,
    max=PIZZA_MAX_SIZE,
)


# =============================================================================
# LLM Gateway Configuration
# =============================================================================
# The gateway speaks the OpenAI chat-completions protocol. Ollama exposes the
# same protocol under /v1, so both providers share one client.

LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "openai").lower()
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "") or "https://api.openai.com/v1"
OLLAMA_BASE_URL: str = os.getenv("OLLAMA_BASE_URL", "") or "http://localhost:11434/v1"
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

_temperature_env = os.getenv("LLM_TEMPERATURE", "0").strip()
LLM_TEMPERATURE: Optional[float] = float(_temperature_env) if _temperature_env else None


@dataclass(frozen=True)
class LlmSettings:
    """
    Everything the plan gateway needs to reach its provider.

    Attributes:
        provider: "openai" or "ollama"
        model: Model name sent with each request
        base_url: OpenAI-compatible base URL (".../v1")
        api_key: Bearer credential (Ollama ignores it but the SDK requires one)
        timeout_seconds: Per-request timeout
        temperature: Sampling temperature, or None to leave the provider default
    """
    provider: str
    model: str
    base_url: str
    api_key: str
    timeout_seconds: float = 30.0
    temperature: Optional[float] = 0.0


def load_llm_settings() -> LlmSettings:
    """Build LlmSettings from the environment."""
    if LLM_PROVIDER == "ollama":
        return LlmSettings(
            provider="ollama",
            model=os.getenv("LLM_MODEL") or "llama3.1",
            base_url=OLLAMA_BASE_URL,
            api_key="ollama",
            timeout_seconds=LLM_TIMEOUT_SECONDS,
            temperature=LLM_TEMPERATURE,
        )
    return LlmSettings(
        provider="openai",
        model=os.getenv("LLM_MODEL") or "gpt-4o-mini",
        base_url=OPENAI_BASE_URL,
        api_key=os.getenv("OPENAI_API_KEY", ""),
        timeout_seconds=LLM_TIMEOUT_SECONDS,
        temperature=LLM_TEMPERATURE,
    )


@lru_cache(maxsize=1)
def get_llm_settings() -> LlmSettings:
    """
    Return the process-wide LlmSettings, resolved on first use.

    Tests can call get_llm_settings.cache_clear() after changing the
    environment.
    """
    return load_llm_settings()


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Rate limit format: "X per Y" where Y is second, minute, hour, or day

RATE_LIMIT_ASSIST: str = os.getenv("RATE_LIMIT_ASSIST", "30 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_assist() -> str:
    """
    Return the current assist rate limit.

    This function allows dynamic override in tests without modifying
    the module-level constant.
    """
    return RATE_LIMIT_ASSIST


# =============================================================================
# Input Validation Configuration
# =============================================================================

# Prevents excessive LLM token usage from very long utterances
MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "2000"))

# Queries shorter than this (after trimming) return no search results
MIN_SEARCH_QUERY_LENGTH: int = 2

# Identity used when a cart request does not name a user
ANONYMOUS_USER_ID: str = "demo"


# =============================================================================
# CORS Configuration
# =============================================================================
# Format: comma-separated list of origins, e.g., "https://pizza.example.com"
# Default "*" allows all origins (suitable for development only)

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]
