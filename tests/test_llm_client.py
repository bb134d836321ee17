"""
Tests for the plan gateway, exercising the real OpenAI SDK over a mock transport.
"""
import asyncio
import json
import logging

import httpx
import pytest

from pizza_assist import llm_client
from pizza_assist.config import LlmSettings
from pizza_assist.errors import PlanGatewayError, PlanGatewayUnavailableError
from pizza_assist.llm_client import PlanGateway


SETTINGS = LlmSettings(
    provider="openai",
    model="gpt-4o-mini",
    base_url="https://llm.test/v1",
    api_key="sk-test",
    timeout_seconds=5.0,
    temperature=0.0,
)

MESSAGES = [
    {"role": "system", "content": "You are a strict pizza cart planner."},
    {"role": "user", "content": "one margherita"},
]


def _completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _gateway(handler, settings=SETTINGS):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PlanGateway(settings, http_client=http_client)


class TestRequestShape:

    def test_posts_messages_with_json_object_format(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion('{"actions": []}'))

        content = asyncio.run(_gateway(handler).complete(MESSAGES))

        assert content == '{"actions": []}'
        assert seen["url"] == "https://llm.test/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["messages"] == MESSAGES
        assert seen["body"]["response_format"] == {"type": "json_object"}
        assert seen["body"]["temperature"] == 0.0
        assert "stream" not in seen["body"] or seen["body"]["stream"] is False

    def test_temperature_omitted_when_none(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("{}"))

        settings = LlmSettings(
            provider="ollama",
            model="llama3.1",
            base_url="http://localhost:11434/v1",
            api_key="ollama",
            temperature=None,
        )
        asyncio.run(_gateway(handler, settings).complete(MESSAGES))
        assert "temperature" not in seen["body"]

    def test_endpoint_property(self):
        gateway = _gateway(lambda request: httpx.Response(200, json=_completion("{}")))
        assert gateway.endpoint == "https://llm.test/v1/chat/completions"


class TestResponses:

    def test_no_choices_returns_none(self):
        body = _completion("{}")
        body["choices"] = []
        gateway = _gateway(lambda request: httpx.Response(200, json=body))
        assert asyncio.run(gateway.complete(MESSAGES)) is None

    def test_non_success_status_raises_with_status_and_body(self, caplog):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, json={"error": {"message": "Rate limit reached"}})

        with caplog.at_level(logging.ERROR):
            with pytest.raises(PlanGatewayError) as exc_info:
                asyncio.run(_gateway(handler).complete(MESSAGES))

        assert exc_info.value.status_code == 429
        assert "Rate limit reached" in exc_info.value.body
        assert "LLM error 429" in caplog.text
        # No retries
        assert len(calls) == 1

    def test_server_error_raises(self):
        gateway = _gateway(lambda request: httpx.Response(500, text="upstream exploded"))
        with pytest.raises(PlanGatewayError) as exc_info:
            asyncio.run(gateway.complete(MESSAGES))
        assert exc_info.value.status_code == 500

    def test_connection_failure_raises_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PlanGatewayUnavailableError):
            asyncio.run(_gateway(handler).complete(MESSAGES))


class TestConfiguration:

    def test_missing_openai_key_logs_warning(self, caplog):
        settings = LlmSettings(
            provider="openai", model="gpt-4o-mini", base_url="https://llm.test/v1", api_key=""
        )
        with caplog.at_level(logging.WARNING):
            PlanGateway(settings)
        assert "OPENAI_API_KEY is not set" in caplog.text

    def test_get_plan_gateway_is_cached(self, monkeypatch):
        monkeypatch.setattr(llm_client, "get_llm_settings", lambda: SETTINGS)
        llm_client.get_plan_gateway.cache_clear()
        try:
            first = llm_client.get_plan_gateway()
            assert first is llm_client.get_plan_gateway()
            assert first.settings == SETTINGS
        finally:
            llm_client.get_plan_gateway.cache_clear()
