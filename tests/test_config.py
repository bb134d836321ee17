"""
Tests for configuration values and LLM settings resolution.
"""
import pytest

from pizza_assist import config
from pizza_assist.config import LlmSettings, SizeRange


class TestSizeRange:

    def test_default_range(self):
        assert config.DEFAULT_SIZE_RANGE.min <= config.DEFAULT_SIZE_RANGE.default <= config.DEFAULT_SIZE_RANGE.max

    @pytest.mark.parametrize("size,expected", [(3, 9), (9, 9), (12, 12), (17, 17), (40, 17), (-1, 9)])
    def test_clamp(self, size, expected):
        assert SizeRange(min=9, default=12, max=17).clamp(size) == expected

    def test_contains(self):
        sizes = SizeRange(min=9, default=12, max=17)
        assert sizes.contains(9)
        assert sizes.contains(17)
        assert not sizes.contains(8)
        assert not sizes.contains(18)

    def test_size_range_is_immutable(self):
        sizes = SizeRange(min=9, default=12, max=17)
        with pytest.raises(AttributeError):
            sizes.min = 1


class TestLlmSettings:

    def test_openai_provider(self, monkeypatch):
        monkeypatch.setattr(config, "LLM_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
        monkeypatch.delenv("LLM_MODEL", raising=False)

        settings = config.load_llm_settings()
        assert settings.provider == "openai"
        assert settings.model == "gpt-4o-mini"
        assert settings.api_key == "sk-abc"
        assert settings.base_url == config.OPENAI_BASE_URL

    def test_ollama_provider(self, monkeypatch):
        monkeypatch.setattr(config, "LLM_PROVIDER", "ollama")
        monkeypatch.delenv("LLM_MODEL", raising=False)

        settings = config.load_llm_settings()
        assert settings.provider == "ollama"
        assert settings.model == "llama3.1"
        assert settings.base_url == config.OLLAMA_BASE_URL
        assert settings.api_key

    def test_model_override(self, monkeypatch):
        monkeypatch.setattr(config, "LLM_PROVIDER", "openai")
        monkeypatch.setenv("LLM_MODEL", "gpt-4o")
        assert config.load_llm_settings().model == "gpt-4o"

    def test_missing_openai_key_is_empty(self, monkeypatch):
        monkeypatch.setattr(config, "LLM_PROVIDER", "openai")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert config.load_llm_settings().api_key == ""

    def test_get_llm_settings_cached(self):
        config.get_llm_settings.cache_clear()
        try:
            assert config.get_llm_settings() is config.get_llm_settings()
            assert isinstance(config.get_llm_settings(), LlmSettings)
        finally:
            config.get_llm_settings.cache_clear()


class TestRateLimitConfig:

    def test_get_rate_limit_reads_module_value(self, monkeypatch):
        monkeypatch.setattr(config, "RATE_LIMIT_ASSIST", "5 per second")
        assert config.get_rate_limit_assist() == "5 per second"

    def test_cors_origins_default(self):
        assert config.CORS_ORIGINS
