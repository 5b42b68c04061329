from pathlib import Path

import pytest

from hotspot_engine import config as config_module
from hotspot_engine.config import GEMINI_OPENAI_BASE_URL, PipelineConfig

ENV_VARS = [
    "HOTSPOT_LLM_PROVIDER", "HOTSPOT_LLM_MODEL", "HOTSPOT_LLM_BASE_URL", "GEMINI_MODEL",
    "GEMINI_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY",
    "SCRAPE_TIMEOUT", "MOCK_MODE", "HOTSPOT_OUTPUT_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)


def test_defaults_without_credentials() -> None:
    config = PipelineConfig.from_env()
    assert config.provider == "gemini"
    assert config.model == "gemini-2.0-flash"
    assert config.api_key is None
    assert not config.has_credentials
    assert config.resolved_base_url == GEMINI_OPENAI_BASE_URL
    assert config.output_dir == Path("outputs")


def test_gemini_from_env(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-1.5-pro")
    monkeypatch.setenv("SCRAPE_TIMEOUT", "15000")
    monkeypatch.setenv("MOCK_MODE", "true")
    monkeypatch.setenv("HOTSPOT_OUTPUT_DIR", "/tmp/hotspots")

    config = PipelineConfig.from_env()

    assert config.has_credentials
    assert config.model == "gemini-1.5-pro"
    assert config.scrape_timeout == 15.0
    assert config.mock_mode
    assert config.output_dir == Path("/tmp/hotspots")


def test_anthropic_provider(monkeypatch) -> None:
    monkeypatch.setenv("HOTSPOT_LLM_PROVIDER", "Anthropic")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
    monkeypatch.setenv("GEMINI_MODEL", "ignored")

    config = PipelineConfig.from_env()

    assert config.provider == "anthropic"
    assert config.model == "claude-3-5-haiku-latest"
    assert config.api_key == "a-key"
    assert config.resolved_base_url is None


def test_overrides_win(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "o-key")
    monkeypatch.setenv("HOTSPOT_LLM_PROVIDER", "openai")
    config = PipelineConfig.from_env(use_ai=False, output_dir=Path("elsewhere"))
    assert config.api_key == "o-key"
    assert not config.has_credentials
    assert config.output_dir == Path("elsewhere")


def test_unknown_provider(monkeypatch) -> None:
    monkeypatch.setenv("HOTSPOT_LLM_PROVIDER", "mistral")
    with pytest.raises(ValueError):
        PipelineConfig.from_env()


def test_api_key_hidden_from_repr() -> None:
    assert "secret" not in repr(PipelineConfig(api_key="secret"))
