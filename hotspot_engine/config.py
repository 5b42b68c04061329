"""Run configuration for the hotspot pipelines.

A :class:`PipelineConfig` is built once per run (usually via
:meth:`PipelineConfig.from_env`) and handed to the scraper, the model client
and every generator. Nothing here is cached at module level.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

Provider = Literal["gemini", "openai", "anthropic"]

DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}

# Gemini speaks the OpenAI chat-completions protocol on this endpoint
GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class PipelineConfig(BaseModel):
    """Settings consumed by one pipeline run."""

    provider: Provider = "gemini"
    api_key: Optional[str] = Field(None, repr=False, description="Model credential; absent means rule-based only")
    model: str = Field(DEFAULT_MODELS["gemini"], description="Model name passed to the provider")
    base_url: Optional[str] = None
    use_ai: bool = True
    request_timeout: float = Field(60.0, gt=0, description="Model call timeout in seconds")
    scrape_timeout: float = Field(30.0, gt=0, description="Page fetch timeout in seconds")
    mock_mode: bool = False
    output_dir: Path = Path("outputs")

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    @property
    def has_credentials(self) -> bool:
        """True when a model call may be attempted."""
        return self.use_ai and bool(self.api_key)

    @property
    def resolved_base_url(self) -> Optional[str]:
        if self.base_url:
            return self.base_url
        if self.provider == "gemini":
            return GEMINI_OPENAI_BASE_URL
        return None

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Build a config from the process environment (and a ``.env`` file)."""
        load_dotenv()

        provider = os.getenv("HOTSPOT_LLM_PROVIDER", "gemini").strip().lower()
        if provider not in API_KEY_ENV:
            raise ValueError(f"Unknown HOTSPOT_LLM_PROVIDER '{provider}', expected one of {sorted(API_KEY_ENV)}")

        model = os.getenv("HOTSPOT_LLM_MODEL") or (os.getenv("GEMINI_MODEL") if provider == "gemini" else None)
        # SCRAPE_TIMEOUT is given in milliseconds
        scrape_timeout_ms = os.getenv("SCRAPE_TIMEOUT")

        values = {
            "provider": provider,
            "api_key": os.getenv(API_KEY_ENV[provider]) or None,
            "model": model or DEFAULT_MODELS[provider],
            "base_url": os.getenv("HOTSPOT_LLM_BASE_URL") or None,
            "mock_mode": _env_flag("MOCK_MODE"),
            "output_dir": Path(os.getenv("HOTSPOT_OUTPUT_DIR", "outputs")),
        }
        if scrape_timeout_ms:
            values["scrape_timeout"] = int(scrape_timeout_ms) / 1000
        values.update(overrides)
        return cls(**values)
