"""Hosted language-model client (OpenAI-compatible and Anthropic APIs)."""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from hotspot_engine.config import PipelineConfig

SYSTEM_PROMPT = "你是一位资深的内容创作顾问和社交媒体分析师。只输出合法的 JSON。"
MAX_TOKENS = 4000
TEMPERATURE = 0.7


def get_logger():
    """Get configured logger."""
    return logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def complete(self, prompt: str) -> str:
        ...


class LLMClient:
    """Single-shot text completion against the configured provider.

    Errors are raised to the caller; the generation adapters decide what a
    failure means.
    """

    def __init__(self, config: PipelineConfig):
        self.config = config
        self.logger = get_logger()
        self._client = None

    def _init_openai(self):
        """Initialize an OpenAI-protocol client (OpenAI or Gemini)."""
        import openai

        return openai.AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.resolved_base_url,
            timeout=self.config.request_timeout,
            max_retries=0,
        )

    def _init_claude(self):
        """Initialize an Anthropic client."""
        import anthropic

        return anthropic.AsyncAnthropic(
            api_key=self.config.api_key,
            timeout=self.config.request_timeout,
            max_retries=0,
        )

    def _get_client(self):
        if self._client is None:
            if self.config.provider == "anthropic":
                self._client = self._init_claude()
            else:
                self._client = self._init_openai()
            self.logger.info(f"{self.config.provider} client initialized (model: {self.config.model})")
        return self._client

    async def aclose(self) -> None:
        """Close the underlying SDK client, if one was created."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _call_openai(self, prompt: str) -> Optional[str]:
        response = await self._get_client().chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )
        return response.choices[0].message.content

    async def _call_claude(self, prompt: str) -> Optional[str]:
        response = await self._get_client().messages.create(
            model=self.config.model,
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")

    async def complete(self, prompt: str) -> str:
        """Send *prompt* once and return the raw response text."""
        if self.config.provider == "anthropic":
            text = await self._call_claude(prompt)
        else:
            text = await self._call_openai(prompt)

        if not text:
            raise ValueError(f"Empty response from {self.config.provider}")
        return text
