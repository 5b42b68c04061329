"""Model-first structured generation with a deterministic fallback.

Every generation site (trend insight, football analysis, image prompts,
social notes) follows the same flow::

    Idle -> AwaitingModel -> Resolved      (model JSON parsed and merged)
                          -> FallenBack    (no credential, call failed,
                                            or output unusable)

Sites subclass :class:`StructuredGenerationAdapter` and provide the prompt,
the response parser and the fallback. The model is called at most once per
:meth:`StructuredGenerationAdapter.generate`; failures never reach the caller.
"""
from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from hotspot_engine.config import PipelineConfig

from .llm_client import CompletionClient, LLMClient
from .models import GenerationResult, Provenance, ScoredRecord

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

TITLE_MATCH_PREFIX = 10

JSON_ONLY_DIRECTIVE = (
    "请只输出一个合法的 JSON 值，不要包含 markdown 代码块标记，"
    "不要在 JSON 前后添加任何解释文字。"
)

_CODE_FENCE = re.compile(r"```(?:json|JSON)?[ \t]*\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers the model may wrap JSON in."""
    return _CODE_FENCE.sub("", text or "").strip()


def load_json_payload(text: str) -> Any:
    """Parse model output as JSON after stripping code fences.

    Raises ``json.JSONDecodeError`` (a ``ValueError``) on malformed text.
    """
    return json.loads(strip_code_fences(text))


def match_source_record(title: str, candidates: Iterable[Any],
                        prefix_len: int = TITLE_MATCH_PREFIX) -> Optional[Any]:
    """Find the source record a model-echoed *title* refers to.

    The model may paraphrase, so this is a lossy join: the first candidate
    whose title contains the first *prefix_len* characters of *title* wins,
    then the first candidate whose own prefix occurs in *title*. Returns
    ``None`` when nothing matches. Candidates sharing a prefix resolve to the
    earliest one.
    """
    if not title:
        return None
    candidates = list(candidates)
    prefix = title[:prefix_len]
    for candidate in candidates:
        if prefix in candidate.title:
            return candidate
    for candidate in candidates:
        if candidate.title[:prefix_len] in title:
            return candidate
    return None


def format_record_lines(records: Sequence[ScoredRecord]) -> str:
    """Numbered prompt lines: source, title, heat and category."""
    return "\n".join(
        f"{i}. [{r.source or '未知来源'}] {r.title} (热度: {r.heat or '-'}, 分类: {r.category})"
        for i, r in enumerate(records, 1)
    )


class StructuredGenerationAdapter(ABC, Generic[InputT, OutputT]):
    """Base class for one model-backed generation site."""

    #: Human-readable site name for log lines
    name = "generation"
    #: Number of input items embedded in the prompt
    prompt_limit = 10

    def __init__(self, config: PipelineConfig, client: Optional[CompletionClient] = None):
        self.config = config
        self._client = client
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    @property
    def client(self) -> CompletionClient:
        if self._client is None:
            self._client = LLMClient(self.config)
        return self._client

    @abstractmethod
    def build_prompt(self, items: Sequence[InputT]) -> str:
        """Return the full instruction text for *items*."""

    @abstractmethod
    def parse_response(self, data: Any, items: Sequence[InputT]) -> OutputT:
        """Validate decoded JSON and merge it with source metadata.

        Raise any exception when *data* does not have the expected shape.
        """

    @abstractmethod
    def fallback(self, items: Sequence[InputT]) -> OutputT:
        """Rule-based output with the same shape as :meth:`parse_response`."""

    def _fall_back(self, items: Sequence[InputT]) -> GenerationResult:
        return GenerationResult(value=self.fallback(items), provenance=Provenance.FALLBACK)

    async def generate(self, items: Sequence[InputT]) -> GenerationResult:
        """Run the site once: model first, fallback on anything unusable."""
        items = list(items)

        if not self.config.has_credentials:
            self.logger.info(f"⚠️ No model credential configured, using rule-based {self.name}")
            return self._fall_back(items)

        if not items:
            self.logger.info(f"No input for {self.name}, skipping model call")
            return self._fall_back(items)

        prompt = self.build_prompt(items)

        try:
            self.logger.info(f"🤖 Requesting {self.name} (model: {self.config.model})...")
            raw_text = await self.client.complete(prompt)
        except Exception as e:
            self.logger.error(f"❌ {self.name} model call failed: {e}")
            return self._fall_back(items)

        try:
            value = self.parse_response(load_json_payload(raw_text), items)
        except Exception as e:
            self.logger.warning(f"⚠️ Could not parse {self.name} response, using rule-based output: {e}")
            self.logger.debug(f"Raw response: {raw_text}")
            return self._fall_back(items)

        self.logger.info(f"✅ {self.name} generated by model")
        return GenerationResult(value=value, provenance=Provenance.MODEL)


def require_items(items: List[Any], what: str) -> List[Any]:
    """Reject an empty list where the prompt asked for items."""
    if not items:
        raise ValueError(f"model returned no {what}")
    return items
