"""Pydantic data models used across the hotspot engine."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Generic, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class TrendRecord(BaseModel):
    """One scraped hot-list entry. Never mutated once created."""

    rank: int = Field(..., ge=1, description="Position on the source platform's list")
    title: str = Field(..., min_length=1, description="Headline text")
    heat: str = Field("", description="Platform heat string, e.g. '5356万'")
    source: str = Field("", description="Platform label, e.g. '微博'")
    url: str = Field("", description="Absolute link to the entry")

    model_config = _FROZEN


class ScoredRecord(TrendRecord):
    """A record after categorization and potential scoring."""

    category: str
    score: int = Field(..., ge=0, le=100, description="Potential score, higher is better")
    keywords: Tuple[str, ...] = Field(default_factory=tuple, description="Matched category keywords")

    model_config = _FROZEN


class ScrapeResult(BaseModel):
    """Records returned by one scrape of the hot-list page."""

    timestamp: str
    time_range: str = Field("", alias="timeRange")
    items: List[TrendRecord] = Field(default_factory=list)
    is_mock: bool = Field(False, alias="isMock")

    model_config = _FROZEN


class TrendAnalysis(BaseModel):
    """Ranked and grouped view of one scrape."""

    timestamp: str
    top30: List[ScoredRecord] = Field(default_factory=list)
    top_picks: List[ScoredRecord] = Field(default_factory=list, alias="topPicks")
    category_groups: Dict[str, List[ScoredRecord]] = Field(default_factory=dict, alias="categoryGroups")

    model_config = _FROZEN


class Provenance(str, Enum):
    """Where a generated value came from."""

    MODEL = "FromModel"
    FALLBACK = "FromFallback"


class GenerationResult(BaseModel, Generic[T]):
    """Outcome of one structured-generation call, tagged with its provenance."""

    value: T
    provenance: Provenance

    model_config = ConfigDict(frozen=True)

    @property
    def from_model(self) -> bool:
        return self.provenance is Provenance.MODEL

    @property
    def from_fallback(self) -> bool:
        return self.provenance is Provenance.FALLBACK


# ---------------------------------------------------------------------------
# Generated artifacts
# ---------------------------------------------------------------------------


class TrendInsight(BaseModel):
    """Creator-oriented reading of the general hot-list."""

    insights: str
    creative_angles: List[str] = Field(default_factory=list, alias="creativeAngles")
    trend_prediction: str = Field(..., alias="trendPrediction")

    model_config = _FROZEN


class AnalyzedTopic(BaseModel):
    """One football topic in the Top 10 analysis."""

    rank: int = Field(..., ge=1)
    title: str
    summary: str
    importance: int = Field(..., ge=1, le=10)
    category: str
    original_heat: str = Field("", alias="originalHeat")
    source: str = ""

    model_config = _FROZEN


class FootballAnalysis(BaseModel):
    """Overview, Top 10 topics and trend insight for the football hot-list."""

    overview: str
    top10: List[AnalyzedTopic] = Field(default_factory=list)
    trend_insight: str = Field(..., alias="trendInsight")
    timestamp: str

    model_config = _FROZEN


class ImagePrompt(BaseModel):
    """Image-generation prompt pair for one topic."""

    topic_rank: int = Field(..., alias="topicRank")
    topic_title: str = Field(..., alias="topicTitle")
    prompt: str
    prompt_cn: str = Field(..., alias="promptCN")
    style: str
    suggested_ratio: str = Field(..., alias="suggestedRatio")

    model_config = _FROZEN


class SocialNote(BaseModel):
    """Xiaohongshu-style post draft for one topic."""

    topic_rank: int = Field(..., alias="topicRank")
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    call_to_action: str = Field(..., alias="callToAction")
    estimated_read_time: str = Field(..., alias="estimatedReadTime")

    model_config = _FROZEN
