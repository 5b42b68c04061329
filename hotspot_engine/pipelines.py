"""End-to-end TopHub trends and football hotspot pipelines.

Each run is sequential: scrape -> score/rank -> generate -> save. The model
client (when credentials exist) is created once per run, shared by every
generation step and closed when the run ends.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, List, Optional, Sequence

from pydantic import BaseModel, Field

from fetchers.rule_categorizer import football_categorizer, general_categorizer
from fetchers.tophub_scraper import FOOTBALL_TIME_RANGE, scrape_football_hotspots, scrape_tophub_trends
from fetchers.trend_scorer import TOP_N, analyze_trends, rank_records, score_records
from generation_engine.football_analyzer import FootballAnalyzer
from generation_engine.image_prompts import ImagePromptGenerator
from generation_engine.llm_client import CompletionClient, LLMClient
from generation_engine.models import (
    GenerationResult,
    ScoredRecord,
    ScrapeResult,
    TrendAnalysis,
    TrendRecord,
)
from generation_engine.social_notes import SocialNoteGenerator
from generation_engine.trend_insight import TrendInsightGenerator

from . import reports
from .config import PipelineConfig
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class TophubRunResult(BaseModel):
    scrape: ScrapeResult
    analysis: TrendAnalysis
    insight: GenerationResult
    saved_files: List[Path] = Field(default_factory=list)


class FootballRunResult(BaseModel):
    scrape: ScrapeResult
    ranked: List[ScoredRecord]
    analysis: GenerationResult
    image_prompts: GenerationResult
    social_notes: GenerationResult
    saved_files: List[Path] = Field(default_factory=list)


def _file_stamp() -> str:
    return datetime.now().strftime("%Y-%m-%dT%H-%M-%S")


@asynccontextmanager
async def _run_client(config: PipelineConfig,
                      client: Optional[CompletionClient]) -> AsyncIterator[Optional[CompletionClient]]:
    """Yield the client shared by one run; a client built here is closed on exit."""
    if client is not None or not config.has_credentials:
        yield client
        return
    owned = LLMClient(config)
    try:
        yield owned
    finally:
        await owned.aclose()


def _given_records(records: Sequence[TrendRecord], time_range: str = "") -> ScrapeResult:
    return ScrapeResult(timestamp=datetime.now(timezone.utc).isoformat(), time_range=time_range, items=list(records))


async def run_tophub_trends(config: PipelineConfig,
                            records: Optional[Sequence[TrendRecord]] = None,
                            save_files: bool = True,
                            client: Optional[CompletionClient] = None) -> TophubRunResult:
    """Scrape (unless *records* is given), analyze and report the general hot-list."""
    scrape = _given_records(records) if records is not None else await scrape_tophub_trends(config)
    if not scrape.items:
        logger.warning("⚠️ No hot-list entries to analyze")

    analysis = analyze_trends(scrape.items, general_categorizer(), scrape.timestamp)
    async with _run_client(config, client) as shared:
        insight = await TrendInsightGenerator(config, shared).generate(analysis.top30)

    result = TophubRunResult(scrape=scrape, analysis=analysis, insight=insight)
    if save_files:
        result.saved_files.extend(save_tophub_run(config, result))
    return result


def save_tophub_run(config: PipelineConfig, result: TophubRunResult) -> List[Path]:
    manager = SessionManager(config.output_dir / "trends")
    session_name, session_dir = manager.create_new_session(label="tophub-trends")
    stamp = _file_stamp()

    report = reports.generate_trend_report(result.analysis, result.insight.value, result.insight.from_model)
    paths = [
        manager.save_json(session_dir, "raw_data", f"tophub_hot_{stamp}.json",
                          result.scrape.model_dump(mode="json", by_alias=True)),
        manager.save_frame(session_dir, "analysis", f"tophub_top30_{stamp}.csv",
                           reports.ranked_frame(result.analysis.top30)),
        manager.save_text(session_dir, "reports", f"tophub_analysis_{stamp}.md", report),
    ]
    manager.record_artifacts(session_name, paths)
    return paths


async def run_football_hotspot(config: PipelineConfig,
                               records: Optional[Sequence[TrendRecord]] = None,
                               save_files: bool = True,
                               client: Optional[CompletionClient] = None) -> FootballRunResult:
    """Scrape football entries, analyze the Top 10 and derive prompts and notes."""
    if records is not None:
        scrape = _given_records(records, FOOTBALL_TIME_RANGE)
    else:
        scrape = await scrape_football_hotspots(config)
    if not scrape.items:
        logger.warning("⚠️ No football entries found")

    scored = score_records(scrape.items, football_categorizer())
    # the analyzer counts every entry; only its prompt and Top 10 are truncated
    ranked_all = rank_records(scored, len(scored))
    ranked = ranked_all[:TOP_N]

    async with _run_client(config, client) as shared:
        analysis = await FootballAnalyzer(config, shared).generate(ranked_all)
        top10 = analysis.value.top10
        image_prompts = await ImagePromptGenerator(config, shared).generate(top10)
        social_notes = await SocialNoteGenerator(config, shared).generate(top10)

    result = FootballRunResult(
        scrape=scrape,
        ranked=ranked,
        analysis=analysis,
        image_prompts=image_prompts,
        social_notes=social_notes,
    )
    if save_files:
        result.saved_files.extend(save_football_run(config, result))
    return result


def save_football_run(config: PipelineConfig, result: FootballRunResult) -> List[Path]:
    manager = SessionManager(config.output_dir / "football-hotspot")
    session_name, session_dir = manager.create_new_session(label="football-hotspot")
    stamp = _file_stamp()

    paths = [
        manager.save_json(session_dir, "raw_data", f"football_hotspot_{stamp}.json",
                          result.scrape.model_dump(mode="json", by_alias=True)),
        manager.save_frame(session_dir, "analysis", f"football_ranked_{stamp}.csv",
                           reports.ranked_frame(result.ranked)),
        manager.save_text(session_dir, "reports", f"football_analysis_{stamp}.md",
                          reports.generate_football_report(result.analysis.value, result.analysis.from_model)),
        manager.save_text(session_dir, "reports", f"image_prompts_{stamp}.json",
                          reports.generate_image_prompts_report(result.image_prompts.value)),
        manager.save_text(session_dir, "reports", f"xiaohongshu_notes_{stamp}.md",
                          reports.generate_social_notes_report(result.social_notes.value)),
    ]
    manager.record_artifacts(session_name, paths)
    return paths
