#!/usr/bin/env python3
"""Console-script wrappers for the hotspot pipelines.

After an editable install (``pip install -e .``) the following commands become
available system-wide:

* ``tophub-trends``     – scrape the TopHub hot-list, score it and write a report
* ``football-hotspot``  – football Top 10 analysis, image prompts and social notes

Both commands read model credentials from the environment (or a ``.env`` file)
and fall back to rule-based output when none is configured.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import PipelineConfig
from .pipelines import run_football_hotspot, run_tophub_trends

LOGGER = logging.getLogger(__name__)


def _build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--no-ai",
        dest="use_ai",
        action="store_false",
        help="Skip the model call and use rule-based output only",
    )
    parser.add_argument(
        "--no-save",
        dest="save_files",
        action="store_false",
        help="Do not write session files",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the full run result as JSON",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use bundled sample data instead of scraping",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for session output (default: $HOTSPOT_OUTPUT_DIR or ./outputs)",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> PipelineConfig:
    overrides = {"use_ai": args.use_ai}
    if args.mock:
        overrides["mock_mode"] = True
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    return PipelineConfig.from_env(**overrides)


def _configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")


def _print_saved(paths: List[Path]) -> None:
    for path in paths:
        print(f"  - {path}")


# ---------------------------------------------------------------------------
# Entry-points
# ---------------------------------------------------------------------------

def tophub_trends(argv: Optional[List[str]] = None) -> None:
    """Run the *TopHub trends* pipeline."""
    parser = _build_parser("Scrape TopHub, rank hot topics and write a trend report")
    args = parser.parse_args(argv)
    _configure_logging()

    try:
        config = _config_from_args(args)
        result = asyncio.run(run_tophub_trends(config, save_files=args.save_files))
    except Exception as e:
        LOGGER.error(f"❌ TopHub trends pipeline failed: {e}")
        sys.exit(1)

    if args.as_json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return

    print(f"\n🔥 Top {len(result.analysis.top_picks)} picks:")
    for index, item in enumerate(result.analysis.top_picks, 1):
        print(f"  {index}. {item.title} [{item.category}] score={item.score}")
    print(f"\n🤖 Insight: {'model' if result.insight.from_model else 'rule-based'}")
    if result.saved_files:
        print("\n📁 Saved files:")
        _print_saved(result.saved_files)
    LOGGER.info("🎉 TopHub trends pipeline finished successfully")


def football_hotspot(argv: Optional[List[str]] = None) -> None:
    """Run the *football hotspot* pipeline."""
    parser = _build_parser("Analyze football hot topics and generate image prompts and notes")
    args = parser.parse_args(argv)
    _configure_logging()

    try:
        config = _config_from_args(args)
        result = asyncio.run(run_football_hotspot(config, save_files=args.save_files))
    except Exception as e:
        LOGGER.error(f"❌ Football hotspot pipeline failed: {e}")
        sys.exit(1)

    if args.as_json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return

    analysis = result.analysis.value
    print(f"\n⚽ {len(result.scrape.items)} football entries, Top {len(analysis.top10)}:")
    for topic in analysis.top10:
        print(f"  {topic.rank}. {topic.title} [{topic.category}] importance={topic.importance}")
    print(f"\n🎨 Image prompts: {len(result.image_prompts.value)} "
          f"({'model' if result.image_prompts.from_model else 'rule-based'})")
    print(f"📕 Social notes: {len(result.social_notes.value)} "
          f"({'model' if result.social_notes.from_model else 'rule-based'})")
    if result.saved_files:
        print("\n📁 Saved files:")
        _print_saved(result.saved_files)
    LOGGER.info("🎉 Football hotspot pipeline finished successfully")


if __name__ == "__main__":
    tophub_trends()
