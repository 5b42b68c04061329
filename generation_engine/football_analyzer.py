"""Top 10 football topic analysis (model first, rule-based fallback)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Sequence

from pydantic import BaseModel, Field

from fetchers.rule_categorizer import football_categorizer

from .fallback_generators import MAX_ITEMS, fallback_football_analysis
from .models import AnalyzedTopic, FootballAnalysis, ScoredRecord
from .structured_generation import (
    JSON_ONLY_DIRECTIVE,
    StructuredGenerationAdapter,
    format_record_lines,
    match_source_record,
    require_items,
)

PROMPT_TEMPLATE = """你是一位资深的足球评论员和社交媒体分析师。请分析以下过去24小时的中文足球热榜数据，提供专业的分析报告。

## 今日足球热点 (共{total}条，列出前{count}条):
{records}

请用中文回答，输出格式为 JSON：

{{
  "overview": "用2-3句话总结今日足球热点整体情况",
  "top10": [
    {{
      "rank": 1,
      "title": "原标题（保持与上面列表中的标题一致）",
      "summary": "一句话总结这个话题的核心内容",
      "importance": 9,
      "category": "分类（{categories}）"
    }}
  ],
  "trendInsight": "2-3句话分析当前足球舆论的热点趋势和走向"
}}

注意：
1. 从热点中选出最重要的 Top 10 话题
2. importance 为 1-10 分，10 分最重要
3. 按重要性从高到低排序
4. {directive}"""

# Labels the model may pick from: the rule-based ones plus two model-only buckets
CATEGORY_CHOICES = "/".join(football_categorizer().categories + ["数据", "其他"])


class _TopicPayload(BaseModel):
    title: str = Field(..., min_length=1)
    summary: str
    importance: int
    category: str


class _AnalysisPayload(BaseModel):
    overview: str
    top10: List[_TopicPayload]
    trendInsight: str


class FootballAnalyzer(StructuredGenerationAdapter[ScoredRecord, FootballAnalysis]):
    """Football hot-list analysis over the ranked football records."""

    name = "football analysis"
    prompt_limit = 20

    def build_prompt(self, items: Sequence[ScoredRecord]) -> str:
        top = list(items[:self.prompt_limit])
        return PROMPT_TEMPLATE.format(
            total=len(items),
            count=len(top),
            records=format_record_lines(top),
            categories=CATEGORY_CHOICES,
            directive=JSON_ONLY_DIRECTIVE,
        )

    def parse_response(self, data: Any, items: Sequence[ScoredRecord]) -> FootballAnalysis:
        payload = _AnalysisPayload.model_validate(data)
        topics = require_items(payload.top10[:MAX_ITEMS], "topics")

        top10 = []
        for index, topic in enumerate(topics):
            original = match_source_record(topic.title, items)
            top10.append(AnalyzedTopic(
                rank=index + 1,
                title=topic.title,
                summary=topic.summary,
                importance=min(max(topic.importance, 1), 10),
                category=topic.category,
                original_heat=original.heat if original else '',
                source=original.source if original else '',
            ))

        return FootballAnalysis(
            overview=payload.overview,
            top10=top10,
            trend_insight=payload.trendInsight,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def fallback(self, items: Sequence[ScoredRecord]) -> FootballAnalysis:
        return fallback_football_analysis(items)
