"""AI trend insight for the general hot-list."""
from __future__ import annotations

from typing import Any, Sequence

from .fallback_generators import MAX_ANGLES, fallback_trend_insight
from .models import ScoredRecord, TrendInsight
from .structured_generation import JSON_ONLY_DIRECTIVE, StructuredGenerationAdapter, format_record_lines

PROMPT_TEMPLATE = """你是一位资深的内容创作顾问和社交媒体分析师。请分析以下中文热榜数据，提供专业的创作建议。

## 今日 Top {count} 热点：
{records}

请用中文完成以下分析，并按下面的 JSON 结构输出：

{{
  "insights": "趋势洞察：分析这些热点背后的共同主题和社会情绪，用 2-3 句话总结",
  "creativeAngles": ["5 个独特的创作切入角度，每个角度一句话（反直觉观点、深度分析、个人故事切入、热点借势等）"],
  "trendPrediction": "爆款预测：哪 2-3 个话题最有可能持续发酵，并说明原因"
}}

{directive}"""


class TrendInsightGenerator(StructuredGenerationAdapter[ScoredRecord, TrendInsight]):
    """Creator insight over the top ranked records."""

    name = "trend insight"
    prompt_limit = 10

    def build_prompt(self, items: Sequence[ScoredRecord]) -> str:
        top = list(items[:self.prompt_limit])
        return PROMPT_TEMPLATE.format(
            count=len(top),
            records=format_record_lines(top),
            directive=JSON_ONLY_DIRECTIVE,
        )

    def parse_response(self, data: Any, items: Sequence[ScoredRecord]) -> TrendInsight:
        insight = TrendInsight.model_validate(data)
        if not insight.insights.strip():
            raise ValueError("empty insights")
        angles = [angle.strip() for angle in insight.creative_angles if angle.strip()]
        return insight.model_copy(update={"creative_angles": angles[:MAX_ANGLES]})

    def fallback(self, items: Sequence[ScoredRecord]) -> TrendInsight:
        return fallback_trend_insight(items)
