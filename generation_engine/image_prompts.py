"""Nano Banana style image prompts for the football Top 10."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field, TypeAdapter

from .fallback_generators import MAX_ITEMS, NANO_BANANA_STYLE, fallback_image_prompts, suggested_ratio
from .models import AnalyzedTopic, ImagePrompt
from .structured_generation import JSON_ONLY_DIRECTIVE, StructuredGenerationAdapter, match_source_record, require_items

PROMPT_TEMPLATE = """你是一位专业的 AI 图片提示词工程师。请为以下足球新闻话题生成 Nano Banana 风格的图片生成提示词。

## Nano Banana 风格特点:
- 高饱和度色彩（明亮的黄、橙、蓝、绿等）
- 扁平化设计 + 3D 立体元素
- 几何形状（圆形、三角形、波浪线）
- 流畅渐变过渡
- 现代科技感
- 活泼、动感的构图
- 适合社交媒体的视觉冲击力

## 需要生成提示词的足球话题:
{topics}

请用 JSON 数组格式输出：
[
  {{
    "topicRank": 1,
    "topicTitle": "话题标题",
    "prompt": "英文版本提示词，详细描述场景、人物、元素、风格、颜色、构图",
    "promptCN": "中文版本提示词",
    "suggestedRatio": "16:9 或 1:1 或 9:16"
  }}
]

注意：
1. 提示词要具体、可执行，能直接用于 Midjourney/DALL-E
2. 融入足球元素（球场、足球、球衣、奖杯等）
3. 保持 Nano Banana 的活泼科技风格
4. 考虑小红书封面的视觉吸引力
5. {directive}"""


class _PromptPayload(BaseModel):
    topicRank: Optional[int] = None
    topicTitle: str = Field(..., min_length=1)
    prompt: str = Field(..., min_length=1)
    promptCN: str = Field(..., min_length=1)
    suggestedRatio: Optional[str] = None


_PROMPT_LIST = TypeAdapter(List[_PromptPayload])


class ImagePromptGenerator(StructuredGenerationAdapter[AnalyzedTopic, List[ImagePrompt]]):
    """Image prompt pairs for each analyzed topic."""

    name = "image prompts"
    prompt_limit = 10

    def build_prompt(self, items: Sequence[AnalyzedTopic]) -> str:
        topics = "\n".join(
            f"{i}. {t.title} (分类: {t.category})"
            for i, t in enumerate(items[:self.prompt_limit], 1)
        )
        return PROMPT_TEMPLATE.format(topics=topics, directive=JSON_ONLY_DIRECTIVE)

    def parse_response(self, data: Any, items: Sequence[AnalyzedTopic]) -> List[ImagePrompt]:
        payloads = require_items(_PROMPT_LIST.validate_python(data)[:MAX_ITEMS], "image prompts")

        prompts = []
        for index, payload in enumerate(payloads):
            topic = match_source_record(payload.topicTitle, items)
            if topic is not None:
                rank = topic.rank
            else:
                rank = payload.topicRank or index + 1
            prompts.append(ImagePrompt(
                topic_rank=rank,
                topic_title=payload.topicTitle,
                prompt=payload.prompt,
                prompt_cn=payload.promptCN,
                style=NANO_BANANA_STYLE,
                suggested_ratio=payload.suggestedRatio or suggested_ratio(topic.category if topic else ''),
            ))
        return prompts

    def fallback(self, items: Sequence[AnalyzedTopic]) -> List[ImagePrompt]:
        return fallback_image_prompts(items)
