"""Xiaohongshu-style note drafts for the football Top 10."""
from __future__ import annotations

from typing import Any, List, Sequence

from pydantic import BaseModel, Field, TypeAdapter

from .fallback_generators import MAX_ITEMS, MAX_TAGS, fallback_social_notes
from .models import AnalyzedTopic, SocialNote
from .structured_generation import JSON_ONLY_DIRECTIVE, StructuredGenerationAdapter, require_items

MODEL_READ_TIME = '1-2分钟'

PROMPT_TEMPLATE = """你是一位拥有百万粉丝的小红书足球博主。请为以下足球热点话题生成小红书风格的笔记。

## 小红书爆款笔记特点:
1. 标题：使用 emoji + 吸睛词（震惊/绝绝子/太顶了/必看）+ 核心信息
2. 正文：
   - 开头抓眼球，引发共鸣
   - 分段清晰，每段 2-3 句
   - 使用 emoji 分隔不同观点
   - 口语化表达，像朋友聊天
   - 200-300 字为佳
3. 标签：5-8 个相关话题标签
4. 互动引导：引导评论/点赞/收藏

## 需要生成笔记的话题:
{topics}

请用 JSON 数组格式输出，每个话题一篇，顺序与上面一致：
[
  {{
    "title": "🔥震惊！xxx竟然xxx｜球迷必看",
    "content": "正文内容...",
    "tags": ["足球", "xxx", "xxx"],
    "callToAction": "你们觉得呢？评论区告诉我👇"
  }}
]

{directive}"""


class _NotePayload(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    callToAction: str = Field(..., min_length=1)


_NOTE_LIST = TypeAdapter(List[_NotePayload])


class SocialNoteGenerator(StructuredGenerationAdapter[AnalyzedTopic, List[SocialNote]]):
    """Social post drafts for each analyzed topic."""

    name = "social notes"
    prompt_limit = 10

    def build_prompt(self, items: Sequence[AnalyzedTopic]) -> str:
        topics = "\n\n".join(
            f"{i}. {t.title}\n   摘要: {t.summary}\n   分类: {t.category}"
            for i, t in enumerate(items[:self.prompt_limit], 1)
        )
        return PROMPT_TEMPLATE.format(topics=topics, directive=JSON_ONLY_DIRECTIVE)

    def parse_response(self, data: Any, items: Sequence[AnalyzedTopic]) -> List[SocialNote]:
        payloads = require_items(_NOTE_LIST.validate_python(data)[:MAX_ITEMS], "notes")
        return [
            SocialNote(
                topic_rank=index + 1,
                title=payload.title,
                content=payload.content,
                tags=[tag.lstrip('#').strip() for tag in payload.tags if tag.strip('# ')][:MAX_TAGS],
                call_to_action=payload.callToAction,
                estimated_read_time=MODEL_READ_TIME,
            )
            for index, payload in enumerate(payloads)
        ]

    def fallback(self, items: Sequence[AnalyzedTopic]) -> List[SocialNote]:
        return fallback_social_notes(items)
