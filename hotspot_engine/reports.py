"""Markdown / JSON report assembly for pipeline results."""
from __future__ import annotations

import json
import math
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from fetchers.heat import parse_heat
from fetchers.rule_categorizer import extract_football_keywords
from fetchers.trend_scorer import recommend_reason
from generation_engine.models import (
    FootballAnalysis,
    ImagePrompt,
    ScoredRecord,
    SocialNote,
    TrendAnalysis,
    TrendInsight,
)

CATEGORY_PREVIEW = 5

CREATIVE_INSPIRATION = [
    "**热点借势**: 结合榜首热点，从独特角度切入评论",
    "**反直觉观点**: 针对大众观点提出不同见解",
    "**深度分析**: 挖掘热点背后的底层逻辑",
    "**个人经历**: 结合热点分享相关亲身经历",
]


def _format_timestamp(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return timestamp


def ranked_frame(records: Sequence[ScoredRecord]) -> pd.DataFrame:
    """Tabular view of ranked records (one row per record, in order)."""
    columns = ["position", "rank", "title", "source", "heat", "heat_value", "category", "score", "keywords", "url"]
    rows = [
        {
            "position": position,
            "rank": r.rank,
            "title": r.title,
            "source": r.source,
            "heat": r.heat,
            "heat_value": parse_heat(r.heat),
            "category": r.category,
            "score": r.score,
            "keywords": "|".join(r.keywords),
            "url": r.url,
        }
        for position, r in enumerate(records, 1)
    ]
    return pd.DataFrame(rows, columns=columns)


def generate_trend_report(analysis: TrendAnalysis, insight: Optional[TrendInsight] = None,
                          insight_from_model: bool = False) -> str:
    """TopHub trends report: top-30 table, top picks, categories, inspiration."""
    lines: List[str] = [
        "# 🔥 TopHub 热榜趋势分析报告",
        "",
        f"📅 **生成时间**: {_format_timestamp(analysis.timestamp)}",
        "",
        "---",
        "",
        f"## 📊 Top {len(analysis.top30)} 热点概览",
        "",
        "| 排名 | 热点标题 | 来源 | 热度 | 分类 | 潜力分 |",
        "|:---:|:---|:---:|:---:|:---:|:---:|",
    ]
    for index, item in enumerate(analysis.top30, 1):
        lines.append(f"| {index} | {item.title} | {item.source} | {item.heat or '-'} | {item.category} | {item.score} |")

    lines += ["", "---", "", f"## 🎯 高潜力选题 (Top {len(analysis.top_picks)})", ""]
    for index, item in enumerate(analysis.top_picks, 1):
        lines += [
            f"### {index}. {item.title}",
            "",
            f"- **来源**: {item.source}",
            f"- **热度**: {item.heat or '无数据'}",
            f"- **分类**: {item.category}",
            f"- **潜力分**: {item.score}/100",
            f"- **推荐理由**: {recommend_reason(item)}",
            "",
        ]

    lines += ["---", "", "## 📁 分类热点", ""]
    for category, items in analysis.category_groups.items():
        lines += [f"### {category}", ""]
        lines += [f"- {item.title} ({item.source}, {item.heat or '-'})" for item in items[:CATEGORY_PREVIEW]]
        lines.append("")

    lines += ["---", "", "## 💡 创作灵感", "", "基于当前热点趋势，建议以下创作角度：", ""]
    lines += [f"{i}. {angle}" for i, angle in enumerate(CREATIVE_INSPIRATION, 1)]
    lines.append("")

    if insight is not None:
        heading = "## 🤖 AI 智能分析" if insight_from_model else "## 🧭 规则引擎分析"
        lines += ["---", "", heading, "", "### 趋势洞察", "", insight.insights, ""]
        if insight.creative_angles:
            lines += ["### 创作角度建议", ""]
            lines += [f"{i}. {angle}" for i, angle in enumerate(insight.creative_angles, 1)]
            lines.append("")
        lines += ["### 爆款预测", "", insight.trend_prediction, ""]

    lines += ["---", "", "*报告由 TopHub Trends 自动生成*", ""]
    return "\n".join(lines)


def generate_football_report(analysis: FootballAnalysis, from_model: bool = False) -> str:
    """Football analysis report with a star rating per topic."""
    lines = [
        "# ⚽ 足球热点分析报告",
        "",
        f"> 生成时间: {_format_timestamp(analysis.timestamp)}",
        "> 数据范围: 过去 24 小时",
        "",
        "## 📊 整体概述",
        "",
        analysis.overview,
        "",
        "## 🏆 Top 10 重要话题",
        "",
    ]
    for topic in analysis.top10:
        stars = "⭐" * math.ceil(topic.importance / 2)
        lines += [
            f"### {topic.rank}. {topic.title}",
            "",
            f"- **分类**: {topic.category}",
            f"- **重要性**: {stars} ({topic.importance}/10)",
            f"- **来源**: {topic.source or '-'} | 热度: {topic.original_heat or '-'}",
            f"- **摘要**: {topic.summary}",
        ]
        keywords = extract_football_keywords(topic.title)
        if keywords:
            lines.append(f"- **关键词**: {'、'.join(keywords)}")
        lines.append("")
    lines += ["## 📈 趋势洞察", "", analysis.trend_insight, "", "---"]
    engine = "AI 模型分析" if from_model else "规则引擎分析"
    lines += [f"*本报告由 Football Hotspot 自动生成，{engine}*", ""]
    return "\n".join(lines)


def generate_image_prompts_report(prompts: Sequence[ImagePrompt]) -> str:
    """Image prompts as pretty-printed JSON (camelCase keys)."""
    return json.dumps([p.model_dump(by_alias=True) for p in prompts], ensure_ascii=False, indent=2)


def generate_social_notes_report(notes: Sequence[SocialNote]) -> str:
    """Social notes ready to copy, one section per note."""
    lines = ["# 📕 小红书足球笔记", "", f"> 共 {len(notes)} 篇笔记待发布", "", "---", ""]
    for note in notes:
        lines += [
            f"## {note.topic_rank}. {note.title}",
            "",
            note.content,
            "",
            f"**话题标签**: {' '.join(f'#{tag}' for tag in note.tags)}",
            "",
            f"**预估阅读时间**: {note.estimated_read_time}",
            "",
            "---",
            "",
        ]
    lines += ["*笔记由 Football Hotspot 自动生成*", "*建议根据个人风格适当调整后发布*", ""]
    return "\n".join(lines)
