"""Rule-based generators used whenever the model path is unavailable.

Each function mirrors the output shape of its model-backed counterpart and
needs nothing but the input records and the template tables below. They are
total: any input sequence (including an empty one) produces a value, at most
``MAX_ITEMS`` items long, with every text field filled in.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from fetchers.trend_scorer import recommend_reason

from .models import AnalyzedTopic, FootballAnalysis, ImagePrompt, ScoredRecord, SocialNote, TrendInsight

MAX_ITEMS = 10
MAX_ANGLES = 5
OTHER_BUCKET = '其他'
UNKNOWN_SOURCE = '未知来源'
MISSING_HEAT = '-'

# ---------------------------------------------------------------------------
# Trend insight
# ---------------------------------------------------------------------------

ANGLE_TEMPLATES = [
    ('热点借势', '结合「{title}」，从独特角度切入评论'),
    ('反直觉观点', '针对「{title}」的大众观点提出不同见解'),
    ('深度分析', '挖掘「{title}」背后的底层逻辑'),
    ('个人经历', '结合「{title}」分享相关亲身经历'),
    ('数据解读', '用数据拆解「{title}」的来龙去脉'),
]


def fallback_trend_insight(records: Sequence[ScoredRecord]) -> TrendInsight:
    """Template insight over the leading hot-list records."""
    top = list(records[:MAX_ITEMS])
    if not top:
        return TrendInsight(
            insights='暂无热榜数据，无法生成趋势洞察。',
            creative_angles=[],
            trend_prediction='暂无可持续发酵的话题。',
        )

    dominant, count = Counter(r.category for r in top).most_common(1)[0]
    leader = top[0]
    insights = (
        f"今日热榜 Top {len(top)} 中「{dominant}」类话题最多（{count} 条），"
        f"榜首话题为「{leader.title}」（{leader.source or UNKNOWN_SOURCE}，热度 {leader.heat or MISSING_HEAT}）。"
    )

    angles = []
    for index, record in enumerate(top[:MAX_ANGLES]):
        label, template = ANGLE_TEMPLATES[index % len(ANGLE_TEMPLATES)]
        angles.append(f"{label}：{template.format(title=record.title)}")

    prediction = '\n'.join(
        f"{i}. {record.title}：{recommend_reason(record)}"
        for i, record in enumerate(top[:3], 1)
    )
    return TrendInsight(insights=insights, creative_angles=angles, trend_prediction=prediction)


# ---------------------------------------------------------------------------
# Football analysis
# ---------------------------------------------------------------------------

FOOTBALL_OVERVIEW = '过去24小时共收集到 {count} 条足球热点新闻。'
FOOTBALL_INSIGHT = '需要 AI 分析以获取深度洞察。'


def fallback_football_analysis(records: Sequence[ScoredRecord],
                               timestamp: Optional[str] = None) -> FootballAnalysis:
    """Top 10 by position, importance counting down from 10."""
    top10 = [
        AnalyzedTopic(
            rank=index + 1,
            title=record.title,
            summary=record.title,
            importance=10 - index,
            category=record.category,
            original_heat=record.heat or MISSING_HEAT,
            source=record.source or UNKNOWN_SOURCE,
        )
        for index, record in enumerate(records[:MAX_ITEMS])
    ]
    return FootballAnalysis(
        overview=FOOTBALL_OVERVIEW.format(count=len(records)),
        top10=top10,
        trend_insight=FOOTBALL_INSIGHT,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
    )


# ---------------------------------------------------------------------------
# Image prompts
# ---------------------------------------------------------------------------

# Nano Banana: high saturation, flat design with 3D touches, geometric
# shapes, smooth gradients, playful composition
NANO_BANANA_STYLE = (
    'nano banana style, vibrant high-saturation colors, flat design with 3D elements, '
    'geometric shapes, smooth gradients, modern tech aesthetic, playful and dynamic composition'
)
NANO_BANANA_STYLE_CN = 'Nano Banana 风格：高饱和度色彩，扁平化设计搭配3D元素，几何形状，流畅渐变，现代科技感，活泼动感的构图'
QUALITY_SUFFIX = 'ultra detailed, 8k quality, trending on artstation'
QUALITY_SUFFIX_CN = '超高清细节，8K画质，艺术站流行风格'

SCENE_TEMPLATES: Dict[str, Dict[str, str]] = {
    '转会': {
        'scene': 'dramatic airport scene, player silhouette with suitcase',
        'elements': 'airplane, club badges, spotlight, contract papers',
    },
    '比赛': {
        'scene': 'dynamic stadium view, action pose',
        'elements': 'football, goal net, scoreboard, cheering crowd',
    },
    '球员动态': {
        'scene': 'portrait style, player in training',
        'elements': 'jersey, football, training cones, modern facility',
    },
    '荣誉': {
        'scene': 'celebration podium, trophy presentation',
        'elements': 'golden trophy, confetti, medals, camera flashes',
    },
    '争议': {
        'scene': 'split screen dramatic comparison',
        'elements': 'VAR monitor, red card, referee whistle, replay screen',
    },
    OTHER_BUCKET: {
        'scene': 'abstract football composition',
        'elements': 'football, geometric patterns, dynamic lines',
    },
}


def suggested_ratio(category: str) -> str:
    return '16:9' if category == '比赛' else '1:1'


def fallback_image_prompts(topics: Sequence[AnalyzedTopic]) -> List[ImagePrompt]:
    """Category-keyed scene/element prompts in the Nano Banana style."""
    prompts = []
    for index, topic in enumerate(topics[:MAX_ITEMS]):
        template = SCENE_TEMPLATES.get(topic.category, SCENE_TEMPLATES[OTHER_BUCKET])
        prompts.append(ImagePrompt(
            topic_rank=index + 1,
            topic_title=topic.title,
            prompt=f"{template['scene']}, {template['elements']}, {NANO_BANANA_STYLE}, {QUALITY_SUFFIX}",
            prompt_cn=f"{topic.title}，{NANO_BANANA_STYLE_CN}，{QUALITY_SUFFIX_CN}",
            style=NANO_BANANA_STYLE,
            suggested_ratio=suggested_ratio(topic.category),
        ))
    return prompts


# ---------------------------------------------------------------------------
# Social notes
# ---------------------------------------------------------------------------

NOTE_EMOJIS = ['⚽', '🔥', '💯', '🏆', '✨', '👀', '😱', '🎯', '💪', '🌟']
NOTE_HOOKS = ['震惊！', '绝了！', '太顶了！', '必看！', '重磅！', '独家！', '速看！', '球迷必看！']
NOTE_CTAS = [
    '你们怎么看？评论区聊聊👇',
    '点赞收藏，持续更新足球热点🔥',
    '关注我，每天带你追最新球事⚽',
    '同意的点个赞，不同意的评论区battle👊',
    '你支持谁？评论区告诉我👇',
]
NOTE_BODY = """{emoji} {hook}

{summary}

📌 关键信息
这件事为什么重要？因为它直接影响了整个足球圈的走向！

💭 我的看法
作为资深球迷，我觉得这件事情值得大家关注。无论你支持哪支球队，都应该了解这个动态。

{emoji} 后续发展
让我们持续关注，看看接下来会有什么新进展！

{cta}"""

BASE_TAGS = ['足球', '球迷日常', '体育热点']
CATEGORY_TAGS: Dict[str, List[str]] = {
    '转会': ['转会窗', '足球转会', '球员动态'],
    '比赛': ['比赛集锦', '进球瞬间', '足球比赛'],
    '球员动态': ['球星生活', '足坛八卦', '球员日常'],
    '荣誉': ['冠军时刻', '足球荣誉', '颁奖典礼'],
    '争议': ['足球争议', 'VAR', '裁判判罚'],
    OTHER_BUCKET: ['足球资讯', '球坛热议'],
}
MAX_TAGS = 8
TEMPLATE_READ_TIME = '1分钟'


def note_tags(category: str) -> List[str]:
    return (BASE_TAGS + CATEGORY_TAGS.get(category, CATEGORY_TAGS[OTHER_BUCKET]))[:MAX_TAGS]


def fallback_social_notes(topics: Sequence[AnalyzedTopic]) -> List[SocialNote]:
    """Template notes with emoji, hook and call-to-action rotated by position."""
    notes = []
    for index, topic in enumerate(topics[:MAX_ITEMS]):
        emoji = NOTE_EMOJIS[index % len(NOTE_EMOJIS)]
        hook = NOTE_HOOKS[index % len(NOTE_HOOKS)]
        cta = NOTE_CTAS[index % len(NOTE_CTAS)]
        notes.append(SocialNote(
            topic_rank=index + 1,
            title=f"{emoji}{hook}{topic.title}",
            content=NOTE_BODY.format(emoji=emoji, hook=hook, summary=topic.summary or topic.title, cta=cta),
            tags=note_tags(topic.category),
            call_to_action=cta,
            estimated_read_time=TEMPLATE_READ_TIME,
        ))
    return notes
