"""Potential scoring, ranking and category grouping of hot-list records."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from generation_engine.models import ScoredRecord, TrendAnalysis, TrendRecord

from .heat import parse_heat
from .rule_categorizer import KeywordCategorizer, general_categorizer

logger = logging.getLogger(__name__)

TOP_N = 30
TOP_PICKS = 5
MAX_SCORE = 100

# (threshold, points) - first threshold reached wins
HEAT_TIERS = (
    (10_000_000, 40),  # 1000万以上
    (5_000_000, 30),  # 500万以上
    (1_000_000, 20),  # 100万以上
)
HEAT_FLOOR = 10

SOURCE_WEIGHTS: Dict[str, int] = {
    '微博': 15,
    '知乎': 20,
    '百度': 10,
    '抖音': 12,
    '小红书': 12,
}
DEFAULT_SOURCE_WEIGHT = 5

# (max rank, points)
RANK_TIERS = (
    (3, 20),
    (10, 15),
    (20, 10),
)
RANK_FLOOR = 5

# Counter-intuitive / curiosity phrasing tends to travel further
CURIOSITY_KEYWORDS = ['为什么', '真相', '揭秘', '惊人', '没想到', '不爱', '不想']
CURIOSITY_BONUS = 10


def heat_points(heat_value: float) -> int:
    for threshold, points in HEAT_TIERS:
        if heat_value >= threshold:
            return points
    return HEAT_FLOOR


def source_points(source: str) -> int:
    return SOURCE_WEIGHTS.get(source, DEFAULT_SOURCE_WEIGHT)


def rank_points(rank: int) -> int:
    for max_rank, points in RANK_TIERS:
        if rank <= max_rank:
            return points
    return RANK_FLOOR


def curiosity_points(title: str) -> int:
    return CURIOSITY_BONUS if any(k in title for k in CURIOSITY_KEYWORDS) else 0


def calculate_score(record: TrendRecord, rank: Optional[int] = None) -> int:
    """Return the potential score (10-100) of *record*.

    *rank* overrides ``record.rank`` when the caller has re-ranked the batch.
    """
    position = record.rank if rank is None else rank
    score = (
        heat_points(parse_heat(record.heat))
        + source_points(record.source)
        + rank_points(position)
        + curiosity_points(record.title)
    )
    return min(score, MAX_SCORE)


def score_records(records: Sequence[TrendRecord],
                  categorizer: Optional[KeywordCategorizer] = None) -> List[ScoredRecord]:
    """Attach category, matched keywords and score to each record, keeping order."""
    categorizer = categorizer or general_categorizer()
    scored: List[ScoredRecord] = []
    for record in records:
        scored.append(
            ScoredRecord(
                **record.model_dump(),
                category=categorizer.categorize(record.title),
                score=calculate_score(record),
                keywords=tuple(categorizer.match_keywords(record.title)),
            )
        )
    return scored


def rank_records(scored: Sequence[ScoredRecord], limit: int = TOP_N) -> List[ScoredRecord]:
    """Sort by score descending and keep the first *limit* records.

    ``sorted`` is stable, so equal scores keep their scrape order.
    """
    ranked = sorted(scored, key=lambda r: r.score, reverse=True)
    return ranked[:limit]


def group_by_category(ranked: Sequence[ScoredRecord]) -> Dict[str, List[ScoredRecord]]:
    """Partition *ranked* by category; keys appear in first-seen order."""
    groups: Dict[str, List[ScoredRecord]] = {}
    for record in ranked:
        groups.setdefault(record.category, []).append(record)
    return groups


def analyze_trends(records: Sequence[TrendRecord],
                   categorizer: Optional[KeywordCategorizer] = None,
                   timestamp: Optional[str] = None) -> TrendAnalysis:
    """Score, rank and group one scrape of the hot-list."""
    logger.info(f"📊 Analyzing {len(records)} hot-list records...")

    top30 = rank_records(score_records(records, categorizer), TOP_N)
    groups = group_by_category(top30)

    logger.info(f"✅ Analysis complete: top {len(top30)} records, {len(groups)} categories")
    return TrendAnalysis(
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        top30=top30,
        top_picks=top30[:TOP_PICKS],
        category_groups=groups,
    )


def recommend_reason(record: ScoredRecord) -> str:
    """Explain in a short phrase why *record* is worth writing about."""
    reasons: List[str] = []

    heat_value = parse_heat(record.heat)
    if heat_value >= 10_000_000:
        reasons.append('超高热度话题')
    elif heat_value >= 5_000_000:
        reasons.append('高热度话题')

    if record.source == '知乎':
        reasons.append('适合深度内容创作')
    elif record.source == '微博':
        reasons.append('传播速度快')

    if record.category == '科技':
        reasons.append('科技类内容长尾价值高')
    elif record.category == '财经':
        reasons.append('财经类受众付费意愿强')
    elif record.category == '职场':
        reasons.append('职场内容易引发共鸣')

    if '为什么' in record.title or '如何' in record.title:
        reasons.append('具有明确用户需求导向')

    return '，'.join(reasons) if reasons else '综合潜力较高'
