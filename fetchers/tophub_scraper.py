"""TopHub hot-list scraper (https://tophub.today/).

Fetches the aggregator page once, turns every platform card into
:class:`TrendRecord` objects and falls back to bundled sample data when the
page cannot be fetched or parsed.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

import httpx
from bs4 import BeautifulSoup

from generation_engine.models import ScrapeResult, TrendRecord
from hotspot_engine.config import PipelineConfig

from .heat import parse_heat
from .rule_categorizer import is_football_related

logger = logging.getLogger(__name__)

TOPHUB_URL = "https://tophub.today/"
UNKNOWN_SOURCE = "未知来源"
FOOTBALL_TIME_RANGE = "过去24小时"

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Cache-Control": "max-age=0",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _absolute_url(href: str) -> str:
    if href.startswith("http"):
        return href
    return f"{TOPHUB_URL.rstrip('/')}{href}"


def parse_tophub_html(html: str) -> List[TrendRecord]:
    """Parse TopHub markup into records; rank restarts at 1 for every card."""
    soup = BeautifulSoup(html, "html.parser")
    records: List[TrendRecord] = []

    for card in soup.select(".cc-cd"):
        label = card.select_one(".cc-cd-lb span")
        source = label.get_text(strip=True) if label else ""
        source = source or UNKNOWN_SOURCE

        for index, item in enumerate(card.select(".cc-cd-cb-l a")):
            spans = item.find_all("span")
            # span 0: rank, span 1: title, span 2: heat
            title = spans[1].get_text(strip=True) if len(spans) > 1 else ""
            heat = spans[2].get_text(strip=True) if len(spans) > 2 else ""
            if not title:
                continue
            records.append(TrendRecord(
                rank=index + 1,
                title=title,
                heat=heat,
                source=source,
                url=_absolute_url(item.get("href") or ""),
            ))

    return records


def filter_football(records: List[TrendRecord]) -> List[TrendRecord]:
    """Keep football headlines, order by heat and renumber from 1."""
    football = [r for r in records if is_football_related(r.title)]
    football.sort(key=lambda r: parse_heat(r.heat), reverse=True)
    return [r.model_copy(update={"rank": index + 1}) for index, r in enumerate(football)]


async def fetch_tophub_html(config: PipelineConfig) -> str:
    """Download the aggregator page. Raises on network or HTTP errors."""
    async with httpx.AsyncClient(timeout=config.scrape_timeout, headers=HEADERS,
                                 follow_redirects=True) as client:
        response = await client.get(TOPHUB_URL)
        response.raise_for_status()
        return response.text


async def _scrape_records(config: PipelineConfig) -> List[TrendRecord]:
    logger.info("📡 Fetching TopHub hot-list...")
    html = await fetch_tophub_html(config)
    records = parse_tophub_html(html)
    if not records:
        raise ValueError("no hot-list entries found in page")
    return records


async def scrape_tophub_trends(config: PipelineConfig) -> ScrapeResult:
    """Scrape every hot-list card on TopHub."""
    if config.mock_mode:
        return get_mock_trends()

    try:
        records = await _scrape_records(config)
    except Exception as e:
        logger.warning(f"⚠️ Scrape failed, using mock data: {e}")
        return get_mock_trends()

    logger.info(f"✅ Scraped {len(records)} hot-list entries")
    return ScrapeResult(timestamp=_now(), items=records)


async def scrape_football_hotspots(config: PipelineConfig) -> ScrapeResult:
    """Scrape TopHub and keep only football-related entries."""
    if config.mock_mode:
        return get_mock_football()

    try:
        records = await _scrape_records(config)
    except Exception as e:
        logger.warning(f"⚠️ Scrape failed, using mock football data: {e}")
        return get_mock_football()

    football = filter_football(records)
    logger.info(f"✅ Found {len(football)} football entries out of {len(records)}")
    return ScrapeResult(timestamp=_now(), time_range=FOOTBALL_TIME_RANGE, items=football)


# ---------------------------------------------------------------------------
# Sample data (offline runs and scrape failures)
# ---------------------------------------------------------------------------

_MOCK_TRENDS = [
    ("AI 技术突破：新模型性能提升 50%", "5356万", "微博"),
    ("春节档电影票房预测出炉", "3200万", "微博"),
    ("新能源汽车销量创新高", "2800万", "知乎"),
    ("年轻人为什么不爱存钱了", "2500万", "知乎"),
    ("多地发布楼市新政", "2100万", "百度"),
    ("某明星官宣喜讯", "1900万", "微博"),
    ("程序员薪资调查报告", "1700万", "知乎"),
    ("健康饮食新趋势", "1500万", "小红书"),
    ("职场人如何高效学习", "1300万", "知乎"),
    ("旅游业复苏数据公布", "1200万", "百度"),
    ("教育改革新方向", "1100万", "微博"),
    ("科技公司裁员潮分析", "1050万", "知乎"),
    ("新款手机发布会预告", "980万", "微博"),
    ("考研成绩公布", "950万", "微博"),
    ("年终奖发放情况调查", "920万", "知乎"),
    ("健身行业新变化", "880万", "小红书"),
    ("美食探店攻略", "850万", "抖音"),
    ("投资理财新思路", "820万", "知乎"),
    ("宠物经济分析", "780万", "小红书"),
    ("远程办公效率提升", "750万", "知乎"),
    ("新剧热播引发讨论", "720万", "微博"),
    ("环保新政策解读", "680万", "百度"),
    ("电商直播新玩法", "650万", "抖音"),
    ("心理健康话题受关注", "620万", "知乎"),
    ("时尚潮流趋势预测", "580万", "小红书"),
    ("体育赛事最新战报", "550万", "微博"),
    ("游戏行业新动态", "520万", "知乎"),
    ("创业故事分享", "480万", "知乎"),
    ("亲子教育讨论", "450万", "小红书"),
    ("职场晋升技巧", "420万", "知乎"),
]

_MOCK_FOOTBALL = [
    ("梅西加盟迈阿密国际后首次回归欧冠赛场", "5356万", "微博"),
    ("皇马官宣姆巴佩正式加盟 身披7号球衣", "4200万", "虎扑"),
    ("英超争冠白热化 曼城阿森纳同分", "3800万", "懂球帝"),
    ("C罗沙特联赛戴帽 本赛季已打进35球", "3500万", "微博"),
    ("欧冠半决赛对阵出炉 皇马对阵拜仁", "3200万", "虎扑"),
    ("中超联赛第10轮综述 上港继续领跑", "2800万", "懂球帝"),
    ("武磊替补登场完成助攻 西班牙人3-1大胜", "2500万", "微博"),
    ("利物浦公布新赛季球衣 致敬伊斯坦布尔奇迹", "2200万", "虎扑"),
    ("哈兰德缺战两周 曼城前锋线告急", "2000万", "懂球帝"),
    ("巴萨青训再出新星 17岁小将首秀破门", "1800万", "虎扑"),
    ("国足世预赛名单公布 归化球员悉数入选", "1600万", "微博"),
    ("德甲收官战多特蒙德逆转夺冠", "1400万", "懂球帝"),
    ("切尔西新帅首秀开门红 4-2大胜西汉姆", "1300万", "虎扑"),
    ("意甲最佳阵容出炉 国米5人入选", "1200万", "懂球帝"),
    ("2026世界杯扩军至48队 亚洲获8.5席位", "1100万", "微博"),
]


def _mock_records(rows) -> List[TrendRecord]:
    return [
        TrendRecord(rank=index + 1, title=title, heat=heat, source=source,
                    url=f"https://example.com/{index + 1}")
        for index, (title, heat, source) in enumerate(rows)
    ]


def get_mock_trends() -> ScrapeResult:
    """Sample general hot-list (30 entries)."""
    logger.info("📦 Using mock hot-list data")
    return ScrapeResult(timestamp=_now(), items=_mock_records(_MOCK_TRENDS), is_mock=True)


def get_mock_football() -> ScrapeResult:
    """Sample football hot-list (15 entries, already ordered by heat)."""
    logger.info("📦 Using mock football data")
    return ScrapeResult(timestamp=_now(), time_range=FOOTBALL_TIME_RANGE,
                        items=_mock_records(_MOCK_FOOTBALL), is_mock=True)
