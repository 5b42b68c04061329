import asyncio

from fetchers import tophub_scraper
from fetchers.tophub_scraper import (
    FOOTBALL_TIME_RANGE,
    filter_football,
    get_mock_football,
    get_mock_trends,
    parse_tophub_html,
    scrape_football_hotspots,
    scrape_tophub_trends,
)
from generation_engine.models import TrendRecord

TOPHUB_HTML = """
<html><body>
  <div class="cc-cd">
    <div class="cc-cd-lb"><span>微博</span></div>
    <div class="cc-cd-cb-l">
      <a href="/l/1"><span>1</span><span>梅西加盟迈阿密国际后首次回归欧冠赛场</span><span>5356万</span></a>
      <a href="https://s.weibo.com/2"><span>2</span><span>春节档电影票房预测出炉</span><span>3200万</span></a>
      <a href="/l/3"><span>3</span><span></span><span>10万</span></a>
    </div>
  </div>
  <div class="cc-cd">
    <div class="cc-cd-lb"></div>
    <div class="cc-cd-cb-l">
      <a href="/l/4"><span>1</span><span>英超争冠白热化 曼城阿森纳同分</span></a>
    </div>
  </div>
</body></html>
"""


def test_parse_tophub_html() -> None:
    records = parse_tophub_html(TOPHUB_HTML)

    assert [r.title for r in records] == [
        "梅西加盟迈阿密国际后首次回归欧冠赛场",
        "春节档电影票房预测出炉",
        "英超争冠白热化 曼城阿森纳同分",
    ]
    first, second, third = records
    assert (first.rank, first.source, first.heat) == (1, "微博", "5356万")
    assert first.url == "https://tophub.today/l/1"
    assert second.url == "https://s.weibo.com/2"
    # rank restarts per card, missing label and heat get defaults
    assert (third.rank, third.source, third.heat) == (1, "未知来源", "")


def test_parse_tophub_html_without_cards() -> None:
    assert parse_tophub_html("<html><body><p>维护中</p></body></html>") == []


def test_filter_football_reranks_by_heat() -> None:
    records = [
        TrendRecord(rank=1, title="春节档电影票房预测出炉", heat="9000万", source="微博"),
        TrendRecord(rank=2, title="国足世预赛名单公布", heat="1600万", source="微博"),
        TrendRecord(rank=3, title="皇马官宣姆巴佩正式加盟", heat="4200万", source="虎扑"),
        TrendRecord(rank=4, title="德甲收官战", heat="", source="懂球帝"),
    ]
    football = filter_football(records)
    assert [r.title for r in football] == ["皇马官宣姆巴佩正式加盟", "国足世预赛名单公布", "德甲收官战"]
    assert [r.rank for r in football] == [1, 2, 3]


def test_mock_data() -> None:
    trends = get_mock_trends()
    football = get_mock_football()
    assert trends.is_mock and len(trends.items) == 30
    assert football.is_mock and len(football.items) == 15
    assert football.time_range == FOOTBALL_TIME_RANGE
    assert [r.rank for r in football.items] == list(range(1, 16))


def test_mock_mode_never_fetches(config_without_key, monkeypatch) -> None:
    async def fail_fetch(config):
        raise AssertionError("should not fetch in mock mode")

    monkeypatch.setattr(tophub_scraper, "fetch_tophub_html", fail_fetch)
    config = config_without_key.model_copy(update={"mock_mode": True})

    assert asyncio.run(scrape_tophub_trends(config)).is_mock
    assert asyncio.run(scrape_football_hotspots(config)).is_mock


def test_scrape_failure_falls_back_to_mock(config_without_key, monkeypatch) -> None:
    async def broken_fetch(config):
        raise ConnectionError("network down")

    monkeypatch.setattr(tophub_scraper, "fetch_tophub_html", broken_fetch)

    result = asyncio.run(scrape_tophub_trends(config_without_key))
    assert result.is_mock
    assert len(result.items) == 30


def test_empty_page_falls_back_to_mock(config_without_key, monkeypatch) -> None:
    async def empty_page(config):
        return "<html></html>"

    monkeypatch.setattr(tophub_scraper, "fetch_tophub_html", empty_page)
    assert asyncio.run(scrape_football_hotspots(config_without_key)).is_mock


def test_scrape_football_filters_live_page(config_without_key, monkeypatch) -> None:
    async def page(config):
        return TOPHUB_HTML

    monkeypatch.setattr(tophub_scraper, "fetch_tophub_html", page)
    result = asyncio.run(scrape_football_hotspots(config_without_key))

    assert not result.is_mock
    assert result.time_range == FOOTBALL_TIME_RANGE
    assert [r.title for r in result.items] == [
        "梅西加盟迈阿密国际后首次回归欧冠赛场",
        "英超争冠白热化 曼城阿森纳同分",
    ]
