import asyncio
import json

import pytest

from generation_engine.models import Provenance, TrendRecord
from hotspot_engine import pipelines
from hotspot_engine.pipelines import run_football_hotspot, run_tophub_trends
from hotspot_engine.session_manager import SessionManager


def test_tophub_run_without_credentials(sample_records, config_without_key) -> None:
    result = asyncio.run(run_tophub_trends(config_without_key, records=sample_records))

    assert [r.title for r in result.analysis.top30][0] == sample_records[0].title
    assert result.insight.provenance is Provenance.FALLBACK
    assert len(result.saved_files) == 3
    assert all(path.exists() for path in result.saved_files)
    report = next(p for p in result.saved_files if p.suffix == ".md").read_text(encoding="utf-8")
    assert "规则引擎分析" in report
    assert (config_without_key.output_dir / "trends" / "session_001").is_dir()


def test_tophub_run_with_model(sample_records, config_with_key, fake_client_cls) -> None:
    response = json.dumps({
        "insights": "科技话题领跑。",
        "creativeAngles": ["从 AI 切入"],
        "trendPrediction": "AI 话题持续发酵。",
    }, ensure_ascii=False)
    client = fake_client_cls([response])

    result = asyncio.run(run_tophub_trends(config_with_key, records=sample_records, save_files=False, client=client))

    assert result.insight.from_model
    assert result.insight.value.insights == "科技话题领跑。"
    assert result.saved_files == []
    assert len(client.prompts) == 1


def test_empty_input_makes_no_model_call(config_with_key, fake_client_cls) -> None:
    client = fake_client_cls(responses=[])

    tophub = asyncio.run(run_tophub_trends(config_with_key, records=[], save_files=False, client=client))
    football = asyncio.run(run_football_hotspot(config_with_key, records=[], save_files=False, client=client))

    assert tophub.analysis.top30 == []
    assert tophub.analysis.category_groups == {}
    assert football.ranked == []
    assert football.analysis.value.top10 == []
    assert football.image_prompts.value == []
    assert football.social_notes.value == []
    assert client.prompts == []


def test_football_run_shares_one_client(football_records, config_with_key, fake_client_cls) -> None:
    analysis = json.dumps({
        "overview": "今日焦点是欧冠。",
        "top10": [{"rank": 1, "title": "欧冠半决赛VAR判罚引发争议", "summary": "判罚争议", "importance": 9, "category": "争议"}],
        "trendInsight": "争议话题升温。",
    }, ensure_ascii=False)
    client = fake_client_cls([analysis, "not json", "not json"])

    result = asyncio.run(run_football_hotspot(config_with_key, records=football_records, client=client))

    assert len(client.prompts) == 3
    assert result.analysis.from_model
    assert result.analysis.value.top10[0].source == "微博"
    assert result.image_prompts.from_fallback
    assert result.social_notes.from_fallback
    assert len(result.image_prompts.value) == 1
    assert len(result.saved_files) == 5
    names = {path.name.split("_2")[0] for path in result.saved_files}
    assert {"football_hotspot", "football_ranked", "football_analysis", "image_prompts", "xiaohongshu_notes"} == names


def test_football_run_from_mock_data(config_without_key) -> None:
    config = config_without_key.model_copy(update={"mock_mode": True})

    result = asyncio.run(run_football_hotspot(config, save_files=False))

    assert result.scrape.is_mock
    assert len(result.analysis.value.top10) == 10
    assert len(result.image_prompts.value) == 10
    assert len(result.social_notes.value) == 10
    assert all(r.category for r in result.ranked)


def test_saved_files_are_recorded_in_session_state(sample_records, config_without_key) -> None:
    result = asyncio.run(run_tophub_trends(config_without_key, records=sample_records))

    manager = SessionManager(config_without_key.output_dir / "trends")
    name, _ = manager.get_latest_session(label="tophub-trends")
    assert manager.list_sessions()[name]["artifacts"] == [str(p) for p in result.saved_files]


def test_football_overview_counts_every_entry(config_without_key) -> None:
    records = [
        TrendRecord(rank=i + 1, title=f"国足新闻{i}", heat=f"{100 - i}万", source="微博")
        for i in range(35)
    ]

    result = asyncio.run(run_football_hotspot(config_without_key, records=records, save_files=False))

    assert "收集到 35 条" in result.analysis.value.overview
    assert len(result.ranked) == 30
    assert len(result.analysis.value.top10) == 10


def test_football_prompt_reports_full_total(config_with_key, fake_client_cls) -> None:
    records = [TrendRecord(rank=i + 1, title=f"英超第{i}轮综述", heat="10万") for i in range(35)]
    client = fake_client_cls(["not json", "not json", "not json"])

    asyncio.run(run_football_hotspot(config_with_key, records=records, save_files=False, client=client))

    assert "共35条，列出前20条" in client.prompts[0]


class ClosingClient:
    def __init__(self, responses):
        self.responses = list(responses)
        self.closed = False

    async def complete(self, prompt: str) -> str:
        return self.responses.pop(0)

    async def aclose(self) -> None:
        self.closed = True


def test_run_closes_the_client_it_builds(sample_records, config_with_key, monkeypatch) -> None:
    built = []

    def build(config):
        built.append(ClosingClient(["not json"]))
        return built[-1]

    monkeypatch.setattr(pipelines, "LLMClient", build)

    asyncio.run(run_tophub_trends(config_with_key, records=sample_records, save_files=False))

    assert len(built) == 1
    assert built[0].closed


def test_run_closes_client_when_a_step_raises(config_with_key, monkeypatch) -> None:
    built = []

    def build(config):
        built.append(ClosingClient([]))
        return built[-1]

    def broken_analyze(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(pipelines, "LLMClient", build)
    monkeypatch.setattr(pipelines.FootballAnalyzer, "generate", broken_analyze)

    with pytest.raises(RuntimeError):
        asyncio.run(run_football_hotspot(config_with_key, records=[], save_files=False))
    assert built[0].closed


def test_caller_supplied_client_is_left_open(sample_records, config_with_key) -> None:
    client = ClosingClient(["not json"])
    asyncio.run(run_tophub_trends(config_with_key, records=sample_records, save_files=False, client=client))
    assert not client.closed
