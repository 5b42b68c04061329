"""Shared pytest fixtures for the hotspot engine test-suite."""
from __future__ import annotations

from typing import List

import pytest

from generation_engine.models import TrendRecord
from hotspot_engine.config import PipelineConfig


class FakeClient:
    """Completion client that replays canned responses and records prompts."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def config_with_key(tmp_path) -> PipelineConfig:
    return PipelineConfig(api_key="test-key", output_dir=tmp_path / "outputs")


@pytest.fixture
def config_without_key(tmp_path) -> PipelineConfig:
    return PipelineConfig(api_key=None, output_dir=tmp_path / "outputs")


@pytest.fixture
def sample_records() -> List[TrendRecord]:
    return [
        TrendRecord(rank=1, title="AI 技术突破：新模型性能提升 50%", heat="5356万", source="微博", url="https://example.com/1"),
        TrendRecord(rank=2, title="年轻人为什么不爱存钱了", heat="200万", source="知乎", url="https://example.com/2"),
        TrendRecord(rank=3, title="多地发布楼市新政", heat="50万", source="百度", url="https://example.com/3"),
    ]


@pytest.fixture
def football_records() -> List[TrendRecord]:
    return [
        TrendRecord(rank=1, title="皇马官宣姆巴佩正式加盟 身披7号球衣", heat="4200万", source="虎扑"),
        TrendRecord(rank=2, title="英超争冠白热化 曼城阿森纳同分", heat="3800万", source="懂球帝"),
        TrendRecord(rank=3, title="欧冠半决赛VAR判罚引发争议", heat="3200万", source="微博"),
        TrendRecord(rank=4, title="C罗沙特联赛戴帽 本赛季已打进35球", heat="3500万", source="微博"),
    ]
