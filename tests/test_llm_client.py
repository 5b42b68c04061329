import asyncio
from types import SimpleNamespace

import pytest

from generation_engine.llm_client import SYSTEM_PROMPT, LLMClient


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeMessages:
    def __init__(self, blocks):
        self.blocks = blocks
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=self.blocks)


def test_openai_protocol_call(config_with_key) -> None:
    completions = FakeCompletions('{"ok": true}')
    client = LLMClient(config_with_key)
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))

    assert asyncio.run(client.complete("分析热榜")) == '{"ok": true}'
    call = completions.calls[0]
    assert call["model"] == "gemini-2.0-flash"
    assert call["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert call["messages"][1]["content"] == "分析热榜"


def test_anthropic_call_joins_text_blocks(config_with_key) -> None:
    config = config_with_key.model_copy(update={"provider": "anthropic", "model": "claude-3-5-haiku-latest"})
    messages = FakeMessages([
        SimpleNamespace(type="text", text='{"a": '),
        SimpleNamespace(type="tool_use", text="ignored"),
        SimpleNamespace(type="text", text="1}"),
    ])
    client = LLMClient(config)
    client._client = SimpleNamespace(messages=messages)

    assert asyncio.run(client.complete("prompt")) == '{"a": 1}'
    assert messages.calls[0]["system"] == SYSTEM_PROMPT


def test_empty_response_raises(config_with_key) -> None:
    client = LLMClient(config_with_key)
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(None)))

    with pytest.raises(ValueError):
        asyncio.run(client.complete("prompt"))


def test_aclose_closes_sdk_client_once(config_with_key) -> None:
    closed = []

    async def close():
        closed.append(True)

    client = LLMClient(config_with_key)
    client._client = SimpleNamespace(close=close)

    asyncio.run(client.aclose())
    asyncio.run(client.aclose())

    assert closed == [True]
    assert client._client is None
