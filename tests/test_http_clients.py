"""Tests for the OpenAI planner adapter."""

import asyncio
import json

import pytest

from diet_planner.adapters.openai_planner_client import OpenAIPlannerClient
from diet_planner.domain.errors import RequestError


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _generate(client: OpenAIPlannerClient, reasoning_effort: str | None = "medium"):
    return asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            schema_name="diet_plan",
            schema={"type": "object"},
            prompt="Plan my week",
        )
    )


def test_openai_planner_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"type": "questions", "questions": ["q"]}))
    client = OpenAIPlannerClient(client=fake)

    result = _generate(client)

    assert result == {"type": "questions", "questions": ["q"]}
    payload = fake.responses.last_payload
    assert payload["text"]["format"]["strict"] is True
    assert payload["text"]["format"]["name"] == "diet_plan"
    assert payload["reasoning"] == {"effort": "medium"}


def test_openai_planner_client_omits_empty_reasoning() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAIPlannerClient(client=fake)

    _generate(client, reasoning_effort=None)

    assert "reasoning" not in fake.responses.last_payload


def test_openai_planner_client_rejects_empty_output() -> None:
    client = OpenAIPlannerClient(client=_FakeOpenAI(""))

    with pytest.raises(RequestError):
        _generate(client)
