"""
Plinth — Enhancer Agent Tests
==============================
Runs against a fake async client, no network and no API key needed.

Run: python -m pytest tests/test_enhancer.py -v
"""

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace

sys.path.insert(0, str(Path(__file__).parent.parent))

import src.agents.enhancer as enhancer_module
from src.agents.enhancer import (
    AISuggestions, EnhancementResult, PositioningEnhancer, parse_numbered_list,
)
from tests.sample_inputs import ACME_INPUT


class FakeMessages:
    """Replays canned replies; an Exception in the list is raised instead."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(text=reply)])


class FakeClient:
    def __init__(self, *replies):
        self.messages = FakeMessages(replies)


def _no_client(*args, **kwargs):
    raise AssertionError("disabled enhancer must not build a client")


def test_disabled_enhancer_falls_back(monkeypatch):
    monkeypatch.setattr(enhancer_module, "AsyncAnthropic", _no_client)
    enhancer = PositioningEnhancer(api_key="")

    assert not enhancer.is_enabled()
    assert asyncio.run(enhancer.infer_problem("analysts", ["Excel"])) == \
        "struggle with manual, error-prone processes"
    assert asyncio.run(enhancer.improve_value_prop("save time", "analysts")) == "save time"
    assert asyncio.run(enhancer.critique_positioning("Acme is a BI tool...")) is None
    assert asyncio.run(enhancer.generate_alternatives("Acme", "analysts", "save time", "BI tool")) == []
    assert asyncio.run(enhancer.suggest_category("Acme", ["dashboards"], ["save time"], "analysts")) == []
    assert asyncio.run(enhancer.suggest(ACME_INPUT, "Acme is a BI tool...")) == AISuggestions()


def test_api_key_enables_client(monkeypatch):
    built = {}

    def fake_anthropic(**kwargs):
        built.update(kwargs)
        return FakeClient()

    monkeypatch.setattr(enhancer_module, "AsyncAnthropic", fake_anthropic)
    enhancer = PositioningEnhancer(api_key="sk-test")

    assert enhancer.is_enabled()
    assert built["api_key"] == "sk-test"
    assert built["max_retries"] == 0


def test_infer_problem_uses_model():
    client = FakeClient("  struggle with copy-pasting numbers between tools \n")
    enhancer = PositioningEnhancer(client=client)

    problem = asyncio.run(enhancer.infer_problem("analysts", ["Excel", "Google Sheets"]))

    assert problem == "struggle with copy-pasting numbers between tools"
    call = client.messages.calls[0]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 100
    assert "Target Market: analysts" in call["messages"][0]["content"]
    assert "Competitive Alternatives: Excel, Google Sheets" in call["messages"][0]["content"]


def test_failures_fall_back():
    client = FakeClient(
        TimeoutError("timed out"),
        RuntimeError("quota"),
        ConnectionError("offline"),
        ValueError("bad payload"),
        RuntimeError("boom"),
    )
    enhancer = PositioningEnhancer(client=client)

    assert asyncio.run(enhancer.infer_problem("recruiters", ["Notion"])) == \
        "struggle with inefficient workflows using Notion"
    assert asyncio.run(enhancer.improve_value_prop("hire faster", "recruiters")) == "hire faster"
    assert asyncio.run(enhancer.critique_positioning("statement")) is None
    assert asyncio.run(enhancer.generate_alternatives("A", "B", "C", "D")) == []
    assert asyncio.run(enhancer.suggest_category("A", ["x"], ["y"], "z")) == []


def test_blank_response_falls_back():
    enhancer = PositioningEnhancer(client=FakeClient("   "))
    assert asyncio.run(enhancer.improve_value_prop("save time", "analysts")) == "save time"


def test_improve_value_prop_strips_quotes():
    enhancer = PositioningEnhancer(client=FakeClient('"Close the books in half the time"'))
    assert asyncio.run(enhancer.improve_value_prop("save time", "accountants")) == \
        "Close the books in half the time"


def test_generate_alternatives_parses_list():
    reply = (
        "Here are three options:\n"
        "1. Acme is the fastest way for analysts to share numbers.\n"
        "2.   Unlike spreadsheets, Acme updates itself.\n"
        "3. Acme: the BI tool analysts actually enjoy.\n"
        "Hope this helps!"
    )
    client = FakeClient(reply)
    enhancer = PositioningEnhancer(client=client)

    alternatives = asyncio.run(enhancer.generate_alternatives("Acme", "analysts", "save time", "BI tool"))

    assert alternatives == [
        "Acme is the fastest way for analysts to share numbers.",
        "Unlike spreadsheets, Acme updates itself.",
        "Acme: the BI tool analysts actually enjoy.",
    ]
    assert client.messages.calls[0]["temperature"] == 0.9
    assert client.messages.calls[0]["max_tokens"] == 300


def test_parse_numbered_list():
    assert parse_numbered_list("1. Revenue intelligence\n10.Deal desk\n - 3. nope\n") == [
        "Revenue intelligence", "Deal desk",
    ]
    assert parse_numbered_list("no list here") == []


def test_suggest_collects_everything():
    client = FakeClient(
        "struggle with stale weekly reports",
        "Answer questions in minutes, not days",
        "- Lead with the outcome",
        "1. Acme keeps analysts current\n2. Acme replaces exports",
        "1. Live reporting\n2. Spreadsheet replacement\n3. Analyst workspace",
    )
    enhancer = PositioningEnhancer(client=client)

    suggestions = asyncio.run(enhancer.suggest(ACME_INPUT, "Acme is a BI tool..."))

    assert suggestions.problem == "struggle with stale weekly reports"
    assert suggestions.improved_values == ["Answer questions in minutes, not days"]
    assert suggestions.critique == "- Lead with the outcome"
    assert suggestions.alternative_positioning == ["Acme keeps analysts current", "Acme replaces exports"]
    assert suggestions.suggested_categories == [
        "Live reporting", "Spreadsheet replacement", "Analyst workspace",
    ]
    assert len(client.messages.calls) == 5
    assert not suggestions.is_empty()
    assert list(suggestions.to_dict()) == [
        "problem", "improvedValues", "critique", "alternativePositioning", "suggestedCategories",
    ]


def test_enhancement_result():
    assert EnhancementResult(value="x").unwrap_or("y") == "x"
    failed = EnhancementResult(error="down")
    assert not failed.ok
    assert failed.unwrap_or("y") == "y"
