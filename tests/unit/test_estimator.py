"""Tests for the estimator prompt building and SSE stream."""

import json
from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.llm.estimator import (
    build_inventory_context,
    build_system_prompt,
    build_user_prompt,
    cached_inventory_context,
    clear_context_cache,
    sse_event,
    stream_estimate,
)
from src.schemas.catalog import PriceRange
from src.schemas.estimate import EstimateRequest


class FakeStream:
    def __init__(self, chunks, error=None):
        self._chunks = chunks
        self._error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    @property
    def text_stream(self):
        async def gen():
            for chunk in self._chunks:
                yield chunk
            if self._error:
                raise self._error
        return gen()


def _client(chunks, error=None):
    client = MagicMock()
    client.messages.stream = MagicMock(return_value=FakeStream(chunks, error))
    return client


def _events(raw: list[str]) -> list[dict]:
    return [json.loads(e[len("data: "):]) for e in raw]


@pytest.fixture
def estimate_request():
    return EstimateRequest(
        project_name="Harbor Road",
        project_type="Road Construction",
        location="Tampa, FL",
        terrain="Flat",
        project_size="2 miles",
        duration="6 months",
    )


@pytest.fixture
def session_factory(mock_db):
    @asynccontextmanager
    async def factory():
        yield mock_db
    return factory


def test_sse_event_format():
    assert sse_event({"content": "hi"}) == 'data: {"content":"hi"}\n\n'


class TestPrompts:
    def test_user_prompt_without_details(self, estimate_request):
        prompt = build_user_prompt(estimate_request)

        assert "**Project Name:** Harbor Road" in prompt
        assert "Additional Details" not in prompt

    def test_user_prompt_with_details(self, estimate_request):
        estimate_request.additional_details = "Wetlands nearby"

        assert "**Additional Details:** Wetlands nearby" in build_user_prompt(estimate_request)

    def test_system_prompt_embeds_context(self):
        prompt = build_system_prompt("INVENTORY HERE")

        assert "INVENTORY HERE" in prompt
        assert "American Iron LLC" in prompt

    @pytest.mark.asyncio
    async def test_inventory_context(self):
        catalog = SimpleNamespace(
            equipment_category_counts=AsyncMock(return_value={"EXCAVATORS": 3, "BULLDOZERS": 2}),
            equipment_price_summary=AsyncMock(return_value={
                "EXCAVATORS": PriceRange(min="$50,000", max="$90,000", avg="$70,000", count=2),
            }),
            parts_category_counts=AsyncMock(return_value={"Filters": 10}),
        )

        context = await build_inventory_context(catalog)

        assert "Total Equipment Items: 5" in context
        assert "Total Parts Items: 10" in context
        assert '"EXCAVATORS":{"min":"$50,000"' in context


class TestStreamEstimate:
    @pytest.mark.asyncio
    async def test_streams_then_saves(self, estimate_request, session_factory, mock_db):
        client = _client(["## Equipment", " list"])

        raw = [e async for e in stream_estimate(estimate_request, "sys", client=client,
                                                 session_factory=session_factory)]

        assert _events(raw) == [{"content": "## Equipment"}, {"content": " list"}, {"done": True}]
        saved = mock_db.add.call_args.args[0]
        assert saved.estimate_result == "## Equipment list"
        assert saved.project_name == "Harbor Road"
        assert client.messages.stream.call_args.kwargs["system"] == "sys"

    @pytest.mark.asyncio
    async def test_error_mid_stream(self, estimate_request, session_factory, mock_db):
        client = _client(["partial"], error=RuntimeError("overloaded"))

        raw = [e async for e in stream_estimate(estimate_request, "sys", client=client,
                                                 session_factory=session_factory)]

        assert _events(raw) == [{"content": "partial"}, {"error": "Failed to generate estimate"}]
        mock_db.add.assert_not_called()


@pytest.mark.asyncio
async def test_inventory_context_is_cached(monkeypatch):
    build = AsyncMock(return_value="ctx")
    monkeypatch.setattr("src.llm.estimator.build_inventory_context", build)
    clear_context_cache()

    assert await cached_inventory_context(MagicMock()) == "ctx"
    assert await cached_inventory_context(MagicMock()) == "ctx"

    build.assert_awaited_once()
    clear_context_cache()
