"""Tests for vision classification parsing and the batch classifier."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from src.etl.image_classifier import (
    classify_directory,
    classify_with_retry,
    is_rate_limited,
    summarize,
)
from src.llm.prompts.image_classifier import PART_CATEGORIES
from src.llm.vision import classify_image, parse_classification


class TestParseClassification:
    def test_json_reply(self):
        assert parse_classification('Sure: {"cat": 5, "type": "oil filter"}') == ("Filters", "oil filter")

    def test_number_fallback(self):
        assert parse_classification("I think 3") == ("Bearings", "unknown")

    def test_index_is_clamped(self):
        assert parse_classification('{"cat": 99, "type": "gasket"}')[0] == PART_CATEGORIES[-1]
        assert parse_classification('{"cat": 0, "type": "x"}')[0] == PART_CATEGORIES[0]

    def test_unparseable_reply(self):
        assert parse_classification("no idea") == (PART_CATEGORIES[0], "unknown")


@pytest.mark.asyncio
async def test_classify_image_sends_png(tmp_path):
    image = tmp_path / "part-0001.png"
    image.write_bytes(b"\x89PNG fake")
    client = SimpleNamespace(messages=SimpleNamespace(create=AsyncMock(
        return_value=SimpleNamespace(content=[SimpleNamespace(text='{"cat": 12, "type": "turbo"}')])
    )))

    result = await classify_image(image, client=client)

    assert result == {"file": "part-0001.png", "category": "Turbochargers", "partType": "turbo"}
    content = client.messages.create.await_args.kwargs["messages"][0]["content"]
    assert content[0]["source"]["media_type"] == "image/png"


class TestRetry:
    def test_rate_limit_detection(self):
        assert is_rate_limited(Exception("Error code: 429"))
        assert is_rate_limited(Exception("Rate limit exceeded"))
        assert not is_rate_limited(Exception("timeout"))

    @pytest.mark.asyncio
    async def test_backs_off_exponentially_on_rate_limits(self, tmp_path):
        result = {"file": "part-0001.png", "category": "Filters", "partType": "filter"}
        classify = AsyncMock(side_effect=[Exception("429"), Exception("429"), result])
        sleep = AsyncMock()

        got = await classify_with_retry(tmp_path / "part-0001.png", classify, sleep=sleep)

        assert got == result
        assert [c.args[0] for c in sleep.await_args_list] == [3.0, 6.0]

    @pytest.mark.asyncio
    async def test_falls_back_after_six_attempts(self, tmp_path):
        classify = AsyncMock(side_effect=ValueError("bad image"))
        sleep = AsyncMock()

        got = await classify_with_retry(tmp_path / "part-0009.png", classify, sleep=sleep)

        assert classify.await_count == 6
        assert [c.args[0] for c in sleep.await_args_list] == [2.0] * 5
        assert got == {
            "file": "part-0009.png",
            "category": "Hardware",
            "partType": "unknown",
            "error": "bad image",
        }


@pytest.mark.asyncio
async def test_classify_directory_resumes_from_checkpoint(tmp_path):
    for name in ("part-0001.png", "part-0002.png", "part-0003.png", "cover.png"):
        (tmp_path / name).write_bytes(b"x")
    checkpoint = tmp_path / "classifications.json"
    checkpoint.write_text(json.dumps([
        {"file": "part-0001.png", "category": "Bearings", "partType": "bushing"},
    ]))

    async def classify(path):
        return {"file": path.name, "category": "Filters", "partType": "filter"}

    results = await classify_directory(tmp_path, checkpoint, classify=classify, sleep=AsyncMock())

    assert [r["file"] for r in results] == ["part-0001.png", "part-0002.png", "part-0003.png"]
    saved = json.loads(checkpoint.read_text())
    assert len(saved) == 3
    assert summarize(results) == [("Filters", 2), ("Bearings", 1)]
