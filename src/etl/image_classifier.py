"""Batch classification of part photos with a checkpoint file for resuming."""

from __future__ import annotations

import asyncio
import json
from collections import Counter
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import structlog
from anthropic import RateLimitError
from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt

from src.llm.vision import classify_image

logger = structlog.get_logger()

CONCURRENCY = 2
MAX_ATTEMPTS = 6
CHECKPOINT_EVERY = 10  # batches
BATCH_PAUSE = 0.3

Classifier = Callable[[Path], Awaitable[dict]]
Sleep = Callable[[float], Awaitable[Any]]


def is_rate_limited(error: BaseException) -> bool:
    if isinstance(error, RateLimitError):
        return True
    message = str(error)
    return "429" in message or "rate" in message.lower()


def backoff_wait(retry_state: RetryCallState) -> float:
    """3s, 6s, 12s... after rate limits; a flat 2s after other errors."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    if error is not None and is_rate_limited(error):
        return 3.0 * 2 ** (retry_state.attempt_number - 1)
    return 2.0


def fallback_result(file: str, error: BaseException) -> dict:
    return {
        "file": file,
        "category": "Hardware",
        "partType": "unknown",
        "error": str(error)[:100],
    }


async def classify_with_retry(
    image_path: Path,
    classify: Classifier,
    sleep: Sleep = asyncio.sleep,
) -> dict:
    """Classify one image, retrying up to six attempts, then fall back."""
    retrying = AsyncRetrying(
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=backoff_wait,
        sleep=sleep,
        reraise=True,
    )
    try:
        return await retrying(classify, image_path)
    except Exception as e:
        logger.warning("image_classification_failed", file=image_path.name, error=str(e))
        return fallback_result(image_path.name, e)


def load_checkpoint(path: Path) -> dict[str, dict]:
    if not path.exists():
        return {}
    return {item["file"]: item for item in json.loads(path.read_text(encoding="utf-8"))}


def save_checkpoint(path: Path, results: list[dict]) -> None:
    path.write_text(json.dumps(results, indent=2), encoding="utf-8")


def pending_images(images_dir: Path, done: dict[str, dict]) -> tuple[list[Path], int]:
    """(images still to classify, total part-*.png images), in name order."""
    images = sorted(p for p in images_dir.glob("part-*.png") if p.is_file())
    return [p for p in images if p.name not in done], len(images)


async def classify_directory(
    images_dir: Path,
    checkpoint: Path,
    classify: Optional[Classifier] = None,
    sleep: Sleep = asyncio.sleep,
) -> list[dict]:
    """Classify every part-*.png not already in the checkpoint.

    Results are appended to the checkpoint every few batches and at the end,
    so an interrupted run picks up where it stopped.
    """
    classify = classify or classify_image
    done = load_checkpoint(checkpoint)
    if done:
        logger.info("classification_resuming", already_classified=len(done))

    todo, total = pending_images(images_dir, done)
    logger.info("classification_started", total=total, remaining=len(todo))

    results = list(done.values())
    if not todo:
        return results

    errors = 0
    for batch_number, start in enumerate(range(0, len(todo), CONCURRENCY)):
        batch = todo[start:start + CONCURRENCY]
        batch_results = await asyncio.gather(
            *(classify_with_retry(path, classify, sleep=sleep) for path in batch)
        )
        results.extend(batch_results)
        errors += sum(1 for r in batch_results if "error" in r)

        if batch_number % CHECKPOINT_EVERY == 0:
            save_checkpoint(checkpoint, results)
            logger.info("classification_progress", done=len(results), total=total, errors=errors)

        await sleep(BATCH_PAUSE)

    save_checkpoint(checkpoint, results)
    return results


def summarize(results: list[dict]) -> list[tuple[str, int]]:
    """Images per category, most common first."""
    return Counter(r["category"] for r in results).most_common()
