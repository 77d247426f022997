"""IRON estimator — streams a project equipment estimate as server-sent events."""

from __future__ import annotations

import json
from contextlib import AbstractAsyncContextManager
from typing import Any, AsyncIterator, Callable, Optional

import structlog
from anthropic import AsyncAnthropic
from cachetools import TTLCache
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database import get_db_session
from src.llm.client import get_llm_client
from src.llm.prompts.estimator import (
    ESTIMATOR_SYSTEM_PROMPT,
    ESTIMATOR_USER_PROMPT,
    INVENTORY_CONTEXT,
)
from src.repositories.catalog import CatalogRepository
from src.repositories.estimate import EstimateRepository
from src.schemas.estimate import EstimateRequest

logger = structlog.get_logger()

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

ESTIMATE_FAILED = "Failed to generate estimate"

# Inventory summary reused across estimates for 5 minutes
_context_cache: TTLCache[str, str] = TTLCache(maxsize=1, ttl=300)


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def sse_event(payload: dict) -> str:
    """Encode one server-sent event carrying a JSON payload."""
    return f"data: {_compact_json(payload)}\n\n"


async def build_inventory_context(catalog: CatalogRepository) -> str:
    """Summarize live inventory for the system prompt."""
    category_counts = await catalog.equipment_category_counts()
    price_summary = await catalog.equipment_price_summary()
    parts_counts = await catalog.parts_category_counts()

    return INVENTORY_CONTEXT.format(
        category_counts=_compact_json(category_counts),
        price_summary=_compact_json(
            {category: summary.model_dump() for category, summary in price_summary.items()}
        ),
        parts_counts=_compact_json(parts_counts),
        total_equipment=sum(category_counts.values()),
        total_parts=sum(parts_counts.values()),
    )


async def cached_inventory_context(catalog: CatalogRepository) -> str:
    if "inventory" not in _context_cache:
        _context_cache["inventory"] = await build_inventory_context(catalog)
        logger.debug("inventory_context_built", length=len(_context_cache["inventory"]))
    return _context_cache["inventory"]


def clear_context_cache() -> None:
    _context_cache.clear()


def build_system_prompt(inventory_context: str) -> str:
    return ESTIMATOR_SYSTEM_PROMPT.format(
        company_name=settings.company_name,
        company_city=settings.company_city,
        inventory_context=inventory_context,
    )


def build_user_prompt(request: EstimateRequest) -> str:
    details = request.additional_details
    return ESTIMATOR_USER_PROMPT.format(
        project_name=request.project_name,
        project_type=request.project_type,
        location=request.location,
        terrain=request.terrain,
        project_size=request.project_size,
        duration=request.duration,
        additional_details=f"**Additional Details:** {details}" if details else "",
    )


async def stream_estimate(
    request: EstimateRequest,
    system_prompt: str,
    client: Optional[AsyncAnthropic] = None,
    session_factory: SessionFactory = get_db_session,
) -> AsyncIterator[str]:
    """Relay the model's text deltas as SSE events, then save the transcript.

    Yields `{"content": ...}` per delta, `{"done": true}` once the estimate
    is stored, or a single `{"error": ...}` event if anything fails after
    the stream has started.
    """
    client = client or get_llm_client()
    chunks: list[str] = []

    try:
        async with client.messages.stream(
            model=settings.llm_model,
            max_tokens=settings.estimator_max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": build_user_prompt(request)}],
        ) as stream:
            async for text in stream.text_stream:
                if text:
                    chunks.append(text)
                    yield sse_event({"content": text})

        transcript = "".join(chunks)
        async with session_factory() as session:
            await EstimateRepository(session).create(request, transcript)

        logger.info(
            "estimate_generated",
            project_type=request.project_type,
            length=len(transcript),
        )
        yield sse_event({"done": True})

    except Exception as e:
        logger.error(
            "estimate_generation_failed",
            error=str(e),
            project_name=request.project_name,
            received=sum(len(c) for c in chunks),
        )
        yield sse_event({"error": ESTIMATE_FAILED})
