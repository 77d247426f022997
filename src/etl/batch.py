"""Bulk load helpers shared by the catalog import jobs."""

from __future__ import annotations

from typing import Any, Iterator, Sequence

import structlog
from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


def chunked(rows: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


def pick(record: dict, *keys: str) -> Any:
    """First truthy value among `keys` (camelCase / snake_case variants)."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return record.get(keys[-1])


async def insert_batches(
    session: AsyncSession,
    model: Any,
    rows: Sequence[dict],
    batch_size: int,
    label: str,
) -> int:
    """Insert dict rows in fixed-size batches, logging progress."""
    inserted = 0
    for batch in chunked(rows, batch_size):
        await session.execute(insert(model), list(batch))
        inserted += len(batch)
        if inserted % 2000 == 0 or inserted == len(rows):
            logger.info("batch_inserted", table=label, inserted=inserted, total=len(rows))
    return inserted


async def replace_table(
    session: AsyncSession,
    model: Any,
    rows: Sequence[dict],
    batch_size: int,
    label: str,
) -> int:
    """Delete every row of `model`, then bulk insert `rows`."""
    await session.execute(delete(model))
    logger.info("table_cleared", table=label)
    return await insert_batches(session, model, rows, batch_size, label)
