"""Startup seeding of the catalog tables from JSON data files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.etl.batch import pick, replace_table
from src.models.catalog import Equipment, Part, PowerUnit

logger = structlog.get_logger()

BATCH_SIZE = 500

# (model, data file, minimum rows for the table to count as seeded)
SEED_TABLES = (
    (Equipment, "equipment.json", "seed_min_equipment"),
    (Part, "parts.json", "seed_min_parts"),
    (PowerUnit, "power-units.json", "seed_min_power_units"),
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


def seed_row(model: Any, record: dict) -> dict:
    """Pick the model's columns out of a camelCase or snake_case record.

    Keys the table doesn't have (serialNumber, description on power units)
    are dropped.
    """
    row = {}
    for column in model.__table__.columns:
        if column.primary_key:
            continue
        camel = _camel(column.name)
        if camel != column.name:
            row[column.name] = pick(record, camel, column.name)
        else:
            row[column.name] = record.get(column.name)
    return row


def load_seed_file(path: Path, model: Any) -> Optional[list[dict]]:
    if not path.exists():
        return None
    return [seed_row(model, r) for r in json.loads(path.read_text(encoding="utf-8"))]


async def count_rows(session: AsyncSession, model: Any) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def sync_power_unit_images(session: AsyncSession, data_dir: Path) -> int:
    """Point power unit image_url at the data file's value, matched by stock number."""
    path = data_dir / "power-units.json"
    if not path.exists():
        return 0

    expected = {}
    for record in json.loads(path.read_text(encoding="utf-8")):
        stock = pick(record, "stockNumber", "stock_number")
        image = pick(record, "imageUrl", "image_url")
        if stock and image:
            expected[stock] = image

    rows = (await session.execute(
        select(PowerUnit.id, PowerUnit.stock_number, PowerUnit.image_url)
    )).all()
    changes = [
        {"id": row.id, "image_url": expected[row.stock_number]}
        for row in rows
        if expected.get(row.stock_number) and expected[row.stock_number] != row.image_url
    ]
    if changes:
        await session.execute(update(PowerUnit), changes)
        logger.info("power_unit_images_synced", updated=len(changes))
    else:
        logger.info("power_unit_images_in_sync")
    return len(changes)


async def seed_if_needed(session: AsyncSession, data_dir: Optional[Path] = None) -> dict[str, int]:
    """Reload any catalog table that has fewer rows than its threshold.

    Returns:
        {table name: rows inserted} for the tables that were reloaded
    """
    data_dir = data_dir or Path(settings.seed_data_dir)

    counts = {model.__tablename__: await count_rows(session, model) for model, _, _ in SEED_TABLES}
    below = [
        (model, filename)
        for model, filename, threshold in SEED_TABLES
        if counts[model.__tablename__] < getattr(settings, threshold)
    ]

    if not below:
        logger.info("database_already_seeded", **counts)
        await sync_power_unit_images(session, data_dir)
        return {}

    logger.info("seeding_started", **counts)
    seeded = {}
    for model, filename in below:
        rows = load_seed_file(data_dir / filename, model)
        if rows is None:
            logger.warning("seed_file_missing", table=model.__tablename__, path=str(data_dir / filename))
            continue
        seeded[model.__tablename__] = await replace_table(
            session, model, rows, BATCH_SIZE, model.__tablename__
        )

    logger.info("seeding_complete", **seeded)
    return seeded
