"""Parts seeder — loads parsed catalog JSON into the parts table."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.etl.batch import pick, replace_table
from src.models.catalog import Part

logger = structlog.get_logger()

BATCH_SIZE = 500
GENERIC_PART_IMAGE = "/images/parts/generic-part.jpg"

CATEGORY_IMAGES = {
    "Air Inlet & Exhaust": "/images/parts/air-inlet-exhaust.jpg",
    "Turbochargers": "/images/parts/turbochargers.jpg",
    "Bearings": "/images/parts/bearings.jpg",
    "Belts & Hoses": "/images/parts/belts-hoses.jpg",
    "Braking & Friction": "/images/parts/braking-friction.jpg",
    "Cooling System": "/images/parts/cooling-system.jpg",
    "Electrical": "/images/parts/electrical.jpg",
    "Engine Components": "/images/parts/engine-components.jpg",
    "Filters": "/images/parts/filters.jpg",
    "Ground Engaging Tools": "/images/parts/ground-engaging.jpg",
    "Hardware": "/images/parts/hardware.jpg",
    "Hydraulic System": "/images/parts/hydraulic-system.jpg",
    "Gaskets & Seals": "/images/parts/gaskets-seals.jpg",
    "Undercarriage": "/images/parts/undercarriage.jpg",
}


def part_row(record: dict) -> dict:
    """Map one parsed-catalog record to a parts row."""
    category = record["category"]
    equipment = record.get("equipment") or None
    return {
        "part_number": pick(record, "partNumber", "part_number"),
        "description": record.get("description") or category,
        "category": category,
        "subcategory": record.get("subcategory") or None,
        "price": None,
        "compatibility": equipment,
        "engine_model": pick(record, "engineModel", "engine_model") or None,
        "gasket": record.get("gasket") or None,
        "equipment": equipment,
        "image_url": CATEGORY_IMAGES.get(category, GENERIC_PART_IMAGE),
    }


def load_parsed_parts(path: Path) -> list[dict]:
    return [part_row(r) for r in json.loads(path.read_text(encoding="utf-8"))]


async def seed_parts(session: AsyncSession, rows: list[dict]) -> int:
    """Replace the parts table with `rows`."""
    inserted = await replace_table(session, Part, rows, BATCH_SIZE, "parts")
    logger.info("parts_seeded", total=inserted)
    return inserted
