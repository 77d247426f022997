"""Equipment listing import — tab-separated dealer export to the equipment table."""

from __future__ import annotations

import re
from collections import Counter
from pathlib import Path
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from src.etl.batch import replace_table
from src.models.catalog import Equipment

logger = structlog.get_logger()

BATCH_SIZE = 100
OTHER = "OTHER EQUIPMENT"

LINK_CATEGORIES = {
    "equipment-scrapers": "SCRAPERS",
    "equipment-articulated-trucks": "ARTICULATED TRUCKS",
    "equipment-wheel-loaders": "WHEEL LOADERS",
    "equipment-excavators": "EXCAVATORS",
    "equipment-bulldozers": "BULLDOZERS",
    "equipment-telehandlers": "TELEHANDLERS",
    "equipment-motor-graders": "MOTOR GRADERS",
    "equipment-skidsteer": "SKIDSTEER",
    "equipment-off-highway-trucks": "OFF-HIGHWAY TRUCKS",
    "equipment-backhoes": "BACKHOES",
    "equipment-compactors": "COMPACTORS",
    "equipment-track-dozers": "TRACK DOZERS",
    "equipment": OTHER,
}

_LINK_SLUG = re.compile(r"americanironus\.com/([^.]+)\.html")
_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def _rx(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# (model pattern, excluded model pattern, CAT-only, category), first match wins
MODEL_RULES: list[tuple[re.Pattern, Optional[re.Pattern], bool, str]] = [
    (_rx(r"^AP\d|PAVER"), None, False, "ASPHALT PAVERS"),
    (_rx(r"^RM\d|^RM\s|RECLAIM"), None, False, "COLD PLANERS"),
    (_rx(r"^PM\d|PLANER|COLD"), None, False, "COLD PLANERS"),
    (_rx(r"FOREST|^5[0-9]{2}\s|^538|^568"), None, True, "FORESTRY EQUIPMENT"),
    (_rx(r"PIPE\s?LAY|^PL\d"), None, False, "PIPELAYERS"),
    (_rx(r"LOADER|^9[0-9]{2}\s|^966|^950|^972"), _rx(r"TRACK|SKID"), False, "WHEEL LOADERS"),
    (_rx(r"GRADER|^1[0-9]{2}[A-Z]"), None, True, "MOTOR GRADERS"),
    (_rx(r"DOZER|^D[0-9]"), _rx(r"TRACK"), False, "BULLDOZERS"),
    (_rx(r"EXCAVAT|^3[0-9]{2}\s"), None, True, "EXCAVATORS"),
    (_rx(r"TELEHANDL|^TL\d|^TH\d"), None, False, "TELEHANDLERS"),
    (_rx(r"SKID\s?STEER|^2[0-9]{2}D|^S[0-9]{3}"), None, False, "SKIDSTEER"),
    (_rx(r"COMPACT|^CS\d|^CP\d|^CB\d|^CC\d|^BW\d|^DD[\-\d]"), None, False, "COMPACTORS"),
    (_rx(r"BACKHOE|^4[12][0-9]\s"), None, True, "BACKHOES"),
    (_rx(r"ARTICULAT|^7[0-9]{2}\s|^A[0-9]{2}[A-Z]"), None, False, "ARTICULATED TRUCKS"),
    (_rx(r"OFF.?HIGH|HAUL|^7[0-9]{2}[A-Z]"), None, False, "OFF-HIGHWAY TRUCKS"),
    (_rx(r"TRACK.?DOZ|TRACK.?LOAD"), None, False, "TRACK DOZERS"),
]


def infer_category_from_model(make: str, model: str) -> str:
    """Guess a category from the model designation when the link is generic."""
    m = model.upper()
    is_cat = make.upper() == "CAT"
    for pattern, excluded, cat_only, category in MODEL_RULES:
        if not pattern.search(m):
            continue
        if excluded is not None and excluded.search(m):
            continue
        if cat_only and not is_cat:
            continue
        return category
    return OTHER


def category_from_link(link: str) -> str:
    match = _LINK_SLUG.search(link)
    if not match:
        return OTHER
    return LINK_CATEGORIES.get(match.group(1), OTHER)


def _leading_int(value: str) -> Optional[int]:
    """Integer prefix of a string ("12,345" -> 12), or None."""
    match = _LEADING_INT.match(value)
    return int(match.group(0)) if match else None


def parse_listing(text: str) -> list[dict]:
    """Turn the tab-separated export into equipment rows.

    The first non-blank line is a header. Rows with fewer than nine columns,
    a repeated id, or no make/model are skipped.
    """
    lines = [line for line in text.replace("\r", "").split("\n") if line.strip()]

    rows: list[dict] = []
    seen: set[str] = set()

    for line in lines[1:]:
        cols = line.split("\t")
        if len(cols) < 9:
            continue

        equipment_id = cols[0].strip()
        if not equipment_id or equipment_id in seen:
            continue
        seen.add(equipment_id)

        make = cols[1].strip()
        model = cols[2].strip()
        if not make or not model:
            continue

        year = _leading_int(cols[3].strip())
        meter = _leading_int(cols[4].strip())
        price = cols[5].strip().replace('"', "").strip()
        link = cols[8].strip()

        category = category_from_link(link)
        if category == OTHER:
            category = infer_category_from_model(make, model)

        if not price or price == "$0.00":
            price = "CALL"

        rows.append(
            {
                "equipment_id": equipment_id[:20],
                "make": make[:50],
                "model": model[:100],
                "year": year if year and 1900 < year < 2100 else None,
                "meter": meter if meter and meter >= 0 else None,
                "price": price[:50],
                "city": None,
                "state": None,
                "category": category,
                "image_url": None,
            }
        )

    return rows


def read_listing(path: Path) -> list[dict]:
    return parse_listing(path.read_bytes().decode("latin-1"))


async def import_equipment(session: AsyncSession, rows: list[dict]) -> Counter:
    """Replace the equipment table with `rows`.

    Returns:
        Row count per category
    """
    await replace_table(session, Equipment, rows, BATCH_SIZE, "equipment")

    breakdown = Counter(row["category"] for row in rows)
    logger.info("equipment_imported", total=len(rows), categories=dict(breakdown.most_common()))
    return breakdown
