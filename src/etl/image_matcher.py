"""Match classified part photos to catalog parts by keyword overlap."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.etl.batch import chunked
from src.models.catalog import Part

logger = structlog.get_logger()

ITEM_IMAGE_PREFIX = "/images/parts/items/"
GENERIC_IMAGE = "/images/parts/generic-part.png"
UPDATE_BATCH_SIZE = 500


@dataclass
class PartRef:
    id: int
    category: str
    subcategory: Optional[str]
    description: str


@dataclass
class MatchStats:
    matched: int = 0
    cycled: int = 0
    fallback: int = 0


def normalize(text: Optional[str]) -> str:
    text = re.sub(r"[^a-z0-9\s]", " ", (text or "").lower())
    return re.sub(r"\s+", " ", text).strip()


def _words(text: str) -> list[str]:
    return [w for w in normalize(text).split(" ") if len(w) > 2]


def match_score(image_text: str, part_text: str) -> int:
    """+3 for each identical word pair, +1 when one word contains the other."""
    score = 0
    part_words = _words(part_text)
    for iw in _words(image_text):
        for pw in part_words:
            if iw == pw:
                score += 3
            elif iw in pw or pw in iw:
                score += 1
    return score


def assign_images(
    parts: Sequence[PartRef],
    classifications: Sequence[dict],
) -> tuple[list[dict], MatchStats]:
    """Pick an image for every part.

    Parts are grouped by category then subcategory; each group ranks its
    category's images against the group's first description and cycles
    through the positively scored ones (or all of them if none score).
    """
    images_by_category: dict[str, list[dict]] = {}
    for item in classifications:
        images_by_category.setdefault(item["category"], []).append(item)

    parts_by_category: dict[str, list[PartRef]] = {}
    for part in parts:
        parts_by_category.setdefault(part.category, []).append(part)

    assignments: list[dict] = []
    stats = MatchStats()

    for category, category_parts in parts_by_category.items():
        category_images = images_by_category.get(category, [])
        if not category_images:
            logger.info("no_images_for_category", category=category)
            assignments.extend({"id": p.id, "image_url": GENERIC_IMAGE} for p in category_parts)
            stats.fallback += len(category_parts)
            continue

        groups: dict[str, list[PartRef]] = {}
        for part in category_parts:
            groups.setdefault(part.subcategory or "GENERAL", []).append(part)

        for subcategory, group in groups.items():
            part_text = f"{group[0].description} {subcategory}"
            scored = sorted(
                (
                    (match_score(f"{img.get('partType', '')} {img.get('keywords', '')}", part_text), img)
                    for img in category_images
                ),
                key=lambda pair: -pair[0],
            )
            ranked = [pair for pair in scored if pair[0] > 0] or [(0, img) for img in category_images]

            for i, part in enumerate(group):
                score, img = ranked[i % len(ranked)]
                assignments.append({"id": part.id, "image_url": f"{ITEM_IMAGE_PREFIX}{img['file']}"})
                if score > 0:
                    stats.matched += 1
                else:
                    stats.cycled += 1

    return assignments, stats


async def load_part_refs(session: AsyncSession) -> list[PartRef]:
    result = await session.execute(
        select(Part.id, Part.category, Part.subcategory, Part.description).order_by(
            Part.category, Part.subcategory.asc().nulls_last(), Part.id
        )
    )
    return [PartRef(*row) for row in result.all()]


async def apply_assignments(session: AsyncSession, assignments: list[dict]) -> int:
    """Bulk update image_url by primary key."""
    updated = 0
    for batch in chunked(assignments, UPDATE_BATCH_SIZE):
        await session.execute(update(Part), list(batch))
        updated += len(batch)
        logger.info("part_images_updated", updated=updated, total=len(assignments))
    return updated
