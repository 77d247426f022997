"""Spread the numbered part photos across categories in proportion to part counts."""

from __future__ import annotations

import math

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.etl.image_matcher import ITEM_IMAGE_PREFIX, apply_assignments
from src.models.catalog import Part

logger = structlog.get_logger()

TOTAL_IMAGES = 975


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def image_ranges(
    category_counts: list[tuple[str, int]],
    total_images: int = TOTAL_IMAGES,
) -> dict[str, range]:
    """1-based image number range for each category, largest category first.

    Every category gets at least one image; numbering wraps to the start
    once the images run out.
    """
    total_parts = sum(count for _, count in category_counts)
    ranges: dict[str, range] = {}
    index = 0
    for category, count in category_counts:
        share = max(1, _round_half_up(count / total_parts * total_images))
        end = min(index + share, total_images)
        ranges[category] = range(index + 1, end + 1)
        index = 0 if end >= total_images else end
    return ranges


def image_path(number: int) -> str:
    return f"{ITEM_IMAGE_PREFIX}part-{number:04d}.png"


async def assign_proportionally(session: AsyncSession, total_images: int = TOTAL_IMAGES) -> int:
    result = await session.execute(
        select(Part.category, func.count().label("cnt"))
        .group_by(Part.category)
        .order_by(func.count().desc())
    )
    ranges = image_ranges([(c, n) for c, n in result.all()], total_images)

    assignments: list[dict] = []
    for category, numbers in ranges.items():
        logger.info("category_image_range", category=category, first=numbers.start, last=numbers.stop - 1)
        ids = (await session.execute(
            select(Part.id).where(Part.category == category).order_by(Part.id)
        )).scalars().all()
        assignments.extend(
            {"id": part_id, "image_url": image_path(numbers[i % len(numbers)])}
            for i, part_id in enumerate(ids)
        )

    return await apply_assignments(session, assignments)
