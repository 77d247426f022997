"""Pick one representative photo per parts category and copy it into place."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

import structlog

logger = structlog.get_logger()

CATEGORY_FILES = {
    "Hydraulic System": "hydraulic-system.png",
    "Engine Components": "engine-components.png",
    "Bearings": "bearings.png",
    "Undercarriage": "undercarriage.png",
    "Filters": "filters.png",
    "Electrical": "electrical.png",
    "Ground Engaging Tools": "ground-engaging-tools.png",
    "Belts & Hoses": "belts-hoses.png",
    "Braking & Friction": "braking-friction.png",
    "Hardware": "hardware.png",
    "Cooling System": "cooling-system.png",
    "Turbochargers": "turbochargers.png",
    "Air Inlet & Exhaust": "air-inlet-exhaust.png",
    "Gaskets & Seals": "gaskets-seals.png",
}

# Hand-picked photos, used instead of classification when requested
FIXED_SOURCES = {
    "Hydraulic System": ("part-0010.png", "hydraulic-system.png"),
    "Engine Components": ("part-0185.png", "engine-components.png"),
    "Bearings": ("part-0310.png", "bearings.png"),
    "Undercarriage": ("part-0430.png", "undercarriage.png"),
    "Filters": ("part-0500.png", "filters.png"),
    "Electrical": ("part-0570.png", "electrical.png"),
    "Ground Engaging Tools": ("part-0640.png", "ground-engaging.png"),
    "Belts & Hoses": ("part-0700.png", "belts-hoses.png"),
    "Braking & Friction": ("part-0760.png", "braking-friction.png"),
    "Hardware": ("part-0830.png", "hardware.png"),
    "Cooling System": ("part-0875.png", "cooling-system.png"),
    "Turbochargers": ("part-0920.png", "turbochargers.png"),
    "Air Inlet & Exhaust": ("part-0955.png", "air-inlet-exhaust.png"),
    "Gaskets & Seals": ("part-0975.png", "gaskets-seals.png"),
}


def largest_image(images: list[dict], images_dir: Path) -> Optional[dict]:
    """The classified image with the biggest file, or the first if none exist on disk."""
    if not images:
        return None
    best, best_size = images[0], 0
    for image in images:
        path = images_dir / image["file"]
        if path.exists() and path.stat().st_size > best_size:
            best, best_size = image, path.stat().st_size
    return best


def update_from_classifications(
    classifications: list[dict],
    images_dir: Path,
    output_dir: Path,
) -> dict[str, str]:
    """Copy the largest photo of each category to its category image file.

    Returns:
        {category: source file name} for the categories updated
    """
    by_category: dict[str, list[dict]] = {}
    for item in classifications:
        by_category.setdefault(item["category"], []).append(item)

    chosen: dict[str, str] = {}
    for category, output_name in CATEGORY_FILES.items():
        best = largest_image(by_category.get(category, []), images_dir)
        if best is None:
            logger.info("category_image_skipped", category=category)
            continue
        shutil.copyfile(images_dir / best["file"], output_dir / output_name)
        chosen[category] = best["file"]
        logger.info("category_image_updated", category=category, source=best["file"], target=output_name)
    return chosen


def set_fixed_images(images_dir: Path, output_dir: Path) -> dict[str, str]:
    chosen: dict[str, str] = {}
    for category, (source, output_name) in FIXED_SOURCES.items():
        src = images_dir / source
        if not src.exists():
            logger.warning("category_image_missing", category=category, source=str(src))
            continue
        shutil.copyfile(src, output_dir / output_name)
        chosen[category] = source
    return chosen
