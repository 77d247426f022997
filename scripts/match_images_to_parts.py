"""Assign classified part photos to parts by keyword overlap."""

import argparse
import asyncio
import json
from pathlib import Path

from src.database import close_db, get_db_session
from src.etl.image_matcher import apply_assignments, assign_images, load_part_refs
from src.logging_config import configure_logging


async def main(classifications: Path):
    images = json.loads(classifications.read_text(encoding="utf-8"))

    try:
        async with get_db_session() as session:
            parts = await load_part_refs(session)
            assignments, stats = assign_images(parts, images)
            await apply_assignments(session, assignments)
    finally:
        await close_db()

    print(f"Matched: {stats.matched}, cycled: {stats.cycled}, generic: {stats.fallback}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--classifications", type=Path, default=Path("server/data/image-classifications.json"))
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.classifications))
