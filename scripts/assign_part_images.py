"""Spread the numbered part photos across categories by part count."""

import argparse
import asyncio

from src.database import close_db, get_db_session
from src.etl.image_assign import TOTAL_IMAGES, assign_proportionally
from src.logging_config import configure_logging


async def main(total_images: int):
    try:
        async with get_db_session() as session:
            updated = await assign_proportionally(session, total_images)
    finally:
        await close_db()
    print(f"Updated {updated} parts")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--total-images", type=int, default=TOTAL_IMAGES)
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.total_images))
