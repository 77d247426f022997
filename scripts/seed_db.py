"""Seed the catalog tables from the JSON data files."""

import argparse
import asyncio
from pathlib import Path

from src.config import settings
from src.database import close_db, get_db_session, init_db
from src.etl.seed import seed_if_needed
from src.logging_config import configure_logging


async def seed(data_dir: Path):
    """Create missing tables and load any under-filled catalog table."""
    await init_db()
    try:
        async with get_db_session() as session:
            seeded = await seed_if_needed(session, data_dir)
    finally:
        await close_db()

    for table, count in seeded.items():
        print(f"  + {table}: {count}")
    print("\nSeed completed!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", type=Path, default=Path(settings.seed_data_dir))
    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed(args.data_dir))
