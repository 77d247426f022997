"""Replace the equipment table with a tab-separated inventory listing."""

import argparse
import asyncio
from pathlib import Path

from src.database import close_db, get_db_session, init_db
from src.etl.equipment_import import import_equipment, read_listing
from src.logging_config import configure_logging


async def main(path: Path):
    rows = read_listing(path)
    print(f"Parsed {len(rows)} equipment rows from {path}")

    await init_db()
    try:
        async with get_db_session() as session:
            breakdown = await import_equipment(session, rows)
    finally:
        await close_db()

    print("\nCategory breakdown:")
    for category, count in breakdown.most_common():
        print(f"  {category}: {count}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("listing", type=Path, help="inventory export (latin-1 TSV)")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.listing))
