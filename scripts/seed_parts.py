"""Replace the parts table with parsed catalog JSON."""

import argparse
import asyncio
from pathlib import Path

from src.database import close_db, get_db_session, init_db
from src.etl.parts_seed import load_parsed_parts, seed_parts
from src.logging_config import configure_logging


async def main(path: Path):
    rows = load_parsed_parts(path)
    await init_db()
    try:
        async with get_db_session() as session:
            inserted = await seed_parts(session, rows)
    finally:
        await close_db()
    print(f"Seeded {inserted} parts")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("parsed", type=Path, nargs="?", default=Path("server/data/parts-parsed.json"))
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.parsed))
