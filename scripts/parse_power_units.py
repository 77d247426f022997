"""Replace the power units table with the inventory spreadsheet."""

import argparse
import asyncio
import json
from pathlib import Path
from typing import Optional

from src.database import close_db, get_db_session, init_db
from src.etl.power_units import import_power_units, read_workbook
from src.logging_config import configure_logging


async def main(workbook: Path, dump: Optional[Path]):
    units = read_workbook(workbook)
    print(f"Parsed {len(units)} power units")

    if dump:
        dump.write_text(json.dumps(units, indent=2), encoding="utf-8")
        print(f"Wrote {dump}")

    await init_db()
    try:
        async with get_db_session() as session:
            await import_power_units(session, units)
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("workbook", type=Path)
    parser.add_argument("--dump", type=Path, help="also write the parsed rows as JSON")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.workbook, args.dump))
