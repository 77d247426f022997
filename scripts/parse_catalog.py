"""Parse the vendor parts catalog text dump into parts JSON."""

import argparse
from pathlib import Path

from src.etl.catalog_parser import parse_catalog_file, summarize, write_parts_json
from src.logging_config import configure_logging


def main(source: Path, output: Path):
    parts = parse_catalog_file(source)
    write_parts_json(parts, output)
    print(f"Wrote {len(parts)} parts to {output}")

    categories, subcategories = summarize(parts)
    print("\nBy category:")
    for name, count in categories.most_common():
        print(f"  {name}: {count}")
    print(f"\n{len(subcategories)} subcategories")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", type=Path)
    parser.add_argument("--output", type=Path, default=Path("server/data/parts-parsed.json"))
    args = parser.parse_args()

    configure_logging()
    main(args.source, args.output)
