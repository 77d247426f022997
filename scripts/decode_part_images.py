"""Decode a file of data-URL lines into part-NNNN image files."""

import argparse
from pathlib import Path

from src.etl.image_decode import decode_data_urls
from src.logging_config import configure_logging

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", type=Path)
    parser.add_argument("--output-dir", type=Path, default=Path("client/public/images/parts/items"))
    args = parser.parse_args()

    configure_logging()
    saved = decode_data_urls(args.source.read_text(encoding="utf-8"), args.output_dir)
    print(f"Saved {len(saved)} images to {args.output_dir}")
