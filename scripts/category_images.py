"""Refresh the per-category part images."""

import argparse
import json
from pathlib import Path

from src.etl.category_images import set_fixed_images, update_from_classifications
from src.logging_config import configure_logging

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--images-dir", type=Path, default=Path("client/public/images/parts/items"))
    parser.add_argument("--output-dir", type=Path, default=Path("client/public/images/parts"))
    parser.add_argument("--classifications", type=Path, default=Path("server/data/image-classifications.json"))
    parser.add_argument("--fixed", action="store_true", help="use the hand-picked photo map")
    args = parser.parse_args()

    configure_logging()
    if args.fixed:
        chosen = set_fixed_images(args.images_dir, args.output_dir)
    else:
        classifications = json.loads(args.classifications.read_text(encoding="utf-8"))
        chosen = update_from_classifications(classifications, args.images_dir, args.output_dir)

    for category, source in chosen.items():
        print(f"  {category}: {source}")
    print(f"\nUpdated {len(chosen)} category images")
