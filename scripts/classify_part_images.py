"""Classify part photos into catalog categories with the vision model."""

import argparse
import asyncio
from pathlib import Path

from src.etl.image_classifier import classify_directory, summarize
from src.llm.client import close_llm_client
from src.logging_config import configure_logging


async def main(images_dir: Path, checkpoint: Path):
    try:
        results = await classify_directory(images_dir, checkpoint)
    finally:
        await close_llm_client()

    print("\n=== Classification Summary ===")
    for category, count in summarize(results):
        print(f"  {category}: {count}")
    print(f"\nTotal: {len(results)} images classified")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--images-dir", type=Path, default=Path("client/public/images/parts/items"))
    parser.add_argument("--checkpoint", type=Path, default=Path("server/data/image-classifications.json"))
    args = parser.parse_args()

    configure_logging()
    asyncio.run(main(args.images_dir, args.checkpoint))
