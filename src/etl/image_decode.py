"""Decode data-URL part photos into numbered image files."""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import Path

import structlog

logger = structlog.get_logger()

_DATA_URL = re.compile(r"^data:image/(png|jpeg|jpg|gif|webp);base64,(.+)$")


def decode_data_urls(text: str, output_dir: Path) -> list[Path]:
    """Write each `data:image/...;base64,` line as part-NNNN.<ext>.

    Numbering follows the position among data-URL lines, so an unreadable
    line leaves a gap instead of shifting later files.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    lines = [line.strip() for line in text.split("\n") if line.strip().startswith("data:image")]
    logger.info("data_urls_found", count=len(lines))

    saved: list[Path] = []
    for i, line in enumerate(lines):
        match = _DATA_URL.match(line)
        if not match:
            logger.warning("data_url_unparseable", line=i + 1)
            continue

        ext = "jpg" if match.group(1) == "jpeg" else match.group(1)
        try:
            data = base64.b64decode(match.group(2))
        except (binascii.Error, ValueError) as e:
            logger.warning("data_url_bad_base64", line=i + 1, error=str(e))
            continue

        path = output_dir / f"part-{i + 1:04d}.{ext}"
        path.write_bytes(data)
        saved.append(path)
        if len(saved) % 100 == 0:
            logger.info("images_saved", saved=len(saved))

    logger.info("images_decoded", saved=len(saved), output_dir=str(output_dir))
    return saved
