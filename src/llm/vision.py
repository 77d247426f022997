"""Vision classification of part photos."""

from __future__ import annotations

import base64
import json
import re
from pathlib import Path
from typing import Optional

import structlog
from anthropic import AsyncAnthropic

from src.config import settings
from src.llm.client import get_llm_client
from src.llm.prompts.image_classifier import IMAGE_CLASSIFY_PROMPT, PART_CATEGORIES

logger = structlog.get_logger()

_JSON_OBJECT = re.compile(r"\{[^}]+\}")
_FIRST_NUMBER = re.compile(r"(\d+)")


def parse_classification(text: str) -> tuple[str, str]:
    """Map a model reply to (category, part type).

    Accepts `{"cat": n, "type": "..."}` anywhere in the reply, falls back to
    the first number in the text, and clamps the index to the category list.
    """
    cat: object = 1
    part_type = "unknown"

    parsed = None
    match = _JSON_OBJECT.search(text)
    if match:
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError:
            parsed = None

    if isinstance(parsed, dict):
        cat = parsed.get("cat") or 1
        part_type = parsed.get("type") or "unknown"
    else:
        number = _FIRST_NUMBER.search(text)
        if number:
            cat = number.group(1)

    try:
        index = int(cat) - 1
    except (TypeError, ValueError):
        index = 0
    index = max(0, min(len(PART_CATEGORIES) - 1, index))
    return PART_CATEGORIES[index], str(part_type)


async def classify_image(
    image_path: Path,
    client: Optional[AsyncAnthropic] = None,
) -> dict:
    """Classify one PNG part photo.

    Returns: {"file", "category", "partType"}
    """
    client = client or get_llm_client()
    encoded = base64.standard_b64encode(image_path.read_bytes()).decode("ascii")

    response = await client.messages.create(
        model=settings.vision_model,
        max_tokens=settings.vision_max_tokens,
        messages=[
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": "image/png",
                            "data": encoded,
                        },
                    },
                    {"type": "text", "text": IMAGE_CLASSIFY_PROMPT},
                ],
            }
        ],
    )
    text = response.content[0].text.strip() if response.content else ""
    category, part_type = parse_classification(text)

    logger.debug("image_classified", file=image_path.name, category=category, part_type=part_type)
    return {"file": image_path.name, "category": category, "partType": part_type}
