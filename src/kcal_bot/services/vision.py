"""Dish extraction from meal photos using a vision-capable model."""

import base64
import logging
from dataclasses import dataclass

from kcal_bot.adapters.image_fetcher import ImageFetcher
from kcal_bot.domain.decoding import UnparsedOutput
from kcal_bot.domain.vision import UNKNOWN_CANDIDATE, DishCandidate
from kcal_bot.services.generation import GenerativeClient, find_json_value

ANALYZE_PROMPT = """You are a nutrition assistant looking at a photo of food.
List EVERY food item, dish, or drink you can see.
- For a prepared dish, give the dish name.
- For a packaged or branded product, give the brand and product name.
- When you cannot tell what something is, use "unknown".
Reply with JSON only: an array, even when there is a single item.
[{"dish_name":"string","portion":"string","confidence":0.0}]

Examples:
A single bottled smoothie:
[{"dish_name": "Dee's Mixedberry High Protein Smoothie", "portion": "500 ML", "confidence": 0.95}]
A table with two dishes:
[{"dish_name": "Pad Krapow Moo", "portion": "1 serving", "confidence": 0.9}, {"dish_name": "Tom Yum Goong", "portion": "1 bowl", "confidence": 0.85}]
A blurry or unclear photo:
[{"dish_name": "unknown", "portion": "", "confidence": 0.1}]
"""  # noqa: E501

_logger = logging.getLogger(__name__)


@dataclass
class ImageAnalyzer:
    """Service that prompts the vision model and decodes dish candidates."""

    fetcher: ImageFetcher
    client: GenerativeClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_url: str) -> list[DishCandidate]:
        """Return the dishes visible in an image, never an empty list."""
        image_bytes = await self.fetcher.fetch(image_url)
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=ANALYZE_PROMPT,
            image_data_url=to_data_url(image_bytes),
        )
        _logger.debug("Vision raw output: url=%s raw=%r", image_url, raw)
        decoded = decode_candidates(raw)
        if isinstance(decoded, UnparsedOutput):
            _logger.warning(
                "No dish candidates decoded (%s): %r", decoded.reason, decoded.raw_text
            )
            return [UNKNOWN_CANDIDATE]
        return decoded


def decode_candidates(text: str) -> list[DishCandidate] | UnparsedOutput:
    """Decode model text into a non-empty list of dish candidates."""
    items = find_json_value(text, "[", list)
    if not isinstance(items, list):
        return UnparsedOutput(raw_text=text, reason="no JSON array in output")
    if not items:
        return UnparsedOutput(raw_text=text, reason="empty JSON array")
    return [
        DishCandidate.model_validate(item if isinstance(item, dict) else {})
        for item in items
    ]


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
