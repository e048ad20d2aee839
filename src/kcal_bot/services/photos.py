"""Background processing of meal photos received over LINE."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from kcal_bot.adapters.line_client import LineClient
from kcal_bot.services.formatters import format_logged_meals
from kcal_bot.services.meals import MealPipeline
from kcal_bot.services.vision import detect_mime_type

ANALYZING_MESSAGE = "Analyzing your meal… 🍱"
PHOTO_ERROR_MESSAGE = (
    "Oops, couldn't analyze that image. Try another angle or add a short caption."
)

_logger = logging.getLogger(__name__)


class ImageStorage(Protocol):
    """Interface for storing uploaded photos."""

    async def upload(self, user_id: UUID, data: bytes, content_type: str) -> str:
        """Store image bytes and return a URL they can be fetched from."""


@dataclass
class PhotoLogService:
    """Second phase of an image event: log the meal, then push the result."""

    line_client: LineClient
    storage: ImageStorage
    pipeline: MealPipeline
    environment: str = "production"

    async def process_photo(
        self, *, line_user_id: str, user_id: UUID, message_id: str
    ) -> None:
        """Run the meal pipeline for a LINE image and push the outcome."""
        try:
            image_bytes = await self.line_client.get_message_content(message_id)
            image_url = await self.storage.upload(
                user_id, image_bytes, detect_mime_type(image_bytes)
            )
            records = await self.pipeline.log_photo(user_id, image_url)
            text = format_logged_meals(records)
        except Exception as exc:
            _logger.exception(
                "Meal photo pipeline failed",
                extra={"line_user_id": line_user_id, "line_message_id": message_id},
            )
            text = format_photo_error(self.environment, exc, PHOTO_ERROR_MESSAGE)

        try:
            await self.line_client.push(line_user_id, [text])
        except Exception:
            _logger.exception(
                "Failed to push meal photo result",
                extra={"line_user_id": line_user_id, "line_message_id": message_id},
            )


def format_photo_error(environment: str, exc: Exception, fallback: str) -> str:
    """Return a user-facing photo error message with local debug info."""
    if environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
