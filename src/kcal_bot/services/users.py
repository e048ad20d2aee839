"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from kcal_bot.adapters.line_client import LineClient
from kcal_bot.domain.models import UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    async def get_by_line_user_id(self, line_user_id: str) -> UserRecord | None:
        """Return the user for a LINE user id, if present."""

    async def upsert_user(
        self, line_user_id: str, display_name: str | None
    ) -> UserRecord:
        """Create the user unless it exists and return the stored record."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    line_client: LineClient

    async def ensure_user(self, line_user_id: str) -> UserRecord:
        """Ensure a user exists for the LINE id and return it."""
        existing = await self.repository.get_by_line_user_id(line_user_id)
        if existing:
            return existing

        display_name = await self._lookup_display_name(line_user_id)
        return await self.repository.upsert_user(line_user_id, display_name)

    async def _lookup_display_name(self, line_user_id: str) -> str | None:
        try:
            profile = await self.line_client.get_profile(line_user_id)
        except httpx.HTTPError:
            _logger.warning(
                "LINE profile lookup failed", extra={"line_user_id": line_user_id}
            )
            return None
        if not profile:
            return None
        display_name = profile.get("displayName")
        return str(display_name) if display_name else None
