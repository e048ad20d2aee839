"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from kcal_bot.domain.errors import PersistenceError
from kcal_bot.domain.models import UserRecord
from kcal_bot.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: AsyncClient

    async def get_by_line_user_id(self, line_user_id: str) -> UserRecord | None:
        """Return the user for a LINE user id, if present."""
        response = await (
            self.client.table("users")
            .select("id, line_user_id, display_name")
            .eq("line_user_id", line_user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    async def upsert_user(
        self, line_user_id: str, display_name: str | None
    ) -> UserRecord:
        """Insert the user keyed by LINE id, keeping any existing row."""
        response = await (
            self.client.table("users")
            .upsert(
                {"line_user_id": line_user_id, "display_name": display_name},
                on_conflict="line_user_id",
                ignore_duplicates=True,
            )
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        existing = await self.get_by_line_user_id(line_user_id)
        if existing is None:
            raise PersistenceError("Failed to upsert user in Supabase")
        return existing


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        line_user_id=str(row["line_user_id"]),
        display_name=row.get("display_name"),
    )
