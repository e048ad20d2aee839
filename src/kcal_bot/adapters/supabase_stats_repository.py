"""Supabase repository for meal summaries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from kcal_bot.domain.stats import MealLogRow
from kcal_bot.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for summary queries."""

    client: AsyncClient

    async def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogRow]:
        """Return meals in the inclusive time range, oldest first."""
        response = await (
            self.client.table("meals")
            .select("dish_name, calories_kcal, protein_g, carbs_g, fat_g, taken_at")
            .eq("user_id", str(user_id))
            .gte("taken_at", start.isoformat())
            .lte("taken_at", end.isoformat())
            .order("taken_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealLogRow:
    return MealLogRow(
        dish_name=str(row.get("dish_name") or "unknown"),
        taken_at=datetime.fromisoformat(str(row["taken_at"])),
        calories_kcal=float(row.get("calories_kcal") or 0.0),
        protein_g=_optional_float(row.get("protein_g")),
        carbs_g=_optional_float(row.get("carbs_g")),
        fat_g=_optional_float(row.get("fat_g")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
