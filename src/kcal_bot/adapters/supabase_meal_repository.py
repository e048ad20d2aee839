"""Supabase repository for meal records."""

from dataclasses import dataclass

from supabase import AsyncClient

from kcal_bot.domain.errors import PersistenceError
from kcal_bot.domain.meals import MealRecord
from kcal_bot.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal writes."""

    client: AsyncClient

    async def insert_meals(self, records: list[MealRecord]) -> None:
        """Insert all meal rows with one request."""
        if not records:
            return
        payload = [_to_row(record) for record in records]
        response = await self.client.table("meals").insert(payload).execute()
        if not response.data:
            raise PersistenceError("Failed to insert meals in Supabase")


def _to_row(record: MealRecord) -> dict[str, object]:
    return {
        "user_id": str(record.user_id),
        "taken_at": record.taken_at.isoformat(),
        "image_url": record.image_url,
        "dish_name": record.dish_name,
        "portion": record.portion or None,
        "confidence": record.confidence,
        "calories_kcal": record.nutrition.kcal,
        "protein_g": record.nutrition.protein_g,
        "carbs_g": record.nutrition.carbs_g,
        "fat_g": record.nutrition.fat_g,
        "raw_ai": record.raw_ai,
    }
