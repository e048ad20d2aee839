"""Photo-to-meal-log pipeline."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from kcal_bot.domain.meals import MealRecord
from kcal_bot.domain.nutrition import NutritionFacts
from kcal_bot.domain.vision import DishCandidate
from kcal_bot.services.nutrition import NutritionEstimator
from kcal_bot.services.vision import ImageAnalyzer


class MealRepository(Protocol):
    """Persistence interface for meal records."""

    async def insert_meals(self, records: list[MealRecord]) -> None:
        """Insert all records in a single write."""


@dataclass
class MealPipeline:
    """Turns one stored photo into persisted, nutrition-annotated records."""

    analyzer: ImageAnalyzer
    estimator: NutritionEstimator
    repository: MealRepository

    async def log_photo(self, user_id: UUID, image_url: str) -> list[MealRecord]:
        """Analyze a photo, estimate every dish, and persist the records."""
        candidates = await self.analyzer.analyze(image_url)
        nutrition = await asyncio.gather(
            *(
                self.estimator.estimate(candidate.dish_name, candidate.portion)
                for candidate in candidates
            )
        )
        taken_at = datetime.now(tz=UTC)
        records = [
            _build_record(user_id, taken_at, image_url, candidate, facts)
            for candidate, facts in zip(candidates, nutrition, strict=True)
        ]
        await self.repository.insert_meals(records)
        return records


def _build_record(
    user_id: UUID,
    taken_at: datetime,
    image_url: str,
    candidate: DishCandidate,
    facts: NutritionFacts,
) -> MealRecord:
    return MealRecord(
        user_id=user_id,
        taken_at=taken_at,
        image_url=image_url,
        dish_name=candidate.dish_name,
        portion=candidate.portion,
        confidence=candidate.confidence,
        nutrition=facts,
        raw_ai={
            "candidate": candidate.model_dump(),
            "nutrition": facts.model_dump(),
        },
    )
