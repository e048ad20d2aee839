"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from kcal_bot.domain.nutrition import NutritionFacts
from kcal_bot.domain.vision import UNKNOWN_DISH


@dataclass(frozen=True)
class MealRecord:
    """One logged dish from one photo."""

    user_id: UUID
    taken_at: datetime
    image_url: str
    dish_name: str
    portion: str
    confidence: float
    nutrition: NutritionFacts
    raw_ai: dict[str, object] = field(default_factory=dict)

    @property
    def is_identified(self) -> bool:
        """Return true when the dish was recognized."""
        return self.dish_name.lower() != UNKNOWN_DISH
