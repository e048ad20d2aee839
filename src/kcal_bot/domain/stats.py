"""Domain models for meal summaries."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MealLogRow:
    """A persisted meal as read back for summaries."""

    dish_name: str
    taken_at: datetime
    calories_kcal: float
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None


@dataclass(frozen=True)
class MealTotals:
    """Summed calories and macros."""

    kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class SpanSummary:
    """Meals and totals for a summary window."""

    span: str
    user_known: bool
    meals: list[MealLogRow]
    total: MealTotals
