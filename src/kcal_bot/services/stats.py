"""Summaries of logged meals over a day or week."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from kcal_bot.domain.stats import MealLogRow, MealTotals, SpanSummary
from kcal_bot.services.formatters import SPAN_TITLES, format_summary
from kcal_bot.services.users import UserRepository

SUNDAY = 6


class StatsRepository(Protocol):
    """Persistence interface for reading logged meals."""

    async def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogRow]:
        """Return meals with start <= taken_at <= end, oldest first."""


@dataclass
class SummaryService:
    """Service for summarizing meals in the configured timezone."""

    user_repository: UserRepository
    repository: StatsRepository
    timezone_name: str

    async def summarize(self, line_user_id: str, span: str) -> str:
        """Return the formatted summary for a span."""
        summary = await self.get_summary(line_user_id, span)
        return format_summary(summary)

    async def get_summary(
        self, line_user_id: str, span: str, now: datetime | None = None
    ) -> SpanSummary:
        """Return meals and exact totals for the current day or week."""
        if span not in SPAN_TITLES:
            raise ValueError(f"Unsupported summary span: {span!r}")
        user = await self.user_repository.get_by_line_user_id(line_user_id)
        if user is None:
            return SpanSummary(
                span=span, user_known=False, meals=[], total=sum_totals([])
            )

        tz = ZoneInfo(self.timezone_name)
        end = (now or datetime.now(tz=tz)).astimezone(tz)
        start = window_start(span, end)
        meals = await self.repository.list_meals(
            user.id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return SpanSummary(
            span=span, user_known=True, meals=meals, total=sum_totals(meals)
        )


def window_start(span: str, now: datetime) -> datetime:
    """Return the local start of the day or week (weeks start on Sunday)."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if span == "day":
        return midnight
    days_since_sunday = (now.weekday() - SUNDAY) % 7
    return midnight - timedelta(days=days_since_sunday)


def sum_totals(meals: list[MealLogRow]) -> MealTotals:
    """Sum calories and macros, treating missing macros as zero."""
    return MealTotals(
        kcal=sum(meal.calories_kcal for meal in meals),
        protein_g=sum(meal.protein_g or 0.0 for meal in meals),
        carbs_g=sum(meal.carbs_g or 0.0 for meal in meals),
        fat_g=sum(meal.fat_g or 0.0 for meal in meals),
    )
