"""Text formatting for chat replies."""

import math

from kcal_bot.domain.meals import MealRecord
from kcal_bot.domain.stats import SpanSummary

NO_MEALS_YET = "No meals yet."
NO_DISHES_IDENTIFIED = "Sorry, I couldn't identify any dishes in that photo."
SPAN_TITLES = {"day": "Today", "week": "This week"}


def format_meal_line(
    name: str,
    kcal: float,
    protein_g: float | None = None,
    carbs_g: float | None = None,
    fat_g: float | None = None,
) -> str:
    """Format a dish with its calories and any non-zero macros."""
    lines = [f"{name} — ~{_round(kcal)} kcal"]
    for label, value in (("Protein", protein_g), ("Carbs", carbs_g), ("Fat", fat_g)):
        if value:
            lines.append(f"  {label}: {_round(value)}g")
    return "\n".join(lines)


def format_logged_meals(records: list[MealRecord]) -> str:
    """Format the reply for a freshly logged photo."""
    identified = [record for record in records if record.is_identified]
    if not identified:
        return NO_DISHES_IDENTIFIED
    total_kcal = sum(record.nutrition.kcal for record in identified)
    lines = [f"Logged {len(identified)} items — Total ~{_round(total_kcal)} kcal"]
    for record in identified:
        lines.append(
            "• "
            + format_meal_line(
                record.dish_name,
                record.nutrition.kcal,
                record.nutrition.protein_g,
                record.nutrition.carbs_g,
                record.nutrition.fat_g,
            )
        )
    return "\n".join(lines)


def format_summary(summary: SpanSummary) -> str:
    """Format a day or week summary."""
    if not summary.user_known:
        return NO_MEALS_YET
    if not summary.meals:
        return f"No meals in this {summary.span}."
    total = summary.total
    lines = [
        f"📊 {SPAN_TITLES[summary.span]} summary",
        f"Total: ~{_round(total.kcal)} kcal "
        f"(P{_round(total.protein_g)} / C{_round(total.carbs_g)} "
        f"/ F{_round(total.fat_g)})",
        "",
    ]
    for meal in summary.meals:
        lines.append(
            "• "
            + format_meal_line(
                meal.dish_name,
                meal.calories_kcal,
                meal.protein_g,
                meal.carbs_g,
                meal.fat_g,
            )
        )
    return "\n".join(lines)


def _round(value: float) -> int:
    """Round to the nearest integer, halves up."""
    return math.floor(value + 0.5)
