"""Nutrition estimation with table lookup and model fallback."""

import logging
from dataclasses import dataclass, field

from kcal_bot.domain.decoding import UnparsedOutput
from kcal_bot.domain.nutrition import (
    DEFAULT_PROFILE,
    DEFAULT_SOURCE,
    MAP_SOURCE_PREFIX,
    MODEL_SOURCE,
    EstimatedMacros,
    NutritionFacts,
)
from kcal_bot.services.generation import GenerativeClient, find_json_value
from kcal_bot.services.matcher import DishMatcher

DEFAULT_PORTION = "typical one-serving"

_logger = logging.getLogger(__name__)


@dataclass
class NutritionEstimator:
    """Resolve nutrition facts for a single dish name."""

    client: GenerativeClient
    model: str
    reasoning_effort: str | None
    store: bool
    matcher: DishMatcher = field(default_factory=DishMatcher)

    async def estimate(
        self, dish_name: str, portion: str | None = None
    ) -> NutritionFacts:
        """Return nutrition for a dish, preferring the curated table."""
        key = self.matcher.match(dish_name)
        if key is not None:
            return NutritionFacts.from_profile(
                self.matcher.profile(key), f"{MAP_SOURCE_PREFIX}{key}"
            )

        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=build_estimate_prompt(dish_name, portion),
        )
        _logger.debug("Nutrition estimate raw output: dish=%s raw=%r", dish_name, raw)
        decoded = decode_nutrition(raw)
        if isinstance(decoded, UnparsedOutput):
            _logger.warning(
                "Using default nutrition for %s (%s): %r",
                dish_name,
                decoded.reason,
                decoded.raw_text,
            )
            return NutritionFacts.from_profile(DEFAULT_PROFILE, DEFAULT_SOURCE)
        return decoded


def build_estimate_prompt(dish_name: str, portion: str | None) -> str:
    """Build the single-dish nutrition prompt."""
    return (
        f'For "{dish_name}" ({portion or DEFAULT_PORTION}), '
        "give JSON {kcal,protein_g,carbs_g,fat_g} numbers only."
    )


def decode_nutrition(text: str) -> NutritionFacts | UnparsedOutput:
    """Decode model text into nutrition facts tagged as model output."""
    payload = find_json_value(text, "{", dict)
    if not isinstance(payload, dict):
        return UnparsedOutput(raw_text=text, reason="no JSON object in output")
    return EstimatedMacros.model_validate(payload).to_facts(MODEL_SOURCE)
