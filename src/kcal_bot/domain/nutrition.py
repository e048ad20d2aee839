"""Nutrition domain models and the curated dish table."""

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

MAP_SOURCE_PREFIX = "map:"
MODEL_SOURCE = "model"
DEFAULT_SOURCE = "default"


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients for one serving."""

    kcal: float
    protein_g: float
    carbs_g: float
    fat_g: float


class NutritionFacts(BaseModel):
    """Resolved nutrition for a dish, tagged with where it came from."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kcal: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    source: str

    @field_validator("source")
    @classmethod
    def _known_source(cls, value: str) -> str:
        if value in {MODEL_SOURCE, DEFAULT_SOURCE}:
            return value
        if value.startswith(MAP_SOURCE_PREFIX) and len(value) > len(MAP_SOURCE_PREFIX):
            return value
        raise ValueError(f"Unsupported nutrition source: {value!r}")

    @classmethod
    def from_profile(cls, profile: MacroProfile, source: str) -> "NutritionFacts":
        """Build facts from a macro profile and a provenance tag."""
        return cls(
            kcal=profile.kcal,
            protein_g=profile.protein_g,
            carbs_g=profile.carbs_g,
            fat_g=profile.fat_g,
            source=source,
        )


DEFAULT_PROFILE = MacroProfile(kcal=500, protein_g=20, carbs_g=60, fat_g=18)

# Insertion order is significant: matching prefers earlier keys on ties.
CURATED_DISHES: dict[str, MacroProfile] = {
    "khao man gai": MacroProfile(kcal=680, protein_g=35, carbs_g=85, fat_g=20),
    "khao moo daeng": MacroProfile(kcal=650, protein_g=28, carbs_g=90, fat_g=18),
    "pad kra pao moo kai dao": MacroProfile(
        kcal=720, protein_g=35, carbs_g=75, fat_g=28
    ),
    "pad thai": MacroProfile(kcal=600, protein_g=24, carbs_g=85, fat_g=18),
    "som tum": MacroProfile(kcal=120, protein_g=3, carbs_g=20, fat_g=2),
    "moo ping (2 sticks)": MacroProfile(kcal=260, protein_g=18, carbs_g=8, fat_g=16),
    "omelet rice": MacroProfile(kcal=550, protein_g=20, carbs_g=75, fat_g=18),
    "grilled chicken (quarter)": MacroProfile(
        kcal=300, protein_g=40, carbs_g=0, fat_g=14
    ),
    "fried rice": MacroProfile(kcal=630, protein_g=20, carbs_g=90, fat_g=20),
}


class EstimatedMacros(BaseModel):
    """Macros reported by the model for one dish.

    Each missing, negative, non-numeric, or non-finite field falls back to the
    matching value of ``DEFAULT_PROFILE``.
    """

    model_config = ConfigDict(frozen=True)

    kcal: float = DEFAULT_PROFILE.kcal
    protein_g: float = DEFAULT_PROFILE.protein_g
    carbs_g: float = DEFAULT_PROFILE.carbs_g
    fat_g: float = DEFAULT_PROFILE.fat_g

    @field_validator("kcal", "protein_g", "carbs_g", "fat_g", mode="before")
    @classmethod
    def _amount_or_default(cls, value: object, info: ValidationInfo) -> float:
        default = getattr(DEFAULT_PROFILE, info.field_name)
        if value is None or isinstance(value, bool):
            return default
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(number) or number < 0:
            return default
        return number

    def to_facts(self, source: str) -> NutritionFacts:
        """Return the macros as nutrition facts tagged with a source."""
        return NutritionFacts(
            kcal=self.kcal,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            source=source,
        )
