"""Models for dish candidates extracted from photos."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_DISH = "unknown"


class DishCandidate(BaseModel):
    """Single food item identified in a photo."""

    model_config = ConfigDict(frozen=True)

    dish_name: str = UNKNOWN_DISH
    portion: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @field_validator("dish_name", mode="before")
    @classmethod
    def _dish_name_or_unknown(cls, value: object) -> str:
        if not value:
            return UNKNOWN_DISH
        return str(value).strip() or UNKNOWN_DISH

    @field_validator("portion", mode="before")
    @classmethod
    def _portion_text(cls, value: object) -> str:
        if not value:
            return ""
        return str(value).strip()

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: object) -> float:
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(number):
            return 0.0
        return min(max(number, 0.0), 1.0)

    @property
    def is_unknown(self) -> bool:
        """Return true for the unrecognized-content sentinel."""
        return self.dish_name.lower() == UNKNOWN_DISH


UNKNOWN_CANDIDATE = DishCandidate()
