"""Offline matching of free-text dish names against the curated table."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from kcal_bot.domain.nutrition import CURATED_DISHES, MacroProfile

_TOKEN_SEPARATORS = re.compile(r"[\s,\-]+")


def _tokens(text: str) -> set[str]:
    return {token for token in _TOKEN_SEPARATORS.split(text) if token}


@dataclass
class DishMatcher:
    """Resolve dish names to canonical table keys.

    Precedence: exact key, then the first key contained in the name, then the
    key sharing the most tokens with the name (earlier keys win ties).
    """

    table: Mapping[str, MacroProfile] = field(default_factory=lambda: CURATED_DISHES)
    _key_tokens: dict[str, set[str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._key_tokens = {key: _tokens(key) for key in self.table}

    def match(self, name: str) -> str | None:
        """Return the canonical key for a dish name, if any."""
        normalized = name.lower().strip()
        if normalized in self.table:
            return normalized
        for key in self.table:
            if key in normalized:
                return key

        name_tokens = _tokens(normalized)
        best_key: str | None = None
        best_score = 0
        for key, key_tokens in self._key_tokens.items():
            score = len(name_tokens & key_tokens)
            if score > best_score:
                best_key = key
                best_score = score
        return best_key

    def profile(self, key: str) -> MacroProfile:
        """Return the stored macros for a canonical key."""
        return self.table[key]
