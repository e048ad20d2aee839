"""Generative model interface and helpers for reading its output."""

import json
from typing import Protocol

_DECODER = json.JSONDecoder()


class GenerativeClient(Protocol):
    """Interface for text generation with optional image input."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_data_url: str | None = None,
    ) -> str:
        """Return the model's raw text response."""


def find_json_value(text: str, opener: str, expected: type) -> object | None:
    """Return the first JSON value of the expected type embedded in text.

    Models tend to wrap JSON in commentary or code fences, so every position
    of ``opener`` is tried in order until one decodes to ``expected``.
    """
    start = text.find(opener)
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, expected):
            return value
        start = text.find(opener, start + 1)
    return None
