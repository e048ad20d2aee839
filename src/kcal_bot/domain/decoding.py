"""Result variants for decoding free-form model output."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UnparsedOutput:
    """Model output that could not be decoded into the expected shape.

    Carries the raw text so callers can log it before falling back to a
    sentinel value.
    """

    raw_text: str
    reason: str
