"""Domain models for the meal bot."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    line_user_id: str
    display_name: str | None = None
