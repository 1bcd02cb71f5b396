"""Domain models for the travel journal."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    full_name: str
    email: str
    password_hash: str
    created_on: datetime | None = None


@dataclass(frozen=True)
class StoryRecord:
    """Represents a travel story owned by a single user."""

    id: UUID
    owner_id: UUID
    title: str
    story: str
    visited_location: list[str]
    image_url: str
    visited_date: datetime
    is_favourite: bool = False
    created_on: datetime | None = None
