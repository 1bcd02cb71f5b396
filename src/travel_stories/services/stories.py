"""Owner-scoped travel story operations."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from travel_stories.domain.models import StoryRecord
from travel_stories.domain.stories import StoryFields
from travel_stories.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields are required"
STORY_NOT_FOUND_MESSAGE = "Travel story not found"


class StoryRepository(Protocol):
    """Persistence interface for travel stories.

    Every method taking both a story id and an owner id must match on both.
    """

    def create_story(self, owner_id: UUID, fields: StoryFields) -> StoryRecord:
        """Create a story and return it."""

    def list_stories(self, owner_id: UUID) -> list[StoryRecord]:
        """Return all stories of an owner, favourites first."""

    def update_story(
        self, story_id: UUID, owner_id: UUID, fields: StoryFields
    ) -> StoryRecord | None:
        """Replace the editable fields of a story, if owned."""

    def delete_story(self, story_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned story and report whether a row matched."""

    def set_favourite(
        self, story_id: UUID, owner_id: UUID, is_favourite: bool
    ) -> StoryRecord | None:
        """Update the favourite flag of an owned story."""

    def search_titles(self, owner_id: UUID, query: str) -> list[StoryRecord]:
        """Return owned stories whose title contains the query, ignoring case."""


@dataclass
class StoryService:
    """Application service for travel story CRUD and search."""

    repository: StoryRepository
    placeholder_image_url: str

    def create(  # noqa: PLR0913
        self,
        owner_id: UUID,
        *,
        title: str | None,
        story: str | None,
        visited_location: list[str] | str | None,
        visited_date: int | str | None,
        image_url: str | None = None,
    ) -> StoryRecord:
        """Create a story, substituting the placeholder for a missing image."""
        fields = self._build_fields(
            title=title,
            story=story,
            visited_location=visited_location,
            image_url=image_url or self.placeholder_image_url,
            visited_date=visited_date,
        )
        created = self.repository.create_story(owner_id, fields)
        logger.info("Created story", extra={"story_id": str(created.id)})
        return created

    def list_by_owner(self, owner_id: UUID) -> list[StoryRecord]:
        """Return the owner's stories with favourites first."""
        return _favourites_first(self.repository.list_stories(owner_id))

    def edit(  # noqa: PLR0913
        self,
        story_id: UUID,
        owner_id: UUID,
        *,
        title: str | None,
        story: str | None,
        visited_location: list[str] | str | None,
        image_url: str | None,
        visited_date: int | str | None,
    ) -> StoryRecord:
        """Replace every editable field of an owned story."""
        fields = self._build_fields(
            title=title,
            story=story,
            visited_location=visited_location,
            image_url=image_url,
            visited_date=visited_date,
        )
        updated = self.repository.update_story(story_id, owner_id, fields)
        if updated is None:
            raise NotFoundError(STORY_NOT_FOUND_MESSAGE)
        return updated

    def remove(self, story_id: UUID, owner_id: UUID) -> None:
        """Delete an owned story. The attached image is left on disk."""
        if not self.repository.delete_story(story_id, owner_id):
            raise NotFoundError(STORY_NOT_FOUND_MESSAGE)
        logger.info("Deleted story", extra={"story_id": str(story_id)})

    def set_favourite(
        self, story_id: UUID, owner_id: UUID, is_favourite: bool | None
    ) -> StoryRecord:
        """Set the favourite flag of an owned story."""
        if is_favourite is None:
            raise ValidationError("isFavourite is required")
        updated = self.repository.set_favourite(story_id, owner_id, is_favourite)
        if updated is None:
            raise NotFoundError(STORY_NOT_FOUND_MESSAGE)
        return updated

    def search(self, owner_id: UUID, query: str | None) -> list[StoryRecord]:
        """Search the owner's story titles, favourites first."""
        if not query or not query.strip():
            raise ValidationError("query is required")
        return _favourites_first(self.repository.search_titles(owner_id, query))

    @staticmethod
    def _build_fields(
        *,
        title: str | None,
        story: str | None,
        visited_location: list[str] | str | None,
        image_url: str | None,
        visited_date: int | str | None,
    ) -> StoryFields:
        if not title or not story or not image_url:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if visited_location is None or visited_location == "":
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if visited_date is None or visited_date == "":
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        return StoryFields(
            title=title,
            story=story,
            visited_location=_normalize_locations(visited_location),
            image_url=image_url,
            visited_date=parse_visited_date(visited_date),
        )


def parse_visited_date(raw: int | float | str) -> datetime:
    """Convert an epoch value in milliseconds into a UTC timestamp."""
    if isinstance(raw, bool):
        raise ValidationError("visitedDate must be an epoch timestamp")
    try:
        millis = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("visitedDate must be an epoch timestamp") from exc
    try:
        return datetime.fromtimestamp(millis / 1000, tz=UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValidationError("visitedDate is out of range") from exc


def _normalize_locations(raw: list[str] | str) -> list[str]:
    if isinstance(raw, str):
        return [raw]
    return [location for location in raw if location and location.strip()]


def _favourites_first(stories: list[StoryRecord]) -> list[StoryRecord]:
    """Stable sort keeping insertion order within each group."""
    return sorted(stories, key=lambda story: not story.is_favourite)
