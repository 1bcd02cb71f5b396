"""Supabase implementation for travel stories."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from travel_stories.domain.models import StoryRecord
from travel_stories.domain.stories import StoryFields
from travel_stories.services.stories import StoryRepository

_TABLE = "travel_stories"


@dataclass
class SupabaseStoryRepository(StoryRepository):
    """Supabase-backed repository; every query filters on ``user_id``."""

    client: Client

    def create_story(self, owner_id: UUID, fields: StoryFields) -> StoryRecord:
        """Create a story row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {"user_id": str(owner_id), "is_favourite": False, **fields.to_row()}
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create travel story")
        return _parse_story(response.data[0])

    def list_stories(self, owner_id: UUID) -> list[StoryRecord]:
        """Return the owner's stories, favourites first then oldest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .order("is_favourite", desc=True)
            .order("created_on")
            .execute()
        )
        return [_parse_story(row) for row in response.data or []]

    def update_story(
        self, story_id: UUID, owner_id: UUID, fields: StoryFields
    ) -> StoryRecord | None:
        """Replace the editable columns of an owned story."""
        response = (
            self.client.table(_TABLE)
            .update(fields.to_row())
            .eq("id", str(story_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_story(response.data[0])

    def delete_story(self, story_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned story row."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(story_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        return bool(response.data)

    def set_favourite(
        self, story_id: UUID, owner_id: UUID, is_favourite: bool
    ) -> StoryRecord | None:
        """Update the favourite flag of an owned story."""
        response = (
            self.client.table(_TABLE)
            .update({"is_favourite": is_favourite})
            .eq("id", str(story_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_story(response.data[0])

    def search_titles(self, owner_id: UUID, query: str) -> list[StoryRecord]:
        """Match titles containing the query, ignoring case.

        PostgREST reads ``*`` in an ``ilike`` pattern as ``%`` and has no escape
        for it, so the store narrows the rows and the literal match is
        re-checked here.
        """
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .ilike("title", f"%{escape_like(query)}%")
            .order("is_favourite", desc=True)
            .order("created_on")
            .execute()
        )
        needle = query.lower()
        stories = [_parse_story(row) for row in response.data or []]
        return [story for story in stories if needle in story.title.lower()]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the query matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str) or not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_story(row: dict[str, object]) -> StoryRecord:
    """Parse a travel story row into a domain model."""
    locations = row.get("visited_location") or []
    visited_date = _parse_timestamp(row.get("visited_date"))
    return StoryRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        story=str(row.get("story", "")),
        visited_location=[str(location) for location in locations],
        image_url=str(row.get("image_url", "")),
        visited_date=visited_date or datetime.fromtimestamp(0, tz=UTC),
        is_favourite=bool(row.get("is_favourite", False)),
        created_on=_parse_timestamp(row.get("created_on")),
    )
