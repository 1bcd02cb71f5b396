"""Value objects for story writes."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StoryFields:
    """Validated, user-editable story fields."""

    title: str
    story: str
    visited_location: list[str]
    image_url: str
    visited_date: datetime

    def to_row(self) -> dict[str, object]:
        """Return the column mapping used by the store."""
        return {
            "title": self.title,
            "story": self.story,
            "visited_location": list(self.visited_location),
            "image_url": self.image_url,
            "visited_date": self.visited_date.isoformat(),
        }
