"""Request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from travel_stories.domain.models import StoryRecord, UserRecord


class ApiModel(BaseModel):
    """Base model that accepts and emits the camelCase wire names."""

    model_config = ConfigDict(populate_by_name=True)


class CreateAccountRequest(ApiModel):
    """Registration payload; presence is checked by the user service."""

    full_name: str | None = Field(default=None, alias="fullName")
    email: str | None = None
    password: str | None = None


class LoginRequest(ApiModel):
    """Login payload."""

    email: str | None = None
    password: str | None = None


class StoryRequest(ApiModel):
    """Payload for creating or replacing a story."""

    title: str | None = None
    story: str | None = None
    visited_location: list[str] | str | None = Field(
        default=None, alias="visitedLocation"
    )
    image_url: str | None = Field(default=None, alias="imageUrl")
    visited_date: StrictInt | str | None = Field(default=None, alias="visitedDate")


class FavouriteRequest(ApiModel):
    """Payload for the favourite toggle."""

    is_favourite: bool | None = Field(default=None, alias="isFavourite")


class UserSummary(ApiModel):
    """User fields returned on sign-up and login."""

    full_name: str = Field(alias="fullName")
    email: str

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserSummary":
        return cls(full_name=user.full_name, email=user.email)


class UserProfile(UserSummary):
    """User fields returned by the profile endpoint."""

    id: UUID = Field(alias="_id")
    created_on: datetime | None = Field(default=None, alias="createdOn")

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserProfile":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            created_on=user.created_on,
        )


class StoryOut(ApiModel):
    """Story representation sent to clients."""

    id: UUID = Field(alias="_id")
    owner_id: UUID = Field(alias="userId")
    title: str
    story: str
    visited_location: list[str] = Field(alias="visitedLocation")
    image_url: str = Field(alias="imageUrl")
    visited_date: datetime = Field(alias="visitedDate")
    is_favourite: bool = Field(alias="isFavourite")
    created_on: datetime | None = Field(default=None, alias="createdOn")

    @classmethod
    def from_record(cls, story: StoryRecord) -> "StoryOut":
        return cls(
            id=story.id,
            owner_id=story.owner_id,
            title=story.title,
            story=story.story,
            visited_location=list(story.visited_location),
            image_url=story.image_url,
            visited_date=story.visited_date,
            is_favourite=story.is_favourite,
            created_on=story.created_on,
        )


class Envelope(ApiModel):
    """Common response wrapper."""

    error: bool = False
    message: str = ""


class AuthResponse(Envelope):
    user: UserSummary
    access_token: str = Field(alias="accessToken")


class ProfileResponse(Envelope):
    user: UserProfile


class ImageUploadResponse(Envelope):
    image_url: str = Field(alias="imageUrl")


class StoryResponse(Envelope):
    story: StoryOut


class StoryListResponse(Envelope):
    stories: list[StoryOut]
