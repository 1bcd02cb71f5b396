"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import Depends, FastAPI, File, Query, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from travel_stories.api.auth import require_user
from travel_stories.api.models import (
    AuthResponse,
    CreateAccountRequest,
    Envelope,
    FavouriteRequest,
    ImageUploadResponse,
    LoginRequest,
    ProfileResponse,
    StoryListResponse,
    StoryOut,
    StoryRequest,
    StoryResponse,
    UserProfile,
    UserSummary,
)
from travel_stories.app_logging import configure_logging
from travel_stories.config import parse_allowed_origins
from travel_stories.containers import AppContainer
from travel_stories.domain.models import StoryRecord
from travel_stories.errors import (
    AuthError,
    CredentialsError,
    NotFoundError,
    TravelStoriesError,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Travel Stories API")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(settings.cors_allowed_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(TravelStoriesError)
    async def handle_domain_error(
        request: Request, exc: TravelStoriesError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred"
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post(
        "/create-account",
        response_model=AuthResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_account(payload: CreateAccountRequest) -> AuthResponse:
        """Register a user and sign them in."""
        user = container.user_service.register(
            payload.full_name, payload.email, payload.password
        )
        return AuthResponse(
            user=UserSummary.from_record(user),
            access_token=container.token_service.issue(user.id),
            message="Registration Successful",
        )

    @app.post("/login", response_model=AuthResponse)
    async def login(payload: LoginRequest) -> AuthResponse:
        """Exchange email and password for an access token."""
        try:
            user = container.user_service.verify(payload.email, payload.password)
        except NotFoundError as exc:
            raise CredentialsError(exc.message) from exc
        return AuthResponse(
            user=UserSummary.from_record(user),
            access_token=container.token_service.issue(user.id),
            message="Login Successful",
        )

    @app.get("/get-user", response_model=ProfileResponse)
    async def get_user(user_id: UUID = Depends(require_user)) -> ProfileResponse:
        """Return the profile of the token's user."""
        user = container.user_service.get_by_id(user_id)
        if user is None:
            raise AuthError("User not found")
        return ProfileResponse(user=UserProfile.from_record(user))

    @app.post(
        "/image-upload",
        response_model=ImageUploadResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def image_upload(
        image: UploadFile | None = File(default=None),
    ) -> ImageUploadResponse:
        """Store an uploaded image and return its public URL."""
        if image is None:
            image_url = await container.media_service.upload(None, None)
        else:
            content = await image.read()
            image_url = await container.media_service.upload(
                image.filename or "", content
            )
        return ImageUploadResponse(image_url=image_url, message="Image uploaded")

    @app.delete("/delete-image", response_model=Envelope)
    async def delete_image(
        image_url: str | None = Query(default=None, alias="imageUrl"),
    ) -> Envelope:
        """Delete an uploaded image; a missing file is reported in the body."""
        if await container.media_service.delete(image_url):
            return Envelope(message="Image deleted successfully")
        return Envelope(error=True, message="Image not found")

    @app.post(
        "/add-travel-story",
        response_model=StoryResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_travel_story(
        payload: StoryRequest, user_id: UUID = Depends(require_user)
    ) -> StoryResponse:
        """Create a story owned by the caller."""
        story = container.story_service.create(
            user_id,
            title=payload.title,
            story=payload.story,
            visited_location=payload.visited_location,
            image_url=payload.image_url,
            visited_date=payload.visited_date,
        )
        return _story_response(story, "Story added successfully")

    @app.get("/get-all-stories", response_model=StoryListResponse)
    async def get_all_stories(
        user_id: UUID = Depends(require_user),
    ) -> StoryListResponse:
        """List the caller's stories, favourites first."""
        return _story_list_response(container.story_service.list_by_owner(user_id))

    @app.put("/edit-story/{story_id}", response_model=StoryResponse)
    async def edit_story(
        story_id: UUID,
        payload: StoryRequest,
        user_id: UUID = Depends(require_user),
    ) -> StoryResponse:
        """Replace every editable field of one of the caller's stories."""
        story = container.story_service.edit(
            story_id,
            user_id,
            title=payload.title,
            story=payload.story,
            visited_location=payload.visited_location,
            image_url=payload.image_url,
            visited_date=payload.visited_date,
        )
        return _story_response(story, "Story updated successfully")

    @app.delete("/delete-story/{story_id}", response_model=Envelope)
    async def delete_story(
        story_id: UUID, user_id: UUID = Depends(require_user)
    ) -> Envelope:
        """Delete one of the caller's stories."""
        container.story_service.remove(story_id, user_id)
        return Envelope(message="Story deleted successfully")

    @app.put("/update-is-favourite/{story_id}", response_model=StoryResponse)
    async def update_is_favourite(
        story_id: UUID,
        payload: FavouriteRequest,
        user_id: UUID = Depends(require_user),
    ) -> StoryResponse:
        """Set the favourite flag on one of the caller's stories."""
        story = container.story_service.set_favourite(
            story_id, user_id, payload.is_favourite
        )
        return _story_response(story, "Story updated successfully")

    @app.get("/search", response_model=StoryListResponse)
    async def search(
        query: str | None = None, user_id: UUID = Depends(require_user)
    ) -> StoryListResponse:
        """Search the caller's story titles."""
        return _story_list_response(container.story_service.search(user_id, query))

    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    app.mount(
        "/assets",
        StaticFiles(directory=settings.assets_dir, check_dir=False),
        name="assets",
    )

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": True, "message": message}
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a short message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part)
        for part in first.get("loc", ())
        if part not in {"body", "query", "path"}
    )
    detail = first.get("msg", "invalid value")
    return f"{location}: {detail}" if location else detail


def _story_response(story: StoryRecord, message: str) -> StoryResponse:
    return StoryResponse(story=StoryOut.from_record(story), message=message)


def _story_list_response(stories: list[StoryRecord]) -> StoryListResponse:
    return StoryListResponse(stories=[StoryOut.from_record(story) for story in stories])
