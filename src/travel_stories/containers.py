"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from travel_stories.adapters.local_image_storage import LocalImageStorage
from travel_stories.adapters.supabase_story_repository import (
    SupabaseStoryRepository,
)
from travel_stories.adapters.supabase_user_repository import SupabaseUserRepository
from travel_stories.config import Settings
from travel_stories.services.media import MediaService
from travel_stories.services.stories import StoryService
from travel_stories.services.tokens import TokenService
from travel_stories.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    token_service: TokenService
    story_service: StoryService
    media_service: MediaService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    story_repository = SupabaseStoryRepository(supabase_client)
    image_storage = LocalImageStorage.create(resolved_settings.upload_dir)
    prepare_assets_dir(resolved_settings)
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository),
        token_service=TokenService(
            secret=resolved_settings.access_token_secret,
            algorithm=resolved_settings.jwt_algorithm,
            expire_hours=resolved_settings.access_token_expire_hours,
        ),
        story_service=StoryService(
            repository=story_repository,
            placeholder_image_url=resolved_settings.placeholder_image_url,
        ),
        media_service=MediaService(
            storage=image_storage,
            server_url=resolved_settings.server_url,
        ),
    )


def prepare_assets_dir(settings: Settings) -> Path:
    """Create the directory served under ``/assets`` if it is missing."""
    path = Path(settings.assets_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path
