"""Tests for container wiring and configuration."""

from pathlib import Path

from travel_stories.config import parse_allowed_origins
from travel_stories.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.story_service.placeholder_image_url == (
        settings.placeholder_image_url
    )
    assert container.token_service.expire_hours == 72
    assert Path(settings.upload_dir).is_dir()
    assert Path(settings.assets_dir).is_dir()


def test_parse_allowed_origins() -> None:
    assert parse_allowed_origins(None) == ["*"]
    assert parse_allowed_origins(" ") == ["*"]
    assert parse_allowed_origins("https://a.dev/, https://b.dev") == [
        "https://a.dev",
        "https://b.dev",
    ]
    assert parse_allowed_origins("https://a.dev,*") == ["*"]
