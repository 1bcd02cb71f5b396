"""Tests for image uploads."""

import asyncio
from pathlib import Path

import pytest

from travel_stories.adapters.local_image_storage import LocalImageStorage
from travel_stories.errors import StorageError, ValidationError
from travel_stories.services.media import MediaService, filename_from_url


def _service(tmp_path: Path) -> MediaService:
    return MediaService(
        storage=LocalImageStorage.create(tmp_path / "uploads"),
        server_url="http://testserver/",
    )


def test_upload_returns_public_url(tmp_path: Path) -> None:
    service = _service(tmp_path)

    url = asyncio.run(service.upload("Eiffel.JPG", b"image-bytes"))

    assert url.startswith("http://testserver/uploads/")
    stored_name = url.rsplit("/", maxsplit=1)[-1]
    assert stored_name.endswith(".jpg")
    assert (tmp_path / "uploads" / stored_name).read_bytes() == b"image-bytes"


def test_upload_names_do_not_collide(tmp_path: Path) -> None:
    service = _service(tmp_path)

    first = asyncio.run(service.upload("photo.png", b"one"))
    second = asyncio.run(service.upload("photo.png", b"two"))

    assert first != second


def test_upload_without_file(tmp_path: Path) -> None:
    service = _service(tmp_path)

    with pytest.raises(ValidationError):
        asyncio.run(service.upload(None, None))


def test_upload_storage_failure(tmp_path: Path) -> None:
    storage = LocalImageStorage(directory=tmp_path / "missing")
    service = MediaService(storage=storage, server_url="http://testserver")

    with pytest.raises(StorageError):
        asyncio.run(service.upload("photo.png", b"bytes"))


def test_delete_existing_image(tmp_path: Path) -> None:
    service = _service(tmp_path)
    url = asyncio.run(service.upload("photo.png", b"bytes"))

    assert asyncio.run(service.delete(url)) is True
    assert list((tmp_path / "uploads").iterdir()) == []


def test_delete_missing_image_is_soft(tmp_path: Path) -> None:
    service = _service(tmp_path)

    assert asyncio.run(service.delete("http://testserver/uploads/ghost.png")) is False


def test_delete_directory_is_treated_as_missing(tmp_path: Path) -> None:
    service = _service(tmp_path)
    (tmp_path / "uploads" / "sub").mkdir()

    assert asyncio.run(service.delete("http://testserver/uploads/sub")) is False
    assert (tmp_path / "uploads" / "sub").is_dir()


def test_delete_requires_url(tmp_path: Path) -> None:
    service = _service(tmp_path)

    with pytest.raises(ValidationError):
        asyncio.run(service.delete(""))


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("http://testserver/uploads/a.png", "a.png"),
        ("http://testserver/uploads/a.png?size=1", "a.png"),
        ("http://testserver/uploads/my%20trip.png", "my trip.png"),
        ("http://testserver/uploads/..", ""),
        ("http://testserver/", ""),
    ],
)
def test_filename_from_url(url: str, expected: str) -> None:
    assert filename_from_url(url) == expected
