"""Image upload and removal."""

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import unquote, urlparse

from travel_stories.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

UPLOADS_PATH = "/uploads"


class ImageStorage(Protocol):
    """Interface for storing uploaded image files."""

    async def save(self, original_filename: str, content: bytes) -> str:
        """Store the bytes and return the generated file name."""

    async def delete(self, filename: str) -> bool:
        """Remove a stored file, returning False if it did not exist."""


@dataclass
class MediaService:
    """Turns uploads into public URLs and removes them again."""

    storage: ImageStorage
    server_url: str

    async def upload(self, filename: str | None, content: bytes | None) -> str:
        """Store an uploaded image and return its public URL."""
        if filename is None or content is None:
            raise ValidationError("No images uploaded")
        try:
            stored_name = await self.storage.save(filename, content)
        except OSError as exc:
            logger.exception("Failed to store upload")
            raise StorageError(f"Failed to store image: {exc.strerror}") from exc
        logger.info("Stored image %s", stored_name)
        return f"{self.server_url.rstrip('/')}{UPLOADS_PATH}/{stored_name}"

    async def delete(self, image_url: str | None) -> bool:
        """Delete the file an image URL points at.

        Returns False when there was nothing to delete.
        """
        if not image_url or not image_url.strip():
            raise ValidationError("imageUrl parameter is required")
        filename = filename_from_url(image_url)
        if not filename:
            return False
        try:
            deleted = await self.storage.delete(filename)
        except OSError as exc:
            logger.exception("Failed to delete image %s", filename)
            raise StorageError(f"Failed to delete image: {exc.strerror}") from exc
        if deleted:
            logger.info("Deleted image %s", filename)
        return deleted


def filename_from_url(image_url: str) -> str:
    """Return the last path segment of an image URL."""
    path = unquote(urlparse(image_url.strip()).path)
    name = PurePosixPath(path).name
    if name in {"", ".", ".."} or "\\" in name:
        return ""
    return name
