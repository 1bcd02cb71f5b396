"""Filesystem-backed image storage."""

from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

import aiofiles
import aiofiles.os

from travel_stories.services.media import ImageStorage


@dataclass
class LocalImageStorage(ImageStorage):
    """Stores uploads as files in a single directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "LocalImageStorage":
        """Create the storage, making sure the directory exists."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    async def save(self, original_filename: str, content: bytes) -> str:
        """Write the bytes under a random name keeping the original suffix."""
        suffix = Path(original_filename).suffix.lower()
        stored_name = f"{uuid4().hex}{suffix}"
        async with aiofiles.open(self.directory / stored_name, "wb") as f:
            await f.write(content)
        return stored_name

    async def delete(self, filename: str) -> bool:
        """Remove a stored file; anything that is not a regular file is absent."""
        target = self.directory / Path(filename).name
        if not await aiofiles.os.path.isfile(target):
            return False
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            return False
        return True
