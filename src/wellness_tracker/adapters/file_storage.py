"""File-backed storage for serialized collections."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from wellness_tracker.services.store import StorageBackend


@dataclass
class FileStorageBackend(StorageBackend):
    """Keeps one JSON file per key in a local directory."""

    directory: Path

    @classmethod
    def create(cls, directory: Path) -> "FileStorageBackend":
        """Create a backend, making the directory if needed."""
        directory.mkdir(parents=True, exist_ok=True)
        return cls(directory=directory)

    def read(self, key: str) -> bytes | None:
        """Return the file contents for a key."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def write(self, key: str, data: bytes) -> None:
        """Write a key's file through a temporary file and an atomic rename."""
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            Path(tmp_name).replace(path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"
