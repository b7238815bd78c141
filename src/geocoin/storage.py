"""Durable key-value storage backends.

SessionPersistence writes each session field as text under its own key,
much like a browser's localStorage. Two backends are provided:

- MemoryStorage: a dict, for tests and throwaway sessions.
- FileStorage: one ``<key>.json`` file per key inside a directory.

Example usage:
    storage = FileStorage(Path.cwd() / "saves")
    storage.set_item("player_position", '{"lat": 1.0, "lng": 2.0}')
    storage.get_item("player_position")  # '{"lat": 1.0, "lng": 2.0}'
    storage.clear()
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"[A-Za-z0-9_.-]+")


def is_valid_key(key: str) -> bool:
    """Check that a key is a plain name usable as a file stem."""
    return _VALID_KEY.fullmatch(key) is not None


class KeyValueStorage(Protocol):
    """Minimal durable text store."""

    def set_item(self, key: str, text: str) -> None:
        """Store text under a key, replacing any previous value."""
        ...

    def get_item(self, key: str) -> str | None:
        """Return the text stored under a key, or None if absent."""
        ...

    def clear(self) -> None:
        """Remove every stored key."""
        ...


class MemoryStorage:
    """In-process storage backed by a dict."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        """Initialize, optionally pre-populated."""
        self.items: dict[str, str] = dict(items or {})

    def set_item(self, key: str, text: str) -> None:
        """Store text under a key."""
        self.items[key] = text

    def get_item(self, key: str) -> str | None:
        """Return the text for a key, or None."""
        return self.items.get(key)

    def clear(self) -> None:
        """Remove every key."""
        self.items.clear()


class FileStorage:
    """Storage that keeps each key in its own JSON text file.

    Attributes:
        directory: Directory holding the ``<key>.json`` files.
    """

    suffix = ".json"

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize the storage directory.

        Args:
            directory: Where files are kept. If None, uses a 'saves' directory
                in the current working directory.
        """
        if directory is None:
            directory = Path.cwd() / "saves"
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not is_valid_key(key):
            msg = f"Invalid storage key: {key!r}"
            raise ValueError(msg)
        return self.directory / f"{key}{self.suffix}"

    def set_item(self, key: str, text: str) -> None:
        """Write text under a key.

        Writes to a temporary file first and renames it over the old one, so
        an interrupted write never leaves a truncated value behind.
        """
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Stored %s (%d chars)", key, len(text))

    def get_item(self, key: str) -> str | None:
        """Read the text for a key, or None if no file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def clear(self) -> None:
        """Delete every stored key file."""
        for path in self.directory.glob(f"*{self.suffix}"):
            path.unlink()
        logger.debug("Cleared storage in %s", self.directory)
