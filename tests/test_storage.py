"""Unit tests for the key-value storage backends."""

import tempfile
import unittest
from pathlib import Path

from geocoin.storage import FileStorage, MemoryStorage


class TestMemoryStorage(unittest.TestCase):
    """Test MemoryStorage."""

    def test_set_get_clear(self) -> None:
        """Test the basic contract."""
        storage = MemoryStorage()
        assert storage.get_item("k") is None

        storage.set_item("k", "v1")
        storage.set_item("k", "v2")
        assert storage.get_item("k") == "v2"

        storage.clear()
        assert storage.get_item("k") is None

    def test_prepopulated(self) -> None:
        """Test construction with initial items."""
        storage = MemoryStorage({"a": "1"})
        assert storage.get_item("a") == "1"


class TestFileStorage(unittest.TestCase):
    """Test FileStorage."""

    def setUp(self) -> None:
        """Create a temporary directory."""
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name) / "saves"
        self.storage = FileStorage(self.directory)

    def tearDown(self) -> None:
        """Remove the temporary directory."""
        self._tmp.cleanup()

    def test_creates_directory(self) -> None:
        """Test that the storage directory is created."""
        assert self.directory.is_dir()

    def test_set_and_get(self) -> None:
        """Test writing and reading a key."""
        self.storage.set_item("player_position", '{"lat":1.0,"lng":2.0}')

        assert self.storage.get_item("player_position") == '{"lat":1.0,"lng":2.0}'
        assert (self.directory / "player_position.json").exists()
        assert not (self.directory / "player_position.json.tmp").exists()

    def test_missing_key(self) -> None:
        """Test that an absent key reads as None."""
        assert self.storage.get_item("nothing") is None

    def test_survives_new_instance(self) -> None:
        """Test that data persists across storage instances."""
        self.storage.set_item("caches", "{}")
        assert FileStorage(self.directory).get_item("caches") == "{}"

    def test_clear(self) -> None:
        """Test that clear removes every key."""
        self.storage.set_item("a", "1")
        self.storage.set_item("b", "2")

        self.storage.clear()

        assert self.storage.get_item("a") is None
        assert self.storage.get_item("b") is None

    def test_rejects_path_like_keys(self) -> None:
        """Test that keys cannot escape the directory."""
        with self.assertRaises(ValueError):
            self.storage.set_item("../evil", "x")

    def test_rejects_trailing_newline_in_key(self) -> None:
        """Test that a key must match in full, not just up to a line end."""
        for key in ("caches\n", "caches\nx", ""):
            with self.assertRaises(ValueError, msg=repr(key)):
                self.storage.get_item(key)
