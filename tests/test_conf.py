"""Unit tests for the lazy settings proxy."""

import os
import sys
import types
import unittest
from unittest.mock import patch

from geocoin.conf import LazySettings, global_settings, settings


class TestLazySettings(unittest.TestCase):
    """Test settings resolution, overrides and reset."""

    def test_defaults_without_settings_module(self) -> None:
        """Test that a missing settings module leaves the defaults in place."""
        lazy = LazySettings()
        with patch.dict(os.environ, {"GEOCOIN_SETTINGS_MODULE": "geocoin_missing_settings_module"}):
            assert lazy.NEIGHBORHOOD_SIZE == global_settings.NEIGHBORHOOD_SIZE
            assert lazy.INSTALLED_SAVES == global_settings.INSTALLED_SAVES

    def test_settings_module_overrides_uppercase_names(self) -> None:
        """Test that UPPERCASE names in the settings module win over defaults."""
        module = types.ModuleType("geocoin_test_settings")
        module.TILE_DEGREES = 2e-4  # type: ignore[attr-defined]
        module.helper_value = 99  # type: ignore[attr-defined]
        lazy = LazySettings()

        with (
            patch.dict(sys.modules, {"geocoin_test_settings": module}),
            patch.dict(os.environ, {"GEOCOIN_SETTINGS_MODULE": "geocoin_test_settings"}),
        ):
            assert lazy.TILE_DEGREES == 2e-4
            assert lazy.MAX_INITIAL_COINS == global_settings.MAX_INITIAL_COINS
            with self.assertRaises(AttributeError):
                _ = lazy.helper_value

    def test_assignment_overrides_one_setting(self) -> None:
        """Test that setting an attribute changes only that value."""
        settings.MAX_INITIAL_COINS = 9
        assert settings.MAX_INITIAL_COINS == 9
        assert settings.NEIGHBORHOOD_SIZE == 8

    def test_reset_discards_configuration(self) -> None:
        """Test that reset() forces the next read to resolve again."""
        settings.configure(NEIGHBORHOOD_SIZE=3)
        assert settings.NEIGHBORHOOD_SIZE == 3

        with patch.dict(os.environ, {"GEOCOIN_SETTINGS_MODULE": "geocoin_missing_settings_module"}):
            settings.reset()
            assert settings.NEIGHBORHOOD_SIZE == global_settings.NEIGHBORHOOD_SIZE
