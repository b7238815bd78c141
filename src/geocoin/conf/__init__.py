"""Settings for Geocoin, resolved lazily.

Defaults live in ``global_settings``. A project overrides them with a plain
module of UPPERCASE names, found through GEOCOIN_SETTINGS_MODULE (default:
a top-level ``settings`` module), or programmatically with configure().

Usage:
    # settings.py next to your game
    TILE_DEGREES = 2e-4
    CACHE_SPAWN_PROBABILITY = 0.05

    # anywhere in the game
    from geocoin.conf import settings

    settings.TILE_DEGREES  # 0.0002
"""

import importlib
import logging
import os
from typing import Any

from geocoin.conf import global_settings

logger = logging.getLogger(__name__)

SETTINGS_MODULE_ENV = "GEOCOIN_SETTINGS_MODULE"


def _uppercase_names(module: Any) -> dict[str, Any]:  # noqa: ANN401
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}


class Settings:
    """Resolved settings: the defaults with any overrides applied on top."""

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """Start from global_settings and apply ``overrides``."""
        for name, value in _uppercase_names(global_settings).items():
            setattr(self, name, value)
        for name, value in (overrides or {}).items():
            setattr(self, name, value)


class LazySettings:
    """Proxy that resolves Settings on first attribute access.

    Nothing is imported until a setting is read, so configure() can run
    before any component looks at a value.
    """

    def __init__(self) -> None:
        """Initialize the unresolved proxy."""
        self._wrapped: Settings | None = None

    def _resolve(self) -> Settings:
        if self._wrapped is None:
            module_name = os.environ.get(SETTINGS_MODULE_ENV, "settings")
            try:
                overrides = _uppercase_names(importlib.import_module(module_name))
            except ImportError:
                logger.debug("No settings module '%s'; using defaults", module_name)
                overrides = {}
            self._wrapped = Settings(overrides)
        return self._wrapped

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Read a setting, resolving the settings module if needed."""
        return getattr(self._resolve(), name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Override a single setting."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
        else:
            setattr(self._resolve(), name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Set settings directly, bypassing the settings module.

        Example:
            settings.configure(TILE_DEGREES=1e-4, CACHE_SPAWN_PROBABILITY=0.1)
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def reset(self) -> None:
        """Forget resolved settings; the next access resolves them again."""
        self._wrapped = None


settings = LazySettings()

__all__ = ["LazySettings", "Settings", "global_settings", "settings"]
