"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from geocoin.conf import settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test and reset them afterwards.

    Yields:
        None
    """
    settings.configure(
        TILE_DEGREES=1e-4,
        NEIGHBORHOOD_SIZE=8,
        CACHE_SPAWN_PROBABILITY=0.1,
        LUCK_SALT="",
        MAX_INITIAL_COINS=5,
        ORIGIN_LAT=36.98949379578401,
        ORIGIN_LNG=-122.06277128548504,
        PLAYER_STEP_DEGREES=1e-4,
        SAVES_DIR="saves",
        LOG_LEVEL="INFO",
        INSTALLED_SAVES=["geocoin.caches.save", "geocoin.player.save"],
    )
    yield
    settings.reset()
