"""Default settings for Geocoin.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    from geocoin.conf import global_settings

    # Override framework defaults
    NEIGHBORHOOD_SIZE = 4
    MAX_INITIAL_COINS = 10
"""

# Board settings
TILE_DEGREES = 1e-4
"""Width and height of one grid cell, in degrees of latitude/longitude."""

NEIGHBORHOOD_SIZE = 8
"""Visibility radius in cells. The visible window spans [-N, N) on both axes."""

CACHE_SPAWN_PROBABILITY = 0.1
"""Probability that any given cell hosts a cache."""

LUCK_SALT = ""
"""Prefix mixed into every luck key. Changing it produces a different world."""

# Cache settings
MAX_INITIAL_COINS = 5
"""Upper bound (exclusive) on the number of coins minted in a fresh cache."""

# Player settings
ORIGIN_LAT = 36.98949379578401
"""Latitude of the player's starting position (Oakes College classroom)."""

ORIGIN_LNG = -122.06277128548504
"""Longitude of the player's starting position."""

PLAYER_STEP_DEGREES = 1e-4
"""Distance covered by one directional step, in degrees."""

# Persistence settings
SAVES_DIR = "saves"
"""Directory (relative to the working directory) used by FileStorage."""

# Logging settings
LOG_LEVEL = "INFO"
"""Level passed to setup_logging() by create_game()."""

# Installed save providers
INSTALLED_SAVES = [
    "geocoin.caches.save",
    "geocoin.player.save",
]
"""List of module paths to import for save provider registration.

Users can add custom providers by extending this list in their settings.py:

Example:
    INSTALLED_SAVES = [
        *global_settings.INSTALLED_SAVES,
        "myproject.saves.achievements",
    ]
"""
