"""Helper functions for creating Geocoin sessions.

This module provides high-level functions to simplify session setup for a
host application (a map view, a bot, a test harness).
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from geocoin.conf import settings
from geocoin.session import GameSession
from geocoin.storage import FileStorage


def setup_logging(log_level: str = "DEBUG") -> None:
    """Configure logging for the game.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def create_game(saves_dir: Path | None = None) -> GameSession:
    """Create a started session backed by file storage.

    Uses the settings from your project's settings.py (or the module named by
    GEOCOIN_SETTINGS_MODULE), sets up logging and restores any saved session.

    Args:
        saves_dir: Directory for session files. Defaults to settings.SAVES_DIR
            under the current working directory.

    Returns:
        A GameSession on which start() has already been called.

    Example:
        >>> from geocoin import create_game
        >>> session = create_game()
        >>> session.step("north")
        >>> session.end()
    """
    setup_logging(settings.LOG_LEVEL)

    if saves_dir is None:
        saves_dir = Path.cwd() / settings.SAVES_DIR

    session = GameSession(storage=FileStorage(saves_dir))
    session.start()
    return session
