"""Loader for save providers."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from geocoin.saves.registry import SaveRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from geocoin.board.registry import CellRegistry
    from geocoin.conf import LazySettings
    from geocoin.saves.base import BaseSaveProvider, SessionSnapshot

logger = logging.getLogger(__name__)


class SaveLoader:
    """Loads and manages save provider instances.

    The SaveLoader handles:
    1. Importing save provider modules to trigger registration
    2. Instantiating save providers in priority order
    3. Gathering state from a snapshot into every provider
    4. Restoring state from every provider into a snapshot
    """

    def __init__(self, settings: LazySettings) -> None:
        """Initialize the save loader.

        Args:
            settings: Settings object providing INSTALLED_SAVES.
        """
        self.settings = settings
        self._instances: dict[str, BaseSaveProvider] = {}
        self._load_order: list[str] = []

    def load_modules(self) -> None:
        """Import all configured save provider modules to trigger registration."""
        for module_path in self.settings.INSTALLED_SAVES or []:
            try:
                importlib.import_module(module_path)
                logger.debug("Loaded save provider module: %s", module_path)
            except ImportError:
                logger.exception("Could not load save provider module '%s'", module_path)
                raise

    def instantiate_all(self) -> dict[str, BaseSaveProvider]:
        """Create instances of all registered save providers.

        Returns:
            Dictionary mapping provider names to their instances.
        """
        self.load_modules()

        ordered = SaveRegistry.ordered()
        if not ordered:
            logger.warning("No save providers registered")
            return {}

        self._load_order = [name for name, _ in ordered]
        self._instances = {name: provider_class() for name, provider_class in ordered}
        logger.debug("Instantiated %d save providers", len(self._instances))
        return self._instances

    def providers(self) -> Iterator[tuple[str, BaseSaveProvider]]:
        """Yield (name, provider) pairs in priority order."""
        for name in self._load_order:
            yield name, self._instances[name]

    def gather_state(self, snapshot: SessionSnapshot) -> None:
        """Let every provider copy its field out of a snapshot."""
        for name, provider in self.providers():
            provider.gather(snapshot)
            logger.debug("Gathered state from save provider: %s", name)

    def restore_state(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Let every provider write its loaded field into a snapshot.

        Returns:
            True if any provider had state to restore.
        """
        any_restored = False
        for name, provider in self.providers():
            if provider.restore(snapshot, registry):
                any_restored = True
                logger.debug("Restored state from provider: %s", name)
        return any_restored

    def clear_all(self) -> None:
        """Clear all save providers."""
        for provider in self._instances.values():
            provider.clear()

    def to_dict(self) -> dict[str, Any]:
        """Serialize all providers, keyed by provider name."""
        return {name: provider.to_dict() for name, provider in self.providers()}
