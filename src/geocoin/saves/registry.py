"""Registry for save providers.

Each provider's ``name`` doubles as the storage key its field is written
under, so names are checked against the storage key rules at registration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from geocoin.storage import is_valid_key

if TYPE_CHECKING:
    from geocoin.saves.base import BaseSaveProvider

logger = logging.getLogger(__name__)


class SaveRegistry:
    """Class-level table of save provider classes, keyed by storage key.

    Providers register themselves with the @SaveRegistry.register decorator
    when their module is imported; SaveLoader imports the modules listed in
    settings.INSTALLED_SAVES.
    """

    _providers: ClassVar[dict[str, type[BaseSaveProvider]]] = {}

    @classmethod
    def register(cls, provider_class: type[BaseSaveProvider]) -> type[BaseSaveProvider]:
        """Register a save provider class under its ``name``.

        Use as a decorator:
            @SaveRegistry.register
            class BadgeSaveProvider(BaseSaveProvider):
                name = "badges"
                priority = 140
                ...

        Returns:
            The same class, so the decorator leaves it unchanged.

        Raises:
            ValueError: If ``name`` is missing or not a valid storage key.
        """
        name = getattr(provider_class, "name", None)
        if not name or not is_valid_key(name):
            msg = f"Save provider {provider_class.__name__} needs a storage-key 'name', got {name!r}"
            raise ValueError(msg)

        previous = cls._providers.get(name)
        if previous is not None and previous is not provider_class:
            logger.warning(
                "Save provider %s replaces %s for field '%s'", provider_class.__name__, previous.__name__, name
            )

        cls._providers[name] = provider_class
        logger.debug("Registered save provider: %s", name)
        return provider_class

    @classmethod
    def ordered(cls) -> list[tuple[str, type[BaseSaveProvider]]]:
        """Registered providers sorted by priority, ties broken by name."""
        return sorted(cls._providers.items(), key=lambda item: (item[1].priority, item[0]))

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a save provider is registered."""
        return name in cls._providers

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a provider (for testing)."""
        cls._providers.pop(name, None)
