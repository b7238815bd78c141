"""Save providers and session persistence."""

from geocoin.saves.base import BaseSaveProvider, SessionSnapshot
from geocoin.saves.loader import SaveLoader
from geocoin.saves.persistence import SessionPersistence
from geocoin.saves.registry import SaveRegistry

__all__ = ["BaseSaveProvider", "SaveLoader", "SaveRegistry", "SessionPersistence", "SessionSnapshot"]
