"""Exception types raised by Geocoin."""


class GeocoinError(Exception):
    """Base class for all Geocoin errors."""


class MalformedSnapshotError(GeocoinError):
    """Raised when a dormant cache snapshot cannot be parsed.

    Raised by the snapshot codec. CacheStore catches it and brings the cache
    back empty rather than partially populated.
    """


class MalformedSessionFieldError(GeocoinError):
    """Raised by a save provider when its persisted field is unparseable.

    SessionPersistence catches it and falls back to the field's default.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with the storage key of the field and what was wrong."""
        super().__init__(f"Malformed session field '{field}': {reason}")
        self.field = field
        self.reason = reason
