"""
Exception taxonomy for the excuse core.

A situation missing from the catalog is not an error: the selector returns None.
Storage (sqlite3.Error) and generator (ollama.ResponseError) failures are not
wrapped; they propagate to the caller unchanged.
"""


class ExcuseError(Exception):
    """Base class for errors raised by the excuse core."""


class ExcuseValidationError(ExcuseError):
    """Malformed input, rejected before anything is persisted."""


class ExcuseNotFoundError(ExcuseError):
    """No persisted excuse has the given identifier."""

    def __init__(self, excuse_id: str):
        super().__init__(f"Excuse not found: {excuse_id}")
        self.excuse_id = excuse_id


class FavoritesLimitError(ExcuseError):
    """A device already holds the maximum number of favorites."""

    def __init__(self, device_id: str, limit: int):
        super().__init__(f"Favorites limit of {limit} reached for device {device_id}")
        self.device_id = device_id
        self.limit = limit


class GenerationError(ExcuseError):
    """The text generator answered, but with nothing usable."""
