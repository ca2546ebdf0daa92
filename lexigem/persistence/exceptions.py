class PersistenceError(Exception):
    """Base exception for persistence gateway failures raised by this package."""


class RecordNotFoundError(PersistenceError):
    """Raised when a single-row operation matches no row for the owner."""
