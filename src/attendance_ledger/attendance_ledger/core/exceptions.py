class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain"


class ValidationError(DomainError):
    """Raised when input data is invalid; no request is sent to the store."""

    kind = "validation"


class ConflictError(DomainError):
    """Raised when the store rejects a request on a business rule (e.g. duplicate)."""

    kind = "conflict"


class StaleReferenceError(DomainError):
    """Raised when a pending edit references an entity missing from the latest snapshot."""

    kind = "stale_reference"


class BackendError(DomainError):
    """Raised on transport or server failure; carries the store's message."""

    kind = "backend"
