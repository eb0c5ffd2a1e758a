"""Domain-level exceptions.

Services and repositories raise these errors; route handlers let them
propagate and the exception handlers registered in ``api.errors`` map them
to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PersistenceError(DomainError):
    """The document store failed to complete an operation."""


class ValidationError(DomainError):
    """Input failed validation.

    ``field`` names the first offending field (``None`` when the whole
    payload is malformed); ``errors`` lists every field-level problem.
    """

    def __init__(self, message: str, field: str | None = None, errors: list[dict] | None = None):
        self.field = field
        self.errors = errors or []
        super().__init__(message)
