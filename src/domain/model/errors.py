"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule.

    ``errors`` holds per-field messages when several checks failed at once.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidOrExpiredError(DomainError):
    """One-time password does not match, was already used, or has expired."""


class InvalidCredentialsError(DomainError):
    """Email/password pair rejected. Deliberately does not say which part."""


class UnauthorizedError(DomainError):
    """Token missing, malformed, expired, or no longer the active one."""


class UnsupportedMediaTypeError(DomainError):
    """Uploaded file type is not accepted."""


class PayloadTooLargeError(DomainError):
    """Uploaded file exceeds the size ceiling."""


class UpstreamError(DomainError):
    """Mail delivery or object storage failed."""


class PersistenceError(DomainError):
    """Database operation failed."""
