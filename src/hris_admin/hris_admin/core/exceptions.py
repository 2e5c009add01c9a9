class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class DuplicateError(ValidationError):
    """Raised when a unique key (code, name, email) is already taken."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class UpstreamError(DomainError):
    """Raised when the HRIS API fails or answers with something unusable."""

    status_code = 500


class CacheNotReadyError(DomainError):
    """Raised when a cache-backed read happens before the cache finished loading."""

    status_code = 503
