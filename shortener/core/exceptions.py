"""
Custom Exceptions

This module defines the error taxonomy shared by the storage layer,
the shortening service and the HTTP layer.

Families:
- ValidationError: the submitted URL is unusable (client fault, never retried)
- NotFoundError: a lookup missed (client fault)
- ConflictError: a write collided with existing state (retried by the service)
- InternalError: unexpected inconsistency (logged, surfaced generically)

The API layer maps each concrete class to its own status code and error kind,
so new kinds should always get their own subclass instead of a message flag.
"""


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class ValidationError(URLShortenerException):
    """Raised when a submitted URL cannot be shortened."""

    kind = "invalid_url"

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url}")


class InvalidURLError(ValidationError):
    """Raised when URL syntax validation fails."""

    kind = "invalid_url"


class BlockedDomainError(ValidationError):
    """Raised when the URL host is on the block-list."""

    kind = "blocked_domain"

    def __init__(self, url: str, domain: str):
        self.domain = domain
        super().__init__(url, reason=f"Domain '{domain}' is blocked")


class SelfReferentialURLError(ValidationError):
    """Raised when the URL points back into this service."""

    kind = "self_referential"

    def __init__(self, url: str, domain: str):
        self.domain = domain
        super().__init__(
            url,
            reason=f"Cannot shorten URLs of this service ('{domain}' would redirect to itself)"
        )


class SchemeNotAllowedError(ValidationError):
    """Raised when the URL scheme is not http or https."""

    kind = "scheme_not_allowed"

    def __init__(self, url: str, scheme: str):
        self.scheme = scheme
        super().__init__(url, reason=f"Scheme '{scheme}' is not allowed, use http or https")


class NotFoundError(URLShortenerException):
    """Raised when a lookup finds nothing."""
    pass


class ShortCodeNotFoundError(NotFoundError):
    """Raised when a short code is not registered."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class RecordNotFoundError(NotFoundError):
    """Raised when no record exists for an internal id."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' not found")


class NormalizedURLNotFoundError(NotFoundError):
    """Raised when no record exists for a normalized URL."""

    def __init__(self, normalized_url: str):
        self.normalized_url = normalized_url
        super().__init__(f"No short code registered for '{normalized_url}'")


class DomainNotFoundError(NotFoundError):
    """Raised when a domain has no ranking entry yet."""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Domain '{domain}' has no shorten count")


class ConflictError(URLShortenerException):
    """Raised when a write collides with existing state."""
    pass


class CodeAlreadyExistsError(ConflictError):
    """Raised when saving a record whose code is already taken."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' already exists")


class DuplicateURLError(ConflictError):
    """Raised when the normalized URL is already registered under another code."""

    def __init__(self, normalized_url: str, existing):
        self.normalized_url = normalized_url
        self.existing = existing
        super().__init__(
            f"URL '{normalized_url}' already registered as '{existing.code}'"
        )


class InternalError(URLShortenerException):
    """Raised on unexpected failures; the message never carries internal state."""

    def __init__(self, message: str = "Internal error", original_error: Exception = None):
        self.original_error = original_error
        super().__init__(message)
