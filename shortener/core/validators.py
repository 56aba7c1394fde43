"""
Input Validators and Sanitizers

This module provides validation and sanitization for user inputs:
- URLValidator: turns a raw URL into (normalized URL, domain) or raises a
  specific ValidationError subclass
- sanitize_short_code: guards path parameters before they reach storage

Security Considerations:
- Only http/https URLs are accepted (no javascript:, data:, file:)
- Self-referential URLs are rejected to prevent redirect loops
- Length limits prevent DoS attacks
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

import validators

from shortener.core.exceptions import (
    BlockedDomainError,
    InvalidURLError,
    SchemeNotAllowedError,
    SelfReferentialURLError,
)
from shortener.core.url_normalizer import normalize_url

ALLOWED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ValidatedURL:
    """Result of a successful validation."""
    original_url: str
    normalized_url: str
    domain: str


def sanitize_short_code(short_code: str) -> Optional[str]:
    """
    Sanitize and validate short code format.

    Short codes only contain alphanumeric characters. This keeps lookups
    consistent and rejects path traversal attempts early.

    Args:
        short_code: The short code to sanitize

    Returns:
        Sanitized short code if valid, None otherwise
    """
    if not short_code or not isinstance(short_code, str):
        return None

    short_code = short_code.strip()

    if len(short_code) > 20:
        return None

    if not re.match(r'^[0-9a-zA-Z]+$', short_code):
        return None

    return short_code


def validate_url_length(url: str, max_length: int = 2048) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length


def _match_domain(host: str, domains: Iterable[str]) -> Optional[str]:
    """Return the listed domain that equals host or is a parent of it."""
    for domain in domains:
        if host == domain or host.endswith("." + domain):
            return domain
    return None


class URLValidator:
    """
    Validates and canonicalizes URLs submitted for shortening.

    Checks run in a fixed order so each input maps to exactly one error kind:
    syntax, scheme, self-reference, block-list, then a final syntax check of
    the normalized form.
    """

    def __init__(
        self,
        blocked_domains: Iterable[str] = (),
        self_domains: Iterable[str] = (),
        enforce_https: bool = True,
        max_length: int = 2048,
    ):
        """
        Initialize the validator.

        Args:
            blocked_domains: Domains that may not be shortened (subdomains included)
            self_domains: Hosts of this service (subdomains included)
            enforce_https: Upgrade http URLs to https
            max_length: Longest accepted URL
        """
        self.blocked_domains = tuple(d.lower() for d in blocked_domains)
        self.self_domains = tuple(d.lower() for d in self_domains)
        self.enforce_https = enforce_https
        self.max_length = max_length

    def validate(self, raw_url: str) -> ValidatedURL:
        """
        Validate a raw URL and compute its dedup key and ranking domain.

        Args:
            raw_url: URL as submitted by the client

        Returns:
            ValidatedURL with normalized URL and domain

        Raises:
            InvalidURLError: Malformed URL
            SchemeNotAllowedError: Scheme other than http/https
            SelfReferentialURLError: Host belongs to this service
            BlockedDomainError: Host is on the block-list
        """
        if not isinstance(raw_url, str) or not raw_url.strip():
            raise InvalidURLError(str(raw_url), reason="URL must not be empty")

        candidate = raw_url.strip()
        if not validate_url_length(candidate, self.max_length):
            raise InvalidURLError(
                candidate[:100],
                reason=f"URL is longer than {self.max_length} characters"
            )

        try:
            parts = urlsplit(candidate)
            host = parts.hostname
            # raises for non-numeric or out of range ports
            parts.port
        except ValueError:
            raise InvalidURLError(candidate)

        scheme = parts.scheme.lower()
        if not scheme:
            raise InvalidURLError(candidate, reason="URL must include a scheme")
        if scheme not in ALLOWED_SCHEMES:
            raise SchemeNotAllowedError(candidate, scheme)
        if not host:
            raise InvalidURLError(candidate, reason="URL must include a host")

        domain = host.lower()

        matched = _match_domain(domain, self.self_domains)
        if matched:
            raise SelfReferentialURLError(candidate, domain)

        matched = _match_domain(domain, self.blocked_domains)
        if matched:
            raise BlockedDomainError(candidate, domain)

        normalized = normalize_url(candidate)
        if self.enforce_https and normalized.startswith("http://"):
            # :80 was dropped as the http default; :443 is the https one
            normalized = normalize_url("https://" + normalized[len("http://"):])

        if not validators.url(normalized, strict_query=False):
            raise InvalidURLError(candidate)

        return ValidatedURL(
            original_url=candidate,
            normalized_url=normalized,
            domain=domain,
        )
