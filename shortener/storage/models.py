"""
Storage Models for URL Shortener Service

This module defines the records kept by the in-memory storage layer:
- UrlRecord: mapping between a short code and its (normalized) original URL
- DomainStat: how many distinct URLs were shortened for a domain

Design Decisions:
- The short code doubles as the internal record id (primary key)
- UrlRecord is immutable once created
- DomainStat is mutated in place by the ranking index only; callers
  always receive copies
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UrlRecord:
    """
    A shortened URL.

    Fields:
    - code: Unique short code, also the public token
    - original_url: Normalized original URL the code redirects to
    - created_at: Timestamp when the URL was shortened
    """
    code: str
    original_url: str
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def id(self) -> str:
        """Internal record id; the code is used as primary key."""
        return self.code


@dataclass
class DomainStat:
    """Shorten count of a single domain."""
    domain: str
    count: int = 0

    def snapshot(self) -> "DomainStat":
        return replace(self)
