"""
Storage Abstraction Interface

This module defines the storage contracts used by the service layer.
The service only depends on these interfaces, so the in-memory
implementations can be swapped (for example for a Redis backed ranking)
without touching the orchestration code.

Both contracts report outcomes through return values or the typed
exceptions in shortener.core.exceptions; a write is never dropped silently.
"""

from abc import ABC, abstractmethod
from typing import List

from shortener.storage.models import DomainStat, UrlRecord


class URLStorage(ABC):
    """
    Bidirectional URL registry.

    One record is reachable through three keys: internal id, short code and
    normalized original URL. Implementations keep all three in sync.
    """

    @abstractmethod
    def save(self, record: UrlRecord) -> None:
        """
        Store a new record.

        Raises:
            CodeAlreadyExistsError: If the code is already taken
            DuplicateURLError: If the normalized URL is registered under another code
        """
        pass

    @abstractmethod
    def get_by_id(self, record_id: str) -> UrlRecord:
        """
        Raises:
            RecordNotFoundError: If no record has this id
        """
        pass

    @abstractmethod
    def get_by_code(self, short_code: str) -> UrlRecord:
        """
        Raises:
            ShortCodeNotFoundError: If the code is unknown
        """
        pass

    @abstractmethod
    def get_by_normalized_url(self, normalized_url: str) -> UrlRecord:
        """
        Constant time dedup lookup.

        Raises:
            NormalizedURLNotFoundError: If the URL was never registered
        """
        pass

    @abstractmethod
    def delete(self, record_id: str) -> UrlRecord:
        """
        Remove a record from every index and return it.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        pass


class DomainRankingStorage(ABC):
    """Per-domain shorten counters with a top-K view."""

    @abstractmethod
    def increment_or_create(self, domain: str) -> DomainStat:
        """Add one to the domain count, creating it at 1; returns the new value."""
        pass

    @abstractmethod
    def get(self, domain: str) -> DomainStat:
        """
        Raises:
            DomainNotFoundError: If the domain was never counted
        """
        pass

    @abstractmethod
    def top_k(self, k: int) -> List[DomainStat]:
        """Return min(k, len) stats ordered by count descending; k <= 0 uses the default."""
        pass
