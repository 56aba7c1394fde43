"""
Domain Metrics Service

This service exposes the domain popularity ranking:
- incrementing the shorten count of a domain
- reading the top domains

Separated from the shortening service so the ranking can later move behind
its own API without touching URL registration.
"""

from typing import List, Optional

from shortener.storage.interface import DomainRankingStorage
from shortener.storage.models import DomainStat

DEFAULT_TOP_DOMAINS_LIMIT = 3


class DomainMetricsService:
    """Service for reading and updating per-domain shorten counts."""

    def __init__(
        self,
        ranking_storage: DomainRankingStorage,
        default_limit: int = DEFAULT_TOP_DOMAINS_LIMIT,
    ):
        """
        Initialize the metrics service.

        Args:
            ranking_storage: Storage holding the per-domain counters
            default_limit: Limit used when the caller asks for a non-positive one
        """
        self.ranking_storage = ranking_storage
        self.default_limit = default_limit if default_limit > 0 else DEFAULT_TOP_DOMAINS_LIMIT

    def get_top_domains(self, limit: Optional[int] = None) -> List[DomainStat]:
        """
        Get the most shortened domains.

        Ties are ordered by domain name ascending.

        Args:
            limit: Number of domains; None or non-positive uses the default (3)

        Returns:
            Up to limit DomainStat entries, highest count first
        """
        if limit is None or limit <= 0:
            limit = self.default_limit
        return self.ranking_storage.top_k(limit)

    def increment_domain_shorten_count(self, domain: str) -> DomainStat:
        return self.ranking_storage.increment_or_create(domain)

    def get_domain_stat(self, domain: str) -> DomainStat:
        return self.ranking_storage.get(domain)
