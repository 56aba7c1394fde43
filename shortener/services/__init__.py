"""
Services module for business logic separation.

This module contains service classes that encapsulate business logic,
keeping it separate from API endpoints and storage:
- ShortenerService: create-or-reuse shortening, lookups, deletion
- DomainMetricsService: domain popularity ranking
- RankingUpdateQueue: background application of ranking increments
"""
