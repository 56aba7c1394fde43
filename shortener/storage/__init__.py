"""
Storage module with abstraction layer.

This module provides:
- URLStorage / DomainRankingStorage: abstract contracts used by services
- InMemoryURLStorage: bidirectional URL registry (id, code, normalized URL)
- InMemoryDomainRankingStorage: per-domain counters with a top-K view

State lives in process memory only; nothing survives a restart.
"""

from shortener.storage.interface import DomainRankingStorage, URLStorage
from shortener.storage.models import DomainStat, UrlRecord
from shortener.storage.ranking_memory import InMemoryDomainRankingStorage
from shortener.storage.url_memory import InMemoryURLStorage

__all__ = [
    "DomainRankingStorage",
    "DomainStat",
    "InMemoryDomainRankingStorage",
    "InMemoryURLStorage",
    "URLStorage",
    "UrlRecord",
]
