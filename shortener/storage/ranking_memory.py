"""
In-Memory Domain Ranking

Per-domain shorten counters backed by an IndexedMaxHeap, guarded by a
reader/writer lock. Increments are linearizable: each one runs entirely under
the write lock, so concurrent increments never lose updates. top_k runs under
the read lock and returns copies, so consecutive queries are independent.
"""

from typing import List

from shortener.core.exceptions import DomainNotFoundError
from shortener.core.locks import ReadWriteLock
from shortener.storage.indexed_heap import IndexedMaxHeap
from shortener.storage.interface import DomainRankingStorage
from shortener.storage.models import DomainStat

DEFAULT_TOP_K = 3


class InMemoryDomainRankingStorage(DomainRankingStorage):
    """Thread-safe top-K domain index held in process memory."""

    def __init__(self, default_k: int = DEFAULT_TOP_K):
        self.default_k = default_k if default_k > 0 else DEFAULT_TOP_K
        self._heap = IndexedMaxHeap()
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._heap)

    def increment_or_create(self, domain: str) -> DomainStat:
        with self._lock.write_locked():
            if domain in self._heap:
                stat = self._heap.increase(domain)
            else:
                stat = DomainStat(domain=domain, count=1)
                self._heap.push(stat)
            return stat.snapshot()

    def get(self, domain: str) -> DomainStat:
        with self._lock.read_locked():
            stat = self._heap.get(domain)
            if stat is None:
                raise DomainNotFoundError(domain)
            return stat.snapshot()

    def top_k(self, k: int) -> List[DomainStat]:
        if k <= 0:
            k = self.default_k
        with self._lock.read_locked():
            return self._heap.top(k)
