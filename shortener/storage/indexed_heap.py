"""
Indexed Max-Heap

A binary max-heap of DomainStat entries that also owns the domain -> position
map, so the two can never drift apart. Supports:
- push of a new domain: O(log n)
- in-place increase of an existing domain: O(log n)
- top(k) without mutating the heap: O(k log k)

Ordering: higher count first; equal counts ordered by domain name ascending.
Counts only ever grow, so an update only needs to sift towards the root.
"""

import heapq
from typing import Dict, List, Optional

from shortener.storage.models import DomainStat


def _outranks(a: DomainStat, b: DomainStat) -> bool:
    if a.count != b.count:
        return a.count > b.count
    return a.domain < b.domain


class IndexedMaxHeap:
    """Max-heap keyed by domain name."""

    def __init__(self):
        self._heap: List[DomainStat] = []
        self._positions: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, domain: str) -> bool:
        return domain in self._positions

    def get(self, domain: str) -> Optional[DomainStat]:
        position = self._positions.get(domain)
        if position is None:
            return None
        return self._heap[position]

    def push(self, stat: DomainStat) -> None:
        if stat.domain in self._positions:
            raise KeyError(f"Domain '{stat.domain}' is already indexed")
        self._heap.append(stat)
        self._positions[stat.domain] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def increase(self, domain: str, amount: int = 1) -> DomainStat:
        """Raise the count of an indexed domain and restore heap order."""
        if amount < 0:
            raise ValueError("Counts can only increase")
        position = self._positions[domain]
        stat = self._heap[position]
        stat.count += amount
        self._sift_up(position)
        return stat

    def top(self, k: int) -> List[DomainStat]:
        """
        Return copies of the k highest ranked entries, best first.

        Walks the heap best-first with a small candidate heap: a node can only
        be emitted after its parent, so at most 2k nodes are ever inspected.
        """
        if k <= 0 or not self._heap:
            return []

        root = self._heap[0]
        candidates = [(-root.count, root.domain, 0)]
        result = []

        while candidates and len(result) < k:
            _, _, position = heapq.heappop(candidates)
            result.append(self._heap[position].snapshot())

            for child in (2 * position + 1, 2 * position + 2):
                if child < len(self._heap):
                    stat = self._heap[child]
                    heapq.heappush(candidates, (-stat.count, stat.domain, child))

        return result

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._positions[heap[i].domain] = i
        self._positions[heap[j].domain] = j

    def _sift_up(self, position: int) -> None:
        while position > 0:
            parent = (position - 1) // 2
            if not _outranks(self._heap[position], self._heap[parent]):
                break
            self._swap(position, parent)
            position = parent
