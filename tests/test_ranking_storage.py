"""
Tests for the indexed max-heap and the in-memory domain ranking.
"""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortener.core.exceptions import DomainNotFoundError
from shortener.storage import InMemoryDomainRankingStorage
from shortener.storage.indexed_heap import IndexedMaxHeap
from shortener.storage.models import DomainStat


def increment(ranking, domain, times):
    for _ in range(times):
        ranking.increment_or_create(domain)


def as_pairs(stats):
    return [(stat.domain, stat.count) for stat in stats]


class TestIndexedMaxHeap:

    def test_push_and_get(self):
        heap = IndexedMaxHeap()
        heap.push(DomainStat("python.org", 3))

        assert "python.org" in heap
        assert heap.get("python.org").count == 3
        assert heap.get("golang.org") is None
        assert len(heap) == 1

    def test_push_existing_domain_fails(self):
        heap = IndexedMaxHeap()
        heap.push(DomainStat("python.org", 1))
        with pytest.raises(KeyError):
            heap.push(DomainStat("python.org", 1))

    def test_increase_reorders(self):
        heap = IndexedMaxHeap()
        heap.push(DomainStat("a.io", 5))
        heap.push(DomainStat("b.io", 1))

        heap.increase("b.io", 10)

        assert as_pairs(heap.top(2)) == [("b.io", 11), ("a.io", 5)]

    def test_increase_rejects_negative_amounts(self):
        heap = IndexedMaxHeap()
        heap.push(DomainStat("a.io", 5))
        with pytest.raises(ValueError):
            heap.increase("a.io", -1)

    def test_top_matches_full_sort(self):
        """Random increments keep the heap consistent with a full sort."""
        rng = random.Random(42)
        heap = IndexedMaxHeap()
        domains = [f"site{i}.com" for i in range(50)]

        for _ in range(2000):
            domain = rng.choice(domains)
            if domain in heap:
                heap.increase(domain)
            else:
                heap.push(DomainStat(domain, 1))

        expected = sorted(
            ((d, heap.get(d).count) for d in domains if d in heap),
            key=lambda pair: (-pair[1], pair[0]),
        )
        assert as_pairs(heap.top(10)) == expected[:10]
        assert as_pairs(heap.top(len(heap))) == expected

    def test_top_of_empty_heap(self):
        assert IndexedMaxHeap().top(3) == []


class TestDomainRanking:

    @pytest.fixture
    def ranked(self, ranking_storage):
        increment(ranking_storage, "a.com", 5)
        increment(ranking_storage, "b.com", 10)
        increment(ranking_storage, "c.com", 3)
        increment(ranking_storage, "d.com", 7)
        return ranking_storage

    def test_increment_creates_then_increments(self, ranking_storage):
        assert ranking_storage.increment_or_create("github.com").count == 1
        assert ranking_storage.increment_or_create("github.com").count == 2
        assert ranking_storage.get("github.com") == DomainStat("github.com", 2)

    def test_get_unknown_domain(self, ranking_storage):
        with pytest.raises(DomainNotFoundError):
            ranking_storage.get("github.com")

    def test_top_two(self, ranked):
        assert as_pairs(ranked.top_k(2)) == [("b.com", 10), ("d.com", 7)]

    def test_top_more_than_available(self, ranked):
        assert as_pairs(ranked.top_k(10)) == [
            ("b.com", 10), ("d.com", 7), ("a.com", 5), ("c.com", 3),
        ]

    @pytest.mark.parametrize("k", [0, -1])
    def test_top_non_positive_uses_default(self, ranked, k):
        assert as_pairs(ranked.top_k(k)) == [("b.com", 10), ("d.com", 7), ("a.com", 5)]

    def test_custom_default_k(self):
        ranking = InMemoryDomainRankingStorage(default_k=2)
        increment(ranking, "a.com", 5)
        increment(ranking, "b.com", 10)
        increment(ranking, "c.com", 3)

        assert as_pairs(ranking.top_k(0)) == [("b.com", 10), ("a.com", 5)]

    def test_default_limit_via_metrics_service(self, ranked, metrics_service):
        assert as_pairs(metrics_service.get_top_domains(0)) == as_pairs(metrics_service.get_top_domains(3))
        assert as_pairs(metrics_service.get_top_domains(-1)) == [
            ("b.com", 10), ("d.com", 7), ("a.com", 5),
        ]
        assert len(metrics_service.get_top_domains(None)) == 3

    def test_ties_are_ordered_by_domain_name(self, ranking_storage):
        for domain in ["zeta.io", "alpha.io", "mid.io"]:
            increment(ranking_storage, domain, 2)
        increment(ranking_storage, "top.io", 3)

        assert as_pairs(ranking_storage.top_k(4)) == [
            ("top.io", 3), ("alpha.io", 2), ("mid.io", 2), ("zeta.io", 2),
        ]

    def test_top_k_is_repeatable_and_read_only(self, ranked):
        first = ranked.top_k(4)
        first[0].count = 999

        second = ranked.top_k(4)
        assert as_pairs(second) == [
            ("b.com", 10), ("d.com", 7), ("a.com", 5), ("c.com", 3),
        ]
        assert ranked.get("b.com").count == 10

    def test_concurrent_increments_are_not_lost(self, ranking_storage):
        domains = ["github.com", "python.org", "golang.org", "docs.python.org"]

        def work(worker):
            for i in range(500):
                ranking_storage.increment_or_create(domains[(worker + i) % len(domains)])

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(work, range(8)))

        assert sum(stat.count for stat in ranking_storage.top_k(10)) == 4000
        for domain in domains:
            assert ranking_storage.get(domain).count == 1000
