"""
Service Manager

This module owns the process-wide service instances. The URL registry and
the domain ranking live in memory, so every request in this process must
share the same objects.

Design:
- Built once on application startup (or lazily on first use)
- Shared across all requests in the same process
- Shutdown drains pending ranking increments before the process exits
"""

import logging
import threading
from typing import Optional, Tuple

from shortener.core.setting import Settings, settings
from shortener.core.validators import URLValidator
from shortener.services.background_tasks import RankingUpdateQueue
from shortener.services.metrics_service import DomainMetricsService
from shortener.services.url_service import ShortenerService
from shortener.storage import InMemoryDomainRankingStorage, InMemoryURLStorage

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_shortener_service: Optional[ShortenerService] = None
_metrics_service: Optional[DomainMetricsService] = None


def build_services(config: Settings = settings) -> Tuple[ShortenerService, DomainMetricsService]:
    """
    Wire storage, validator and services from configuration.

    Args:
        config: Settings to read from

    Returns:
        Tuple of (ShortenerService, DomainMetricsService) sharing one ranking
    """
    metrics_service = DomainMetricsService(
        InMemoryDomainRankingStorage(default_k=config.TOP_DOMAINS_DEFAULT_LIMIT),
        default_limit=config.TOP_DOMAINS_DEFAULT_LIMIT,
    )
    ranking_queue = RankingUpdateQueue(
        metrics_service.increment_domain_shorten_count,
        workers=config.RANKING_WORKERS,
        max_size=config.RANKING_QUEUE_SIZE,
        max_attempts=config.RANKING_MAX_ATTEMPTS,
    )
    validator = URLValidator(
        blocked_domains=config.BLOCKED_DOMAINS,
        self_domains=config.self_hosts,
        enforce_https=config.ENFORCE_HTTPS,
        max_length=config.MAX_URL_LENGTH,
    )
    shortener_service = ShortenerService(
        url_storage=InMemoryURLStorage(),
        metrics_service=metrics_service,
        validator=validator,
        base_url=config.BASE_URL,
        code_length=config.SHORT_CODE_LENGTH,
        max_code_attempts=config.MAX_CODE_GENERATION_ATTEMPTS,
        ranking_queue=ranking_queue,
    )
    return shortener_service, metrics_service


def initialize_services() -> None:
    """Create the shared services if they do not exist yet."""
    global _shortener_service, _metrics_service

    with _lock:
        if _shortener_service is not None:
            logger.warning("Services already initialized")
            return

        _shortener_service, _metrics_service = build_services()
        logger.info(
            f"Services initialized: base_url={settings.BASE_URL}, "
            f"code_length={_shortener_service.code_length}, "
            f"ranking_workers={settings.RANKING_WORKERS}"
        )


def get_shortener_service() -> ShortenerService:
    """FastAPI dependency returning the shared ShortenerService."""
    if _shortener_service is None:
        initialize_services()
    return _shortener_service


def get_metrics_service() -> DomainMetricsService:
    """FastAPI dependency returning the shared DomainMetricsService."""
    if _metrics_service is None:
        initialize_services()
    return _metrics_service


def shutdown_services() -> None:
    """Drain pending ranking increments and drop the shared services."""
    global _shortener_service, _metrics_service

    with _lock:
        if _shortener_service is None:
            return
        logger.info("Shutting down services")
        _shortener_service.ranking_queue.shutdown()
        _shortener_service = None
        _metrics_service = None
