"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Validating and normalizing submitted URLs
- Reusing the existing short code for URLs that were already shortened
- Generating random short codes, retrying on collision
- Feeding the domain ranking for every newly registered URL

Design Decisions:
- Create-or-reuse: URLs that normalize identically share one record, and
  reuse does not count towards the domain ranking
- Only this service retries (code collisions) or fires and forgets
  (ranking increments); storage reports every outcome through exceptions
- Ranking increments go through RankingUpdateQueue so requests do not wait
  on them, while failures still end up in the logs
"""

import logging
from typing import Optional

from shortener.core.exceptions import (
    CodeAlreadyExistsError,
    DuplicateURLError,
    InternalError,
    NormalizedURLNotFoundError,
    RecordNotFoundError,
    ShortCodeNotFoundError,
)
from shortener.core.validators import URLValidator
from shortener.services.background_tasks import RankingUpdateQueue
from shortener.services.code_generator import DEFAULT_SHORT_CODE_LENGTH, generate_short_code
from shortener.services.metrics_service import DomainMetricsService
from shortener.storage.interface import URLStorage
from shortener.storage.models import UrlRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_CODE_ATTEMPTS = 5


class ShortenerService:
    """
    Core business logic for URL shortening.

    Composes the validator, code generator, URL registry and domain ranking.
    Separated from API layer for testability and maintainability.
    """

    def __init__(
        self,
        url_storage: URLStorage,
        metrics_service: DomainMetricsService,
        validator: URLValidator,
        base_url: str,
        code_length: int = DEFAULT_SHORT_CODE_LENGTH,
        max_code_attempts: int = DEFAULT_MAX_CODE_ATTEMPTS,
        ranking_queue: Optional[RankingUpdateQueue] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_storage: Registry of short URLs
            metrics_service: Domain ranking service
            validator: URL validator/normalizer
            base_url: Base of generated short URLs (e.g. "https://sho.rt")
            code_length: Length of generated codes
            max_code_attempts: Code generations tried before giving up
            ranking_queue: Dispatcher for ranking increments; inline when omitted
        """
        self.url_storage = url_storage
        self.metrics_service = metrics_service
        self.validator = validator
        self.base_url = base_url
        self.code_length = code_length if code_length > 0 else DEFAULT_SHORT_CODE_LENGTH
        self.max_code_attempts = max(1, max_code_attempts)
        self.ranking_queue = ranking_queue or RankingUpdateQueue(
            metrics_service.increment_domain_shorten_count,
            workers=0,
        )

    def create_short_url(self, original_url: str) -> UrlRecord:
        """
        Create a new short URL or return existing one if URL was already shortened.

        Args:
            original_url: The long URL to shorten

        Returns:
            UrlRecord holding the code and the normalized URL

        Raises:
            ValidationError: If the URL is invalid, blocked, self-referential
                or uses a scheme other than http/https
            InternalError: If no free short code was found
        """
        validated = self.validator.validate(original_url)

        try:
            existing = self.url_storage.get_by_normalized_url(validated.normalized_url)
            logger.debug(f"Reusing short code {existing.code} for {validated.normalized_url[:100]}")
            return existing
        except NormalizedURLNotFoundError:
            pass

        for attempt in range(1, self.max_code_attempts + 1):
            record = UrlRecord(
                code=generate_short_code(self.code_length),
                original_url=validated.normalized_url,
            )

            try:
                self.url_storage.save(record)
            except CodeAlreadyExistsError:
                logger.warning(
                    f"Short code collision on {record.code} "
                    f"(attempt {attempt}/{self.max_code_attempts})"
                )
                continue
            except DuplicateURLError as e:
                # a concurrent request registered the same URL first
                return e.existing

            logger.info(f"Created short URL {record.code} for domain {validated.domain}")
            self.ranking_queue.submit(validated.domain)
            return record

        logger.error(
            f"Could not find a free short code after {self.max_code_attempts} attempts"
        )
        raise InternalError("Failed to create short URL")

    def get_url(self, short_code: str) -> UrlRecord:
        """
        Retrieve the record for a given short code.

        Raises:
            ShortCodeNotFoundError: If the code is unknown
        """
        return self.url_storage.get_by_code(short_code)

    def resolve(self, short_code: str) -> str:
        """Return the URL a short code redirects to."""
        return self.get_url(short_code).original_url

    def delete_short_url(self, short_code: str) -> UrlRecord:
        """
        Remove a short URL from every registry index.

        The domain ranking keeps its count; it records registrations.

        Raises:
            ShortCodeNotFoundError: If the code is unknown
        """
        try:
            return self.url_storage.delete(short_code)
        except RecordNotFoundError:
            raise ShortCodeNotFoundError(short_code)

    def generate_short_url(self, short_code: str) -> str:
        return f"{self.base_url.rstrip('/')}/{short_code}"

    def wait_for_pending_updates(self) -> None:
        """Block until all dispatched ranking increments are applied."""
        self.ranking_queue.join()
