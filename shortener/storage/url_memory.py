"""
In-Memory URL Registry

Keeps three indices over the same records:
- id -> record
- short code -> id
- normalized original URL -> id

All three are updated together under one write lock, so a reader never sees
a code that resolves to nothing or a normalized URL pointing at a deleted
record. Every lookup is a dict access (O(1)).
"""

import logging
from typing import Dict

from shortener.core.exceptions import (
    CodeAlreadyExistsError,
    DuplicateURLError,
    InternalError,
    NormalizedURLNotFoundError,
    RecordNotFoundError,
    ShortCodeNotFoundError,
)
from shortener.core.locks import ReadWriteLock
from shortener.core.url_normalizer import normalize_url
from shortener.storage.interface import URLStorage
from shortener.storage.models import UrlRecord

logger = logging.getLogger(__name__)


def _dedup_key(url: str) -> str:
    try:
        return normalize_url(url)
    except ValueError:
        return url


class InMemoryURLStorage(URLStorage):
    """
    Thread-safe URL registry held in process memory.

    Records saved here are expected to carry an already normalized URL; the
    registry normalizes again so keys stay canonical even when they do not.
    """

    def __init__(self):
        self._records: Dict[str, UrlRecord] = {}
        self._code_to_id: Dict[str, str] = {}
        self._normalized_to_id: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def save(self, record: UrlRecord) -> None:
        key = _dedup_key(record.original_url)

        with self._lock.write_locked():
            if record.id in self._records or record.code in self._code_to_id:
                raise CodeAlreadyExistsError(record.code)

            existing_id = self._normalized_to_id.get(key)
            if existing_id is not None:
                raise DuplicateURLError(key, self._records[existing_id])

            self._records[record.id] = record
            self._code_to_id[record.code] = record.id
            self._normalized_to_id[key] = record.id

    def get_by_id(self, record_id: str) -> UrlRecord:
        with self._lock.read_locked():
            record = self._records.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    def get_by_code(self, short_code: str) -> UrlRecord:
        with self._lock.read_locked():
            record_id = self._code_to_id.get(short_code)
            if record_id is None:
                raise ShortCodeNotFoundError(short_code)
            record = self._records.get(record_id)

        if record is None:
            logger.error(f"Code index points at missing record: code={short_code}")
            raise InternalError("URL registry is inconsistent")
        return record

    def get_by_normalized_url(self, normalized_url: str) -> UrlRecord:
        key = _dedup_key(normalized_url)

        with self._lock.read_locked():
            record_id = self._normalized_to_id.get(key)
            if record_id is None:
                raise NormalizedURLNotFoundError(key)
            record = self._records.get(record_id)

        if record is None:
            logger.error(f"URL index points at missing record: url={key[:100]}")
            raise InternalError("URL registry is inconsistent")
        return record

    def delete(self, record_id: str) -> UrlRecord:
        with self._lock.write_locked():
            record = self._records.pop(record_id, None)
            if record is None:
                raise RecordNotFoundError(record_id)

            self._code_to_id.pop(record.code, None)
            key = _dedup_key(record.original_url)
            if self._normalized_to_id.get(key) == record_id:
                del self._normalized_to_id[key]

        logger.info(f"Deleted short URL {record.code}")
        return record
