"""
Background Task Helpers

Domain ranking increments run off the request path. Every successfully
registered URL submits exactly one increment; the request returns without
waiting for it.

Design:
- Bounded queue served by daemon worker threads
- A full queue never blocks the caller: the increment is applied inline
- Failed increments are retried, then logged with traceback
- Work already queued is drained on shutdown, so a dispatched increment is
  never abandoned half way
"""

import logging
import queue
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

_STOP = object()


class RankingUpdateQueue:
    """
    Applies domain increments on worker threads.

    With workers=0 every increment is applied synchronously in submit().
    """

    def __init__(
        self,
        apply: Callable[[str], object],
        workers: int = 2,
        max_size: int = 1000,
        max_attempts: int = 3,
        name: str = "ranking-updates",
    ):
        """
        Initialize the queue and start its workers.

        Args:
            apply: Callable performing one increment for a domain
            workers: Number of worker threads (0 = inline)
            max_size: Pending increments held before falling back to inline
            max_attempts: Attempts per increment before giving up
            name: Thread name prefix
        """
        self._apply = apply
        self.max_attempts = max(1, max_attempts)
        self._queue: queue.Queue = queue.Queue(maxsize=max_size)
        self._lock = threading.Lock()
        self._closed = False

        self._total_processed = 0
        self._total_failed = 0
        self._total_inline = 0

        self._threads = []
        for index in range(workers):
            thread = threading.Thread(
                target=self._worker,
                name=f"{name}-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

    def submit(self, domain: str) -> None:
        """Schedule one increment for domain without waiting for it."""
        with self._lock:
            if self._threads and not self._closed:
                try:
                    self._queue.put_nowait(domain)
                    return
                except queue.Full:
                    logger.warning(
                        f"Ranking queue full ({self._queue.maxsize}), "
                        f"applying increment for {domain} inline"
                    )
            self._total_inline += 1

        self._run(domain)

    def join(self) -> None:
        """Block until every queued increment has been processed."""
        self._queue.join()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Process everything already queued, then stop the workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True

        for _ in self._threads:
            self._queue.put(_STOP)
        for thread in self._threads:
            thread.join(timeout)

        logger.info(
            f"Ranking queue stopped: processed={self._total_processed}, "
            f"failed={self._total_failed}"
        )

    def get_stats(self) -> dict:
        """
        Get queue statistics for monitoring.

        Returns:
            Dictionary with queue metrics
        """
        with self._lock:
            return {
                "workers": len(self._threads),
                "pending": self._queue.qsize(),
                "total_processed": self._total_processed,
                "total_failed": self._total_failed,
                "total_inline": self._total_inline,
                "is_closed": self._closed,
            }

    def _worker(self) -> None:
        while True:
            domain = self._queue.get()
            try:
                if domain is _STOP:
                    return
                self._run(domain)
            finally:
                self._queue.task_done()

    def _run(self, domain: str) -> bool:
        for attempt in range(1, self.max_attempts + 1):
            try:
                self._apply(domain)
            except Exception as e:
                if attempt < self.max_attempts:
                    logger.warning(
                        f"Increment for {domain} failed "
                        f"(attempt {attempt}/{self.max_attempts}): {e}"
                    )
                    continue
                logger.error(
                    f"Dropping increment for {domain} after {attempt} attempts: {e}",
                    exc_info=True
                )
                with self._lock:
                    self._total_failed += 1
                return False

            with self._lock:
                self._total_processed += 1
            return True
        return False
