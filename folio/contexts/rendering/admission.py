"""
Admission control in front of the Render Engine.

Each render holds one browser instance for its whole lifetime, so the number
of renders in flight is capped. Callers that cannot get a slot within the
timeout fail with RenderFailure instead of queuing forever.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.settings import AdmissionSettings
from folio.exceptions import RenderFailure


class RenderAdmission:
    """
    Bounded-concurrency gate for browser renders.

    Attributes:
        max_concurrent: Maximum renders in flight
        acquire_timeout_s: Seconds to wait for a slot (None waits indefinitely)
        in_flight: Renders currently holding a slot
        peak: Highest in_flight value observed
    """

    def __init__(self, max_concurrent: int = 2, acquire_timeout_s: Optional[float] = 120):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self.acquire_timeout_s = acquire_timeout_s
        self._semaphore = threading.BoundedSemaphore(max_concurrent)
        self._counter_lock = threading.Lock()
        self.in_flight = 0
        self.peak = 0

    @classmethod
    def from_settings(cls, settings: AdmissionSettings) -> "RenderAdmission":
        return cls(settings.max_concurrent, settings.acquire_timeout_s)

    @contextmanager
    def slot(self) -> Iterator[None]:
        """
        Hold one render slot for the duration of the block.

        Raises:
            RenderFailure: If no slot frees up within acquire_timeout_s
        """
        acquired = self._semaphore.acquire(timeout=self.acquire_timeout_s)
        if not acquired:
            raise RenderFailure(
                f"Render queue full: {self.max_concurrent} renders in flight "
                f"for more than {self.acquire_timeout_s}s"
            )
        with self._counter_lock:
            self.in_flight += 1
            self.peak = max(self.peak, self.in_flight)
        _log_debug(f"Render slot acquired ({self.in_flight}/{self.max_concurrent})")
        try:
            yield
        finally:
            with self._counter_lock:
                self.in_flight -= 1
            self._semaphore.release()
