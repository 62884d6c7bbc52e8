"""Fixed-delay throttle for sequential outbound requests."""
import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class RateLimiter:
    """Pauses a fixed delay after every unit of work, successful or not."""

    def __init__(self, delay_seconds: float, sleep: Callable[[float], None] = time.sleep):
        self.delay_seconds = max(delay_seconds, 0.0)
        self._sleep = sleep

    def pause(self) -> None:
        """Wait out the configured delay."""
        if self.delay_seconds > 0:
            logger.debug(f"Sleeping {self.delay_seconds:.1f}s before next request")
            self._sleep(self.delay_seconds)

    @contextmanager
    def slot(self) -> Iterator[None]:
        """Scope one unit of work; the delay runs on exit, even if the body raised."""
        try:
            yield
        finally:
            self.pause()
