"""
Minimum-interval gate used to pace delete calls.

Lambda throttles control-plane requests per account, so successive
deletes are spaced by a fixed minimum interval. The clock and sleep
functions are injectable so the policy can be tested without real time.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.1


class MinIntervalGate:
    """
    Enforce a minimum interval between marked events.

    Parameters
    ----------
    min_interval : float, default=0.1
        Minimum number of seconds between a ``mark()`` and the next
        ``wait()`` returning.
    clock : callable, optional
        Monotonic clock returning seconds. Defaults to ``time.monotonic``.
    sleep : callable, optional
        Sleep function taking seconds. Defaults to ``time.sleep``.

    Example
    -------
    >>> gate = MinIntervalGate(0.1)
    >>> for version in candidates:
    ...     gate.wait()
    ...     delete(version)
    ...     gate.mark()
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_INTERVAL,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.min_interval = min_interval
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._last: Optional[float] = None

    def wait(self) -> float:
        """
        Block until the interval since the last mark has elapsed.

        Returns
        -------
        float
            Seconds slept (0.0 when no wait was needed).
        """
        if self._last is None:
            return 0.0

        remaining = self.min_interval - (self._clock() - self._last)
        if remaining <= 0:
            return 0.0

        logger.debug(f"Pacing: sleeping {remaining:.3f}s")
        self._sleep(remaining)
        return remaining

    def mark(self) -> None:
        """Record that a paced event just happened."""
        self._last = self._clock()

    def reset(self) -> None:
        """Forget the last mark so the next wait returns immediately."""
        self._last = None

    def __repr__(self) -> str:
        return f"MinIntervalGate(min_interval={self.min_interval})"
