# Overview: Exponential backoff for outbound webhook calls.

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    max_retries=0 means a single attempt (no retries).

    Delay before retry n (0-based) is base_delay * 2**n, capped at max_delay,
    plus up to `jitter` * delay of random spread.
    """
    max_retries: int = 0
    base_delay: float = 0.5
    max_delay: float = 10.0
    jitter: float = 0.0

    def delay_for(self, attempt: int) -> float:
        delay = min(self.base_delay * (2 ** attempt), self.max_delay)
        if self.jitter:
            delay += delay * self.jitter * random.random()
        return delay


NO_RETRY = RetryPolicy()


def run_with_retry(
    func: Callable[[], T],
    *,
    policy: RetryPolicy = NO_RETRY,
    is_retryable: Callable[[Exception], bool] = lambda exc: True,
    sleep: Callable[[float], None] = time.sleep,
    label: str = "operation",
) -> T:
    """
    Execute func, retrying retryable failures with exponential backoff.

    Non-retryable exceptions and the last failure are re-raised unchanged.
    """
    attempt = 0
    while True:
        try:
            return func()
        except Exception as exc:
            if attempt >= policy.max_retries or not is_retryable(exc):
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                "Retry %d/%d for %s (%s), waiting %.2fs",
                attempt + 1,
                policy.max_retries,
                label,
                exc,
                delay,
            )
            sleep(delay)
            attempt += 1
