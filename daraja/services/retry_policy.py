"""
Retry Policy
Pure classification of failures plus the exponential-backoff loop that
consumes it.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar, Union

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_random,
)

from daraja.errors import AuthenticationError, ServiceError, TransientError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# system busy | quota violation or spike arrest violation
BUSY_ERROR_CODES = frozenset({"500.003.02", "500.003.03"})
# transaction already in progress for the subscriber
LOCK_ERROR_CODE = "500.001.1001"
LOCK_ERROR_MESSAGE = "Unable to lock subscriber"

RETRY_AFTER_SECONDS = 1.0


@dataclass(frozen=True)
class Permanent:
    error: BaseException


@dataclass(frozen=True)
class Transient:
    error: BaseException


@dataclass(frozen=True)
class TransientWithDelay:
    error: BaseException
    delay: float = RETRY_AFTER_SECONDS


RetryDecision = Union[Permanent, Transient, TransientWithDelay]


def classify(error: BaseException) -> RetryDecision:
    """Decide whether a failed attempt is worth repeating."""
    if isinstance(error, TransientError):
        return Transient(error)

    if isinstance(error, ServiceError) and not isinstance(error, AuthenticationError):
        if error.error_code in BUSY_ERROR_CODES:
            return TransientWithDelay(error)
        if error.error_code == LOCK_ERROR_CODE and LOCK_ERROR_MESSAGE in error.error_message:
            return TransientWithDelay(error)

    return Permanent(error)


def is_retryable(error: BaseException) -> bool:
    return not isinstance(classify(error), Permanent)


class wait_for_decision:
    """Exponential wait, raised to the decision's fixed delay when it has one."""

    def __init__(self, exponential):
        self.exponential = exponential

    def __call__(self, retry_state: RetryCallState) -> float:
        wait = self.exponential(retry_state)
        decision = classify(retry_state.outcome.exception())
        if isinstance(decision, TransientWithDelay):
            return max(wait, decision.delay)
        return wait


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception()
    logger.debug(
        "Retrying attempt %s in %.2fs after %s: %s",
        retry_state.attempt_number,
        retry_state.next_action.sleep if retry_state.next_action else 0.0,
        error.__class__.__name__,
        error,
    )


@dataclass
class RetryPolicy:
    """
    Exponential backoff settings.

    Attributes:
        initial_interval: Wait before the first retry, in seconds
        multiplier: Growth factor between consecutive waits
        max_interval: Cap on a single wait
        max_elapsed_time: Give up once this many seconds have passed
        jitter: Upper bound of the random amount added to each wait
        max_attempts: Optional hard cap on attempts (None = time-bounded only)
        sleep: Coroutine used to wait between attempts
    """
    initial_interval: float = 0.5
    multiplier: float = 1.5
    max_interval: float = 60.0
    max_elapsed_time: float = 300.0
    jitter: float = 0.25
    max_attempts: Optional[int] = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def _retrying(self) -> AsyncRetrying:
        exponential = wait_exponential(
            multiplier=self.initial_interval,
            exp_base=self.multiplier,
            max=self.max_interval,
        )
        if self.jitter:
            exponential = exponential + wait_random(0, self.jitter)

        stop = stop_after_delay(self.max_elapsed_time)
        if self.max_attempts is not None:
            stop = stop | stop_after_attempt(self.max_attempts)

        return AsyncRetrying(
            retry=retry_if_exception(is_retryable),
            wait=wait_for_decision(exponential),
            stop=stop,
            sleep=self.sleep,
            before_sleep=_log_retry,
            reraise=True,
        )

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Await operation() until it succeeds, fails permanently, or the
        budget runs out. The last error is re-raised as-is.
        """
        async for attempt in self._retrying():
            with attempt:
                return await operation()
