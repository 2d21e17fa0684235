"""
Status poller for request-to-pay payments.

Polls a status-check coroutine until the payment reaches a terminal status,
the attempt budget runs out, the optional timeout elapses, or the poll is
cancelled. Sleep and clock are injected so the loop can be driven in tests
without real timers.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from src.integrations.contracts.interfaces import PaymentStatus, PaymentStatusResult
from src.integrations.contracts.payments import advance_status, is_terminal_status
from src.integrations.errors import ProviderError

logger = logging.getLogger(__name__)

StatusCheck = Callable[[str], Awaitable[PaymentStatusResult]]


@dataclass
class PollOutcome:
    reference_id: str
    status: PaymentStatus
    attempts: int
    elapsed: float
    last_result: Optional[PaymentStatusResult] = None

    @property
    def paid(self) -> bool:
        return self.status is PaymentStatus.SUCCESSFUL


class PaymentStatusPoller:
    def __init__(
        self,
        check_status: StatusCheck,
        *,
        interval: float = 3.0,
        backoff_factor: float = 1.5,
        max_interval: float = 30.0,
        max_attempts: int = 20,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        if backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        self._check_status = check_status
        self.interval = interval
        self.backoff_factor = backoff_factor
        self.max_interval = max(max_interval, interval)
        self.max_attempts = max_attempts
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock
        self._task: Optional[asyncio.Task] = None

    def delays(self):
        """Yield the wait before each poll after the first."""
        delay = self.interval
        while True:
            yield delay
            delay = min(delay * self.backoff_factor, self.max_interval)

    async def poll(self, reference_id: str) -> PollOutcome:
        started = self._clock()
        status = PaymentStatus.PENDING
        last_result: Optional[PaymentStatusResult] = None
        delays = self.delays()
        attempts = 0

        while attempts < self.max_attempts:
            attempts += 1
            try:
                last_result = await self._check_status(reference_id)
            except ProviderError as e:
                # A failed provider call is not a verdict on the payment; keep polling.
                # Validation, configuration and disabled errors never clear, so they propagate.
                logger.warning("Status check %d for %s failed: %s", attempts, reference_id, e)
            else:
                status = advance_status(status, last_result.status)
                if is_terminal_status(status):
                    logger.info("Payment %s reached %s after %d checks", reference_id, status.value, attempts)
                    return PollOutcome(reference_id, status, attempts, self._clock() - started, last_result)

            if attempts >= self.max_attempts:
                break

            delay = next(delays)
            if self.timeout is not None and (self._clock() - started) + delay > self.timeout:
                logger.info("Polling for %s timed out after %d checks", reference_id, attempts)
                break
            await self._sleep(delay)

        logger.info("Abandoning payment %s after %d checks", reference_id, attempts)
        return PollOutcome(reference_id, PaymentStatus.ABANDONED, attempts, self._clock() - started, last_result)

    def start(self, reference_id: str) -> asyncio.Task:
        """Run poll() in the background. Only one poll per poller at a time."""
        if self._task is not None and not self._task.done():
            raise RuntimeError("Poller is already running")
        self._task = asyncio.ensure_future(self.poll(reference_id))
        return self._task

    def cancel(self) -> bool:
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
