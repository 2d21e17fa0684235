"""
MTN Mobile Money — SIMULATED client (development mode).

⚠️  Used automatically when MOMO_API_KEY / MOMO_USER_ID / MOMO_USER_SECRET are
    not all configured. No network calls are made: every answer is a biased
    coin flip after an artificial delay, and every result is flagged with
    development_mode=True so callers never mistake it for real settlement.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

from src.integrations.contracts.interfaces import (
    MobileMoneyProvider,
    PaymentInitiation,
    PaymentRequest,
    PaymentStatus,
    PaymentStatusResult,
    Provider,
)
from src.integrations.errors import SimulatedPaymentFailure

logger = logging.getLogger(__name__)

SIMULATED_STATUS_AMOUNT = "5"
SIMULATED_STATUS_CURRENCY = "GHS"


class MTNSimulatedClient(MobileMoneyProvider):
    """
    Development-mode MTN MoMo client.

    Parameters
    ----------
    payment_success_rate : float
        Probability (0–1) that an initiation is accepted. Default 0.9.
    status_success_rate : float
        Probability (0–1) that a status check reports SUCCESSFUL rather than
        PENDING. Default 0.8.
    delay_seconds / status_delay_seconds : float
        Artificial latency before initiation / status answers.
    rng : random.Random
        Injected for deterministic tests.
    """

    def __init__(
        self,
        payment_success_rate: float = 0.9,
        status_success_rate: float = 0.8,
        delay_seconds: float = 2.0,
        status_delay_seconds: float = 1.0,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._payment_success_rate = payment_success_rate
        self._status_success_rate = status_success_rate
        self._delay_seconds = delay_seconds
        self._status_delay_seconds = status_delay_seconds
        self._rng = rng or random.Random()
        self._sleep = sleep

    @property
    def provider(self) -> Provider:
        return Provider.MTN

    async def initiate_payment(self, request: PaymentRequest) -> PaymentInitiation:
        logger.warning("[MTN SIM] Running in development mode - simulating payment ref=%s", request.reference_id)
        await self._sleep(self._delay_seconds)

        if self._rng.random() >= self._payment_success_rate:
            logger.info("[MTN SIM] Simulated payment %s failed", request.reference_id)
            raise SimulatedPaymentFailure(
                "[DEV MODE] Payment failed. Please try again.",
                payload={"developmentMode": True},
            )

        return PaymentInitiation(
            reference_id=request.reference_id,
            status=PaymentStatus.PENDING,
            message=f"[DEV MODE] Payment request sent to {request.provider.wallet_name} number {request.phone_number}",
            development_mode=True,
        )

    async def check_status(self, reference_id: str) -> PaymentStatusResult:
        logger.warning("[MTN SIM] Running in development mode - simulating status check ref=%s", reference_id)
        await self._sleep(self._status_delay_seconds)

        status = PaymentStatus.SUCCESSFUL if self._rng.random() < self._status_success_rate else PaymentStatus.PENDING
        return PaymentStatusResult(
            reference_id=reference_id,
            status=status,
            amount=SIMULATED_STATUS_AMOUNT,
            currency=SIMULATED_STATUS_CURRENCY,
            development_mode=True,
            raw={
                "status": status.value,
                "referenceId": reference_id,
                "amount": 5,
                "currency": SIMULATED_STATUS_CURRENCY,
                "developmentMode": True,
            },
        )
