"""
Telecel Cash (formerly Vodafone Cash) — PLACEHOLDER client.

⚠️  There is no real Telecel collection protocol wired up yet. When the
    Telecel URL and key are configured the initiation is accepted after an
    artificial delay; otherwise every call fails with ConfigurationError.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from src.integrations.contracts.interfaces import (
    MobileMoneyProvider,
    PaymentInitiation,
    PaymentRequest,
    PaymentStatus,
    PaymentStatusResult,
    Provider,
)
from src.integrations.errors import ConfigurationError
from src.utils.config_loader import TelecelConfig

logger = logging.getLogger(__name__)


class TelecelPlaceholderClient(MobileMoneyProvider):
    def __init__(
        self,
        config: TelecelConfig,
        delay_seconds: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._config = config
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    @property
    def provider(self) -> Provider:
        return Provider.VODAFONE

    def _require_config(self) -> None:
        if not self._config.is_configured:
            raise ConfigurationError("Telecel API not configured")

    async def initiate_payment(self, request: PaymentRequest) -> PaymentInitiation:
        self._require_config()
        logger.info("[TELECEL] Simulating payment ref=%s amount=%s", request.reference_id, request.amount)
        await self._sleep(self._delay_seconds)
        return PaymentInitiation(
            reference_id=request.reference_id,
            status=PaymentStatus.PENDING,
            message=f"Payment request sent to {self.provider.wallet_name} number {request.phone_number}",
        )

    async def check_status(self, reference_id: str) -> PaymentStatusResult:
        self._require_config()
        # No status endpoint exists for the placeholder; the payment stays pending.
        return PaymentStatusResult(reference_id=reference_id, status=PaymentStatus.PENDING)
