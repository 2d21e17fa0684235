"""
Payment Service for mobile money listing fees.

Single entry point used by the API layer. Handles:
- Feature switch (payments are disabled unless MOMO_PAYMENTS_ENABLED is set)
- Phone number, provider, amount and reference id validation before any
  network call
- Reference id generation (the sole correlation key for later polling)
- Client selection: simulated MTN client in development mode, real MTN
  Collections client otherwise, Telecel placeholder for vodafone numbers
"""

import logging
from typing import Any, Optional

from src.integrations.clients.mocks.mtn import MTNSimulatedClient
from src.integrations.clients.mocks.telecel import TelecelPlaceholderClient
from src.integrations.clients.real_http.mtn_momo import MTNMomoClient
from src.integrations.contracts.interfaces import (
    ApiUser,
    MobileMoneyProvider,
    PaymentInitiation,
    PaymentRequest,
    PaymentStatusResult,
    Provider,
)
from src.integrations.contracts.payments import (
    clean_phone_number,
    generate_reference_id,
    is_valid_reference_id,
    parse_amount,
    parse_provider,
    validate_phone_number,
)
from src.integrations.errors import PaymentsDisabledError, ValidationError
from src.utils.config_loader import MomoSettings

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(
        self,
        settings: MomoSettings,
        mtn_client: Optional[MTNMomoClient] = None,
        simulated_client: Optional[MobileMoneyProvider] = None,
        telecel_client: Optional[MobileMoneyProvider] = None,
    ):
        self.settings = settings
        self.mtn_client = mtn_client or MTNMomoClient(settings)
        self.simulated_client = simulated_client or MTNSimulatedClient(
            delay_seconds=settings.simulation_delay_seconds,
            status_delay_seconds=settings.simulation_status_delay_seconds,
        )
        self.telecel_client = telecel_client or TelecelPlaceholderClient(
            settings.telecel,
            delay_seconds=settings.simulation_delay_seconds,
        )

    @property
    def development_mode(self) -> bool:
        return self.settings.development_mode

    def _ensure_enabled(self) -> None:
        if not self.settings.payments_enabled:
            raise PaymentsDisabledError()

    def _select_client(self, provider: Provider) -> MobileMoneyProvider:
        if self.development_mode:
            return self.simulated_client
        if provider is Provider.VODAFONE:
            return self.telecel_client
        return self.mtn_client

    def _validation_error(self, message: str) -> ValidationError:
        payload = {"developmentMode": True} if self.development_mode else None
        return ValidationError(message, payload=payload)

    async def initiate_payment(self, phone_number: Any, amount: Any, provider: Any = Provider.MTN) -> PaymentInitiation:
        """
        Validate the number and send one request-to-pay prompt.

        Not idempotent: every call mints a new reference id and triggers a new
        prompt on the payer's phone, even for identical arguments.
        """
        self._ensure_enabled()

        provider_key = parse_provider(provider)
        if provider_key is None:
            raise self._validation_error("Invalid provider. Expected 'mtn' or 'vodafone'.")

        if not validate_phone_number(phone_number, provider_key):
            raise self._validation_error(f"Invalid {provider_key.display_name} phone number format")

        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            raise self._validation_error("Invalid amount. Expected a number greater than 0.")

        request = PaymentRequest(
            reference_id=generate_reference_id(),
            phone_number=clean_phone_number(phone_number),
            amount=parsed_amount,
            provider=provider_key,
        )
        logger.info(
            "Initiating %s payment ref=%s amount=%s %s (development_mode=%s)",
            provider_key.value, request.reference_id, request.amount, request.currency, self.development_mode,
        )

        client = self._select_client(provider_key)
        return await client.initiate_payment(request)

    async def check_status(self, reference_id: str) -> PaymentStatusResult:
        self._ensure_enabled()
        if not is_valid_reference_id(reference_id):
            raise self._validation_error("Invalid reference id")
        client = self.simulated_client if self.development_mode else self.mtn_client
        return await client.check_status(reference_id)

    async def create_api_user(self) -> ApiUser:
        self._ensure_enabled()
        return await self.mtn_client.create_api_user()
