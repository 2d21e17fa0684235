"""
MTN MoMo Collections HTTP Client.

Used when MOMO_API_KEY, MOMO_USER_ID and MOMO_USER_SECRET are all configured.
Every call that needs a bearer token fetches a fresh one first; tokens are
never cached between requests.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from src.integrations.contracts.interfaces import (
    AccessToken,
    ApiUser,
    MobileMoneyProvider,
    PaymentInitiation,
    PaymentRequest,
    PaymentStatus,
    PaymentStatusResult,
    Provider,
)
from src.integrations.contracts.payments import generate_reference_id
from src.integrations.errors import AuthError, ConfigurationError, ProviderError
from src.integrations.policy.response_wrappers import normalize_status_response, normalize_token_response
from src.utils.config_loader import MomoSettings

logger = logging.getLogger(__name__)

PAYER_MESSAGE = "Payment for Ad Listing on AdHouse"
PAYEE_NOTE = "Ad Listing Payment"


class MTNMomoClient(MobileMoneyProvider):
    def __init__(
        self,
        settings: MomoSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.base_url = settings.base_url
        self.timeout_seconds = settings.http_timeout_seconds
        self._transport = transport

    @property
    def provider(self) -> Provider:
        return Provider.MTN

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    def _subscription_headers(self) -> Dict[str, str]:
        if not self.settings.subscription_key:
            raise ConfigurationError("MOMO_API_KEY is not configured.")
        return {"Ocp-Apim-Subscription-Key": self.settings.subscription_key}

    # ------------------------------------------------------------------
    # Token
    # ------------------------------------------------------------------

    async def acquire_token(self) -> AccessToken:
        url = f"{self.base_url}/collection/v1_0/token/"
        headers = self._subscription_headers()
        auth = httpx.BasicAuth(self.settings.user_id or "", self.settings.user_secret or "")
        try:
            async with self._client() as client:
                response = await client.post(url, headers=headers, auth=auth)
        except httpx.RequestError as e:
            logger.error("[MTN MOMO] Token request failed: %s", e)
            raise ProviderError("Failed to reach MTN MoMo token endpoint") from e

        if not response.is_success:
            logger.error("[MTN MOMO] Token rejected: %s %s", response.status_code, response.text)
            raise AuthError(
                "MTN MoMo rejected the API user credentials",
                payload={"provider_status": response.status_code},
            )

        token = normalize_token_response(_json_or_empty(response))
        logger.debug("[MTN MOMO] Access token obtained (expires_in=%s)", token.expires_in)
        return token

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def initiate_payment(self, request: PaymentRequest) -> PaymentInitiation:
        token = await self.acquire_token()

        headers = {
            "Authorization": f"Bearer {token.value}",
            "X-Reference-Id": request.reference_id,
            "X-Target-Environment": self.settings.target_environment,
            "Content-Type": "application/json",
            **self._subscription_headers(),
        }
        payload: Dict[str, Any] = {
            "amount": format(request.amount, "f"),
            "currency": request.currency,
            "externalId": str(int(time.time() * 1000)),
            "payer": {
                "partyIdType": "MSISDN",
                "partyId": request.phone_number,
            },
            "payerMessage": PAYER_MESSAGE,
            "payeeNote": PAYEE_NOTE,
        }

        url = f"{self.base_url}/collection/v1_0/requesttopay"
        logger.info("[MTN MOMO] Request to pay ref=%s amount=%s %s", request.reference_id, request.amount, request.currency)
        try:
            async with self._client() as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("[MTN MOMO] Payment error: %s %s", e.response.status_code, e.response.text)
            raise ProviderError("Failed to initiate MTN payment") from e
        except httpx.RequestError as e:
            logger.error("[MTN MOMO] Payment error: %s", e)
            raise ProviderError("Failed to initiate MTN payment") from e

        return PaymentInitiation(
            reference_id=request.reference_id,
            status=PaymentStatus.PENDING,
            message=f"Payment request sent to {self.provider.wallet_name} number {request.phone_number}",
        )

    async def check_status(self, reference_id: str) -> PaymentStatusResult:
        token = await self.acquire_token()

        headers = {
            "Authorization": f"Bearer {token.value}",
            "X-Target-Environment": self.settings.target_environment,
            **self._subscription_headers(),
        }
        url = f"{self.base_url}/collection/v1_0/requesttopay/{reference_id}"
        try:
            async with self._client() as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("[MTN MOMO] Status check error: %s %s", e.response.status_code, e.response.text)
            raise ProviderError("Failed to check payment status") from e
        except httpx.RequestError as e:
            logger.error("[MTN MOMO] Status check error: %s", e)
            raise ProviderError("Failed to check payment status") from e

        result = normalize_status_response(_json_or_empty(response), reference_id=reference_id)
        logger.info("[MTN MOMO] Payment %s -> %s", reference_id, result.status.value)
        return result

    # ------------------------------------------------------------------
    # One-time API user onboarding
    # ------------------------------------------------------------------

    async def create_api_user(self) -> ApiUser:
        user_id = generate_reference_id()
        subscription = self._subscription_headers()
        try:
            async with self._client() as client:
                created = await client.post(
                    f"{self.base_url}/v1_0/apiuser",
                    json={"providerCallbackHost": self.settings.callback_host},
                    headers={
                        "X-Reference-Id": user_id,
                        "Content-Type": "application/json",
                        **subscription,
                    },
                )
                created.raise_for_status()

                details = await client.get(f"{self.base_url}/v1_0/apiuser/{user_id}", headers=subscription)
                details.raise_for_status()

                key_response = await client.post(f"{self.base_url}/v1_0/apiuser/{user_id}/apikey", headers=subscription)
                key_response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("[MTN MOMO] API user creation error: %s %s", e.response.status_code, e.response.text)
            raise ProviderError("Failed to create API user") from e
        except httpx.RequestError as e:
            logger.error("[MTN MOMO] API user creation error: %s", e)
            raise ProviderError("Failed to create API user") from e

        api_key = _json_or_empty(key_response).get("apiKey")
        if not api_key:
            raise ProviderError("Failed to create API user")

        logger.info("[MTN MOMO] API user created id=%s", user_id)
        return ApiUser(user_id=user_id, api_key=str(api_key))


def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
