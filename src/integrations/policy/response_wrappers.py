from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.interfaces import AccessToken, PaymentStatus, PaymentStatusResult
from src.integrations.contracts.payments import map_provider_status
from src.integrations.errors import AuthError, ProviderError


class TokenResponseModel(BaseModel):
    access_token: str = Field(min_length=1)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None


class RequestToPayStatusModel(BaseModel):
    status: PaymentStatus
    amount: Optional[str] = None
    currency: Optional[str] = None
    financial_transaction_id: Optional[str] = None
    external_id: Optional[str] = None
    reason: Optional[Any] = None
    raw: Dict[str, Any] = Field(default_factory=dict)


def normalize_token_response(raw: Any) -> AccessToken:
    if not isinstance(raw, dict):
        raise AuthError("Token response was not a JSON object.", payload={"provider_response": raw})
    try:
        model = TokenResponseModel(**raw)
    except ValidationError as exc:
        raise AuthError("Token response did not contain an access_token.") from exc
    return AccessToken(value=model.access_token, expires_in=model.expires_in)


def normalize_status_response(raw: Any, *, reference_id: str) -> PaymentStatusResult:
    if not isinstance(raw, dict):
        raise ProviderError("Failed to check payment status")

    model = RequestToPayStatusModel(
        status=map_provider_status(raw.get("status")),
        amount=_optional_str(raw.get("amount")),
        currency=_optional_str(raw.get("currency")),
        financial_transaction_id=_optional_str(raw.get("financialTransactionId")),
        external_id=_optional_str(raw.get("externalId")),
        reason=raw.get("reason"),
        raw=raw,
    )
    return PaymentStatusResult(
        reference_id=reference_id,
        status=model.status,
        amount=model.amount,
        currency=model.currency,
        raw=model.raw,
    )


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
