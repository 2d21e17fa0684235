"""
Payment integration errors.

Every error raised by the mobile money layer derives from PaymentError and
carries the HTTP status the API should answer with, plus an optional payload
that is merged into the JSON error body (e.g. ``developmentMode``).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PaymentError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.payload}


class ValidationError(PaymentError):
    """Malformed input (phone number, provider, amount, reference id). Never retried."""

    status_code = 400


class ProviderError(PaymentError):
    """Transport failure or non-2xx answer from the payment provider."""

    status_code = 500


class AuthError(ProviderError):
    """The provider rejected our API user credentials on the token endpoint."""


class ConfigurationError(PaymentError):
    status_code = 500


class SimulatedPaymentFailure(PaymentError):
    """Development-mode coin flip came up as a failed payment."""

    status_code = 400


class PaymentsDisabledError(PaymentError):
    status_code = 503

    def __init__(self, message: str = "MoMo payment functionality has been disabled") -> None:
        super().__init__(message)
