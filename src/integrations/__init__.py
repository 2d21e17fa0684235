"""
Integrations layer.
This package contains all code used to communicate with mobile money providers:
- MTN MoMo Collections (token, request-to-pay, status, API user onboarding)
- Telecel / Vodafone Cash (placeholder until a real API is available)

Key rule:
- The API layer MUST NOT call provider endpoints directly.
- Routes call PaymentService (src/integrations/policy/payment_service.py),
  which picks the simulated client in development mode and the real HTTP
  client when MTN credentials are configured.
"""

from .contracts.interfaces import (
    AccessToken,
    ApiUser,
    MobileMoneyProvider,
    PaymentInitiation,
    PaymentRequest,
    PaymentStatus,
    PaymentStatusResult,
    Provider,
)
from .contracts.payments import (
    advance_status,
    format_phone_number,
    generate_reference_id,
    is_terminal_status,
    is_valid_reference_id,
    map_provider_status,
    parse_amount,
    validate_phone_number,
)
from .errors import (
    AuthError,
    ConfigurationError,
    PaymentError,
    PaymentsDisabledError,
    ProviderError,
    SimulatedPaymentFailure,
    ValidationError,
)

__all__ = [
    # interfaces
    "AccessToken", "ApiUser", "MobileMoneyProvider", "PaymentInitiation",
    "PaymentRequest", "PaymentStatus", "PaymentStatusResult", "Provider",
    # payments
    "advance_status", "format_phone_number", "generate_reference_id",
    "is_terminal_status", "is_valid_reference_id", "map_provider_status",
    "parse_amount", "validate_phone_number",
    # errors
    "AuthError", "ConfigurationError", "PaymentError", "PaymentsDisabledError",
    "ProviderError", "SimulatedPaymentFailure", "ValidationError",
]
