"""
Payment contract helpers specific to the Ghana mobile money flow:
phone number rules per provider, reference ids and status mapping.
"""

import re
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .interfaces import PaymentStatus, Provider

_PHONE_PATTERNS = {
    Provider.MTN: re.compile(r"^(024|054|055|059|025)\d{7}$"),
    Provider.VODAFONE: re.compile(r"^(050|020|010)\d{7}$"),
}

_NON_DIGITS = re.compile(r"\D")
_REFERENCE_ID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")

TERMINAL_STATUSES = frozenset({PaymentStatus.SUCCESSFUL, PaymentStatus.FAILED, PaymentStatus.ABANDONED})


def parse_provider(value: Any) -> Optional[Provider]:
    """Return the Provider for ``value`` ('mtn' / 'vodafone', any case), or None."""
    if isinstance(value, Provider):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Provider(value.strip().lower())
    except ValueError:
        return None


def clean_phone_number(phone_number: Any) -> str:
    if not isinstance(phone_number, str):
        return ""
    return _NON_DIGITS.sub("", phone_number)


def validate_phone_number(phone_number: Any, provider: Any) -> bool:
    """
    Return True if ``phone_number`` is a valid local number for ``provider``.
    Non-digit characters are ignored. Never raises.
    """
    provider_key = parse_provider(provider)
    if provider_key is None:
        return False
    return bool(_PHONE_PATTERNS[provider_key].match(clean_phone_number(phone_number)))


def format_phone_number(phone_number: str) -> str:
    """'0241234567' -> '024 123 4567'; anything that isn't 10 digits comes back unchanged."""
    digits = clean_phone_number(phone_number)
    if len(digits) == 10:
        return f"{digits[:3]} {digits[3:6]} {digits[6:]}"
    return phone_number


def generate_reference_id() -> str:
    """
    New request-to-pay correlation id (UUID v4).

    Only used to match an initiation with its later status polls; it is not a
    secret and must not be treated as one.
    """
    return str(uuid.uuid4())


def is_valid_reference_id(reference_id: Any) -> bool:
    """True for a canonical hyphenated UUID string, the only shape sent to MTN as a path segment."""
    return isinstance(reference_id, str) and bool(_REFERENCE_ID.match(reference_id))


def parse_amount(amount: Any) -> Optional[Decimal]:
    """
    Return ``amount`` as a Decimal, or None when it is not a finite amount
    greater than zero. Floats go through ``str`` so 5.1 stays 5.1.
    """
    if isinstance(amount, bool):
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def map_provider_status(raw_status: Any) -> PaymentStatus:
    value = str(raw_status or "").strip().upper()
    if value == "SUCCESSFUL":
        return PaymentStatus.SUCCESSFUL
    if value == "FAILED":
        return PaymentStatus.FAILED
    return PaymentStatus.PENDING


def is_terminal_status(status: PaymentStatus) -> bool:
    """Return True if the payment has reached a final, non-changeable state."""
    return status in TERMINAL_STATUSES


def advance_status(current: PaymentStatus, observed: PaymentStatus) -> PaymentStatus:
    """Apply an observed status to a request; terminal states never change."""
    if is_terminal_status(current):
        return current
    return observed
