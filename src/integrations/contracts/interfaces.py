from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    ABANDONED = "ABANDONED"              # client-side only, never reported to the provider


class Provider(str, Enum):
    MTN = "mtn"
    VODAFONE = "vodafone"

    @property
    def display_name(self) -> str:
        return "MTN" if self is Provider.MTN else "Vodafone"

    @property
    def wallet_name(self) -> str:
        return "MTN Mobile Money" if self is Provider.MTN else "Telecel Cash"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PaymentRequest:
    reference_id: str                    # correlation key, fixed before any network call
    phone_number: str                    # digits only
    amount: Decimal
    provider: Provider
    currency: str = "GHS"
    status: PaymentStatus = PaymentStatus.PENDING


@dataclass(frozen=True)
class AccessToken:
    value: str
    obtained_at: datetime = field(default_factory=datetime.utcnow)
    expires_in: Optional[int] = None


@dataclass
class PaymentInitiation:
    reference_id: str
    status: PaymentStatus
    message: str
    development_mode: bool = False


@dataclass
class PaymentStatusResult:
    reference_id: str
    status: PaymentStatus
    amount: Optional[str] = None
    currency: Optional[str] = None
    development_mode: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def paid(self) -> bool:
        return self.status is PaymentStatus.SUCCESSFUL


@dataclass
class ApiUser:
    user_id: str
    api_key: str


# ---------------------------------------------------------------------------
# Abstract provider interface
# ---------------------------------------------------------------------------

class MobileMoneyProvider(ABC):
    """Every mobile money collection client must implement this interface."""

    @property
    @abstractmethod
    def provider(self) -> Provider:
        """Return the provider enum value."""

    @abstractmethod
    async def initiate_payment(self, request: PaymentRequest) -> PaymentInitiation:
        """Send a request-to-pay prompt to the payer's phone. Does not wait for settlement."""

    @abstractmethod
    async def check_status(self, reference_id: str) -> PaymentStatusResult:
        """Fetch the current status of a previously initiated payment."""
