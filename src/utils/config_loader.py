"""
Configuration loader for the MoMo payments service
"""

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MOMO_API_URL = "https://sandbox.momodeveloper.mtn.com"
DEFAULT_RECIPIENT_NUMBER = "0556317768"


class TelecelConfig(BaseModel):
    """Telecel (Vodafone Cash) credentials. Only presence is checked for now."""

    model_config = ConfigDict(frozen=True)

    api_url: Optional[str] = None
    api_key: Optional[str] = None
    user_id: Optional[str] = None
    user_secret: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)


class MomoSettings(BaseModel):
    """Process-wide provider credentials and service options, built once at startup."""

    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_MOMO_API_URL
    subscription_key: Optional[str] = None
    user_id: Optional[str] = None
    user_secret: Optional[str] = None
    target_environment: str = "sandbox"
    callback_host: str = "http://localhost:5000"
    recipient_number: str = DEFAULT_RECIPIENT_NUMBER

    payments_enabled: bool = False
    simulation_delay_seconds: float = Field(default=2.0, ge=0.0)
    simulation_status_delay_seconds: float = Field(default=1.0, ge=0.0)
    http_timeout_seconds: float = Field(default=20.0, gt=0.0)

    telecel: TelecelConfig = Field(default_factory=TelecelConfig)

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    port: int = Field(default=5000, ge=1, le=65535)

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")

    @property
    def development_mode(self) -> bool:
        """True when any of the three MTN credentials is missing."""
        return not (self.subscription_key and self.user_id and self.user_secret)


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_bool(name: str, default: bool = False) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = _env(name)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def load_settings() -> MomoSettings:
    """
    Build MomoSettings from the environment (and a .env file when present).

    Returns:
        Validated, immutable MomoSettings

    Raises:
        ValidationError: If a variable doesn't match the schema
    """
    load_dotenv()

    data = {
        "api_url": _env("MOMO_API_URL") or DEFAULT_MOMO_API_URL,
        "subscription_key": _env("MOMO_API_KEY"),
        "user_id": _env("MOMO_USER_ID"),
        "user_secret": _env("MOMO_USER_SECRET"),
        "target_environment": _env("MOMO_TARGET_ENVIRONMENT") or "sandbox",
        "callback_host": _env("MOMO_CALLBACK_HOST") or "http://localhost:5000",
        "recipient_number": _env("MOMO_RECIPIENT_NUMBER") or DEFAULT_RECIPIENT_NUMBER,
        "payments_enabled": _env_bool("MOMO_PAYMENTS_ENABLED"),
        "telecel": {
            "api_url": _env("TELECEL_API_URL"),
            "api_key": _env("TELECEL_API_KEY"),
            "user_id": _env("TELECEL_USER_ID"),
            "user_secret": _env("TELECEL_USER_SECRET"),
        },
        "cors_origins": _env_list("CORS_ORIGINS", ["*"]),
    }
    optional_numbers = {
        "simulation_delay_seconds": "MOMO_SIMULATION_DELAY_SECONDS",
        "simulation_status_delay_seconds": "MOMO_SIMULATION_STATUS_DELAY_SECONDS",
        "http_timeout_seconds": "MOMO_HTTP_TIMEOUT_SECONDS",
        "port": "PORT",
    }
    for field_name, env_name in optional_numbers.items():
        value = _env(env_name)
        if value is not None:
            data[field_name] = value

    try:
        settings = MomoSettings(**data)
    except ValidationError as e:
        logger.error(f"Settings validation failed: {e}")
        raise

    logger.info(
        "Loaded MoMo settings (enabled=%s, development_mode=%s, target=%s)",
        settings.payments_enabled,
        settings.development_mode,
        settings.target_environment,
    )
    return settings
