"""Pytest fixtures for the MoMo payment tests."""

import re
from typing import Any, Dict, List, Optional

import httpx
import pytest

from src.utils.config_loader import MomoSettings

_API_USER_PATH = re.compile(r"^/v1_0/apiuser/(?P<user_id>[^/]+)$")
_API_KEY_PATH = re.compile(r"^/v1_0/apiuser/(?P<user_id>[^/]+)/apikey$")


class FakeMomoProvider:
    """Stands in for the MTN MoMo sandbox behind an httpx.MockTransport."""

    def __init__(
        self,
        token_status: int = 200,
        pay_status: int = 202,
        status_code: int = 200,
        status_payload: Optional[Dict[str, Any]] = None,
        api_key: str = "K",
    ):
        self.token_status = token_status
        self.pay_status = pay_status
        self.status_code = status_code
        self.status_payload = status_payload or {"status": "SUCCESSFUL", "amount": "5", "currency": "GHS"}
        self.api_key = api_key
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/collection/v1_0/token/":
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "login_failed"})
            return httpx.Response(200, json={"access_token": "T", "token_type": "access_token", "expires_in": 3600})

        if path == "/collection/v1_0/requesttopay" and request.method == "POST":
            return httpx.Response(self.pay_status)

        if path.startswith("/collection/v1_0/requesttopay/") and request.method == "GET":
            return httpx.Response(self.status_code, json=self.status_payload)

        if path == "/v1_0/apiuser" and request.method == "POST":
            return httpx.Response(201)

        if _API_USER_PATH.match(path) and request.method == "GET":
            return httpx.Response(200, json={"providerCallbackHost": "localhost", "targetEnvironment": "sandbox"})

        if _API_KEY_PATH.match(path) and request.method == "POST":
            return httpx.Response(201, json={"apiKey": self.api_key})

        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls(self) -> List[tuple]:
        return [(r.method, r.url.path) for r in self.requests]

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


class FixedRandom:
    """random.Random stand-in that always draws the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_provider():
    return FakeMomoProvider()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def live_settings():
    """Settings with MTN credentials present (real client path)."""
    return MomoSettings(
        api_url="https://momo.test/",
        subscription_key="sub-key",
        user_id="user-1",
        user_secret="secret-1",
        payments_enabled=True,
        simulation_delay_seconds=0,
        simulation_status_delay_seconds=0,
        http_timeout_seconds=5,
    )


@pytest.fixture
def dev_settings():
    """Settings without MTN credentials (development mode)."""
    return MomoSettings(payments_enabled=True)
