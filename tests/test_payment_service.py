"""Tests for PaymentService: validation, client selection and the MoMo sequence."""

import json
import re
from decimal import Decimal

import pytest

from src.integrations.clients.mocks.mtn import MTNSimulatedClient
from src.integrations.clients.mocks.telecel import TelecelPlaceholderClient
from src.integrations.clients.real_http.mtn_momo import MTNMomoClient
from src.integrations.contracts.interfaces import PaymentStatus
from src.integrations.errors import (
    AuthError,
    ConfigurationError,
    PaymentsDisabledError,
    SimulatedPaymentFailure,
    ValidationError,
)
from src.integrations.policy.payment_service import PaymentService
from src.utils.config_loader import MomoSettings, TelecelConfig

from tests.conftest import FakeMomoProvider, FixedRandom

UUID_V4 = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def _live_service(settings, provider: FakeMomoProvider) -> PaymentService:
    return PaymentService(settings, mtn_client=MTNMomoClient(settings, transport=provider.transport))


@pytest.mark.asyncio
async def test_initiate_then_check_status_reports_paid(live_settings, fake_provider):
    service = _live_service(live_settings, fake_provider)

    initiation = await service.initiate_payment("024 123 4567", Decimal("5"), "mtn")
    result = await service.check_status(initiation.reference_id)

    assert initiation.status is PaymentStatus.PENDING
    assert UUID_V4.match(initiation.reference_id)
    assert result.status is PaymentStatus.SUCCESSFUL
    assert result.paid is True
    assert fake_provider.calls() == [
        ("POST", "/collection/v1_0/token/"),
        ("POST", "/collection/v1_0/requesttopay"),
        ("POST", "/collection/v1_0/token/"),
        ("GET", f"/collection/v1_0/requesttopay/{initiation.reference_id}"),
    ]


@pytest.mark.asyncio
async def test_phone_number_is_sent_as_digits(live_settings, fake_provider):
    service = _live_service(live_settings, fake_provider)

    await service.initiate_payment("055-123-4567", 5, "MTN")

    body = json.loads(fake_provider.calls_to("/collection/v1_0/requesttopay")[0].content)
    assert body["payer"]["partyId"] == "0551234567"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "amount, wire_amount",
    [
        (5, "5"),
        (5.1, "5.1"),
        ("1e2", "100"),
        (Decimal("5.00"), "5.00"),
        (" 12.5 ", "12.5"),
    ],
)
async def test_amount_is_sent_in_plain_notation(live_settings, fake_provider, amount, wire_amount):
    service = _live_service(live_settings, fake_provider)

    await service.initiate_payment("0241234567", amount, "mtn")

    body = json.loads(fake_provider.calls_to("/collection/v1_0/requesttopay")[0].content)
    assert body["amount"] == wire_amount


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [-5, 0, Decimal("0.00"), "NaN", "Infinity", "-inf", "abc", None, True])
async def test_invalid_amount_fails_before_any_network_call(live_settings, fake_provider, amount):
    service = _live_service(live_settings, fake_provider)

    with pytest.raises(ValidationError, match="Invalid amount"):
        await service.initiate_payment("0241234567", amount, "mtn")
    assert fake_provider.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("reference_id", ["ref", "abc?x=1", "../token/", "", None])
async def test_malformed_reference_id_fails_before_any_network_call(live_settings, fake_provider, reference_id):
    service = _live_service(live_settings, fake_provider)

    with pytest.raises(ValidationError, match="Invalid reference id"):
        await service.check_status(reference_id)
    assert fake_provider.requests == []


@pytest.mark.asyncio
async def test_token_rejection_means_no_request_to_pay(live_settings):
    provider = FakeMomoProvider(token_status=401)
    service = _live_service(live_settings, provider)

    with pytest.raises(AuthError):
        await service.initiate_payment("0241234567", Decimal("5"), "mtn")

    assert provider.calls_to("/collection/v1_0/requesttopay") == []


@pytest.mark.asyncio
async def test_initiation_is_not_idempotent(live_settings, fake_provider):
    """Known gap: identical submissions create two real payment prompts."""
    service = _live_service(live_settings, fake_provider)

    first = await service.initiate_payment("0241234567", Decimal("5"), "mtn")
    second = await service.initiate_payment("0241234567", Decimal("5"), "mtn")

    assert first.reference_id != second.reference_id
    pay_calls = fake_provider.calls_to("/collection/v1_0/requesttopay")
    assert len(pay_calls) == 2
    assert {r.headers["X-Reference-Id"] for r in pay_calls} == {first.reference_id, second.reference_id}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "phone, provider, message",
    [
        ("0201234567", "mtn", "Invalid MTN phone number format"),
        ("0241234567", "vodafone", "Invalid Vodafone phone number format"),
        ("", "mtn", "Invalid MTN phone number format"),
        ("0241234567", "airtel", "Invalid provider. Expected 'mtn' or 'vodafone'."),
    ],
)
async def test_invalid_input_fails_before_any_network_call(live_settings, fake_provider, phone, provider, message):
    service = _live_service(live_settings, fake_provider)

    with pytest.raises(ValidationError) as exc_info:
        await service.initiate_payment(phone, Decimal("5"), provider)

    assert str(exc_info.value) == message
    assert exc_info.value.payload == {}
    assert fake_provider.requests == []


@pytest.mark.asyncio
async def test_disabled_payments_reject_every_operation(fake_provider):
    settings = MomoSettings(subscription_key="k", user_id="u", user_secret="s")
    service = _live_service(settings, fake_provider)

    with pytest.raises(PaymentsDisabledError):
        await service.initiate_payment("0241234567", Decimal("5"), "mtn")
    with pytest.raises(PaymentsDisabledError):
        await service.check_status("ref")
    with pytest.raises(PaymentsDisabledError):
        await service.create_api_user()
    assert fake_provider.requests == []


@pytest.mark.asyncio
async def test_vodafone_without_telecel_config_is_not_configured(live_settings, fake_provider):
    service = _live_service(live_settings, fake_provider)

    with pytest.raises(ConfigurationError, match="Telecel API not configured"):
        await service.initiate_payment("0501234567", Decimal("5"), "vodafone")
    assert fake_provider.requests == []


@pytest.mark.asyncio
async def test_vodafone_with_telecel_config_is_accepted(live_settings, fake_provider, recording_sleep):
    telecel = TelecelPlaceholderClient(
        TelecelConfig(api_url="https://telecel.test", api_key="tk"),
        delay_seconds=2.0,
        sleep=recording_sleep,
    )
    service = PaymentService(
        live_settings,
        mtn_client=MTNMomoClient(live_settings, transport=fake_provider.transport),
        telecel_client=telecel,
    )

    initiation = await service.initiate_payment("0501234567", Decimal("5"), "vodafone")

    assert initiation.status is PaymentStatus.PENDING
    assert initiation.message == "Payment request sent to Telecel Cash number 0501234567"
    assert recording_sleep.calls == [2.0]
    assert fake_provider.requests == []


@pytest.mark.asyncio
async def test_development_mode_simulates_without_network(dev_settings, recording_sleep):
    simulated = MTNSimulatedClient(rng=FixedRandom(0.5), sleep=recording_sleep)
    service = PaymentService(dev_settings, simulated_client=simulated)

    initiation = await service.initiate_payment("0241234567", Decimal("5"), "mtn")
    result = await service.check_status(initiation.reference_id)

    assert service.development_mode is True
    assert initiation.development_mode is True
    assert initiation.message.startswith("[DEV MODE]")
    assert result.status is PaymentStatus.SUCCESSFUL
    assert result.paid is True
    assert result.development_mode is True
    assert recording_sleep.calls == [2.0, 1.0]


@pytest.mark.asyncio
async def test_development_mode_failures_are_flagged(dev_settings, recording_sleep):
    service = PaymentService(dev_settings, simulated_client=MTNSimulatedClient(rng=FixedRandom(0.95), sleep=recording_sleep))

    with pytest.raises(SimulatedPaymentFailure) as exc_info:
        await service.initiate_payment("0241234567", Decimal("5"), "mtn")
    assert exc_info.value.to_dict() == {"error": "[DEV MODE] Payment failed. Please try again.", "developmentMode": True}

    with pytest.raises(ValidationError) as invalid:
        await service.initiate_payment("123", Decimal("5"), "mtn")
    assert invalid.value.payload == {"developmentMode": True}


@pytest.mark.asyncio
async def test_development_mode_status_can_stay_pending(dev_settings, recording_sleep):
    service = PaymentService(dev_settings, simulated_client=MTNSimulatedClient(rng=FixedRandom(0.85), sleep=recording_sleep))

    result = await service.check_status("3f2b8c1e-6d4a-4f7b-9a2e-1c5d8e9f0a7b")

    assert result.status is PaymentStatus.PENDING
    assert result.paid is False
    assert result.raw["developmentMode"] is True
    assert result.raw["amount"] == 5
