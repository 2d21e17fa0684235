#!/usr/bin/env python3
"""
Check MTN MoMo configuration:
- report which MOMO_* variables are set (never their values)
- request an access token with the configured API user
- optionally call a running local API's /api/momo/pay endpoint
- optionally poll /api/momo/status until the payment settles or is abandoned
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx
from dotenv import load_dotenv

load_dotenv()

from src.integrations.clients.real_http.mtn_momo import MTNMomoClient
from src.integrations.contracts.interfaces import PaymentStatusResult, PaymentStatus
from src.integrations.contracts.payments import map_provider_status
from src.integrations.errors import PaymentError, PaymentsDisabledError, ProviderError, ValidationError
from src.integrations.policy.status_poller import PaymentStatusPoller
from src.utils.config_loader import load_settings


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


async def check_token() -> bool:
    settings = load_settings()
    print(f"API URL:     {settings.api_url}")
    print(f"API Key:     {'Set' if settings.subscription_key else 'Not set'}")
    print(f"User ID:     {'Set' if settings.user_id else 'Not set'}")
    print(f"User Secret: {'Set' if settings.user_secret else 'Not set'}")

    if settings.development_mode:
        print("Missing required MTN credentials; the API would run in development mode", file=sys.stderr)
        return False

    try:
        await MTNMomoClient(settings).acquire_token()
    except PaymentError as e:
        print(f"MTN token generation failed: {e}", file=sys.stderr)
        return False
    print("MTN token generated successfully")
    return True


async def check_local_payment(base_url: str, phone_number: str, amount: str) -> Optional[str]:
    url = f"{base_url.rstrip('/')}/api/momo/pay"
    async with httpx.AsyncClient(timeout=30) as client:
        try:
            response = await client.post(url, json={"phoneNumber": phone_number, "amount": amount, "provider": "mtn"})
        except httpx.RequestError as e:
            print(f"Local payment test failed: {e}", file=sys.stderr)
            return None
    if not response.is_success:
        print(f"Local payment test failed: {response.status_code} {response.text}", file=sys.stderr)
        return None
    print(f"Local payment endpoint working: {response.json()}")
    return response.json().get("referenceId")


async def poll_local_status(base_url: str, reference_id: str, max_attempts: int) -> bool:
    async def fetch_status(ref: str) -> PaymentStatusResult:
        try:
            async with httpx.AsyncClient(timeout=30) as client:
                response = await client.get(f"{base_url.rstrip('/')}/api/momo/status/{ref}")
        except httpx.RequestError as e:
            raise ProviderError(f"Status check failed: {e}") from e
        if response.status_code == PaymentsDisabledError.status_code:
            raise PaymentsDisabledError()
        if response.status_code >= 500:
            raise ProviderError(f"Status check returned {response.status_code}")
        if not response.is_success:
            raise ValidationError(f"Status check returned {response.status_code} {response.text}")
        data = response.json()
        return PaymentStatusResult(reference_id=ref, status=map_provider_status(data.get("status")), raw=data)

    try:
        outcome = await PaymentStatusPoller(fetch_status, max_attempts=max_attempts).poll(reference_id)
    except PaymentError as e:
        print(f"Status polling stopped: {e}", file=sys.stderr)
        return False
    print(f"Payment {reference_id}: {outcome.status.value} after {outcome.attempts} checks")
    return outcome.status is PaymentStatus.SUCCESSFUL


async def run(args: argparse.Namespace) -> int:
    ok = await check_token()
    if ok and args.local_url:
        reference_id = await check_local_payment(args.local_url, args.phone, args.amount)
        ok = reference_id is not None
        if ok and args.poll:
            ok = await poll_local_status(args.local_url, reference_id, args.max_attempts)
    print("All checks passed." if ok else "Some checks failed. Please check your configuration.")
    return 0 if ok else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Check MTN MoMo credentials and the local payments API")
    parser.add_argument("--local-url", default=None, help="Base URL of a running API, e.g. http://localhost:5000")
    parser.add_argument("--phone", default="0556317768", help="MTN number used for the local payment check")
    parser.add_argument("--amount", default="5", help="Amount in GHS for the local payment check")
    parser.add_argument("--poll", action="store_true", help="Poll the status endpoint after a successful local payment")
    parser.add_argument("--max-attempts", type=int, default=20, help="Status checks before giving up (with --poll)")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
