#!/usr/bin/env python3
"""
Create an MTN MoMo sandbox API user and API key (one-time onboarding).
Needs MOMO_API_KEY (the Collections subscription key); prints the values to
put into MOMO_USER_ID and MOMO_USER_SECRET.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from src.integrations.clients.real_http.mtn_momo import MTNMomoClient
from src.integrations.errors import PaymentError
from src.utils.config_loader import load_settings


async def create_user() -> int:
    client = MTNMomoClient(load_settings())
    try:
        api_user = await client.create_api_user()
    except PaymentError as e:
        print(f"API user creation failed: {e}", file=sys.stderr)
        return 1
    print(f"MOMO_USER_ID={api_user.user_id}")
    print(f"MOMO_USER_SECRET={api_user.api_key}")
    return 0


def main() -> int:
    return asyncio.run(create_user())


if __name__ == "__main__":
    sys.exit(main())
