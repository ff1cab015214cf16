#!/usr/bin/env python3
"""Exercise the AppPricing API end to end with the apppricing library.

Initializes the SDK for this host, lists the available plans and
optionally records a page view and a test payment.

Usage
-----
Set environment variables and run::

    export APPPRICING_API_KEY="your-api-key"
    python scripts/probe_api.py

Options::

    --base-url URL      Override the API base URL
    --page NAME         Track a page view for NAME
    --payment AMOUNT    Track a payment of AMOUNT (type/currency via --type/--currency)
    --json              Output plans as machine-readable JSON
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from apppricing import AppPricingClient, AppPricingConfig, PaymentType  # noqa: E402


async def main() -> int:
    parser = argparse.ArgumentParser(description="Probe the AppPricing API with the apppricing client")
    parser.add_argument("--base-url", help="Override the API base URL")
    parser.add_argument("--page", help="Track a page view with this name")
    parser.add_argument("--payment", type=float, help="Track a payment with this amount")
    parser.add_argument("--type", default=PaymentType.NEW_SUB.value, choices=[t.value for t in PaymentType])
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    api_key = os.environ.get("APPPRICING_API_KEY", "")
    if not api_key:
        print("APPPRICING_API_KEY is not set", file=sys.stderr)
        return 2

    overrides = {"base_url": args.base_url} if args.base_url else {}
    config = AppPricingConfig.from_env(**overrides)

    async with AppPricingClient(config) as client:
        if not await client.initialize(api_key):
            print("initialize() failed", file=sys.stderr)
            return 1
        print(f"device_id: {client.state.device_id}")

        plans = await client.get_available_plans()
        if args.json_mode:
            print(json.dumps([plan.model_dump(mode="json") for plan in plans], indent=2))
        else:
            print(f"{len(plans)} plan(s)")
            for plan in plans:
                print(f"  {plan.id}: {plan.name}")

        if args.page:
            print(f"track_page_view({args.page!r}): {await client.track_page_view(args.page)}")

        if args.payment is not None:
            payment = {"type": args.type, "amount": args.payment, "currency": args.currency}
            print(f"track_payment({payment}): {await client.track_payment([payment])}")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
