"""
Minimal script that uses the public API to onboard a merchant end to end.
"""

from __future__ import annotations

import argparse
import logging
import sys

import airxpay
from airxpay import AirXPayError, load_sdk_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Onboard a merchant using the AirXPay SDK")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AIRXPAY_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--public-key", help="Public key issued to the integrating app")
    parser.add_argument("--backend-url", help="Override the backend base URL")
    parser.add_argument("--merchant-name", required=True)
    parser.add_argument("--merchant-email", required=True)
    parser.add_argument("--business-name", required=True)
    parser.add_argument("--country", help="Two-letter country code")
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify the public key with the backend during initialization",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_sdk_config(
            env_file=args.env_file,
            public_key=args.public_key,
            backend_url=args.backend_url,
        )
        airxpay.initialize(config.get_public_key(), verify=args.verify, config=config)
    except AirXPayError as exc:
        logging.error("Could not initialize the SDK: %s", exc.message)
        return 1

    payload = {
        "merchantName": args.merchant_name,
        "merchantEmail": args.merchant_email,
        "businessName": args.business_name,
    }
    if args.country:
        payload["country"] = args.country

    try:
        created = airxpay.create_merchant(payload)
        status = airxpay.get_merchant_status()
    except AirXPayError as exc:
        logging.error("Onboarding failed: %s", exc.message)
        return 1

    logging.info(
        "Merchant %s onboarded with status %s",
        created.get("merchant", {}).get("merchantId"),
        status.get("status"),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
