"""
Command-line interface for exercising an AirXPay merchant backend.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, Iterable, Sequence, TextIO, Tuple

import requests

from .api import create_merchant_client
from .core.client import MerchantClient
from .core.errors import AirXPayError, ConfigError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _load_payload(path: str, stdin: TextIO) -> Dict[str, Any]:
    try:
        if path == "-":
            return json.load(stdin)
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Could not read merchant payload from {path}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airxpay",
        description="Call the AirXPay merchant onboarding backend",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing AIRXPAY_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--public-key",
        help="Public key to use instead of AIRXPAY_PUBLIC_KEY",
    )
    parser.add_argument(
        "--backend-url",
        help="Backend base URL to use instead of AIRXPAY_BACKEND_URL",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("verify-key", help="Ask the backend whether the public key is valid")
    commands.add_parser("status", help="Fetch the merchant status")
    commands.add_parser("refresh-token", help="Refresh the merchant auth token")
    create = commands.add_parser("create-merchant", help="Create a merchant from a JSON payload")
    create.add_argument(
        "--payload",
        required=True,
        help="Path to a JSON file with the merchant payload, or - for stdin",
    )
    return parser


def _command(args: argparse.Namespace, stdin: TextIO) -> Callable[[MerchantClient], Dict[str, Any]]:
    if args.command == "verify-key":
        return lambda client: client.verify_public_key()
    if args.command == "status":
        return lambda client: client.get_merchant_status()
    if args.command == "refresh-token":
        return lambda client: client.refresh_token()
    payload = _load_payload(args.payload, stdin)
    return lambda client: client.create_merchant(payload)


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: requests.Session | None = None,
    stdout: TextIO | None = None,
    stdin: TextIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        command = _command(args, stdin or sys.stdin)
        client = create_merchant_client(
            env_file=args.env_file,
            overrides=overrides,
            public_key=args.public_key,
            backend_url=args.backend_url,
            session=session,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc.message)
        return 1

    try:
        with client:
            result = command(client)
    except AirXPayError as exc:
        logging.error("%s failed: %s", args.command, exc.message)
        return 1

    json.dump(result, out, indent=2, sort_keys=True)
    out.write("\n")
    return 0
