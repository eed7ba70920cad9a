#!/usr/bin/env python3
"""
Fluxor command-line runner.

Formats amounts the way the exchange views show them and decodes payment
locators returned by the swap backend.

Usage:
    python run_fluxor.py usd 12400                  # $12.4K
    python run_fluxor.py balance 0.00002 --symbol BTC
    python run_fluxor.py full 1234567.891 --decimals 2
    python run_fluxor.py format 0.5 --prefix '~' --no-compact
    python run_fluxor.py decode 'mixin://mixin.one/pay/<uid>?amount=1' --json
    python run_fluxor.py estimate --value 7.5 --price 120
    python run_fluxor.py estimate --value 7.5 --prices prices.json

Environment variables (alternative to flags):
    FLUXOR_MAX_DECIMALS, FLUXOR_COMPACT, FLUXOR_FEE_RATE, FLUXOR_XIN_PRICE,
    FLUXOR_LOG_LEVEL, FLUXOR_LOG_FMT, FLUXOR_LOG_FILE
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is in sys.path so imports work before pip install
# ---------------------------------------------------------------------------
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fluxor_core.config import FluxorConfig, load_config  # noqa: E402
from fluxor_core.formatting import (  # noqa: E402
    FormatOptions,
    format_balance,
    format_full_number,
    format_smart_number,
    format_usd,
)
from fluxor_core.logging_config import setup_logging_from_config  # noqa: E402
from fluxor_core.payment_uri import DecodeError, decode_swap_tx  # noqa: E402
from fluxor_core.selection import estimate_return  # noqa: E402

logger = logging.getLogger("fluxor.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fluxor", description="Fluxor dust exchange tools")
    p.add_argument("--config", default=None, help="Path to fluxor.toml config file")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--log-format", choices=["human", "json"], default=None)
    sub = p.add_subparsers(dest="command", required=True)

    fmt = sub.add_parser("format", help="Adaptive number formatting")
    fmt.add_argument("value")
    fmt.add_argument("--prefix", default="")
    fmt.add_argument("--suffix", default="")
    fmt.add_argument("--max-decimals", type=int, default=None)
    fmt.add_argument("--force-decimals", type=int, default=None)
    fmt.add_argument("--no-compact", action="store_true",
                     help="Disable K suffix and early scientific notation")

    usd = sub.add_parser("usd", help="Format a USD value")
    usd.add_argument("value")

    bal = sub.add_parser("balance", help="Format an asset balance")
    bal.add_argument("value")
    bal.add_argument("--symbol", default="")

    full = sub.add_parser("full", help="Full-precision, unabbreviated number")
    full.add_argument("value")
    full.add_argument("--decimals", type=int, default=None)

    dec = sub.add_parser("decode", help="Decode a mixin:// payment locator")
    dec.add_argument("locator")
    dec.add_argument("--json", action="store_true", help="Print as JSON")

    est = sub.add_parser("estimate", help="Estimate XIN returned for a USD total")
    est.add_argument("--value", type=float, required=True, help="Selected USD value")
    est.add_argument("--price", default=None, help="XIN price in USD")
    est.add_argument("--prices", default=None,
                     help="JSON file mapping asset id to USD price; XIN is looked up in it")

    return p


def run(args: argparse.Namespace, cfg: FluxorConfig) -> int:
    """Execute one sub-command, print its result, return the exit code."""
    if args.command == "format":
        opts = FormatOptions(
            prefix=args.prefix,
            suffix=args.suffix,
            max_decimals=(args.max_decimals if args.max_decimals is not None
                          else cfg.format.max_decimals),
            force_decimals=args.force_decimals,
            compact=cfg.format.compact and not args.no_compact,
        )
        print(format_smart_number(args.value, opts))
    elif args.command == "usd":
        print(format_usd(args.value))
    elif args.command == "balance":
        print(format_balance(args.value, args.symbol))
    elif args.command == "full":
        decimals = args.decimals if args.decimals is not None else cfg.format.full_decimals
        print(format_full_number(args.value, decimals))
    elif args.command == "decode":
        try:
            tx = decode_swap_tx(args.locator)
        except DecodeError as exc:
            logger.error("%s", exc)
            return 1
        if args.json:
            print(json.dumps(tx.to_dict(), indent=2))
        else:
            for key, value in tx.to_dict().items():
                print(f"{key:<8} {value}")
    elif args.command == "estimate":
        price = args.price
        if price is None and args.prices:
            with open(args.prices, encoding="utf-8") as fh:
                prices = json.load(fh)
            if not isinstance(prices, dict):
                logger.error("%s: expected a JSON object of asset id to price", args.prices)
                return 1
            price = prices.get(cfg.exchange.xin_asset_id)
        xin = estimate_return(
            args.value, price,
            fee_rate=cfg.exchange.fee_rate,
            default_price_usd=cfg.exchange.default_xin_price_usd,
        )
        print(format_balance(xin, "XIN"))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Load config (TOML + env overrides); CLI flags override config
    cfg = load_config(args.config)
    if args.log_level:
        cfg.logging.level = args.log_level.upper()
    if args.log_format:
        cfg.logging.format = args.log_format
    setup_logging_from_config(cfg.logging)

    return run(args, cfg)


def main_sync() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_sync()
