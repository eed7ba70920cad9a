"""
TOML-based configuration for Fluxor.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from fluxor_core.config import load_config
    cfg = load_config("fluxor.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[import,no-redef]


# XIN, the asset small balances are exchanged into.
XIN_ASSET_ID = "c94ac88f-4671-3976-b60a-09064f1811e8"


@dataclass
class FormatConfig:
    """Default number formatting settings."""
    max_decimals: int = 8
    compact: bool = True
    full_decimals: int = 8     # digits shown by the full-precision view


@dataclass
class ExchangeConfig:
    """Dust exchange settings."""
    select_limit_usd: float = 10.0     # only assets worth less can be picked
    fee_rate: float = 0.08             # 5% price slippage + 3% fee
    xin_asset_id: str = XIN_ASSET_ID
    default_xin_price_usd: float = 100.0  # used when no price is known


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class FluxorConfig:
    """Top-level configuration container."""
    format: FormatConfig = field(default_factory=FormatConfig)
    exchange: ExchangeConfig = field(default_factory=ExchangeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def load_config(path: str | None = None) -> FluxorConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        FLUXOR_MAX_DECIMALS  -> format.max_decimals
        FLUXOR_COMPACT       -> format.compact    (1/0, true/false, yes/no)
        FLUXOR_SELECT_LIMIT  -> exchange.select_limit_usd
        FLUXOR_FEE_RATE      -> exchange.fee_rate
        FLUXOR_XIN_PRICE     -> exchange.default_xin_price_usd
        FLUXOR_LOG_LEVEL     -> logging.level
        FLUXOR_LOG_FMT       -> logging.format
        FLUXOR_LOG_FILE      -> logging.file
    """
    cfg = FluxorConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("format", cfg.format),
                ("exchange", cfg.exchange),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("FLUXOR_MAX_DECIMALS"):
        cfg.format.max_decimals = int(v)
    if v := os.environ.get("FLUXOR_COMPACT"):
        cfg.format.compact = _parse_bool("FLUXOR_COMPACT", v)
    if v := os.environ.get("FLUXOR_SELECT_LIMIT"):
        cfg.exchange.select_limit_usd = float(v)
    if v := os.environ.get("FLUXOR_FEE_RATE"):
        cfg.exchange.fee_rate = float(v)
    if v := os.environ.get("FLUXOR_XIN_PRICE"):
        cfg.exchange.default_xin_price_usd = float(v)
    if v := os.environ.get("FLUXOR_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("FLUXOR_LOG_FMT"):
        cfg.logging.format = v
    if v := os.environ.get("FLUXOR_LOG_FILE"):
        cfg.logging.file = v

    return cfg
