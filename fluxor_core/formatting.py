"""
Adaptive number formatting for Fluxor.

A single quantity has to stay legible whether it is a $0.00000003 dust
balance or a $12,400,000 valuation, so the precision and abbreviation
depend on the magnitude:

    >= 1e9          1.23B
    >= 1e6          4.56M
    >= 1e4          12.4K       (compact mode only)
    >= 1e3          1,234.57    (grouped, up to 2 decimals)
    >= 1            12.3456     (grouped, up to 4 decimals)
    < 1e-4          1.23e-5     (compact mode; always below 1e-8)
    < 1             0.000123    (adaptive decimals, trailing zeros stripped)

Rounding works on the exact binary value of the double and rounds half
away from zero, which is what browsers do for ``toFixed`` and
``toLocaleString``.  Abbreviated output is lossy and is not meant to be
parsed back.

Usage:
    from fluxor_core.formatting import format_usd, format_balance
    format_usd(0.0000231)          # "$2.31e-5"
    format_balance(1.5, "BTC")     # "1.5 BTC"
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Union

logger = logging.getLogger("fluxor.formatting")

Numeric = Union[int, float, Decimal, str]

# Default upper bound on fractional digits (satoshi-style 8 places).
DEFAULT_MAX_DECIMALS: int = 8

GIGA: float = 1_000_000_000.0
MEGA: float = 1_000_000.0
KILO: float = 1_000.0
COMPACT_KILO_MIN: float = 10_000.0
COMPACT_EXP_MAX: float = 0.0001
EXP_MAX: float = 0.00000001

# toFixed() accepts 0..100 fraction digits.
MAX_FRACTION_DIGITS: int = 100

# Wide enough to hold the exact expansion of any double.
_CTX = Context(prec=1100, rounding=ROUND_HALF_UP)

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class FormatOptions:
    """Formatting knobs; every field is optional."""
    prefix: str = ""                     # e.g. "$"
    suffix: str = ""                     # e.g. "BTC", space-separated
    max_decimals: int = DEFAULT_MAX_DECIMALS
    force_decimals: int | None = None    # overrides the tier's decimals
    compact: bool = True                 # K suffix, earlier scientific


# ═══════════════════════════════════════════════════════════════════
#  Internal helpers
# ═══════════════════════════════════════════════════════════════════

def _to_float(value: Any) -> float:
    """Parse *value* as a finite float; NaN when it is not a number."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            return math.nan
        num = float(text)
    else:
        try:
            num = float(value)
        except (TypeError, ValueError, OverflowError):
            return math.nan
    if math.isinf(num):
        return math.nan
    return num


def _quantize(num: float, decimals: int) -> Decimal:
    decimals = min(max(0, decimals), MAX_FRACTION_DIGITS)
    return Decimal(num).quantize(Decimal(1).scaleb(-decimals), context=_CTX)


def _strip_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", "0", ""):
        return "0"
    return text


def _to_fixed(num: float, decimals: int) -> str:
    """``Number.prototype.toFixed``: exactly *decimals* fraction digits."""
    text = f"{_quantize(num, decimals):f}"
    if text.startswith("-") and not text.strip("-0."):
        return text[1:]
    return text


def _grouped(num: float, decimals: int) -> str:
    """Thousands-grouped with at most *decimals* fraction digits."""
    return _strip_zeros(f"{_quantize(num, decimals):,f}")


def _exponential(num: float, digits: int = 2) -> str:
    """``Number.prototype.toExponential``: ``1.23e-5`` style."""
    mag = abs(Decimal(num))
    exp = mag.adjusted()
    step = Decimal(1).scaleb(-digits)
    mantissa = mag.scaleb(-exp, context=_CTX).quantize(step, context=_CTX)
    if mantissa >= 10:
        mantissa = (mantissa / 10).quantize(step, context=_CTX)
        exp += 1
    sign = "-" if num < 0 else ""
    exp_sign = "+" if exp >= 0 else "-"
    return f"{sign}{mantissa}e{exp_sign}{abs(exp)}"


def _adaptive_decimals(magnitude: float, max_decimals: int) -> int:
    if magnitude < 0.01:
        return min(6, max_decimals)
    if magnitude < 0.1:
        return min(4, max_decimals)
    return max_decimals


def _assemble(prefix: str, body: str, suffix: str) -> str:
    return f"{prefix}{body}{' ' + suffix if suffix else ''}"


# ═══════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════

def format_smart_number(
    value: Numeric,
    options: FormatOptions | None = None,
    **overrides: Any,
) -> str:
    """
    Render *value* for display, choosing precision by magnitude.

    Parameters
    ----------
    value : int, float, Decimal or str
        The quantity.  Text must be plain decimal notation (an exponent
        is allowed).  Anything unparseable renders as zero.
    options : FormatOptions, optional
        Formatting settings; defaults to ``FormatOptions()``.
    **overrides
        Field overrides applied on top of *options*
        (``prefix``, ``suffix``, ``max_decimals``, ``force_decimals``,
        ``compact``).

    Never raises for any *value*.
    """
    opts = options or FormatOptions()
    if overrides:
        opts = replace(opts, **overrides)

    num = _to_float(value)
    if math.isnan(num):
        logger.debug("Not a number: %r, rendering zero", value)
        return _assemble(opts.prefix, "0", opts.suffix)

    max_decimals = max(0, opts.max_decimals)
    force = opts.force_decimals
    mag = abs(num)

    if mag >= GIGA:
        body = _to_fixed(num / GIGA, 2) + "B"
    elif mag >= MEGA:
        body = _to_fixed(num / MEGA, 2) + "M"
    elif mag >= KILO:
        if opts.compact and mag >= COMPACT_KILO_MIN:
            body = _to_fixed(num / KILO, 1) + "K"
        else:
            decimals = force if force is not None else min(2, max_decimals)
            body = _grouped(num, decimals)
    elif mag >= 1:
        decimals = force if force is not None else min(4, max_decimals)
        body = _grouped(num, decimals)
    elif mag > 0:
        if mag < EXP_MAX or (opts.compact and mag < COMPACT_EXP_MAX):
            body = _exponential(num, 2)
        else:
            if force is not None:
                decimals = force
            else:
                decimals = _adaptive_decimals(mag, max_decimals)
            body = _strip_zeros(_to_fixed(num, decimals))
    else:
        body = "0"

    return _assemble(opts.prefix, body, opts.suffix)


def format_usd(value: Numeric) -> str:
    """Format a USD value, e.g. ``$1,234.57`` or ``$12.4K``."""
    return format_smart_number(value, FormatOptions(prefix="$", max_decimals=8))


def format_balance(value: Numeric, symbol: str = "") -> str:
    """Format an asset balance followed by its *symbol*."""
    return format_smart_number(value, FormatOptions(suffix=symbol, max_decimals=8))


def format_full_number(value: Numeric, decimals: int = DEFAULT_MAX_DECIMALS) -> str:
    """
    Full-precision rendering for detail views and tooltips.

    Thousands-grouped with up to *decimals* fraction digits.  Never
    abbreviated and never in scientific notation.

    >>> format_full_number(1234567, 2)
    '1,234,567'
    """
    num = _to_float(value)
    if math.isnan(num):
        return "0"
    return _grouped(num, decimals)
