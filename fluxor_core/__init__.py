"""
Fluxor - exchange or burn small crypto balances through the Mixin network.

Key features:
- Adaptive number formatting for USD values and token balances
- Strict decoding of mixin:// payment locators
- Route API data contracts (tokens, quotes, swaps, orders)
- Asset selection with XIN return estimate
"""

from fluxor_core.formatting import (
    FormatOptions,
    format_balance,
    format_full_number,
    format_smart_number,
    format_usd,
)
from fluxor_core.payment_uri import DecodeError, SwapTx, decode_swap_tx

__version__ = "0.1.0"
__all__ = [
    "DecodeError",
    "FormatOptions",
    "SwapTx",
    "decode_swap_tx",
    "format_balance",
    "format_full_number",
    "format_smart_number",
    "format_usd",
]
