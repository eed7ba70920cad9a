"""
Decoding of Mixin payment locators.

The swap backend answers a quote with a ``mixin://`` locator that the
wallet opens to pay:

    mixin://mixin.one/pay/<payee>?asset=<id>&amount=<n>&memo=<m>&trace=<t>

``decode_swap_tx`` turns that locator into a ``SwapTx`` or raises
``DecodeError``; a partial result is never returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlsplit

logger = logging.getLogger("fluxor.payment_uri")

MIXIN_SCHEME = "mixin://"
PAY_SEGMENT = "/pay/"

# Printable ASCII a browser leaves as-is in a URL path.
_PATH_SAFE = "!#$%&'()*+,/:;=?@[\\]^|"


class DecodeError(ValueError):
    """Raised when a payment locator cannot be decoded."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Failed to decode tx: {cause}")


@dataclass(frozen=True)
class SwapTx:
    """A pending transfer described by a payment locator."""
    trace: str       # correlation id of this payment attempt
    payee: str       # recipient user / multisig id
    asset: str       # asset id
    amount: str      # decimal string, not coerced
    memo: str
    # The route backend reuses the memo as its order id.  Kept as-is;
    # it may not be a real order identifier.
    order_id: str

    def to_dict(self) -> dict:
        return {
            "trace": self.trace,
            "payee": self.payee,
            "asset": self.asset,
            "amount": self.amount,
            "memo": self.memo,
            "orderId": self.order_id,
        }


def decode_swap_tx(locator: str) -> SwapTx:
    """
    Parse a ``mixin://…/pay/<payee>?…`` locator.

    The recipient is percent-encoded the way a browser encodes a URL
    path, so ``/pay/abc def`` yields ``abc%20def``.  Existing escapes
    are left alone.

    Raises
    ------
    DecodeError
        On malformed URI syntax, a missing or empty recipient after
        ``/pay/``, or a missing or empty ``amount`` parameter.
    """
    if not isinstance(locator, str):
        raise DecodeError(f"locator must be a string, got {type(locator).__name__}")

    url = locator.replace(MIXIN_SCHEME, "http://", 1)
    try:
        parts = urlsplit(url)
        _ = parts.port  # raises on a bad port
        path = quote(parts.path, safe=_PATH_SAFE)
    except ValueError as exc:
        logger.debug("Malformed locator %r: %s", locator, exc)
        raise DecodeError(f"malformed locator: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        logger.debug("Malformed locator %r: no scheme or host", locator)
        raise DecodeError(f"malformed locator: {locator}")

    segments = path.split(PAY_SEGMENT)
    payee = segments[1] if len(segments) >= 2 else ""
    if not payee:
        logger.debug("Locator %r has no recipient", locator)
        raise DecodeError(f"invalid recipient in path: {path}")

    params: dict[str, str] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        params.setdefault(key, value)

    amount = params.get("amount", "")
    if not amount:
        logger.debug("Locator %r has no amount", locator)
        raise DecodeError("invalid amount in query")

    memo = params.get("memo", "")
    return SwapTx(
        trace=params.get("trace", ""),
        payee=payee,
        asset=params.get("asset", ""),
        amount=amount,
        memo=memo,
        order_id=memo,
    )
