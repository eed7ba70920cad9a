"""
Data contracts of the Mixin Route swap API.

Plain value types only; the HTTP client that produces them lives outside
this package.  Each type round-trips through ``from_dict`` / ``to_dict``
using the backend's wire keys.

Mirrors the route API documentation:
  - TokenView / TokenChain: swappable tokens
  - QuoteRespView / SwapRequest / SwapRespView: quote and swap calls
  - SwapOrder / SwapOrderState: order history
  - MixinRouteAPIError: error payloads
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fluxor_core.payment_uri import SwapTx, decode_swap_tx


class HistoryPriceType(Enum):
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    YTD = "YTD"
    ALL = "ALL"


class SwapOrderState(Enum):
    CREATED = "created"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_final(self) -> bool:
        return self in (SwapOrderState.SUCCESS, SwapOrderState.FAILED)


@dataclass(frozen=True)
class TokenChain:
    """The chain a token lives on."""
    chain_id: str
    symbol: str
    name: str
    icon: str
    decimals: int

    @classmethod
    def from_dict(cls, d: dict) -> TokenChain:
        return cls(
            chain_id=d["chainId"],
            symbol=d["symbol"],
            name=d["name"],
            icon=d.get("icon", ""),
            decimals=int(d.get("decimals", 0)),
        )

    def to_dict(self) -> dict:
        return {
            "chainId": self.chain_id,
            "symbol": self.symbol,
            "name": self.name,
            "icon": self.icon,
            "decimals": self.decimals,
        }


@dataclass(frozen=True)
class TokenView:
    """A swappable token."""
    asset_id: str
    name: str
    symbol: str
    icon: str
    chain: TokenChain

    @classmethod
    def from_dict(cls, d: dict) -> TokenView:
        return cls(
            asset_id=d["assetId"],
            name=d["name"],
            symbol=d["symbol"],
            icon=d.get("icon", ""),
            chain=TokenChain.from_dict(d["chain"]),
        )

    def to_dict(self) -> dict:
        return {
            "assetId": self.asset_id,
            "name": self.name,
            "symbol": self.symbol,
            "icon": self.icon,
            "chain": self.chain.to_dict(),
        }


@dataclass(frozen=True)
class QuoteRespView:
    """A price quote; ``payload`` is echoed back in the swap request."""
    input_mint: str
    in_amount: str
    output_mint: str
    out_amount: str
    payload: str

    @classmethod
    def from_dict(cls, d: dict) -> QuoteRespView:
        return cls(
            input_mint=d["inputMint"],
            in_amount=d["inAmount"],
            output_mint=d["outputMint"],
            out_amount=d["outAmount"],
            payload=d.get("payload", ""),
        )

    def to_dict(self) -> dict:
        return {
            "inputMint": self.input_mint,
            "inAmount": self.in_amount,
            "outputMint": self.output_mint,
            "outAmount": self.out_amount,
            "payload": self.payload,
        }


@dataclass(frozen=True)
class SwapRequest:
    payer: str
    input_mint: str
    output_mint: str
    input_amount: str
    payload: str
    referral: str | None = None

    @classmethod
    def from_dict(cls, d: dict) -> SwapRequest:
        return cls(
            payer=d["payer"],
            input_mint=d["inputMint"],
            output_mint=d["outputMint"],
            input_amount=d["inputAmount"],
            payload=d["payload"],
            referral=d.get("referral"),
        )

    def to_dict(self) -> dict:
        d = {
            "payer": self.payer,
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "inputAmount": self.input_amount,
            "payload": self.payload,
        }
        if self.referral is not None:
            d["referral"] = self.referral
        return d


@dataclass(frozen=True)
class SwapRespView:
    """Swap response: a payment locator plus the quote it settles."""
    tx: str
    quote: QuoteRespView

    @classmethod
    def from_dict(cls, d: dict) -> SwapRespView:
        return cls(tx=d["tx"], quote=QuoteRespView.from_dict(d["quote"]))

    def to_dict(self) -> dict:
        return {"tx": self.tx, "quote": self.quote.to_dict()}

    def decode_tx(self) -> SwapTx:
        """Decode ``tx``; raises ``DecodeError`` when it is malformed."""
        return decode_swap_tx(self.tx)


@dataclass(frozen=True)
class QuoteRange:
    """Accepted input range reported with an out-of-range quote."""
    min: str
    max: str

    @classmethod
    def from_dict(cls, d: dict) -> QuoteRange:
        return cls(min=str(d["min"]), max=str(d["max"]))

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class SwapOrder:
    order_id: str
    user_id: str
    asset_id: str
    receive_asset_id: str
    amount: str
    receive_amount: str
    payment_trace_id: str
    receive_trace_id: str
    state: SwapOrderState
    created_at: str

    @classmethod
    def from_dict(cls, d: dict) -> SwapOrder:
        return cls(
            order_id=d["order_id"],
            user_id=d["user_id"],
            asset_id=d["asset_id"],
            receive_asset_id=d["receive_asset_id"],
            amount=d["amount"],
            receive_amount=d.get("receive_amount", ""),
            payment_trace_id=d.get("payment_trace_id", ""),
            receive_trace_id=d.get("receive_trace_id", ""),
            state=SwapOrderState(d["state"]),
            created_at=d.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "user_id": self.user_id,
            "asset_id": self.asset_id,
            "receive_asset_id": self.receive_asset_id,
            "amount": self.amount,
            "receive_amount": self.receive_amount,
            "payment_trace_id": self.payment_trace_id,
            "receive_trace_id": self.receive_trace_id,
            "state": self.state.value,
            "created_at": self.created_at,
        }


class MixinRouteAPIError(Exception):
    """A non-success answer from the route API."""

    def __init__(
        self,
        status_code: int,
        code: int | None = None,
        description: str | None = None,
        raw_body: str | None = None,
        range: QuoteRange | None = None,  # noqa: A002
    ):
        super().__init__(description or raw_body or "Mixin Route API Error")
        self.status_code = status_code
        self.code = code
        self.description = description
        self.raw_body = raw_body
        self.range = range

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> MixinRouteAPIError:
        """
        Build an error from a response body.

        *body* is the JSON text or an already-decoded dict of the form
        ``{"error": {"code": .., "description": .., "extra": {"range": ..}}}``.
        Anything else is kept verbatim as ``raw_body``.
        """
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        raw = body if isinstance(body, str) else None
        data = body
        if isinstance(body, str):
            try:
                data = json.loads(body)
            except ValueError:
                return cls(status_code, raw_body=raw)
        if not isinstance(data, dict) or not isinstance(data.get("error"), dict):
            return cls(status_code, raw_body=raw if raw is not None else str(body))

        err = data["error"]
        extra = err.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        quote_range = None
        if isinstance(extra.get("range"), dict):
            try:
                quote_range = QuoteRange.from_dict(extra["range"])
            except KeyError:
                quote_range = None
        code = err.get("code")
        if isinstance(code, bool) or not isinstance(code, (int, float)) or not math.isfinite(code):
            code = None
        return cls(
            status_code,
            code=int(code) if code is not None else None,
            description=err.get("description") or None,
            raw_body=raw,
            range=quote_range,
        )
