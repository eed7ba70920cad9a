"""
Asset selection for the dust exchange.

Only assets worth less than a small USD limit may be exchanged or burnt.
``AssetSelection`` holds the user's current picks and estimates how much
XIN the exchange would return.  It is a plain object: whoever renders
the selection owns an instance and passes it to the views that need it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fluxor_core.config import ExchangeConfig

logger = logging.getLogger("fluxor.selection")

_DEFAULTS = ExchangeConfig()


def _parse(value: object) -> float:
    try:
        num = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return num if math.isfinite(num) else 0.0


@dataclass(frozen=True)
class SelectedAsset:
    """An asset balance the user may exchange."""
    asset_id: str
    symbol: str
    total_amount: str        # balance as returned by the wallet
    price_usd: str
    name: str = ""
    icon_url: str = ""

    @property
    def value_usd(self) -> float:
        """Balance times price; unparseable parts count as zero."""
        return _parse(self.total_amount) * _parse(self.price_usd)


def can_select(value_usd: float, limit: float = _DEFAULTS.select_limit_usd) -> bool:
    """True when an asset worth *value_usd* is small enough to pick."""
    return value_usd < limit


def estimate_return(
    total_value_usd: float,
    price_usd: float | str | None,
    fee_rate: float = _DEFAULTS.fee_rate,
    default_price_usd: float = _DEFAULTS.default_xin_price_usd,
) -> float:
    """
    Estimate the XIN received for *total_value_usd* worth of assets.

    ``total * (1 - fee_rate) / price``.  A missing, unparseable or
    non-positive *price_usd* falls back to *default_price_usd*.
    """
    if total_value_usd == 0:
        return 0.0
    price = _parse(price_usd) if price_usd is not None else 0.0
    if price <= 0:
        logger.debug("No usable XIN price (%r), using %s", price_usd, default_price_usd)
        price = default_price_usd
    return total_value_usd * (1 - fee_rate) / price


class AssetSelection:
    """The set of assets picked for exchange or burn, in pick order."""

    def __init__(
        self,
        limit: float = _DEFAULTS.select_limit_usd,
        fee_rate: float = _DEFAULTS.fee_rate,
        default_price_usd: float = _DEFAULTS.default_xin_price_usd,
        xin_asset_id: str = _DEFAULTS.xin_asset_id,
    ):
        self.limit = limit
        self.fee_rate = fee_rate
        self.default_price_usd = default_price_usd
        self.xin_asset_id = xin_asset_id
        self._assets: dict[str, SelectedAsset] = {}

    @classmethod
    def from_config(cls, cfg: ExchangeConfig) -> AssetSelection:
        return cls(
            limit=cfg.select_limit_usd,
            fee_rate=cfg.fee_rate,
            default_price_usd=cfg.default_xin_price_usd,
            xin_asset_id=cfg.xin_asset_id,
        )

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    @property
    def assets(self) -> tuple[SelectedAsset, ...]:
        return tuple(self._assets.values())

    def is_selected(self, asset_id: str) -> bool:
        return asset_id in self._assets

    def toggle(self, asset: SelectedAsset) -> bool:
        """
        Select *asset*, or deselect it if already selected.

        Returns whether the asset is selected afterwards.  Assets worth
        the limit or more are never added.
        """
        if asset.asset_id in self._assets:
            del self._assets[asset.asset_id]
            return False
        if not can_select(asset.value_usd, self.limit):
            logger.debug(
                "Rejected %s: $%s is not below $%s",
                asset.symbol, asset.value_usd, self.limit,
            )
            return False
        self._assets[asset.asset_id] = asset
        return True

    def clear(self) -> None:
        self._assets.clear()

    @property
    def total_value_usd(self) -> float:
        return sum(a.value_usd for a in self._assets.values())

    def estimate_return(self, price_usd: float | str | None = None) -> float:
        """XIN expected for the current selection at *price_usd* per XIN."""
        return estimate_return(
            self.total_value_usd, price_usd,
            fee_rate=self.fee_rate, default_price_usd=self.default_price_usd,
        )

    def estimate_from_prices(self, prices: Mapping[str, Any]) -> float:
        """
        Estimate using the wallet's USD prices keyed by asset id.

        The XIN price is looked up under ``xin_asset_id``; when the wallet
        holds no XIN the default price applies.
        """
        return self.estimate_return(prices.get(self.xin_asset_id))
