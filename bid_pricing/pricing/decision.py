# bid_pricing/pricing/decision.py
from __future__ import annotations

import enum
import logging

from ..errors import DenomNotSupported
from ..model.entities import PriceQuote
from .rates import UAKT_PER_AKT
from .result import BidOutcome, BlockRates

log = logging.getLogger(__name__)

NATIVE_DENOM = "uakt"

# USDC в сети Akash (IBC-деномы)
USD_STABLE_DENOMS = frozenset({
    "ibc/12C6A0C374171B595A0A9E18B83FA09D295FB1F2D8C6DAA3AC28683471752D84",
    "ibc/170C677610AC31DF0904FFE09CD3B5C657492170E7E52372E48756B71E56F2F1",
})


class SettlementKind(enum.Enum):
    NATIVE = "native"
    USD_STABLE = "usd_stable"
    UNSUPPORTED = "unsupported"


def classify_denom(denom: str) -> SettlementKind:
    if denom == NATIVE_DENOM:
        return SettlementKind.NATIVE
    if denom in USD_STABLE_DENOMS:
        return SettlementKind.USD_STABLE
    return SettlementKind.UNSUPPORTED


def format_rate(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def decide_bid(rates: BlockRates, quote: PriceQuote) -> BidOutcome:
    """
    Сравнение нашей цены за блок с потолком заказчика.

    Цена, равная потолку, принимается. Неизвестный denom — DenomNotSupported.
    """
    kind = classify_denom(quote.denom)
    if kind is SettlementKind.NATIVE:
        rate = rates.rate_per_block_uakt
    elif kind is SettlementKind.USD_STABLE:
        # микро-единицы стейблкоина, как и uakt
        rate = rates.rate_per_block_usd * UAKT_PER_AKT
    else:
        raise DenomNotSupported(quote.denom)

    formatted = format_rate(rate, quote.precision)
    if rate > float(quote.amount):
        log.info("Ceiling %s%s is below our rate %s", quote.amount, quote.denom, formatted)
        return BidOutcome(accepted=False, denom=quote.denom, min_expected=formatted)

    return BidOutcome(accepted=True, denom=quote.denom, price=formatted)
