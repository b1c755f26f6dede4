# bid_pricing/pricing/engine.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..config import Settings
from ..errors import DenomNotSupported, InvalidOrder, PriceInfoMissing
from ..feeds.price_cache import FileRateStore, PriceFeedCache, RateProvider
from ..feeds.whitelist import SPECIAL_RATE, WhitelistCache, is_special_account
from ..model.entities import BidOrder, PriceTargets
from .costs import calculate_total_cost_usd
from .decision import SettlementKind, classify_denom, decide_bid, format_rate
from .gpu import calculate_total_gpu_price, max_gpu_price
from .rates import calculate_block_rates
from .resources import aggregate_resources
from .result import BidOutcome, BidResult

log = logging.getLogger(__name__)


def price_order(order: BidOrder, targets: PriceTargets, rate_provider: RateProvider) -> BidResult:
    """
    Полный расчёт цены бида по заявке.

    rate_provider — что угодно с get_rate() -> Decimal (обычно PriceFeedCache).
    Цена заказчика и её denom проверяются до похода за курсом.
    """
    quote = order.quote
    if quote is None:
        raise PriceInfoMissing()
    if classify_denom(quote.denom) is SettlementKind.UNSUPPORTED:
        raise DenomNotSupported(quote.denom)

    gpu_usd = calculate_total_gpu_price(
        order.request, targets.gpu_mappings, max_gpu_price(targets.gpu_mappings)
    )
    resources = aggregate_resources(order.request)
    monthly_usd = calculate_total_cost_usd(resources, targets, gpu_usd)

    usd_per_akt = rate_provider.get_rate()
    rates = calculate_block_rates(monthly_usd, usd_per_akt)
    log.info("Total cost per block: %s (%.2f USD/month)", rates.canonical, monthly_usd)

    outcome = decide_bid(rates, quote)
    return BidResult(outcome=outcome, monthly_usd=monthly_usd, gpu_usd=gpu_usd, rates=rates)


class BidService:
    """
    Обвязка вокруг price_order для CLI и API: спец-аккаунты,
    белый список и кэш курса из настроек.
    """

    def __init__(
        self,
        settings: Settings,
        rate_provider: Optional[RateProvider] = None,
        whitelist: Optional[WhitelistCache] = None,
    ):
        self.settings = settings
        self.rate_provider = rate_provider or PriceFeedCache(
            store=FileRateStore(settings.price_cache_file)
        )
        if whitelist is None and settings.whitelist_url:
            whitelist = WhitelistCache(settings.whitelist_url, settings.whitelist_cache_file)
        self.whitelist = whitelist

    def current_rate(self) -> Decimal:
        return self.rate_provider.get_rate()

    def price(self, order: BidOrder) -> BidResult:
        owner = order.owner or self.settings.owner
        if not owner and self.whitelist is not None:
            raise InvalidOrder("request owner is not specified")

        if is_special_account(owner, self.settings.special_accounts):
            log.info("Special pricing activated for %s", owner)
            precision = order.quote.precision if order.quote else 2
            price = format_rate(float(SPECIAL_RATE), precision)
            denom = order.quote.denom if order.quote else ""
            return BidResult(
                outcome=BidOutcome(accepted=True, denom=denom, price=price),
                monthly_usd=0.0,
                gpu_usd=0.0,
                special=True,
            )

        if self.whitelist is not None:
            self.whitelist.check(owner)

        return price_order(order, self.settings.targets, self.rate_provider)
