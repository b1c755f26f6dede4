# bid_pricing/errors.py
from __future__ import annotations


class BidPricingError(Exception):
    """Базовая ошибка: цену посчитать нельзя."""


class InvalidOrder(BidPricingError):
    pass


class PriceInfoMissing(BidPricingError):
    def __init__(self, detail: str = "price information is missing or incomplete"):
        super().__init__(detail)


class DenomNotSupported(BidPricingError):
    def __init__(self, denom: str):
        self.denom = denom
        super().__init__(f"denom is not supported: {denom}")


class PriceUnavailable(BidPricingError):
    def __init__(self, detail: str):
        super().__init__(f"error getting price: {detail}")


class InvalidGpuMapping(BidPricingError):
    pass


class WhitelistError(BidPricingError):
    def __init__(self, detail: str):
        super().__init__(f"whitelist check failed: {detail}")
