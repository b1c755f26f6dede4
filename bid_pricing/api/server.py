# bid_pricing/api/server.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException

from ..config import load_settings
from ..errors import BidPricingError, PriceUnavailable, WhitelistError
from ..order.from_order import order_from_data
from ..pricing.engine import BidService
from .schema import BidResponse, BlockRatesModel, OrderModel, PriceFeedResponse

app = FastAPI(title="bid-pricing")

log = logging.getLogger("uvicorn")

# --- STATE ---
_SERVICE: Optional[BidService] = None


def get_service() -> BidService:
    """Сервис создаётся один раз на процесс из переменных окружения."""
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = BidService(load_settings())
    return _SERVICE


def _status_for(e: BidPricingError) -> int:
    if isinstance(e, PriceUnavailable):
        return 502
    if isinstance(e, WhitelistError):
        return 403
    return 400


# --- Endpoints ---

@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.post("/bid", response_model=BidResponse)
def bid(order: OrderModel, service: BidService = Depends(get_service)) -> BidResponse:
    try:
        parsed = order_from_data(order.model_dump(exclude_none=True))
        result = service.price(parsed)
    except BidPricingError as e:
        log.error(f"Bid pricing failed: {e}")
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    outcome = result.outcome
    rates = None
    if result.rates is not None:
        rates = BlockRatesModel(
            rate_per_block_uakt=result.rates.rate_per_block_uakt,
            rate_per_block_usd=result.rates.rate_per_block_usd,
            canonical=result.rates.canonical,
        )
    return BidResponse(
        accepted=outcome.accepted,
        denom=outcome.denom,
        price=outcome.price,
        min_expected=outcome.min_expected,
        message=outcome.message,
        monthly_usd=result.monthly_usd,
        gpu_usd=result.gpu_usd,
        special=result.special,
        rates=rates,
    )


@app.get("/price-feed", response_model=PriceFeedResponse)
def price_feed(service: BidService = Depends(get_service)) -> PriceFeedResponse:
    try:
        rate = service.current_rate()
    except PriceUnavailable as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PriceFeedResponse(usd_per_akt=str(rate))
