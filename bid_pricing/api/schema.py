# bid_pricing/api/schema.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class PriceModel(BaseModel):
    denom: str
    amount: str


class OrderModel(BaseModel):
    """Заявка в формате bid-script провайдера (юниты — сырые dict'ы)."""
    resources: List[Dict[str, Any]]
    price: Optional[PriceModel] = None
    price_precision: int = 0
    owner: Optional[str] = None


class BlockRatesModel(BaseModel):
    rate_per_block_uakt: float
    rate_per_block_usd: float
    canonical: str


class BidResponse(BaseModel):
    accepted: bool
    denom: str
    price: Optional[str] = None
    min_expected: Optional[str] = None
    message: str
    monthly_usd: float
    gpu_usd: float
    special: bool = False
    rates: Optional[BlockRatesModel] = None


class PriceFeedResponse(BaseModel):
    usd_per_akt: str
