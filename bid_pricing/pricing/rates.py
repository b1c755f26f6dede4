# bid_pricing/pricing/rates.py
from __future__ import annotations

from decimal import Decimal
from typing import Union

from .result import BlockRates

# Фиксированные константы сети, динамически не пересчитываются
AVERAGE_BLOCK_TIME_SECONDS = 6.117
DAYS_PER_MONTH = 30.437
BLOCKS_PER_MONTH = (60 / AVERAGE_BLOCK_TIME_SECONDS) * 24 * 60 * DAYS_PER_MONTH

UAKT_PER_AKT = 1_000_000
CANONICAL_DIGITS = 16


def calculate_block_rates(
    monthly_usd: float,
    usd_per_akt: Union[Decimal, float],
) -> BlockRates:
    """
    Месячная стоимость в USD -> цена за блок.

    usd_per_akt — курс AKT в долларах; ноль сюда не доходит, его
    отбрасывает кэш курса.
    """
    total_akt = monthly_usd / float(usd_per_akt)
    total_uakt = total_akt * UAKT_PER_AKT

    rate_per_block_uakt = total_uakt / BLOCKS_PER_MONTH
    rate_per_block_usd = monthly_usd / BLOCKS_PER_MONTH

    return BlockRates(
        rate_per_block_uakt=rate_per_block_uakt,
        rate_per_block_usd=rate_per_block_usd,
        canonical=f"{rate_per_block_uakt:.{CANONICAL_DIGITS}f}uakt",
    )
