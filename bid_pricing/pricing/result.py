# bid_pricing/pricing/result.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NormalizedResources:
    """
    Суммарные ресурсы заявки, уже умноженные на count каждого юнита.

      - CPU: ядра (float)
      - RAM: гигабайты (float, 2^30)
      - storage: целые гигабайты по четырём классам
    """
    cpu_cores: float = 0.0
    memory_gb: float = 0.0
    ephemeral_gb: int = 0
    hdd_gb: int = 0
    ssd_gb: int = 0
    nvme_gb: int = 0
    endpoints: int = 0
    ips: int = 0


@dataclass(frozen=True)
class BlockRates:
    rate_per_block_uakt: float
    rate_per_block_usd: float
    # 16 знаков после запятой + "uakt", для логов
    canonical: str


@dataclass(frozen=True)
class BidOutcome:
    """
    Итог решения по биду.

    accepted=False — не ошибка: потолок заказчика ниже нашей цены,
    бид просто не делаем. min_expected — наша цена в том же формате.
    """
    accepted: bool
    denom: str
    price: Optional[str] = None
    min_expected: Optional[str] = None

    @property
    def message(self) -> str:
        if self.accepted:
            return self.price or ""
        return f"requested rate is too low. min expected {self.min_expected}{self.denom}"


@dataclass(frozen=True)
class BidResult:
    """То, что уходит в CLI / API."""
    outcome: BidOutcome
    monthly_usd: float
    gpu_usd: float
    rates: Optional[BlockRates] = None
    special: bool = False
