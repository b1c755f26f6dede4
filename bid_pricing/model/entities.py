# bid_pricing/model/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from ..types import CpuMillis, Bytes, Denom


@dataclass
class StorageEntry:
    name: str
    size_b: Bytes
    # атрибут "class", если он был в заявке; иначе класс берём из name
    storage_class: Optional[str] = None


@dataclass
class GpuSpec:
    """
    GPU в юните заявки.

    attributes — плоский список пар (ключ, значение) в исходном порядке,
    ключи вида "vendor/nvidia/model/a100/ram/80Gi".
    """
    units: int
    attributes: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class ResourceUnit:
    count: int = 1
    cpu_m: CpuMillis = CpuMillis(0)
    memory_b: Bytes = Bytes(0)
    storage: List[StorageEntry] = field(default_factory=list)
    gpu: Optional[GpuSpec] = None
    endpoint_quantity: int = 0
    ip_lease_quantity: int = 0


@dataclass
class ResourceRequest:
    units: List[ResourceUnit] = field(default_factory=list)


@dataclass(frozen=True)
class PriceQuote:
    """Потолок цены от заказчика: сколько он готов платить за блок."""
    denom: Denom
    amount: Decimal
    precision: int = 6


@dataclass
class BidOrder:
    """Заявка целиком, как её прислал провайдер."""
    request: ResourceRequest
    quote: Optional[PriceQuote]
    owner: str = ""


@dataclass(frozen=True)
class PriceTargets:
    """Целевые цены в USD за месяц на единицу ресурса."""
    cpu: float = 1.60        # USD/core-month
    memory: float = 0.80     # USD/GB-month
    ephemeral: float = 0.02  # USD/GB-month
    hdd: float = 0.01        # USD/GB-month (beta1)
    ssd: float = 0.03        # USD/GB-month (beta2)
    nvme: float = 0.04       # USD/GB-month (beta3)
    endpoint: float = 0.05   # USD/endpoint-month
    ip: float = 5.00         # USD/IP-month
    gpu_mappings: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class CachedRate:
    value: Decimal      # USD за 1 AKT
    fetched_at: float   # unix time

    def age_seconds(self, now: float) -> float:
        return now - self.fetched_at
