# bid_pricing/pricing/costs.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import InvalidGpuMapping
from ..model.entities import PriceTargets
from ..types import UsdPerMonth
from .result import NormalizedResources

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Загрузка прайсов из файла
# ---------------------------------------------------------------------

# имя в JSON -> поле PriceTargets
_TARGET_FIELDS = ("cpu", "memory", "ephemeral", "hdd", "ssd", "nvme", "endpoint", "ip")


def price_targets_from_dict(data: Dict[str, Any]) -> PriceTargets:
    """
    Ожидаемый формат:
    {
      "targets": {"cpu": 1.6, "memory": 0.8, ...},
      "gpu_mappings": {"a100": 200, "a100.80Gi": 250}
    }
    Отсутствующие поля берутся по умолчанию.
    """
    defaults = PriceTargets()
    raw_targets = data.get("targets") or {}
    values = {}
    for name in _TARGET_FIELDS:
        raw = raw_targets.get(name)
        values[name] = float(raw) if raw is not None else getattr(defaults, name)

    gpu: Dict[str, float] = {}
    for k, v in (data.get("gpu_mappings") or {}).items():
        try:
            gpu[str(k)] = float(v)
        except (TypeError, ValueError) as e:
            raise InvalidGpuMapping(f"invalid GPU price for {k}: {e}") from e

    return PriceTargets(gpu_mappings=gpu, **values)


def load_price_targets_from_file(path: Union[str, Path]) -> PriceTargets:
    p = Path(path)
    data = json.loads(p.read_text("utf-8"))
    targets = price_targets_from_dict(data)
    log.info("Loaded price targets from %s (%d GPU mappings)", p, len(targets.gpu_mappings))
    return targets


# ---------------------------------------------------------------------
# Стоимость заявки в месяц
# ---------------------------------------------------------------------


def calculate_total_cost_usd(
    resources: NormalizedResources,
    targets: PriceTargets,
    gpu_cost: float = 0.0,
) -> UsdPerMonth:
    """Взвешенная сумма ресурсов по целевым ценам, USD/месяц. Без округления."""
    total = 0.0
    total += resources.cpu_cores * targets.cpu
    total += resources.memory_gb * targets.memory
    total += resources.ephemeral_gb * targets.ephemeral
    total += resources.hdd_gb * targets.hdd
    total += resources.ssd_gb * targets.ssd
    total += resources.nvme_gb * targets.nvme
    total += resources.endpoints * targets.endpoint
    total += resources.ips * targets.ip
    total += gpu_cost
    return UsdPerMonth(total)
