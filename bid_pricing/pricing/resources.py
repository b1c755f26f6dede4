# bid_pricing/pricing/resources.py
from __future__ import annotations

from typing import Dict, Optional

from ..model.entities import ResourceRequest, StorageEntry
from ..types import GIB
from .result import NormalizedResources


# класс хранилища -> поле NormalizedResources
STORAGE_CLASSES: Dict[str, str] = {
    "ephemeral": "ephemeral_gb",
    "default": "ephemeral_gb",
    "beta1": "hdd_gb",
    "beta2": "ssd_gb",
    "beta3": "nvme_gb",
}


def storage_class_of(entry: StorageEntry) -> str:
    """Явный атрибут class, если есть; иначе имя тома."""
    if entry.storage_class:
        return entry.storage_class
    return entry.name or ""


def storage_bucket(entry: StorageEntry) -> Optional[str]:
    return STORAGE_CLASSES.get(storage_class_of(entry))


def aggregate_resources(request: ResourceRequest) -> NormalizedResources:
    """
    Сводит юниты заявки к суммарным ресурсам.

    Неизвестные классы хранилища молча пропускаются. Гигабайты хранилища
    считаются целочисленным делением по каждому тому отдельно.
    """
    cpu_m_total = 0
    memory_b_total = 0
    storage_gb = {name: 0 for name in set(STORAGE_CLASSES.values())}
    endpoints = 0
    ips = 0

    for unit in request.units:
        count = int(unit.count or 0)

        cpu_m_total += int(unit.cpu_m or 0) * count
        memory_b_total += int(unit.memory_b or 0) * count

        for entry in unit.storage:
            bucket = storage_bucket(entry)
            if bucket is None:
                continue
            storage_gb[bucket] += (int(entry.size_b or 0) // GIB) * count

        endpoints += int(unit.endpoint_quantity or 0) * count
        ips += int(unit.ip_lease_quantity or 0) * count

    return NormalizedResources(
        cpu_cores=cpu_m_total / 1000.0,
        memory_gb=memory_b_total / float(GIB),
        ephemeral_gb=storage_gb["ephemeral_gb"],
        hdd_gb=storage_gb["hdd_gb"],
        ssd_gb=storage_gb["ssd_gb"],
        nvme_gb=storage_gb["nvme_gb"],
        endpoints=endpoints,
        ips=ips,
    )
