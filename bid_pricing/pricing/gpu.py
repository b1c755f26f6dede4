# bid_pricing/pricing/gpu.py
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from ..errors import InvalidGpuMapping
from ..model.entities import GpuSpec, ResourceRequest
from ..types import GpuKey

log = logging.getLogger(__name__)

# Цена за GPU в месяц, если таблица цен пустая
DEFAULT_MAX_GPU_PRICE = 100.0


def parse_gpu_price_mappings(mapping_str: str) -> Dict[str, float]:
    """
    Разбор строки вида "a100=200,a100.80Gi=250,rtx4090=120".

    Пустая строка -> пустая таблица. Пустые элементы (",,") пропускаем,
    всё остальное, что не похоже на key=число, считаем ошибкой конфигурации.
    """
    mappings: Dict[str, float] = {}
    if not mapping_str:
        return mappings

    for pair in mapping_str.split(","):
        if pair == "":
            continue
        kv = pair.split("=")
        if len(kv) != 2:
            raise InvalidGpuMapping(f"invalid GPU mapping: {pair}")
        key, raw_price = kv
        try:
            price = float(raw_price)
        except ValueError as e:
            raise InvalidGpuMapping(f"invalid GPU price for {key}: {e}") from e
        mappings[key] = price

    return mappings


def max_gpu_price(mappings: Dict[str, float]) -> float:
    if not mappings:
        return DEFAULT_MAX_GPU_PRICE
    return max(mappings.values())


def gpu_attributes(spec: GpuSpec) -> Tuple[str, str, str]:
    """
    Достаём (model, vram, interface) из ключей атрибутов.

    Ключ режем по "/", значение — следующий токен после "model",
    "ram" или "interface". Последнее найденное значение побеждает.
    """
    model = vram = interface = ""
    for key, _value in spec.attributes:
        parts = key.split("/")
        for i, part in enumerate(parts):
            if i + 1 >= len(parts):
                break
            if part == "model":
                model = parts[i + 1]
            elif part == "ram":
                vram = parts[i + 1]
            elif part == "interface":
                interface = parts[i + 1]
    return model, vram, interface


def gpu_key_candidates(model: str, vram: str, interface: str) -> List[GpuKey]:
    """Ключи от самого точного к самому общему: model.vram.interface, model.vram, model."""
    full_key = model
    if vram:
        full_key += "." + vram
    if interface:
        full_key += "." + interface

    model_vram_key = model
    if vram:
        model_vram_key += "." + vram

    candidates: List[GpuKey] = []
    for key in (full_key, model_vram_key, model):
        if key and key not in candidates:
            candidates.append(GpuKey(key))
    return candidates


def resolve_gpu_price(spec: GpuSpec, mappings: Dict[str, float], default_price: float) -> float:
    """Цена одного GPU в месяц: первое совпадение по ключам, иначе default_price."""
    model, vram, interface = gpu_attributes(spec)
    for key in gpu_key_candidates(model, vram, interface):
        if key in mappings:
            return mappings[key]
    return default_price


def calculate_total_gpu_price(
    request: ResourceRequest,
    mappings: Dict[str, float],
    default_price: float,
) -> float:
    """Сумма по всем юнитам с GPU: count * units * цена."""
    total = 0.0
    for unit in request.units:
        if unit.gpu is None:
            continue
        count = float(unit.count or 0)
        units = float(unit.gpu.units or 0)
        price = resolve_gpu_price(unit.gpu, mappings, default_price)
        total += count * units * price

        model, vram, interface = gpu_attributes(unit.gpu)
        log.debug(
            "GPU pricing: model=%s vram=%s interface=%s units=%s price=%s total=%s",
            model, vram, interface, units, price, count * units * price,
        )
    return total
