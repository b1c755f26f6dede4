# bid_pricing/order/from_order.py
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from ..errors import InvalidOrder
from ..model.entities import (
    BidOrder, GpuSpec, PriceQuote, ResourceRequest, ResourceUnit, StorageEntry,
)
from ..types import Bytes, CpuMillis, Denom

log = logging.getLogger(__name__)

DEFAULT_PRICE_PRECISION = 6

# Endpoint.Kind в GroupSpec: SHARED_HTTP=0, RANDOM_PORT=1, LEASED_IP=2
LEASED_IP_KINDS = {"LEASED_IP", "leased_ip", 2, "2"}


def _quantity(v: Any) -> int:
    """
    Число из заявки: 100, "100", "1.5" или {"val": "100"}.
    Всё непонятное считаем нулём.
    """
    if isinstance(v, dict):
        return _quantity(v.get("val"))
    if v is None or isinstance(v, bool):
        return 0
    try:
        d = Decimal(str(v))
    except (InvalidOperation, ValueError):
        return 0
    if not d.is_finite():
        return 0
    return int(d)


def flatten_gpu_attributes(raw: Any) -> List[Tuple[str, str]]:
    """
    Атрибуты GPU -> плоский список (ключ, значение).

    Вложенный вид {"vendor": {"nvidia": {"model": "a100"}}} превращается
    в ("vendor/nvidia/model/a100", "true"); список {"key","value"}
    из GroupSpec берётся как есть.
    """
    result: List[Tuple[str, str]] = []
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, dict) and item.get("key"):
                result.append((str(item["key"]), str(item.get("value", ""))))
        return result

    def walk(prefix: str, node: Any) -> None:
        if isinstance(node, dict):
            for k, v in node.items():
                walk(f"{prefix}/{k}" if prefix else str(k), v)
        elif isinstance(node, list):
            for item in node:
                walk(prefix, item)
        elif node is True or str(node).lower() == "true":
            result.append((prefix, "true"))
        elif node not in (None, False, ""):
            result.append((f"{prefix}/{node}", "true"))

    if isinstance(raw, dict):
        walk("", raw)
    return result


def _storage_class_attr(attrs: Any) -> Optional[str]:
    if isinstance(attrs, list):
        for a in attrs:
            if isinstance(a, dict) and a.get("key") == "class":
                return str(a.get("value", ""))
    elif isinstance(attrs, dict) and "class" in attrs:
        return str(attrs["class"])
    return None


def _storage_from_data(raw: Any) -> List[StorageEntry]:
    if isinstance(raw, dict):
        raw = [raw]
    entries: List[StorageEntry] = []
    for s in raw or []:
        if not isinstance(s, dict):
            continue
        size = s.get("size", s.get("quantity"))
        storage_class = s.get("class") or _storage_class_attr(s.get("attributes"))
        entries.append(StorageEntry(
            name=str(s.get("name") or ""),
            size_b=Bytes(_quantity(size)),
            storage_class=str(storage_class) if storage_class else None,
        ))
    return entries


def _gpu_from_data(raw: Any) -> Optional[GpuSpec]:
    if not isinstance(raw, dict):
        return None
    units = _quantity(raw.get("units"))
    if units <= 0:
        return None
    return GpuSpec(units=units, attributes=flatten_gpu_attributes(raw.get("attributes")))


def _unit_from_data(raw: Dict[str, Any]) -> ResourceUnit:
    count = _quantity(raw.get("count", 1)) or 1

    # GroupSpec: ресурсы лежат под "resource" (или "resources")
    res = raw.get("resource") or raw.get("resources")
    if isinstance(res, dict):
        cpu = res.get("cpu") or {}
        memory = res.get("memory") or {}
        endpoints = [e for e in res.get("endpoints") or [] if isinstance(e, dict)]
        return ResourceUnit(
            count=count,
            cpu_m=CpuMillis(_quantity(cpu.get("units") if isinstance(cpu, dict) else cpu)),
            memory_b=Bytes(_quantity(memory.get("quantity") if isinstance(memory, dict) else memory)),
            storage=_storage_from_data(res.get("storage")),
            gpu=_gpu_from_data(res.get("gpu")),
            endpoint_quantity=len(endpoints),
            ip_lease_quantity=sum(1 for e in endpoints if e.get("kind") in LEASED_IP_KINDS),
        )

    # плоский вид из bid-script провайдера
    return ResourceUnit(
        count=count,
        cpu_m=CpuMillis(_quantity(raw.get("cpu"))),
        memory_b=Bytes(_quantity(raw.get("memory"))),
        storage=_storage_from_data(raw.get("storage")),
        gpu=_gpu_from_data(raw.get("gpu")),
        endpoint_quantity=_quantity(raw.get("endpoint_quantity")),
        ip_lease_quantity=_quantity(raw.get("ip_lease_quantity")),
    )


def quote_from_data(price: Any, precision: Any) -> Optional[PriceQuote]:
    """None, если denom/amount нет, amount не число или ноль."""
    if not isinstance(price, dict):
        return None
    denom = str(price.get("denom") or "")
    try:
        amount = Decimal(str(price.get("amount")))
    except (InvalidOperation, ValueError):
        return None
    if not denom or not amount.is_finite() or amount.is_zero():
        return None

    p = _quantity(precision)
    if p <= 0:
        p = DEFAULT_PRICE_PRECISION
    return PriceQuote(denom=Denom(denom), amount=amount, precision=p)


def order_from_data(data: Dict[str, Any], owner: str = "") -> BidOrder:
    if not isinstance(data, dict):
        raise InvalidOrder("order document must be a JSON object")

    raw_units = data.get("resources")
    if raw_units is None and isinstance(data.get("group_spec"), dict):
        raw_units = data["group_spec"].get("resources")
    if not isinstance(raw_units, list):
        raise InvalidOrder("order has no resources list")

    units = [_unit_from_data(u) for u in raw_units if isinstance(u, dict)]

    price = data.get("price")
    if price is None and raw_units and isinstance(raw_units[0], dict):
        # старый формат: цена у первого юнита
        price = raw_units[0].get("price")

    quote = quote_from_data(price, data.get("price_precision"))
    log.debug("Parsed order: %d units, quote=%s", len(units), quote)

    return BidOrder(
        request=ResourceRequest(units=units),
        quote=quote,
        owner=str(data.get("owner") or owner or ""),
    )
