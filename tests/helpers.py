# tests/helpers.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import requests


GIB = 1024 ** 3


class FixedRate:
    """Курс без сети и диска; считает вызовы."""

    def __init__(self, value: str = "2.50"):
        self.value = Decimal(value)
        self.calls = 0

    def get_rate(self) -> Decimal:
        self.calls += 1
        return self.value


class FakeSource:
    def __init__(self, name: str, value: Optional[str] = None, error: Optional[Exception] = None):
        self.name = name
        self.value = value
        self.error = error
        self.calls = 0

    def fetch(self) -> Decimal:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return Decimal(self.value)


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, content: bytes = b""):
        self.payload = payload
        self.status_code = status_code
        self.content = content

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


def make_unit(
    cpu: int = 100,
    memory: int = 268435456,
    storage: Optional[List[Dict[str, Any]]] = None,
    gpu: Optional[Dict[str, Any]] = None,
    count: int = 1,
    endpoints: int = 1,
    ips: int = 0,
) -> Dict[str, Any]:
    unit: Dict[str, Any] = {
        "cpu": cpu,
        "memory": memory,
        "storage": storage if storage is not None else [{"class": "ephemeral", "size": 268435456}],
        "count": count,
        "endpoint_quantity": endpoints,
        "ip_lease_quantity": ips,
    }
    if gpu is not None:
        unit["gpu"] = gpu
    return unit


def make_order(units=None, denom: str = "uakt", amount: str = "100000", precision: int = 18) -> Dict[str, Any]:
    return {
        "resources": units if units is not None else [make_unit()],
        "price": {"denom": denom, "amount": amount},
        "price_precision": precision,
    }


