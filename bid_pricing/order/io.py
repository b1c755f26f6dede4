# bid_pricing/order/io.py
from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from ..errors import InvalidOrder
from ..model.entities import BidOrder
from .from_order import order_from_data


def load_order_from_stream(stream: TextIO, owner: str = "") -> BidOrder:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise InvalidOrder(f"order is not valid JSON: {e}") from e
    return order_from_data(data, owner=owner)


def load_order_from_file(path: Path, owner: str = "") -> BidOrder:
    with open(path, "r", encoding="utf-8") as f:
        return load_order_from_stream(f, owner=owner)
