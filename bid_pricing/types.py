# bid_pricing/types.py
from __future__ import annotations

from typing import NewType


# Ресурсы
CpuMillis = NewType("CpuMillis", int)  # milliCPU
Bytes = NewType("Bytes", int)          # байты

# Ключ в таблице цен GPU: "model.vram.interface" (или короче)
GpuKey = NewType("GpuKey", str)

# Деньги
Denom = NewType("Denom", str)
UsdPerMonth = NewType("UsdPerMonth", float)

GIB = 1024 * 1024 * 1024
