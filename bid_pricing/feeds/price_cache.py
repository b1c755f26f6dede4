# bid_pricing/feeds/price_cache.py
from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Sequence, Union

import requests

from ..errors import PriceUnavailable
from ..model.entities import CachedRate

log = logging.getLogger(__name__)

PRIMARY_PRICE_URL = "https://api-osmosis.imperator.co/tokens/v2/price/AKT"
FALLBACK_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price?ids=akash-network&vs_currencies=usd"

DEFAULT_CACHE_FILE = "/tmp/aktprice.cache"
PRICE_MAX_AGE_SECONDS = 60 * 60
HTTP_TIMEOUT_SECONDS = 10


# ---------------------------
# Разбор ответов
# ---------------------------


def _to_rate(raw: Any) -> Decimal:
    # bool — подкласс int, но курсом не является
    if raw is None or isinstance(raw, bool):
        raise ValueError(f"no numeric price in response: {raw!r}")
    try:
        value = Decimal(str(raw))
    except InvalidOperation as e:
        raise ValueError(f"price is not a number: {raw!r}") from e
    if not value.is_finite() or value <= 0:
        raise ValueError(f"price must be positive: {raw!r}")
    return value


def extract_price(data: Any) -> Decimal:
    """
    Курс из ответа любого из двух API:
      - {"price": 2.5}                         (osmosis)
      - {"akash-network": {"usd": 2.5}}        (coingecko)
    Osmosis иногда отдаёт список из одного объекта.
    """
    if isinstance(data, list) and data:
        data = data[0]
    if not isinstance(data, dict):
        raise ValueError(f"unexpected response shape: {type(data).__name__}")

    if "price" in data:
        return _to_rate(data["price"])

    nested = data.get("akash-network")
    if isinstance(nested, dict) and "usd" in nested:
        return _to_rate(nested["usd"])

    raise ValueError("price field missing in response")


@dataclass
class PriceSource:
    name: str
    url: str
    timeout: float = HTTP_TIMEOUT_SECONDS

    def fetch(self) -> Decimal:
        resp = requests.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        return extract_price(resp.json())


def default_sources() -> List[PriceSource]:
    return [
        PriceSource(name="osmosis", url=PRIMARY_PRICE_URL),
        PriceSource(name="coingecko", url=FALLBACK_PRICE_URL),
    ]


# ---------------------------
# Хранилища кэша
# ---------------------------


class MemoryRateStore:
    """Кэш в памяти, для тестов и встраивания."""

    def __init__(self, rate: Optional[CachedRate] = None):
        self.rate = rate
        self.writes = 0

    def get(self) -> Optional[CachedRate]:
        return self.rate

    def put(self, rate: CachedRate) -> None:
        self.rate = rate
        self.writes += 1


class FileRateStore:
    """
    Один файл с курсом в виде десятичной строки.
    Время получения курса — mtime файла.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_CACHE_FILE):
        self.path = Path(path)

    def get(self) -> Optional[CachedRate]:
        try:
            text = self.path.read_text("utf-8").strip()
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return None
        except OSError as e:
            log.warning("Cannot read price cache %s: %s", self.path, e)
            return None

        try:
            value = _to_rate(text)
        except ValueError as e:
            log.warning("Ignoring unreadable price cache %s: %s", self.path, e)
            return None
        return CachedRate(value=value, fetched_at=mtime)

    def put(self, rate: CachedRate) -> None:
        self.path.write_text(str(rate.value), encoding="utf-8")
        os.utime(self.path, (rate.fetched_at, rate.fetched_at))


# ---------------------------
# Кэш курса
# ---------------------------


class RateProvider(Protocol):
    def get_rate(self) -> Decimal: ...


class PriceFeedCache:
    """
    Курс USD/AKT с окном свежести.

    Свежий кэш отдаём как есть. Иначе идём в источники по порядку
    (основной, затем запасной) и записываем первый успешный курс.
    Если не ответил ни один — PriceUnavailable: без курса цену не считаем.
    Блокировок нет: параллельные процессы максимум перезапишут одно и то же.
    """

    def __init__(
        self,
        store=None,
        sources: Optional[Sequence[PriceSource]] = None,
        max_age: float = PRICE_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store if store is not None else FileRateStore()
        self.sources = list(sources) if sources is not None else default_sources()
        self.max_age = max_age
        self.clock = clock

    def cached(self) -> Optional[CachedRate]:
        rate = self.store.get()
        if rate is None:
            return None
        if rate.age_seconds(self.clock()) >= self.max_age:
            log.debug("Cached price %s is expired", rate.value)
            return None
        return rate

    def get_rate(self) -> Decimal:
        rate = self.cached()
        if rate is not None:
            log.debug("Using cached price %s", rate.value)
            return rate.value
        return self.refresh()

    def refresh(self) -> Decimal:
        errors: List[str] = []
        for source in self.sources:
            try:
                value = source.fetch()
            except (requests.RequestException, ValueError) as e:
                log.warning("Price source %s failed: %s", source.name, e)
                errors.append(f"{source.name}: {e}")
                continue

            self.store.put(CachedRate(value=value, fetched_at=self.clock()))
            log.info("Fetched AKT price %s from %s", value, source.name)
            return value

        raise PriceUnavailable("; ".join(errors) or "no price sources configured")
