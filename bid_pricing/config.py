# bid_pricing/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from .feeds.price_cache import DEFAULT_CACHE_FILE
from .feeds.whitelist import DEFAULT_WHITELIST_FILE, SPECIAL_ACCOUNTS
from .model.entities import PriceTargets
from .pricing.gpu import parse_gpu_price_mappings

log = logging.getLogger(__name__)

# переменная окружения -> поле PriceTargets
TARGET_ENV_VARS = {
    "PRICE_TARGET_CPU": "cpu",
    "PRICE_TARGET_MEMORY": "memory",
    "PRICE_TARGET_HD_EPHEMERAL": "ephemeral",
    "PRICE_TARGET_HD_PERS_HDD": "hdd",
    "PRICE_TARGET_HD_PERS_SSD": "ssd",
    "PRICE_TARGET_HD_PERS_NVME": "nvme",
    "PRICE_TARGET_ENDPOINT": "endpoint",
    "PRICE_TARGET_IP": "ip",
}


@dataclass
class Settings:
    targets: PriceTargets = field(default_factory=PriceTargets)
    whitelist_url: str = ""
    owner: str = ""
    debug: bool = False
    price_cache_file: str = DEFAULT_CACHE_FILE
    whitelist_cache_file: str = DEFAULT_WHITELIST_FILE
    special_accounts: FrozenSet[str] = SPECIAL_ACCOUNTS


def _truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() not in ("", "0", "false", "no")


def env_float(env: Mapping[str, str], name: str, default: float) -> float:
    """Невалидное значение молча заменяется дефолтом."""
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def price_targets_from_env(env: Optional[Mapping[str, str]] = None) -> PriceTargets:
    """Целевые цены из PRICE_TARGET_*; битая таблица GPU — InvalidGpuMapping."""
    env = os.environ if env is None else env
    defaults = PriceTargets()
    values = {
        attr: env_float(env, var, getattr(defaults, attr))
        for var, attr in TARGET_ENV_VARS.items()
    }
    gpu = parse_gpu_price_mappings(env.get("PRICE_TARGET_GPU_MAPPINGS", ""))
    return PriceTargets(gpu_mappings=gpu, **values)


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    special = env.get("SPECIAL_PRICING_ACCOUNTS")
    special_accounts = SPECIAL_ACCOUNTS
    if special is not None:
        special_accounts = frozenset(a.strip() for a in special.split(",") if a.strip())

    return Settings(
        targets=price_targets_from_env(env),
        whitelist_url=env.get("WHITELIST_URL", "").strip('"'),
        owner=env.get("AKASH_OWNER", ""),
        debug=_truthy(env.get("DEBUG_BID_SCRIPT")),
        price_cache_file=env.get("AKT_PRICE_CACHE_FILE") or DEFAULT_CACHE_FILE,
        whitelist_cache_file=env.get("WHITELIST_CACHE_FILE") or DEFAULT_WHITELIST_FILE,
        special_accounts=special_accounts,
    )
