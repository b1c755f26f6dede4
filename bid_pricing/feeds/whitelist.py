# bid_pricing/feeds/whitelist.py
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Union

import requests

from ..errors import WhitelistError

log = logging.getLogger(__name__)

DEFAULT_WHITELIST_FILE = "/tmp/price-script.whitelist"
WHITELIST_MAX_AGE_SECONDS = 10 * 60
HTTP_TIMEOUT_SECONDS = 10

# Аккаунты со спец-ценой
SPECIAL_ACCOUNTS = frozenset({
    "akash1fxa9ss3dg6nqyz8aluyaa6svypgprk5tw9fa4q",
    "akash1fhe3uk7d95vvr69pna7cxmwa8777as46uyxcz8",
})
SPECIAL_RATE = "1.00"


def is_special_account(owner: str, accounts: Iterable[str] = SPECIAL_ACCOUNTS) -> bool:
    return bool(owner) and owner in set(accounts)


class WhitelistCache:
    """
    Белый список владельцев: по одному адресу на строку.

    Файл перекачивается, если его нет или он старше max_age.
    """

    def __init__(
        self,
        url: str,
        path: Union[str, Path] = DEFAULT_WHITELIST_FILE,
        max_age: float = WHITELIST_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.url = url.strip('"')
        self.path = Path(path)
        self.max_age = max_age
        self.clock = clock

    def should_fetch(self) -> bool:
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return True
        return self.clock() - mtime > self.max_age

    def refresh(self) -> None:
        try:
            resp = requests.get(self.url, timeout=HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            raise WhitelistError(f"error fetching whitelist: {e}") from e
        if resp.status_code != 200:
            raise WhitelistError(f"error fetching whitelist: HTTP {resp.status_code}")
        self.path.write_bytes(resp.content)
        log.info("Whitelist refreshed from %s", self.url)

    def contains(self, owner: str) -> bool:
        if not owner:
            return False
        with open(self.path, "r", encoding="utf-8") as f:
            return any(line.strip() == owner for line in f)

    def check(self, owner: str) -> None:
        if self.should_fetch():
            self.refresh()
        if not self.contains(owner):
            raise WhitelistError(f"{owner} is not whitelisted")
