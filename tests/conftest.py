# tests/conftest.py
import pytest

from bid_pricing.config import TARGET_ENV_VARS


@pytest.fixture
def clean_env(monkeypatch):
    for var in list(TARGET_ENV_VARS) + [
        "PRICE_TARGET_GPU_MAPPINGS", "WHITELIST_URL", "AKASH_OWNER", "DEBUG_BID_SCRIPT",
        "AKT_PRICE_CACHE_FILE", "WHITELIST_CACHE_FILE", "SPECIAL_PRICING_ACCOUNTS",
    ]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
