"""
Tests: settings from environment variables.

Run with:
    pytest tests/test_config.py -v
"""

import pytest

from bid_pricing.config import load_settings, price_targets_from_env
from bid_pricing.errors import InvalidGpuMapping
from bid_pricing.feeds.whitelist import SPECIAL_ACCOUNTS
from bid_pricing.model.entities import PriceTargets


class TestPriceTargets:
    def test_defaults(self):
        assert price_targets_from_env({}) == PriceTargets()

    def test_overrides(self):
        targets = price_targets_from_env({
            "PRICE_TARGET_CPU": "2.5",
            "PRICE_TARGET_HD_PERS_NVME": "0.07",
            "PRICE_TARGET_GPU_MAPPINGS": "a100=200",
        })
        assert targets.cpu == 2.5
        assert targets.nvme == 0.07
        assert targets.gpu_mappings == {"a100": 200.0}

    def test_invalid_float_falls_back_to_default(self):
        assert price_targets_from_env({"PRICE_TARGET_IP": "five"}).ip == 5.00

    def test_invalid_gpu_mapping_is_fatal(self):
        with pytest.raises(InvalidGpuMapping):
            price_targets_from_env({"PRICE_TARGET_GPU_MAPPINGS": "a100:200"})


class TestSettings:
    def test_from_process_env(self, clean_env):
        clean_env.setenv("WHITELIST_URL", '"https://example.invalid/wl"')
        clean_env.setenv("AKASH_OWNER", "akash1me")
        clean_env.setenv("DEBUG_BID_SCRIPT", "1")
        settings = load_settings()
        assert settings.whitelist_url == "https://example.invalid/wl"
        assert settings.owner == "akash1me"
        assert settings.debug
        assert settings.special_accounts == SPECIAL_ACCOUNTS

    def test_special_accounts_override(self):
        settings = load_settings({"SPECIAL_PRICING_ACCOUNTS": "akash1a, akash1b,"})
        assert settings.special_accounts == frozenset({"akash1a", "akash1b"})

    def test_debug_off_by_default(self):
        assert not load_settings({}).debug
