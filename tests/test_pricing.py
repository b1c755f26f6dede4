"""
Tests: monthly cost, block rates and the bid decision.

Run with:
    pytest tests/test_pricing.py -v
"""

import json
from decimal import Decimal

import pytest

from bid_pricing.errors import DenomNotSupported, InvalidGpuMapping
from bid_pricing.model.entities import PriceQuote, PriceTargets
from bid_pricing.pricing.costs import (
    calculate_total_cost_usd,
    load_price_targets_from_file,
    price_targets_from_dict,
)
from bid_pricing.pricing.decision import SettlementKind, classify_denom, decide_bid
from bid_pricing.pricing.rates import BLOCKS_PER_MONTH, calculate_block_rates
from bid_pricing.pricing.result import NormalizedResources

USDC = "ibc/170C677610AC31DF0904FFE09CD3B5C657492170E7E52372E48756B71E56F2F1"


class TestCosts:
    def test_weighted_sum(self):
        res = NormalizedResources(
            cpu_cores=2.0, memory_gb=4.0, ephemeral_gb=10, hdd_gb=100,
            ssd_gb=50, nvme_gb=20, endpoints=2, ips=1,
        )
        expected = (
            2.0 * 1.60 + 4.0 * 0.80 + 10 * 0.02 + 100 * 0.01
            + 50 * 0.03 + 20 * 0.04 + 2 * 0.05 + 1 * 5.00 + 300.0
        )
        assert calculate_total_cost_usd(res, PriceTargets(), gpu_cost=300.0) == pytest.approx(expected)

    def test_no_rounding(self):
        res = NormalizedResources(cpu_cores=0.001)
        assert calculate_total_cost_usd(res, PriceTargets()) == pytest.approx(0.0016, abs=1e-12)

    def test_targets_from_dict_defaults(self):
        targets = price_targets_from_dict({"targets": {"cpu": 2}, "gpu_mappings": {"a100": "150"}})
        assert targets.cpu == 2.0
        assert targets.memory == PriceTargets().memory
        assert targets.gpu_mappings == {"a100": 150.0}

    def test_bad_gpu_price_in_file(self):
        with pytest.raises(InvalidGpuMapping):
            price_targets_from_dict({"gpu_mappings": {"a100": "n/a"}})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "targets.json"
        path.write_text(json.dumps({"targets": {"ip": 3.5}}), encoding="utf-8")
        assert load_price_targets_from_file(path).ip == 3.5


class TestBlockRates:
    def test_blocks_per_month_constant(self):
        assert BLOCKS_PER_MONTH == pytest.approx((60 / 6.117) * 24 * 60 * 30.437)

    def test_conversion(self):
        rates = calculate_block_rates(0.41, Decimal("2.50"))
        assert rates.rate_per_block_uakt == pytest.approx(0.41 / 2.5 * 1_000_000 / BLOCKS_PER_MONTH)
        assert rates.rate_per_block_usd == pytest.approx(0.41 / BLOCKS_PER_MONTH)

    def test_canonical_has_sixteen_digits(self):
        rates = calculate_block_rates(0.41, Decimal("2.50"))
        number = rates.canonical[:-len("uakt")]
        assert rates.canonical.endswith("uakt")
        assert len(number.split(".")[1]) == 16


class TestDenoms:
    def test_classify(self):
        assert classify_denom("uakt") is SettlementKind.NATIVE
        assert classify_denom(USDC) is SettlementKind.USD_STABLE
        assert classify_denom("uatom") is SettlementKind.UNSUPPORTED


class TestDecision:
    rates = calculate_block_rates(0.41, Decimal("2.50"))

    def test_accepted_below_ceiling(self):
        outcome = decide_bid(self.rates, PriceQuote(denom="uakt", amount=Decimal("100000"), precision=6))
        assert outcome.accepted
        assert outcome.price == f"{self.rates.rate_per_block_uakt:.6f}"

    def test_equal_to_ceiling_is_accepted(self):
        ceiling = Decimal(repr(self.rates.rate_per_block_uakt))
        outcome = decide_bid(self.rates, PriceQuote(denom="uakt", amount=ceiling, precision=6))
        assert outcome.accepted

    def test_one_micro_unit_above_ceiling_is_rejected(self):
        ceiling = Decimal(repr(self.rates.rate_per_block_uakt)) - 1
        outcome = decide_bid(self.rates, PriceQuote(denom="uakt", amount=ceiling, precision=6))
        assert not outcome.accepted
        assert outcome.min_expected == f"{self.rates.rate_per_block_uakt:.6f}"
        assert "requested rate is too low" in outcome.message

    def test_usd_stable_uses_usd_rate(self):
        outcome = decide_bid(self.rates, PriceQuote(denom=USDC, amount=Decimal("100"), precision=4))
        assert outcome.accepted
        assert outcome.price == f"{self.rates.rate_per_block_usd * 1_000_000:.4f}"

    def test_usd_stable_too_low(self):
        outcome = decide_bid(self.rates, PriceQuote(denom=USDC, amount=Decimal("0.0001"), precision=4))
        assert not outcome.accepted

    @pytest.mark.parametrize("amount", ["0.000001", "1", "999999999"])
    def test_unsupported_denom_always_rejected(self, amount):
        with pytest.raises(DenomNotSupported, match="denom is not supported"):
            decide_bid(self.rates, PriceQuote(denom="uatom", amount=Decimal(amount)))
