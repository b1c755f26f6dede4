"""
Tests: bid-price command line.

Run with:
    pytest tests/test_cli.py -v
"""

import io
import json
import time

import pytest

from bid_pricing.cli import EXIT_ERROR, EXIT_OK, EXIT_RATE_TOO_LOW, main_cli
from bid_pricing.model.entities import PriceTargets
from bid_pricing.order.from_order import order_from_data
from bid_pricing.pricing.engine import price_order
from tests.helpers import FixedRate, make_order


@pytest.fixture
def cli_env(clean_env, tmp_path):
    cache = tmp_path / "aktprice.cache"
    cache.write_text("2.50")
    clean_env.setenv("AKT_PRICE_CACHE_FILE", str(cache))
    return clean_env


def _expected(rate: str) -> str:
    order = order_from_data(make_order(precision=6))
    return price_order(order, PriceTargets(), FixedRate(rate)).outcome.price


def _run(monkeypatch, data, *argv):
    stdin = data if isinstance(data, str) else json.dumps(data)
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return main_cli(list(argv))


class TestCli:
    def test_prints_price(self, cli_env, capsys):
        code = _run(cli_env, make_order(precision=6))
        out = capsys.readouterr().out.strip()
        assert code == EXIT_OK
        assert out == _expected("2.50")

    def test_order_file(self, cli_env, tmp_path, capsys):
        path = tmp_path / "order.json"
        path.write_text(json.dumps(make_order()))
        assert _run(cli_env, "", "--order", str(path)) == EXIT_OK

    def test_too_low(self, cli_env, capsys):
        code = _run(cli_env, make_order(amount="0.000001"))
        captured = capsys.readouterr()
        assert code == EXIT_RATE_TOO_LOW
        assert captured.out == ""
        assert "requested rate is too low" in captured.err

    def test_unsupported_denom(self, cli_env, capsys):
        assert _run(cli_env, make_order(denom="uatom")) == EXIT_ERROR
        assert "denom is not supported" in capsys.readouterr().err

    def test_missing_price(self, cli_env, capsys):
        data = make_order()
        del data["price"]
        assert _run(cli_env, data) == EXIT_ERROR
        assert "price information is missing" in capsys.readouterr().err

    def test_bad_gpu_mapping(self, cli_env, capsys):
        cli_env.setenv("PRICE_TARGET_GPU_MAPPINGS", "a100")
        assert _run(cli_env, make_order()) == EXIT_ERROR
        assert "invalid GPU mapping" in capsys.readouterr().err

    def test_special_owner_flag(self, cli_env, capsys):
        code = _run(cli_env, make_order(precision=2), "--owner", "akash1fhe3uk7d95vvr69pna7cxmwa8777as46uyxcz8")
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "1.00"

    def test_targets_file(self, cli_env, tmp_path, capsys):
        path = tmp_path / "targets.json"
        path.write_text(json.dumps({"targets": {"cpu": 0, "memory": 0, "endpoint": 0}}))
        code = _run(cli_env, make_order(precision=4), "--targets", str(path))
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == "0.0000"

    def test_fresh_cache_file_is_used(self, cli_env, tmp_path, capsys):
        cache = tmp_path / "aktprice.cache"
        cache.write_text("5.00")
        assert time.time() - cache.stat().st_mtime < 3600
        _run(cli_env, make_order(precision=6))
        assert capsys.readouterr().out.strip() == _expected("5.00")
