# bid_pricing/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_settings
from .errors import BidPricingError
from .order.io import load_order_from_file, load_order_from_stream
from .pricing.costs import load_price_targets_from_file
from .pricing.engine import BidService

log = logging.getLogger("bid_pricing")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_RATE_TOO_LOW = 3


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute an Akash bid price (uakt or USDC per block) for a deployment order.",
    )
    parser.add_argument(
        "--order",
        help="Путь к JSON заявки. Если не указан, читаем stdin.",
    )
    parser.add_argument(
        "--owner",
        help="Адрес владельца заявки (по умолчанию AKASH_OWNER).",
    )
    parser.add_argument(
        "--targets",
        help="JSON с целевыми ценами вместо переменных PRICE_TARGET_*.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Отладочный вывод в stderr (то же, что DEBUG_BID_SCRIPT=1).",
    )
    return parser.parse_args(argv)


def main_cli(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        settings = load_settings()
    except BidPricingError as e:
        print(str(e), file=sys.stderr)
        return EXIT_ERROR

    level = logging.DEBUG if (args.verbose or settings.debug) else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    if args.owner:
        settings.owner = args.owner

    try:
        if args.targets:
            settings.targets = load_price_targets_from_file(Path(args.targets))
        if args.order:
            order = load_order_from_file(Path(args.order), owner=settings.owner)
        else:
            order = load_order_from_stream(sys.stdin, owner=settings.owner)

        result = BidService(settings).price(order)
    except BidPricingError as e:
        print(str(e), file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as e:
        print(f"cannot read input: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not result.outcome.accepted:
        print(result.outcome.message, file=sys.stderr)
        return EXIT_RATE_TOO_LOW

    print(result.outcome.price)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main_cli())
