# run_bid_server.py
import argparse
import logging

import uvicorn

from bid_pricing.config import load_settings

# Настраиваем логирование для лаунчера
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("launcher")


def check_config() -> None:
    """
    Проверяем конфиг до старта сервера: битая PRICE_TARGET_GPU_MAPPINGS
    должна уронить запуск сразу, а не первый запрос.
    """
    settings = load_settings()
    log.info(
        "Price targets: cpu=%s memory=%s, %d GPU mappings, whitelist=%s",
        settings.targets.cpu,
        settings.targets.memory,
        len(settings.targets.gpu_mappings),
        settings.whitelist_url or "off",
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bid pricing server launcher")

    # Стандартные настройки uvicorn
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    check_config()

    uvicorn.run(
        "bid_pricing.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
