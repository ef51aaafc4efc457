"""Application entrypoint."""

from __future__ import annotations

from pathlib import Path

import uvicorn

from app.config import AppConfig, load_config
from app.health import utc_timestamp
from app.logger import setup_logger
from web.server import create_app


def _log_startup(config: AppConfig, logger) -> None:
    logger.info("=" * 40)
    logger.info("Webhook server starting")
    logger.info("Port: {}", config.server.port)
    logger.info("Time: {}", utc_timestamp())
    logger.info("Environment: {}", config.environment)
    logger.info("Exchange: {}", config.binance.base_url)
    logger.info("=" * 40)

    if not config.has_api_key:
        logger.warning("BINANCE_API_KEY is not set; orders will be rejected by the exchange")
    if not config.has_secret_key:
        logger.warning("BINANCE_SECRET_KEY is not set; every signal will fail at signing")


def main(config_path: str | Path = "config.yml") -> None:
    config = load_config(config_path)
    logger = setup_logger(config.server.log_dir, level=config.server.log_level)
    _log_startup(config, logger)

    uvicorn.run(
        create_app(config, logger=logger),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
