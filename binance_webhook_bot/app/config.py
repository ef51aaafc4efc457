"""Configuration loading and validation."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

MAINNET_URL = "https://fapi.binance.com"
TESTNET_URL = "https://testnet.binancefuture.com"


class BinanceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: str = ""
    api_secret: str = ""
    testnet: bool = False
    timeout_sec: float = Field(default=10, gt=0)

    @property
    def base_url(self) -> str:
        return TESTNET_URL if self.testnet else MAINNET_URL


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_dir: str = "logs"
    log_level: str = Field(default="INFO", pattern=r"^(TRACE|DEBUG|INFO|SUCCESS|WARNING|ERROR|CRITICAL)$")


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    environment: str = "development"
    binance: BinanceConfig = Field(default_factory=BinanceConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @property
    def has_api_key(self) -> bool:
        return bool(self.binance.api_key)

    @property
    def has_secret_key(self) -> bool:
        return bool(self.binance.api_secret)


# env var -> (section, field); section None means top level
ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "BINANCE_API_KEY": ("binance", "api_key"),
    "BINANCE_SECRET_KEY": ("binance", "api_secret"),
    "BINANCE_TESTNET": ("binance", "testnet"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "LOG_DIR": ("server", "log_dir"),
    "LOG_LEVEL": ("server", "log_level"),
    "APP_ENV": (None, "environment"),
}


def _apply_env(raw_data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    data = {key: (dict(value) if isinstance(value, dict) else value) for key, value in raw_data.items()}
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        if section is None:
            data[field] = value
            continue
        if not isinstance(data.get(section), dict):
            data[section] = {}
        data[section][field] = value
    return data


def load_config(
    path: str | Path = "config.yml",
    environ: Mapping[str, str] | None = None,
    dotenv: bool = True,
) -> AppConfig:
    """Load YAML (optional) + environment overrides and validate schema."""
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    config_path = Path(path)
    raw_data: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as fh:
            raw_data = yaml.safe_load(fh) or {}
        if not isinstance(raw_data, dict):
            raise ValueError(f"Invalid config '{config_path}': top level must be a mapping")

    try:
        return AppConfig.model_validate(_apply_env(raw_data, environ))
    except ValidationError as exc:
        raise ValueError(f"Invalid config '{config_path}': {exc}") from exc
