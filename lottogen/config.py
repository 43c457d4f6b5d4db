"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from lottogen import __version__


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Historical draw files: read from DATA_DIR, or fetched from
    # DATA_BASE_URL/<file> when a base URL is configured.
    DATA_DIR: str = os.getenv("LOTTERY_DATA_DIR", "./data")
    DATA_BASE_URL: str = os.getenv("LOTTERY_DATA_BASE_URL", "").strip()
    HTTP_TIMEOUT: float = _env_float("LOTTERY_HTTP_TIMEOUT", 10.0)

    GENERATOR_VERSION: str = os.getenv("LOTTERY_GENERATOR_VERSION", __version__)
    MAX_DRAW_ATTEMPTS: int = _env_int("LOTTERY_MAX_DRAW_ATTEMPTS", 10_000)
    MAX_BATCH_SIZE: int = _env_int("LOTTERY_MAX_BATCH_SIZE", 50)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig
