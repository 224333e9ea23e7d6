"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _env_path(name: str) -> Optional[Path]:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    return Path(raw_value).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str = "Enclosure Allocation Analyzer"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    reference_data_path: Optional[Path] = None
    analysis_cohabitation_penalty: int = 1
    api_host: str = "127.0.0.1"
    api_port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    defaults = Settings()
    return Settings(
        app_name=os.getenv("APP_NAME", defaults.app_name),
        app_version=os.getenv("APP_VERSION", defaults.app_version),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        reference_data_path=_env_path("REFERENCE_DATA_PATH"),
        analysis_cohabitation_penalty=_env_int(
            "ANALYSIS_COHABITATION_PENALTY",
            defaults.analysis_cohabitation_penalty,
        ),
        api_host=os.getenv("API_HOST", defaults.api_host),
        api_port=_env_int("API_PORT", defaults.api_port),
    )
