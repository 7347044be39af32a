"""Конфигурация приложения."""
import logging
import os
from functools import lru_cache

DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


def _port(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return DEFAULT_PORT


def _log_level(value: str) -> str:
    # getLevelName возвращает число только для известных уровней
    name = value.strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else DEFAULT_LOG_LEVEL


@lru_cache
def get_config():
    return type("Config", (), {
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": _port(os.environ.get("PORT", str(DEFAULT_PORT))),
        "debug": os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes"),
        "log_level": _log_level(os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "static_dir": os.environ.get("STATIC_DIR", ""),
    })()
