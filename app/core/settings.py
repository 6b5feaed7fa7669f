import os
import logging
from dataclasses import dataclass

DEFAULT_API_URL = "https://swapi.py4e.com/api/people/"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    connect_timeout_sec: float = 0.5
    read_timeout_sec: float = 5.0
    debounce_sec: float = 0.3
    cache_size: int = 0
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default

def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default

def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name, "").strip()
    return raw or default


def load_settings() -> Settings:
    return Settings(
        api_url=_env_str("SWAPI_URL", DEFAULT_API_URL),
        connect_timeout_sec=_env_float("CATALOG_CONNECT_TIMEOUT_SEC", 0.5),
        read_timeout_sec=_env_float("CATALOG_READ_TIMEOUT_SEC", 5.0),
        debounce_sec=_env_float("SEARCH_DEBOUNCE_SEC", 0.3),
        cache_size=max(0, _env_int("GALLERY_CACHE_SIZE", 0)),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op once the root logger has handlers
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
