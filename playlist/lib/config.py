import logging
import shutil
from functools import lru_cache
from pathlib import Path

import yaml

from . import paths

DEFAULTS = {
    "database": "playlist.db",
    "log_level": "INFO",
    "api": {"host": "127.0.0.1", "port": 8000},
    "pagination": {"default_limit": 50},
}


def get_default_config_path() -> Path:
    return paths.package_root() / "config.yaml"


def config_file() -> Path:
    """Return config file path in .playlist/"""
    return paths.dot_playlist() / "config.yaml"


def _validate_config(cfg: dict) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a dict, got {type(cfg).__name__}")

    for section in ("api", "pagination"):
        if section in cfg and not isinstance(cfg[section], dict):
            raise ValueError(f"Config '{section}' must be a dict")

    limit = cfg.get("pagination", {}).get("default_limit")
    if limit is not None and (not isinstance(limit, int) or not 1 <= limit <= 100):
        raise ValueError("Config 'pagination.default_limit' must be an integer in [1, 100]")


def clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml merged over DEFAULTS. Missing file yields DEFAULTS."""
    cfg = {key: dict(value) if isinstance(value, dict) else value for key, value in DEFAULTS.items()}
    path = config_file()
    if not path.exists():
        return cfg
    with open(path) as f:
        loaded = yaml.safe_load(f) or {}
    _validate_config(loaded)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(cfg.get(key), dict):
            cfg[key].update(value)
        else:
            cfg[key] = value
    return cfg


def init_config() -> Path:
    """Initialize .playlist/config.yaml from defaults if missing."""
    target = config_file()
    if target.exists():
        return target

    target.parent.mkdir(parents=True, exist_ok=True)

    default_config_path = get_default_config_path()
    if not default_config_path.exists():
        raise FileNotFoundError(f"Default config not found at {default_config_path}")

    shutil.copy(default_config_path, target)
    clear_cache()
    return target


def database_file() -> str:
    return load_config()["database"]


def default_limit() -> int:
    return load_config()["pagination"]["default_limit"]


def api_address() -> tuple[str, int]:
    api = load_config()["api"]
    return api["host"], int(api["port"])


def configure_logging(level: str | None = None) -> None:
    """Install root logging for entry points (API server, CLI)."""
    name = (level or load_config().get("log_level") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
