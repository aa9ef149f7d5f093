"""Configuration loading utilities."""

import json
import threading
from pathlib import Path
from typing import Any

from loguru import logger

from odoolink.config.schema import OdooConfig
from odoolink.utils.helpers import ensure_dir, get_data_path

# Keys accepted in config files besides the snake_case field names.
_KEY_ALIASES: dict[str, str] = {
    "api-suffix": "api_suffix",
    "database": "db",
    "user": "username",
}

_lock = threading.Lock()
# resolved path -> (file mtime in ns or None when absent, parsed config)
_cache: dict[Path, tuple[int | None, OdooConfig]] = {}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_data_path() / "config.json"


def load_config(config_path: Path | None = None) -> OdooConfig:
    """
    Load configuration from file or create default.

    Values present in the file win over ODOOLINK_* environment variables;
    environment variables fill in whatever the file leaves out.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config file must be a JSON object")
            cfg = OdooConfig(**convert_keys(data))
            logger.debug(f"Loaded odoolink config from {path}")
            return cfg
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to fall back to defaults."
            ) from e

    return OdooConfig()


def save_config(config: OdooConfig, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    ensure_dir(path.parent)

    data = config.model_dump()
    data["api-suffix"] = data.pop("api_suffix")

    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    clear_config_cache(config_path=path)


def get_config(config_path: Path | None = None, *, force_reload: bool = False) -> OdooConfig:
    """
    Load a config file once and reuse it until the file changes on disk.

    A file that is created, edited or removed after the first load is picked
    up on the next call; ``force_reload`` skips the check.
    """
    path = _resolve(config_path)
    stamp = _mtime_ns(path)
    with _lock:
        cached = _cache.get(path)
        if force_reload or cached is None or cached[0] != stamp:
            cached = (stamp, load_config(path))
            _cache[path] = cached
        return cached[1]


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Forget one cached file (or all of them)."""
    with _lock:
        if config_path is None:
            _cache.clear()
            return
        _cache.pop(_resolve(config_path), None)


def _resolve(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def _mtime_ns(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


def convert_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase / dashed / aliased keys onto OdooConfig field names."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(key, camel_to_snake(key).replace("-", "_"))
        result[name] = value
    return result


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)
