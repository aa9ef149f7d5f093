"""Small helpers shared by config and client code."""

from pathlib import Path

DEFAULT_API_SUFFIX = "/xmlrpc/"


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the odoolink data directory (~/.odoolink)."""
    return Path.home() / ".odoolink"


def normalize_host(host: str | None) -> str:
    """Drop trailing slashes so that host + suffix never doubles a separator."""
    if not host:
        return ""
    return host.strip().rstrip("/")


def normalize_api_suffix(suffix: str | None) -> str:
    """Wrap the endpoint suffix in slashes: ``xmlrpc/2`` -> ``/xmlrpc/2/``."""
    value = (suffix or "").strip().strip("/")
    if not value:
        return DEFAULT_API_SUFFIX
    return f"/{value}/"
