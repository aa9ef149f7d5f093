"""Configuration schema using Pydantic.

Single data model for the connection settings, persisted to ~/.odoolink/config.json.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from odoolink.utils.helpers import DEFAULT_API_SUFFIX, normalize_api_suffix, normalize_host


class OdooConfig(BaseSettings):
    """Connection settings for one Odoo server."""
    host: str = ""  # e.g. "https://erp.example.com"; no trailing slash
    db: str = ""
    username: str = ""
    password: str = ""
    api_suffix: str = DEFAULT_API_SUFFIX  # "api-suffix" in config files
    timeout: float = 30.0  # Seconds per RPC request (transport only)

    model_config = SettingsConfigDict(
        env_prefix="ODOOLINK_",
        extra="ignore",
    )

    @field_validator("host", mode="before")
    @classmethod
    def _strip_host(cls, value: str | None) -> str:
        return normalize_host(value)

    @field_validator("api_suffix", mode="before")
    @classmethod
    def _wrap_suffix(cls, value: str | None) -> str:
        return normalize_api_suffix(value)
