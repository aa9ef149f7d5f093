"""Configuration module for odoolink."""

from odoolink.config.loader import load_config, save_config, get_config_path, get_config, clear_config_cache
from odoolink.config.schema import OdooConfig

__all__ = ["OdooConfig", "load_config", "save_config", "get_config_path", "get_config", "clear_config_cache"]
