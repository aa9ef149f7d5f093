"""Utility functions for odoolink."""

from odoolink.utils.helpers import ensure_dir, get_data_path, normalize_host, normalize_api_suffix
from odoolink.utils.exceptions import (
    OdooLinkError,
    ConfigurationError,
    AuthenticationError,
    UnscopedMutationError,
    RemoteFault,
    TransportError,
    ErrorCategory,
    sanitize_error_message,
)

__all__ = [
    "ensure_dir",
    "get_data_path",
    "normalize_host",
    "normalize_api_suffix",
    "OdooLinkError",
    "ConfigurationError",
    "AuthenticationError",
    "UnscopedMutationError",
    "RemoteFault",
    "TransportError",
    "ErrorCategory",
    "sanitize_error_message",
]
