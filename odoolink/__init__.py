"""odoolink - fluent client for the Odoo external API."""

__version__ = "0.1.0"

from odoolink.client import OdooClient
from odoolink.config import OdooConfig
from odoolink.utils.exceptions import (
    AuthenticationError,
    ConfigurationError,
    OdooLinkError,
    RemoteFault,
    TransportError,
    UnscopedMutationError,
)

__all__ = [
    "OdooClient",
    "OdooConfig",
    "OdooLinkError",
    "ConfigurationError",
    "AuthenticationError",
    "RemoteFault",
    "TransportError",
    "UnscopedMutationError",
]
