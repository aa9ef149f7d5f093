"""Odoo client: session, query state, dispatch and response normalization."""

from odoolink.client.normalizer import normalize_response
from odoolink.client.odoo import DELETE_GUARD_MESSAGE, UPDATE_GUARD_MESSAGE, OdooClient
from odoolink.client.query import QueryState
from odoolink.client.session import Credentials, SessionManager
from odoolink.client.transport import RpcEndpoint, RpcTransport, XmlRpcTransport

__all__ = [
    "OdooClient",
    "QueryState",
    "Credentials",
    "SessionManager",
    "RpcEndpoint",
    "RpcTransport",
    "XmlRpcTransport",
    "normalize_response",
    "UPDATE_GUARD_MESSAGE",
    "DELETE_GUARD_MESSAGE",
]
