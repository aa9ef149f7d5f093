"""RPC transport: the interface the client consumes and the default XML-RPC implementation."""

from __future__ import annotations

import xmlrpc.client
from typing import Any, Mapping, Protocol
from xml.parsers.expat import ExpatError

import httpx
from loguru import logger

from odoolink.client.normalizer import FAULT_CODE_KEY, FAULT_STRING_KEY
from odoolink.utils.exceptions import TransportError, sanitize_error_message


class RpcEndpoint(Protocol):
    """Handle bound to one endpoint URL."""

    def invoke(self, method: str, *args: Any) -> Any: ...


class RpcTransport(Protocol):
    """Factory of endpoint handles."""

    def client(self, url: str) -> RpcEndpoint: ...


class XmlRpcEndpoint:
    """Endpoint handle that encodes calls as XML-RPC and posts them through httpx."""

    def __init__(self, url: str, transport: XmlRpcTransport):
        self.url = url
        self._transport = transport

    def invoke(self, method: str, *args: Any) -> Any:
        """
        Perform one blocking remote call.

        A fault response is handed back as ``{"faultCode": ..., "faultString": ...}``
        so callers decide what a fault means; it is never raised here.
        """
        body = xmlrpc.client.dumps(tuple(args), methodname=method, allow_none=True)
        content = self._transport.post(self.url, body.encode("utf-8"))
        try:
            params, _ = xmlrpc.client.loads(content, use_builtin_types=True)
        except xmlrpc.client.Fault as fault:
            return {FAULT_CODE_KEY: fault.faultCode, FAULT_STRING_KEY: fault.faultString}
        except (ExpatError, xmlrpc.client.ResponseError) as exc:
            raise TransportError(
                f"xml-rpc bad response: unparsable body for {method} at {self.url}",
                url=self.url,
            ) from exc
        return params[0] if params else None

    def __repr__(self) -> str:
        return f"XmlRpcEndpoint({self.url!r})"


class XmlRpcTransport:
    """XML-RPC over HTTP(S) using httpx."""

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self.headers = {"Content-Type": "text/xml", **(headers or {})}
        self._http_transport = http_transport

    def client(self, url: str) -> XmlRpcEndpoint:
        return XmlRpcEndpoint(url, self)

    def post(self, url: str, payload: bytes) -> bytes:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._http_transport) as client:
                resp = client.post(url, content=payload, headers=self.headers)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"xml-rpc timeout: POST {url}",
                url=url,
                retryable=True,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(f"xml-rpc network error for {url}: {sanitize_error_message(str(exc))}")
            raise TransportError(
                f"xml-rpc network error: POST {url}: {sanitize_error_message(str(exc))}",
                url=url,
                retryable=True,
            ) from exc

        if resp.status_code >= 400:
            raise TransportError(
                f"xml-rpc http error {resp.status_code}: POST {url}",
                url=url,
                status_code=resp.status_code,
                retryable=self._is_retryable_status(resp.status_code),
            )
        return resp.content

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return status_code >= 500 or status_code in {408, 429}
