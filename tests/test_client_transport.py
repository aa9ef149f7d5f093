import xmlrpc.client

import httpx
import pytest

from odoolink.client.transport import XmlRpcTransport
from odoolink.utils.exceptions import TransportError

URL = "http://erp.local/xmlrpc/object"


def _xml_response(value) -> httpx.Response:
    body = xmlrpc.client.dumps((value,), methodresponse=True, allow_none=True)
    return httpx.Response(200, content=body.encode("utf-8"), headers={"Content-Type": "text/xml"})


def test_invoke_encodes_call_and_decodes_result() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        params, method = xmlrpc.client.loads(request.content)
        seen["url"] = str(request.url)
        seen["method"] = method
        seen["params"] = params
        return _xml_response([{"id": 1, "name": "Azure"}])

    transport = XmlRpcTransport(http_transport=httpx.MockTransport(handler))
    result = transport.client(URL).invoke(
        "execute_kw", "prod", 7, "p", "res.partner", "read", [[1]], {"fields": ["name"]}
    )

    assert result == [{"id": 1, "name": "Azure"}]
    assert seen["url"] == URL
    assert seen["method"] == "execute_kw"
    assert seen["params"] == ("prod", 7, "p", "res.partner", "read", [[1]], {"fields": ["name"]})


def test_invoke_returns_fault_as_mapping() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = xmlrpc.client.dumps(xmlrpc.client.Fault("AccessDenied", "Access denied"), methodresponse=True)
        return httpx.Response(200, content=body.encode("utf-8"))

    transport = XmlRpcTransport(http_transport=httpx.MockTransport(handler))
    result = transport.client(URL).invoke("authenticate", "prod", "u", "bad", {})
    assert result == {"faultCode": "AccessDenied", "faultString": "Access denied"}


def test_invoke_allows_none_arguments() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        params, _ = xmlrpc.client.loads(request.content)
        assert params == (None,)
        return _xml_response(True)

    transport = XmlRpcTransport(http_transport=httpx.MockTransport(handler))
    assert transport.client(URL).invoke("ping", None) is True


def test_http_error_status_raises_transport_error() -> None:
    transport = XmlRpcTransport(http_transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    with pytest.raises(TransportError) as exc_info:
        transport.client(URL).invoke("version")
    assert exc_info.value.status_code == 503
    assert exc_info.value.retryable is True


def test_client_error_status_is_not_retryable() -> None:
    transport = XmlRpcTransport(http_transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    with pytest.raises(TransportError) as exc_info:
        transport.client(URL).invoke("version")
    assert exc_info.value.retryable is False


def test_network_error_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = XmlRpcTransport(http_transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as exc_info:
        transport.client(URL).invoke("version")
    assert exc_info.value.retryable is True
    assert exc_info.value.url == URL


def test_timeout_raises_retryable_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    transport = XmlRpcTransport(http_transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as exc_info:
        transport.client(URL).invoke("version")
    assert "timeout" in exc_info.value.message
    assert exc_info.value.retryable is True


def test_unparsable_body_raises_transport_error() -> None:
    transport = XmlRpcTransport(
        http_transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>oops"))
    )
    with pytest.raises(TransportError) as exc_info:
        transport.client(URL).invoke("version")
    assert "bad response" in exc_info.value.message
