"""Pytest hooks and fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from odoolink.client import OdooClient
from odoolink.config import clear_config_cache


@dataclass
class RecordedCall:
    url: str
    method: str
    args: tuple[Any, ...]

    @property
    def model(self) -> str:
        return self.args[3]

    @property
    def model_method(self) -> str:
        return self.args[4]

    @property
    def positional(self) -> list[Any]:
        return self.args[5]

    @property
    def kwargs(self) -> dict[str, Any] | None:
        return self.args[6] if len(self.args) > 6 else None


class FakeEndpoint:
    def __init__(self, transport: FakeTransport, url: str):
        self.transport = transport
        self.url = url

    def invoke(self, method: str, *args: Any) -> Any:
        return self.transport.dispatch(self.url, method, args)


class FakeTransport:
    """Records every call; answers from ``responses`` keyed by model method (or endpoint method)."""

    def __init__(self, uid: Any = 7):
        self.calls: list[RecordedCall] = []
        self.urls: list[str] = []
        self.responses: dict[str, Any] = {"authenticate": uid}

    def client(self, url: str) -> FakeEndpoint:
        self.urls.append(url)
        return FakeEndpoint(self, url)

    def respond(self, method: str, value: Any) -> FakeTransport:
        self.responses[method] = value
        return self

    def dispatch(self, url: str, method: str, args: tuple[Any, ...]) -> Any:
        self.calls.append(RecordedCall(url, method, args))
        key = args[4] if method == "execute_kw" else method
        value = self.responses.get(key)
        if callable(value):
            return value(*args)
        return value

    def execute_calls(self, model_method: str | None = None) -> list[RecordedCall]:
        return [
            c for c in self.calls
            if c.method == "execute_kw" and (model_method is None or c.model_method == model_method)
        ]

    def calls_to(self, method: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> OdooClient:
    return OdooClient("http://erp.local", "prod", "u", "p", transport=transport)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep ODOOLINK_* env vars and the user's config file out of every test."""
    for name in ("HOST", "DB", "USERNAME", "PASSWORD", "API_SUFFIX", "TIMEOUT"):
        monkeypatch.delenv(f"ODOOLINK_{name}", raising=False)
    monkeypatch.setattr("odoolink.config.loader.get_data_path", lambda: tmp_path / ".odoolink")
    clear_config_cache()
    yield
    clear_config_cache()
