"""Fluent client for the Odoo external API (XML-RPC ``execute_kw``)."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from loguru import logger

from odoolink.client.normalizer import normalize_response
from odoolink.client.query import QueryState
from odoolink.client.session import Credentials, SessionManager
from odoolink.client.transport import RpcTransport, XmlRpcTransport
from odoolink.config.loader import get_config
from odoolink.config.schema import OdooConfig
from odoolink.utils.exceptions import UnscopedMutationError
from odoolink.utils.helpers import DEFAULT_API_SUFFIX, normalize_api_suffix, normalize_host

UPDATE_GUARD_MESSAGE = (
    "To prevent updating all records you must provide at least one condition. "
    "Using where method would solve this."
)
DELETE_GUARD_MESSAGE = (
    "To prevent deleting all records you must provide at least one condition. "
    "Using where method would solve this."
)

_MISSING = object()


class OdooClient:
    """
    Stateful Odoo client.

    Conditions, paging and fields accumulate through ``where`` / ``limit`` /
    ``fields`` and are consumed by the next terminal call::

        partners = (
            OdooClient("https://erp.example.com", "prod", "admin", "secret")
            .where("customer_rank", ">", 0)
            .fields("name", "email")
            .limit(10)
            .get("res.partner")
        )

    The first object-model call authenticates automatically when ``connect``
    was not called. Remote faults raise ``RemoteFault``.

    An instance holds unsynchronized query state: use one client per thread
    (or per logical session), or serialize access externally.
    """

    def __init__(
        self,
        host: str = "",
        db: str = "",
        username: str = "",
        password: str = "",
        api_suffix: str = DEFAULT_API_SUFFIX,
        *,
        transport: RpcTransport | None = None,
    ):
        credentials = Credentials(
            host=normalize_host(host),
            db=db,
            username=username,
            password=password,
            api_suffix=normalize_api_suffix(api_suffix),
        )
        self._session = SessionManager(credentials, transport or XmlRpcTransport())
        self._query = QueryState()

    @classmethod
    def from_config(cls, config: OdooConfig | None = None, *, transport: RpcTransport | None = None) -> OdooClient:
        """Build a client from settings (defaults to ~/.odoolink/config.json)."""
        if config is None:
            config = get_config()
        return cls(
            host=config.host,
            db=config.db,
            username=config.username,
            password=config.password,
            api_suffix=config.api_suffix,
            transport=transport or XmlRpcTransport(timeout=config.timeout),
        )

    # ---- session ----

    def connect(
        self,
        db: str | None = None,
        username: str | None = None,
        password: str | None = None,
        auth_options: Mapping[str, Any] | None = None,
    ) -> OdooClient:
        """Authenticate (omitted credentials fall back to the configured ones)."""
        self._session.connect(db, username, password, auth_options)
        return self

    def has_session(self) -> bool:
        return self._session.has_session()

    # ---- query builder ----

    def where(self, field: str, operator: Any, value: Any = _MISSING) -> OdooClient:
        """Add a condition; ``where("name", "Bob")`` means ``where("name", "=", "Bob")``."""
        if value is _MISSING:
            self._query.add_condition(field, "=", operator)
        else:
            self._query.add_condition(field, operator, value)
        return self

    def limit(self, limit: int, offset: int = 0) -> OdooClient:
        self._query.limit = limit
        self._query.offset = offset
        return self

    def fields(self, *names: Any) -> OdooClient:
        """Set the fields to read, as one iterable of names or as separate arguments."""
        if len(names) == 1 and not isinstance(names[0], str) and isinstance(names[0], Iterable):
            names = tuple(names[0])
        self._query.fields = list(names)
        return self

    # ---- operations ----

    def search(self, model: str) -> list[int]:
        """Ids matching the current conditions (all records when none were given)."""
        result = self._execute(model, "search", self._query.domain(), self._query.paging_kwargs())
        self._query.clear_paging()
        self._query.clear_conditions()
        return normalize_response(result)

    def count(self, model: str) -> int:
        result = self._execute(model, "search_count", self._query.domain())
        self._query.clear_conditions()
        return normalize_response(result, 0)

    def get(self, model: str) -> list[dict[str, Any]]:
        """Read the records matching the current conditions."""
        ids = self.search(model)
        result = self._execute(model, "read", [ids], self._query.fields_kwargs())
        self._query.clear_fields()
        return normalize_response(result)

    def fields_of(self, model: str) -> dict[str, Any]:
        """
        Model structure as returned by ``fields_get``.

        The interesting keys per field are ``string`` (label), ``help`` and
        ``type``.
        """
        result = self._execute(model, "fields_get", [])
        return normalize_response(result)

    def create(self, model: str, data: Mapping[str, Any]) -> int:
        """Create one record and return its id."""
        result = self._execute(model, "create", [dict(data)])
        return normalize_response(result, 0)

    def update(self, model: str, data: Mapping[str, Any]) -> bool:
        """
        Write ``data`` to every record matching the current conditions.

        Raises:
            UnscopedMutationError: no condition was set.
        """
        if not self._query.has_conditions():
            logger.warning(f"Refusing unscoped write on {model}")
            raise UnscopedMutationError(UPDATE_GUARD_MESSAGE, model=model, operation="update")
        ids = self.search(model)
        result = self._execute(model, "write", [ids, dict(data)])
        return normalize_response(result, 0)

    def delete_by_id(self, model: str, ids: int | Iterable[int]) -> bool:
        if isinstance(ids, bool):
            raise TypeError(f"record ids must be integers, got {ids!r}")
        if isinstance(ids, int):
            ids = [ids]
        result = self._execute(model, "unlink", [list(ids)])
        return normalize_response(result, 0)

    def delete(self, model: str) -> bool:
        """
        Remove every record matching the current conditions.

        Raises:
            UnscopedMutationError: no condition was set.
        """
        if not self._query.has_conditions():
            logger.warning(f"Refusing unscoped unlink on {model}")
            raise UnscopedMutationError(DELETE_GUARD_MESSAGE, model=model, operation="delete")
        ids = self.search(model)
        return self.delete_by_id(model, ids)

    def can(self, permissions: str | Iterable[str], model: str, raise_exception: bool = False) -> bool:
        """Check access rights ('read', 'write', 'create', 'unlink') on a model."""
        if isinstance(permissions, str):
            permissions = [permissions]
        result = self._execute(
            model,
            "check_access_rights",
            list(permissions),
            {"raise_exception": raise_exception},
        )
        return normalize_response(result, 0, bool)

    def version(self, key: str | None = None) -> Any:
        """Server version info (no authentication needed); ``key`` picks one entry."""
        result = self._session.common_client().invoke("version")
        return normalize_response(result, key)

    def call(
        self,
        model: str,
        method: str,
        args: Iterable[Any],
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        """Run any model method through ``execute_kw``."""
        return normalize_response(self._execute(model, method, args, kwargs))

    def _execute(
        self,
        model: str,
        method: str,
        args: Iterable[Any],
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        if not self._session.has_session():
            self._session.connect()

        creds = self._session.credentials
        params: list[Any] = [creds.db, self._session.uid, creds.password, model, method, list(args)]
        if kwargs is not None:
            params.append(dict(kwargs))
        logger.debug(f"execute_kw {model}.{method}")
        return self._session.object.invoke("execute_kw", *params)

    # ---- credentials ----

    def set_host(self, url: str) -> OdooClient:
        self._session.update_credentials(host=normalize_host(url))
        return self

    def set_db(self, name: str) -> OdooClient:
        self._session.update_credentials(db=name)
        return self

    def set_username(self, username: str) -> OdooClient:
        self._session.update_credentials(username=username)
        return self

    def set_password(self, password: str) -> OdooClient:
        self._session.update_credentials(password=password)
        return self

    def set_api_suffix(self, suffix: str) -> OdooClient:
        self._session.update_credentials(api_suffix=normalize_api_suffix(suffix))
        return self

    @property
    def host(self) -> str:
        return self._session.credentials.host

    @property
    def db(self) -> str:
        return self._session.credentials.db

    @property
    def username(self) -> str:
        return self._session.credentials.username

    @property
    def password(self) -> str:
        return self._session.credentials.password

    @property
    def api_suffix(self) -> str:
        return self._session.credentials.api_suffix

    @property
    def uid(self) -> int | None:
        return self._session.uid

    @property
    def transport(self) -> RpcTransport:
        return self._session.transport

    @property
    def query(self) -> QueryState:
        return self._query
