"""Credentials and the authenticated session that gates every object-model call."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from loguru import logger

from odoolink.client.normalizer import FAULT_CODE_KEY, FAULT_STRING_KEY
from odoolink.client.transport import RpcEndpoint, RpcTransport
from odoolink.utils.exceptions import AuthenticationError, ConfigurationError, sanitize_error_message
from odoolink.utils.helpers import DEFAULT_API_SUFFIX

COMMON_ENDPOINT = "common"  # meta-calls which don't require authentication
OBJECT_ENDPOINT = "object"  # execute_kw on models

UNSUCCESSFUL_AUTHORIZATION = "Unsuccessful Authorization"


@dataclass
class Credentials:
    host: str = ""
    db: str = ""
    username: str = ""
    password: str = ""
    api_suffix: str = DEFAULT_API_SUFFIX


class SessionManager:
    """
    Owns the credentials, authenticates them and keeps the resulting uid.

    Endpoint handles are created on each successful ``connect``; a failed
    attempt leaves the previous session (if any) untouched.
    """

    def __init__(self, credentials: Credentials, transport: RpcTransport):
        self.credentials = credentials
        self.transport = transport
        self.uid: int | None = None
        self.common: RpcEndpoint | None = None
        self.object: RpcEndpoint | None = None

    def endpoint(self, name: str, credentials: Credentials | None = None) -> str:
        """Full URL of an endpoint: host + suffix + name."""
        creds = credentials or self.credentials
        if not creds.host:
            raise ConfigurationError(
                "You must provide the odoo host by host setter method",
                setting="host",
            )
        return f"{creds.host}{creds.api_suffix}{name}"

    def has_session(self) -> bool:
        return self.uid is not None

    def reset(self) -> None:
        """Forget the current session; the next object-model call authenticates again."""
        self.uid = None
        self.common = None
        self.object = None

    def update_credentials(self, **changes: str) -> None:
        """Replace credential values, dropping the session when any of them changed."""
        updated = replace(self.credentials, **changes)
        if updated == self.credentials:
            return
        if self.has_session():
            logger.debug(f"Credentials changed for {updated.host}, session dropped")
            self.reset()
        self.credentials = updated

    def common_client(self) -> RpcEndpoint:
        """Handle on the common endpoint, usable without authenticating."""
        return self.transport.client(self.endpoint(COMMON_ENDPOINT))

    def connect(
        self,
        db: str | None = None,
        username: str | None = None,
        password: str | None = None,
        auth_options: Mapping[str, Any] | None = None,
    ) -> int:
        """
        Authenticate and store the uid.

        Omitted (or empty) arguments fall back to the configured credentials;
        given ones replace them once the server accepts them.

        Raises:
            ConfigurationError: host is not set.
            AuthenticationError: the server did not answer with a positive uid.
        """
        creds = replace(
            self.credentials,
            db=db or self.credentials.db,
            username=username or self.credentials.username,
            password=password or self.credentials.password,
        )

        common = self.transport.client(self.endpoint(COMMON_ENDPOINT, creds))
        obj = self.transport.client(self.endpoint(OBJECT_ENDPOINT, creds))

        uid = common.invoke("authenticate", creds.db, creds.username, creds.password, dict(auth_options or {}))
        if not _is_uid(uid):
            if isinstance(uid, Mapping) and FAULT_CODE_KEY in uid:
                fault_code = uid[FAULT_CODE_KEY]
                logger.warning(
                    f"Authentication fault on {creds.host} db={creds.db}: "
                    f"{sanitize_error_message(str(uid.get(FAULT_STRING_KEY) or fault_code))}"
                )
                raise AuthenticationError(str(fault_code), fault_code=fault_code)
            logger.warning(f"Authentication refused on {creds.host} db={creds.db} user={creds.username}")
            raise AuthenticationError(UNSUCCESSFUL_AUTHORIZATION)

        self.credentials = creds
        self.uid = uid
        self.common = common
        self.object = obj
        logger.info(f"Authenticated on {creds.host} db={creds.db} uid={uid}")
        return uid

    def ensure_connected(self) -> None:
        """Connect with the configured credentials unless a session exists."""
        if not self.has_session():
            self.connect()


def _is_uid(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
