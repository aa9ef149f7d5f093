"""
Exception hierarchy for odoolink.

Provides:
- A base error carrying a code, a category and structured details
- Typed errors for configuration, authentication, remote faults and transport
- Safe error message formatting (no credential leak in logs)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    REMOTE = "remote"
    RETRYABLE = "retryable"
    FATAL = "fatal"


class OdooLinkError(Exception):
    """Base exception for all odoolink errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(OdooLinkError):
    """Client is missing a setting required to reach the server."""

    def __init__(self, message: str, setting: str | None = None):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            category=ErrorCategory.CONFIGURATION,
            details=details,
        )


class AuthenticationError(OdooLinkError):
    """The common endpoint refused the credentials."""

    def __init__(self, message: str, fault_code: Any = None):
        super().__init__(
            message,
            code="AUTHENTICATION_FAILED",
            category=ErrorCategory.AUTHENTICATION,
            details={"fault_code": fault_code} if fault_code is not None else {},
        )
        self.fault_code = fault_code


class UnscopedMutationError(OdooLinkError):
    """Write or unlink requested without any condition."""

    def __init__(self, message: str, model: str, operation: str):
        super().__init__(
            message,
            code="UNSCOPED_MUTATION",
            category=ErrorCategory.VALIDATION,
            details={"model": model, "operation": operation},
        )
        self.model = model
        self.operation = operation


class RemoteFault(OdooLinkError):
    """Fault payload returned by the server instead of a result."""

    def __init__(self, fault_code: Any, fault_string: str | None = None):
        message = str(fault_code)
        if fault_string and fault_string != message:
            message = f"{message}: {fault_string}"
        super().__init__(
            message,
            code="REMOTE_FAULT",
            category=ErrorCategory.REMOTE,
            details={"fault_code": fault_code, "fault_string": fault_string},
        )
        self.fault_code = fault_code
        self.fault_string = fault_string


class TransportError(OdooLinkError):
    """The RPC request could not be delivered or its answer could not be read."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        retryable: bool = False,
    ):
        category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            category=category,
            details={"url": url, "status_code": status_code, "retryable": retryable},
        )
        self.url = url
        self.status_code = status_code
        self.retryable = retryable


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|passwd|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        if pattern.groups == 1:
            sanitized = pattern.sub(lambda m: f"{m.group(1)}{replacement}@", sanitized)
        else:
            sanitized = pattern.sub(replacement, sanitized)
    return sanitized
