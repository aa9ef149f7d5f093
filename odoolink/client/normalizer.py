"""Response normalization: the one place that decides whether a remote call failed."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Mapping

from odoolink.utils.exceptions import RemoteFault

FAULT_CODE_KEY = "faultCode"
FAULT_STRING_KEY = "faultString"


def as_container(result: Any) -> Mapping[Any, Any] | list[Any] | tuple[Any, ...]:
    """View a raw result as a keyed/ordered container; scalars become one-element lists."""
    if isinstance(result, (Mapping, list, tuple)):
        return result
    if result is None:
        return []
    return [result]


def is_fault(result: Any) -> bool:
    return isinstance(result, Mapping) and FAULT_CODE_KEY in result


def _has_key(container: Mapping[Any, Any] | list[Any] | tuple[Any, ...], key: Hashable) -> bool:
    if isinstance(container, Mapping):
        return key in container
    return isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(container)


def normalize_response(
    result: Any,
    key: Hashable | None = None,
    cast: Callable[[Any], Any] | None = None,
) -> Any:
    """
    Shape a raw RPC result into the value returned to callers.

    Args:
        result: Deserialized remote response.
        key: Narrow to this entry when present (``0`` picks a scalar result itself).
        cast: Coerce the (possibly narrowed) value, e.g. ``bool`` or ``int``.

    Returns:
        The narrowed / coerced value, or the raw result untouched.

    Raises:
        RemoteFault: The result carries a fault code; key and cast are ignored.
    """
    container = as_container(result)
    if is_fault(container):
        raise RemoteFault(container[FAULT_CODE_KEY], container.get(FAULT_STRING_KEY))

    value = result
    if key is not None and _has_key(container, key):
        value = container[key]
    if cast is not None:
        value = cast(value)
    return value
