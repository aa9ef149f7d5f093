"""Accumulated query intent: conditions, paging and field projection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Condition = tuple[str, str, Any]


@dataclass
class QueryState:
    """
    Mutable query being built by the fluent client calls.

    All conditions form one clause list and are ANDed on the server.
    """

    conditions: list[Condition] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    fields: list[str] | None = None

    def add_condition(self, field_name: str, operator: str, value: Any) -> None:
        self.conditions.append((field_name, operator, value))

    def has_conditions(self) -> bool:
        return bool(self.conditions)

    def domain(self) -> list[list[list[Any]]]:
        """Positional search args: ``[[cond, ...]]``, or ``[[]]`` to match every record."""
        return [[list(condition) for condition in self.conditions]]

    def paging_kwargs(self) -> dict[str, int]:
        kwargs: dict[str, int] = {}
        if self.limit is not None:
            kwargs["limit"] = self.limit
        if self.offset is not None:
            kwargs["offset"] = self.offset
        return kwargs

    def fields_kwargs(self) -> dict[str, list[str]]:
        if self.fields is None:
            return {}
        return {"fields": list(self.fields)}

    def clear_conditions(self) -> None:
        self.conditions = []

    def clear_paging(self) -> None:
        self.limit = None
        self.offset = None

    def clear_fields(self) -> None:
        self.fields = None
