"""Base dataclasses for composed queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueryFragment:
    """Query text paired with its positional parameters.

    The Nth ``$N`` placeholder in ``text`` binds ``params[N - 1]``.
    """

    text: str
    params: tuple[Any, ...] = ()


@dataclass
class QueryBuilder:
    """Accumulates query text and keeps placeholders aligned with parameters."""

    parts: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def add(self, text: str) -> "QueryBuilder":
        self.parts.append(text)
        return self

    def bind(self, value: Any) -> str:
        """Append a parameter and return its ``$N`` placeholder."""
        self.params.append(value)
        return f"${len(self.params)}"

    def build(self) -> QueryFragment:
        return QueryFragment(text="\n".join(self.parts), params=tuple(self.params))
