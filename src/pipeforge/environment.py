"""Variable lookup consumed by the expander."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class VariableLookup(Protocol):
    """Anything the expander can ask for a variable's value.

    A plain ``dict`` satisfies this protocol.
    """

    def get(self, name: str) -> str | None: ...


class Environment:
    """Name to value store owned by the shell layer.

    The processing core only ever calls :meth:`get`.
    """

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = dict(variables or {})

    def get(self, name: str) -> str | None:
        return self._vars.get(name)

    def set(self, name: str, value: str) -> None:
        self._vars[name] = value

    def remove(self, name: str) -> None:
        self._vars.pop(name, None)

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the stored variables."""
        return dict(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __repr__(self) -> str:
        return f"Environment({len(self._vars)} variables)"
