"""Partition a token stream into pipeline segments."""

from __future__ import annotations

from collections.abc import Iterable

PIPE = "|"


def split_on_pipes(tokens: Iterable[str]) -> list[list[str]]:
    """Split raw tokens at every token that is exactly ``|``.

    Runs before quote stripping, so a quoted ``"|"`` never splits. An
    empty trailing group (line ending in ``|``) is dropped; empty groups
    anywhere else are kept so the producer can reject them.
    """
    groups: list[list[str]] = []
    current: list[str] = []
    for token in tokens:
        if token == PIPE:
            groups.append(current)
            current = []
        else:
            current.append(token)
    if current:
        groups.append(current)
    return groups
