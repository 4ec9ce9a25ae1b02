"""Variable substitution for weak and unquoted tokens.

Expansion runs in four passes over each expandable token:

1. ``\\$`` is swapped for a sentinel so it can never start a reference.
2. ``${NAME}`` forms are replaced; braces delimit the name exactly.
3. Bare ``$NAME`` forms are resolved with longest-match-with-backoff: the
   maximal identifier run after ``$`` is shrunk from the right until a
   defined name is found. ``$A$Bp`` with ``A`` and ``B`` defined becomes
   the value of ``A``, the value of ``B``, then ``p``.
4. Sentinels turn back into literal ``$``.

Undefined names expand to the empty string in braced form. In bare form
a ``$`` with no defined prefix is kept literally.
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable

from pipeforge.environment import VariableLookup
from pipeforge.tokens import Token

SENTINEL = "\u0001"

_BRACED_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def _protect_escaped_dollars(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        if text[i] == "\\" and i + 1 < len(text) and text[i + 1] == "$":
            out.append(SENTINEL)
            i += 2
            continue
        out.append(text[i])
        i += 1
    return "".join(out)


def _expand_braced(env: VariableLookup, text: str) -> str:
    return _BRACED_RE.sub(lambda m: env.get(m.group(1)) or "", text)


def _longest_defined_name(env: VariableLookup, text: str, start: int) -> tuple[str, int] | None:
    """Find the longest defined name starting at ``start``.

    Returns the value and the index just past the name, or None.
    """
    end = start
    while end < len(text) and text[end] in _NAME_CHARS:
        end += 1

    for stop in range(end, start, -1):
        value = env.get(text[start:stop])
        if value is not None:
            return value, stop
    return None


def _expand_bare(env: VariableLookup, text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "$" and i + 1 < len(text) and text[i + 1] in _NAME_START:
            found = _longest_defined_name(env, text, i + 1)
            if found is not None:
                value, i = found
                out.append(value)
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def expand_text(env: VariableLookup, text: str) -> str:
    """Expand variable references in a single string."""
    result = _protect_escaped_dollars(text)
    result = _expand_braced(env, result)
    result = _expand_bare(env, result)
    return result.replace(SENTINEL, "$")


def expand(env: VariableLookup, tokens: Iterable[Token]) -> list[str]:
    """Expand every token, returning one piece per token in order.

    Raw (single-quoted) tokens are returned untouched.
    """
    return [expand_text(env, t.value) if t.expandable else t.value for t in tokens]
