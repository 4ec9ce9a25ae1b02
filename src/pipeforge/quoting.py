"""Classify raw tokens by quoting mode and strip their delimiters."""

from __future__ import annotations

from collections.abc import Iterable

from pipeforge.tokens import Token, TokenMode


def unescape(text: str) -> str:
    r"""Resolve backslash escapes, keeping ``\$`` intact for the expander.

    ``\X`` becomes ``X`` for every other character; a lone trailing
    backslash is dropped.
    """
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            if i + 1 < len(text):
                nxt = text[i + 1]
                if nxt == "$":
                    out.append("\\$")
                else:
                    out.append(nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _is_wrapped(raw: str, quote: str) -> bool:
    return len(raw) >= 2 and raw.startswith(quote) and raw.endswith(quote)


def classify_token(raw: str) -> Token:
    """Classify a single raw token."""
    if _is_wrapped(raw, "'"):
        return Token(raw[1:-1], TokenMode.RAW)
    if _is_wrapped(raw, '"'):
        return Token(unescape(raw[1:-1]), TokenMode.WEAK)
    return Token(unescape(raw), TokenMode.FULL)


def classify(raw_tokens: Iterable[str]) -> list[Token]:
    """Classify every raw token of one pipeline segment.

    Never fails: unterminated quotes were already rejected by the tokenizer.
    """
    return [classify_token(raw) for raw in raw_tokens]
