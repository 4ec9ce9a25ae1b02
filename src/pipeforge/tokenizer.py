"""Split a raw input line into whitespace-delimited tokens."""

from __future__ import annotations

import logging

from pipeforge.errors import QuoteError

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')
BLANKS = (" ", "\t")


def tokenize(line: str) -> list[str]:
    """Split ``line`` on unquoted blanks, keeping quotes and escapes as typed.

    Quote delimiters stay in the token so the classifier can see them, and
    a backslash is kept together with the character it protects. Escape
    meaning is resolved later; here it only stops a blank or quote from
    splitting or closing the token.

    Raises QuoteError if a quote is still open at end of line.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    i = 0

    while i < len(line):
        ch = line[i]

        if quote is None and ch in BLANKS:
            if current:
                tokens.append("".join(current))
                current = []
            i += 1
            continue

        if quote is None and ch in QUOTES:
            quote = ch
            current.append(ch)
            i += 1
            continue

        if quote is not None and ch == quote:
            quote = None
            current.append(ch)
            i += 1
            continue

        if ch == "\\":
            current.append(ch)
            if i + 1 < len(line):
                current.append(line[i + 1])
            i += 2
            continue

        current.append(ch)
        i += 1

    if quote is not None:
        raise QuoteError("unclosed quote")

    if current:
        tokens.append("".join(current))

    logger.debug("Tokenized %d chars into %d tokens", len(line), len(tokens))
    return tokens
