"""Error taxonomy for line processing."""

from __future__ import annotations


class CliError(Exception):
    """Base class for every failure raised while compiling a line."""

    kind: str = "cli"

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind.replace('_', ' ')} error: {self.message}"


class QuoteError(CliError):
    """A `'` or `"` was still open at end of line."""

    kind = "quote"


class EmptyCommandError(CliError):
    """A pipeline segment had no pieces left to name a command."""

    kind = "empty_command"

    def __str__(self) -> str:
        return f"empty command: {self.message}" if self.message else "empty command"


class ExpansionError(CliError):
    # Not raised by the current expander: undefined names expand to "".
    kind = "expansion"
