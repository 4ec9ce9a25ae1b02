"""Build a command descriptor from the expanded pieces of one segment."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from pipeforge.errors import EmptyCommandError

logger = logging.getLogger(__name__)


class Stream(str, Enum):
    STDIN = "stdin"
    STDOUT = "stdout"
    STDERR = "stderr"


# operator -> (stream, append)
REDIRECTIONS: dict[str, tuple[Stream, bool]] = {
    "<": (Stream.STDIN, False),
    "0<": (Stream.STDIN, False),
    ">": (Stream.STDOUT, False),
    "1>": (Stream.STDOUT, False),
    ">>": (Stream.STDOUT, True),
    "1>>": (Stream.STDOUT, True),
    "2>": (Stream.STDERR, False),
    "2>>": (Stream.STDERR, True),
}

_FD_REDIRECT_RE = re.compile(r"^([0-9]+)>>?$")
FIRST_UNMODELED_FD = 3


@dataclass(frozen=True)
class Redirect:
    path: str
    append: bool = False


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    args: tuple[str, ...] = ()
    stdin: str | None = None
    stdout: Redirect | None = None
    stderr: Redirect | None = None

    @property
    def append_stdout(self) -> bool:
        return self.stdout is not None and self.stdout.append

    @property
    def append_stderr(self) -> bool:
        return self.stderr is not None and self.stderr.append

    def to_dict(self) -> dict:
        """Plain-data form for JSON output."""
        return {
            "name": self.name,
            "args": list(self.args),
            "stdin": self.stdin,
            "stdout": _redirect_to_dict(self.stdout),
            "stderr": _redirect_to_dict(self.stderr),
        }


def _redirect_to_dict(redirect: Redirect | None) -> dict | None:
    if redirect is None:
        return None
    return {"path": redirect.path, "append": redirect.append}


def is_unmodeled_fd_redirect(piece: str) -> bool:
    """True for ``N>`` or ``N>>`` where N names a descriptor above stderr."""
    m = _FD_REDIRECT_RE.match(piece)
    return m is not None and int(m.group(1)) >= FIRST_UNMODELED_FD


def produce(pieces: Sequence[str]) -> CommandDescriptor:
    """Turn one segment's expanded pieces into a CommandDescriptor.

    The first piece names the command. Redirection operators consume the
    following piece as their target; a later redirection of the same
    stream replaces an earlier one. ``N>``/``N>>`` for N >= 3 is not
    modelled and stays in ``args`` together with its target.

    Raises EmptyCommandError if there are no pieces, if the first piece is
    empty, or if the segment opens with a redirection operator (including
    an unmodelled ``N>``) instead of a command name.
    """
    if not pieces or not pieces[0]:
        raise EmptyCommandError()
    if pieces[0] in REDIRECTIONS or is_unmodeled_fd_redirect(pieces[0]):
        raise EmptyCommandError(f"no command name before {pieces[0]!r}")

    name = pieces[0]
    args: list[str] = []
    stdin: str | None = None
    stdout: Redirect | None = None
    stderr: Redirect | None = None

    i = 1
    while i < len(pieces):
        piece = pieces[i]
        target = pieces[i + 1] if i + 1 < len(pieces) else None

        if piece in REDIRECTIONS:
            stream, append = REDIRECTIONS[piece]
            if stream is Stream.STDIN:
                stdin = target
            elif stream is Stream.STDOUT:
                stdout = Redirect(target, append) if target is not None else None
            else:
                stderr = Redirect(target, append) if target is not None else None
            i += 2
            continue

        if is_unmodeled_fd_redirect(piece):
            logger.debug("Redirection %r is not supported, keeping it as arguments", piece)
            args.append(piece)
            if target is not None:
                args.append(target)
            i += 2
            continue

        args.append(piece)
        i += 1

    return CommandDescriptor(name=name, args=tuple(args), stdin=stdin, stdout=stdout, stderr=stderr)
