"""Top-level entry point: one input line in, a pipeline of descriptors out."""

from __future__ import annotations

import logging

from pipeforge.environment import Environment, VariableLookup
from pipeforge.expander import expand
from pipeforge.producer import CommandDescriptor, produce
from pipeforge.quoting import classify
from pipeforge.splitter import split_on_pipes
from pipeforge.tokenizer import tokenize

logger = logging.getLogger(__name__)


def process(line: str, env: VariableLookup) -> list[CommandDescriptor]:
    """Compile ``line`` into one CommandDescriptor per pipeline segment.

    The environment is only read. The first error aborts the whole line
    and nothing is returned for it.
    """
    segments = split_on_pipes(tokenize(line))
    logger.debug("Line split into %d segment(s)", len(segments))

    commands: list[CommandDescriptor] = []
    for raw_segment in segments:
        pieces = expand(env, classify(raw_segment))
        commands.append(produce(pieces))
    return commands


class InputProcessor:
    """Binds an environment for shells that keep one for the whole session."""

    def __init__(self, env: VariableLookup | None = None) -> None:
        self.environment = env if env is not None else Environment()

    def process(self, line: str) -> list[CommandDescriptor]:
        return process(line, self.environment)
