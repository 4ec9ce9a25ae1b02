"""pipeforge - compile shell input lines into command descriptors."""

from pipeforge.environment import Environment, VariableLookup
from pipeforge.errors import CliError, EmptyCommandError, ExpansionError, QuoteError
from pipeforge.processor import InputProcessor, process
from pipeforge.producer import CommandDescriptor, Redirect
from pipeforge.tokens import Token, TokenMode

__version__ = "0.3.0"

__all__ = [
    "CliError",
    "CommandDescriptor",
    "EmptyCommandError",
    "Environment",
    "ExpansionError",
    "InputProcessor",
    "QuoteError",
    "Redirect",
    "Token",
    "TokenMode",
    "VariableLookup",
    "process",
]
