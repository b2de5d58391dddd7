"""
The parse pipeline: raw argv in, ParseResult out.

    argv ─ normalize ─ resolve ─ match ─ validate ─ collect ─▶ ParseResult

parse() never prints and never exits. Parse-time faults (UnknownOptionError,
MissingOptionValueError, TooFewParametersError, TooManyParametersError) are
raised for the caller to handle; Program.run() is the caller that renders them.
"""
import logging
from types import MappingProxyType
from typing import NamedTuple

from .coercion import collect
from .matcher import match
from .registry import Registry
from .resolver import resolve
from .tokens import normalize
from .validation import validate

logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    """
    outcome of one parse.

    - options: read-only mapping of alias → value (every alias of an option is a key).
    - command: the matched CommandSpec, or None when no command matched.
    - parameters: positional values for the command (or all positionals when
      no command matched).
    - leftover: tokens that followed a "--" terminator, verbatim.
    """
    options: MappingProxyType
    command: object
    parameters: tuple
    leftover: tuple


def parse(argv, registry, /):
    """
    resolve an argument vector (program path excluded) against a registry.
    """
    if not isinstance(registry, Registry):
        raise TypeError("parse() second argument must be a registry")

    tokens = normalize(argv)
    entries, positionals, leftover = resolve(tokens, registry)
    command, parameters = match(positionals, registry)
    if command is not None:
        validate(parameters, command.parameters, command=command)

    result = ParseResult(
        MappingProxyType(collect(entries, registry, command)),
        command,
        tuple(parameters),
        tuple(leftover),
    )
    logger.debug(
        "parsed %d tokens: command=%r, %d parameters, %d option entries",
        len(tokens),
        command.name if command is not None else None,
        len(result.parameters),
        len(entries),
    )
    return result


__all__ = (
    "ParseResult",
    "parse",
)
