r"""
Commandeer declaration grammar.

Patterns
- command:  name[.sub]* followed by parameter chunks
    "init"
    "add [files ...]"
    "remote.add <addr>"
- option:   one or more aliases followed by at most one parameter chunk
    "-v, --verbose"
    "-c --config <key>"
    "--color [when]"

Chunking
- chunks are separated by commas and/or whitespace, mixed freely
  ("-c, --config <key>" == "-c --config,<key>").
- a bracketed chunk keeps its inner whitespace, so "<files ...>" is one chunk.

Parameter shapes (the single place where shapes are recognized)
    <name>        required
    [name]        optional
    <name ...>    required-variadic   (the space before "..." is optional)
    [name ...]    optional-variadic

Alias shapes
    -x            one letter or digit
    --long-name   letters/digits in dash-separated segments

Faults
- InvalidPatternError for anything that does not fit the grammar.
- InvalidParameterOrderError for ordering problems (see validation.validate_order).
"""
import functools
import re
from typing import NamedTuple

from .faults import *
from .specs import ParameterKind, ParameterSpec
from .validation import validate_order

_CHUNKS = re.compile(r"""
    (?P<separator>[\s,]+)
  | (?P<chunk>(?:<[^<>]*>|\[[^\[\]]*\]|[^\s,<>\[\]])+)
  | (?P<stray>.)
""", re.VERBOSE | re.DOTALL)

_NAME = r"[^\s<>\[\]]*[^\s<>\[\].]"

_SHAPES = (
    # variadic shapes first so "<files...>" is never read as a name ending in dots
    (ParameterKind.REQUIRED_VARIADIC, re.compile(rf"<(?P<name>{_NAME})\s*\.\.\.>")),
    (ParameterKind.OPTIONAL_VARIADIC, re.compile(rf"\[(?P<name>{_NAME})\s*\.\.\.\]")),
    (ParameterKind.REQUIRED, re.compile(rf"<(?P<name>{_NAME})>")),
    (ParameterKind.OPTIONAL, re.compile(rf"\[(?P<name>{_NAME})\]")),
)

ALIAS = re.compile(r"-[A-Za-z0-9]|--[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*")

_SEGMENT = re.compile(r"\w[\w-]*")


class CommandPattern(NamedTuple):
    path: tuple
    parameters: tuple


class OptionPattern(NamedTuple):
    aliases: tuple
    parameter: ParameterSpec | None


def _invalid(pattern, reason, hint, **options):
    return InvalidPatternError(
        "pattern %r is invalid because %s" % (pattern, reason),
        title="invalid pattern",
        code=FaultCode.INVALID_PATTERN,
        hint=hint,
        pattern=pattern,
        **options
    )


def chunks(pattern, /):
    """
    split a pattern into its chunks.

    raises InvalidPatternError on unbalanced brackets.
    """
    if not isinstance(pattern, str):
        raise TypeError("pattern must be a string")
    result = []
    for match in _CHUNKS.finditer(pattern):
        if match["stray"] is not None:
            raise _invalid(
                pattern,
                "%r at offset %d is not part of any chunk" % (match["stray"], match.start()),
                "check that every '<' and '[' has a matching '>' or ']'",
                token=match["stray"],
            )
        if match["chunk"] is not None:
            result.append(match["chunk"])
    return result


@functools.cache
def classify(chunk, /):
    """
    recognize one parameter chunk.

    returns
    - ParameterSpec when the chunk matches one of the four shapes.
    - None otherwise.
    """
    for kind, shape in _SHAPES:
        if match := shape.fullmatch(chunk):
            return ParameterSpec(kind, match["name"])
    return None


def _parameter(pattern, chunk):
    if (parameter := classify(chunk)) is None:
        raise _invalid(
            pattern,
            "%r is not a parameter" % chunk,
            "write parameters as <name>, [name], <name ...> or [name ...]",
            token=chunk,
        )
    return parameter


def parse_command_pattern(pattern, /):
    """
    parse a command pattern into its path and ordered parameters.

    examples
    - "remote.add <addr>" → CommandPattern(("remote", "add"), (<addr>,))
    - "add [files ...]"   → CommandPattern(("add",), ([files ...],))
    """
    parts = chunks(pattern)
    if not parts:
        raise _invalid(pattern, "it has no command name", "start the pattern with a name, e.g. 'remote.add <addr>'")

    name, *rest = parts
    path = tuple(name.split("."))
    for segment in path:
        if not _SEGMENT.fullmatch(segment):
            raise _invalid(
                pattern,
                "%r is not a valid command path" % name,
                "use dot-separated names, e.g. 'remote.add'",
                token=name,
            )

    parameters = tuple(_parameter(pattern, chunk) for chunk in rest)
    validate_order(parameters, source=pattern)
    return CommandPattern(path, parameters)


def parse_option_pattern(pattern, /):
    """
    parse an option pattern into its aliases and optional parameter.

    examples
    - "-v, --verbose"        → OptionPattern(("-v", "--verbose"), None)
    - "-c, --config <key>"   → OptionPattern(("-c", "--config"), <key>)
    """
    aliases = []
    parameters = []
    for chunk in chunks(pattern):
        if chunk.startswith("-"):
            if parameters:
                raise _invalid(
                    pattern,
                    "alias %r appears after a parameter" % chunk,
                    "list every alias before the parameter",
                    token=chunk,
                )
            if not ALIAS.fullmatch(chunk):
                raise _invalid(
                    pattern,
                    "%r is not a valid alias" % chunk,
                    "use -x for short aliases and --long-name for long ones",
                    token=chunk,
                )
            if chunk in aliases:
                raise _invalid(
                    pattern,
                    "alias %r is repeated" % chunk,
                    "keep a single %r" % chunk,
                    token=chunk,
                )
            aliases.append(chunk)
        else:
            parameters.append(_parameter(pattern, chunk))

    if not aliases:
        raise _invalid(pattern, "it has no alias", "start the pattern with an alias, e.g. '-v, --verbose'")
    if len(parameters) > 1:
        raise _invalid(
            pattern,
            "options take at most one parameter",
            "keep a single parameter, e.g. '%s %s'" % (aliases[-1], parameters[0]),
            token=str(parameters[1]),
        )
    if parameters and parameters[0].kind.variadic:
        raise _invalid(
            pattern,
            "option parameters cannot be variadic",
            "use %r instead" % parameters[0].kind.render(parameters[0].name).replace(" ...", ""),
            token=str(parameters[0]),
        )

    return OptionPattern(tuple(aliases), parameters[0] if parameters else None)


__all__ = (
    "CommandPattern",
    "OptionPattern",
    "ALIAS",
    "chunks",
    "classify",
    "parse_command_pattern",
    "parse_option_pattern",
)
