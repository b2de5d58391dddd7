"""
Argument resolution: classify normalized tokens as option flags, option
values or positional parameters.

resolve(tokens, registry) scans left to right with one pending-option slot:

- "--" sends every following token to the positionals, verbatim.
- a token starting with "-" (a lone "-" excepted, it is a positional by
  convention) names an option; unknown aliases raise UnknownOptionError.
  before it takes the slot, the previous pending option is finalized, and
  MissingOptionValueError is raised if it required a value it never got.
- any other token is the pending option's value when that option takes a
  parameter and has no value yet; otherwise it is a positional.
- at the end of input the pending option is finalized the same way.

Boolean (parameterless) options resolve to True. An option with an optional
parameter and no value resolves to Unset, leaving the default to coercion.
"""
from typing import NamedTuple

from .faults import *
from .tokens import TERMINATOR
from .utils import *


class OptionEntry(NamedTuple):
    """
    one option occurrence: the alias as typed, its resolved value and its spec.
    """
    name: str
    value: object
    option: object


class Resolution(NamedTuple):
    entries: list
    positionals: list
    leftover: list


def _finalize(pending):
    """
    turn the pending option into an entry, or raise if it still needs a value.
    """
    name, option, value = pending
    if option.boolean:
        return OptionEntry(name, True, option)
    if value is Unset and option.parameter.kind.required:
        raise MissingOptionValueError(
            "option %r expects a value for %s" % (name, option.parameter),
            title="missing option value",
            code=FaultCode.MISSING_OPTION_VALUE,
            hint="pass it as '%s <value>' or '%s=<value>'" % (name, name),
            token=name,
            option=option,
        )
    return OptionEntry(name, value, option)


def resolve(tokens, registry, /):
    """
    split normalized tokens into option entries and raw positionals.

    returns Resolution(entries, positionals, leftover) where leftover holds the
    tokens that followed a "--" terminator (they are also in positionals).
    """
    entries = []
    positionals = []
    leftover = []
    pending = None  # (name, option, value)

    iterator = iter(tokens)
    for token in iterator:
        if token == TERMINATOR:
            leftover.extend(iterator)
            positionals.extend(leftover)
            break

        if token.startswith("-") and token != "-":
            if pending is not None:
                entries.append(_finalize(pending))
            try:
                option = registry.lookup(token)
            except KeyError:
                raise UnknownOptionError(
                    "unknown option %r" % token,
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    hint="run with --help to see the available options, or put '--' before values that start with '-'",
                    token=token,
                ) from None
            pending = (token, option, Unset)
            if option.boolean:
                entries.append(_finalize(pending))
                pending = None
            continue

        if pending is not None:
            name, option, _ = pending
            entries.append(OptionEntry(name, token, option))
            pending = None
            continue

        positionals.append(token)

    if pending is not None:
        entries.append(_finalize(pending))

    return Resolution(entries, positionals, leftover)


__all__ = (
    "OptionEntry",
    "Resolution",
    "resolve",
)
