"""
Value coercion: turn resolved option entries into the final option map.

coerce(option, supplied) applies the rules for one option:
- no parameter: True when present, else the declared default (False when none).
- with a parameter: the supplied value, else the declared default (Unset when
  none, which keeps the key out of the map).
Options never take more than one value, so no lists are produced here.

collect(entries, registry, command) builds the map keyed by every alias:
- each supplied option maps all of its aliases to its coerced value; a later
  occurrence overrides an earlier one.
- options that were not supplied contribute their default only when they are
  in scope for the matched command (global, or owned by the command or one of
  its parents).
"""
from .utils import *


def coerce(option, supplied=Unset, /, *, present=Unset):
    """
    return the final value of one option, or Unset when it has none.

    parameters
    - option: OptionSpec.
    - supplied: the resolved value (Unset when the option was absent or took
      no value).
    - present: whether the option appeared on the command line; defaults to
      "supplied is not Unset".
    """
    present = coalesce(present, supplied is not Unset)
    if option.boolean:
        if present:
            return True
        return coalesce(option.default, False)
    if supplied is not Unset:
        return supplied
    return option.default


def collect(entries, registry, command=None, /):
    """
    return the option map (alias → value) for one invocation.
    """
    options = {}
    for option in registry.scoped(command):
        if (value := coerce(option)) is not Unset:
            options.update(dict.fromkeys(option.aliases, value))

    for entry in entries:
        if (value := coerce(entry.option, entry.value, present=True)) is not Unset:
            options.update(dict.fromkeys(entry.option.aliases, value))
        else:
            # an optional parameter with no value and no default: present, but valueless
            options.update(dict.fromkeys(entry.option.aliases, None))
    return options


__all__ = (
    "coerce",
    "collect",
)
