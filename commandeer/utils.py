"""
Small shared helpers for the commandeer package.

- Unset: the "not declared" sentinel. Option defaults use it so that None stays
  a legitimate default value.
- coalesce(): materialize Unset into a fallback.
- rename(): give generated callables readable names in tracebacks.
- mirror(): read-only property over a "_name" backing field, returning frozen
  views of containers.
- pluralize(): English plurals for fault messages.
- keyify(): alias → identifier, used to build callback namespaces.
- palette(): styler/text helpers shared by the rich renderers.

    >>> coalesce(Unset, "dev")
    'dev'
    >>> keyify("--dry-run")
    'dry_run'
"""
import builtins
import functools
import re
from collections import defaultdict
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final

from rich.text import Text


@final
class UnsetType:
    """
    Type of the Unset sentinel (one instance per process, falsey, sealed).

    An OptionSpec declared without a default keeps Unset; coercion then leaves
    the option out of the parsed map instead of reporting None.
    """

    def __or__(self, other, /):
        # lets "str | Unset" be used in isinstance() checks
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object, or default when object is Unset.

    Only Unset is replaced: None, 0 and "" come back untouched.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Set __name__ and __qualname__ on a callable.

    rename(callable, name) renames in place and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")
        return lambda target: rename(target, name)

    if len(parameters) != 2:
        raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))

    target, name = parameters
    if not builtins.callable(target):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    try:
        target.__name__ = target.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() first argument must be an updatable callable") from None
    return target


def _freeze(value):
    if isinstance(value, Mapping):
        return MappingProxyType(value)
    if isinstance(value, Set):
        return frozenset(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return tuple(value)
    return value


def mirror(name, /):
    """
    Read-only property exposing self._<name>; lists come back as tuples,
    dicts as mapping proxies and sets as frozensets.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    field = "_" + name

    def getter(self):
        return _freeze(getattr(self, field))

    return property(rename(getter, name))


_IRREGULARS = {
    "child": "children",
    "person": "people",
    "index": "indices",
    "matrix": "matrices",
}


@functools.cache
def pluralize(text, /):
    """
    Pluralize the last word of text, keeping its casing.

    pluralize("parameter") -> "parameters", pluralize("Entry") -> "Entries",
    pluralize("command option") -> "command options".
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")
    if (match := re.search(r"(\S+)(\s*)$", text)) is None:
        return text

    word = match[1]
    lower = word.lower()
    if lower in _IRREGULARS:
        plural = _IRREGULARS[lower]
    elif lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif len(lower) > 1 and lower.endswith("y") and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    elif len(lower) > 2 and lower.endswith("fe"):
        plural = lower[:-2] + "ves"
    elif len(lower) > 1 and lower.endswith("f"):
        plural = lower[:-1] + "ves"
    else:
        plural = lower + "s"

    if len(word) > 1 and word.isupper():
        plural = plural.upper()
    elif word[0].isupper():
        plural = plural[0].upper() + plural[1:]
    return text[:match.start(1)] + plural + match[2]


def palette(defaults, /, *, colorful=True):
    """
    Build the (styler, text) pair used by every rich renderer in the package.

    defaults are merged with the host's __styles__ (from __main__), unknown
    style names resolve to "". With colorful=False both helpers drop styles.
    """
    styles = defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))

    def styler(name):
        return styles[name] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


@functools.cache
def keyify(alias, /):
    """
    Turn a flag alias into a namespace key: "--dry-run" → "dry_run", "-v" → "v".

    Casing is preserved.
    """
    if not isinstance(alias, str):
        raise TypeError("keyify() argument must be a string")
    if not (key := alias.lstrip("-")):
        raise ValueError("keyify() argument must contain a name after the dashes")
    return key.replace("-", "_")


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "keyify",
    "palette",
    "UnsetType",
    "Unset",
)
