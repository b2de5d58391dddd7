"""
Commandeer specifications (the declaration-time data model).

Overview
- ParameterKind: tagged variant for the four parameter shapes
  (required, optional, required-variadic, optional-variadic).
- ParameterSpec: one named positional slot of a command or an option.
- OptionSpec: one option with its aliases, at most one non-variadic parameter,
  a description, a default and the scope (command path) it belongs to.
- CommandSpec: one (sub)command path with its ordered parameters, description
  and callback.

Introspection & representation
- SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties (see mirror()).
- Specs are immutable once built; copy.replace() produces an updated copy
  through __replace__ (the registry uses it to bind an option to its scope).

Validation highlights (sanitized on construction)
- descr: Unset | str, trimmed; Unset and blank strings become None.
- aliases: one or more distinct strings starting with '-'.
- OptionSpec.parameter: None or a non-variadic ParameterSpec.
- CommandSpec.path: one or more non-empty segments ("remote.add" is accepted
  and split on dots).
- CommandSpec.parameters: ordered per validate_order() (no required after an
  optional, variadic only in last position).

Shape knowledge (which strings make which kind) lives in grammar.py only.
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable
from enum import Enum

from .utils import *
from .validation import validate_order


class ParameterKind(Enum):
    """
    the four parameter shapes of the pattern grammar.

    - REQUIRED            <name>
    - OPTIONAL            [name]
    - REQUIRED_VARIADIC   <name ...>
    - OPTIONAL_VARIADIC   [name ...]
    """
    REQUIRED = "required"
    OPTIONAL = "optional"
    REQUIRED_VARIADIC = "required-variadic"
    OPTIONAL_VARIADIC = "optional-variadic"

    @property
    def required(self):
        return self in (ParameterKind.REQUIRED, ParameterKind.REQUIRED_VARIADIC)

    @property
    def variadic(self):
        return self in (ParameterKind.REQUIRED_VARIADIC, ParameterKind.OPTIONAL_VARIADIC)

    def render(self, name, /):
        """
        render a parameter name back into its pattern form, e.g. "<addr>" or "[files ...]".
        """
        opening, closing = ("<", ">") if self.required else ("[", "]")
        return f"{opening}{name}{' ...' if self.variadic else ''}{closing}"


class SpecType(type):
    """
    Metaclass that turns spec classes into introspectable, read-only records.

    Responsibilities
    - Derive __typename__ from the class name ("OptionSpec" → "option-spec") for messages.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Seal the resulting classes against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_descr(cls, descr, /):
    """
    Internal: normalize the shared 'descr' field (Unset and blank → None, trimmed).
    """
    if descr is None:  # already sanitized (copy.replace round-trip)
        return None
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    if isinstance(descr, str):
        return descr.strip() or None
    return None


def _sanitize_path(cls, path, /):
    """
    Internal: normalize a command path (or an option scope) into a tuple of segments.

    A string is split on dots; any other iterable must yield non-empty strings.
    """
    if isinstance(path, str):
        path = path.split(".")
    if not isinstance(path, Iterable):
        raise TypeError(f"{cls.__typename__} path must be a string or an iterable of strings")
    segments = []
    for segment in path:
        if not isinstance(segment, str):
            raise TypeError(f"{cls.__typename__} path segments must be strings")
        elif not segment.strip():
            raise ValueError(f"{cls.__typename__} path segments cannot be empty")
        segments.append(segment.strip())
    return tuple(segments)


class ParameterSpec(metaclass=SpecType):
    """
    one positional slot: its kind (shape) and its name.

    two specs are equal when their kind and name are equal.
    """

    __introspectable__ = (
        "kind",
        "name",
    )

    def __new__(cls, kind, name, /):
        if not isinstance(kind, ParameterKind):
            raise TypeError(f"{cls.__typename__} 'kind' must be a parameter-kind")
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

        self = super().__new__(cls)
        self._kind = kind
        self._name = name
        return self

    def __eq__(self, other):
        if not isinstance(other, ParameterSpec):
            return NotImplemented
        return (self.kind, self.name) == (other.kind, other.name)

    def __hash__(self):
        return hash((self.kind, self.name))

    def __str__(self):
        return self.kind.render(self.name)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(overrides.get("kind", self.kind), overrides.get("name", self.name))


class OptionSpec(metaclass=SpecType):
    """
    one option: aliases, at most one parameter, description, default and scope.

    fields
    - aliases: tuple[str, ...], ordered and distinct ("-v", "--verbose").
    - parameter: ParameterSpec | None; never variadic.
    - descr: str | None.
    - default: any value, or Unset when the option was declared without one.
    - scope: tuple[str, ...] path of the owning command; () means global.
      Unset until the registry binds it.
    """

    __introspectable__ = (
        "aliases",
        "parameter",
        "descr",
        "default",
        "scope",
    )

    def __new__(cls, aliases, /, parameter=None, descr=Unset, default=Unset, scope=Unset):
        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise TypeError(f"{cls.__typename__} aliases must be an iterable of strings")

        sanitized = []
        for alias in aliases:
            if not isinstance(alias, str):
                raise TypeError(f"{cls.__typename__} aliases must be strings")
            elif not alias.startswith("-") or not alias.strip("-"):
                raise ValueError(f"{cls.__typename__} alias {alias!r} must be a dash-prefixed name")
            elif alias in sanitized:
                raise ValueError(f"{cls.__typename__} aliases cannot contain duplicates")
            sanitized.append(alias)
        if not sanitized:
            raise TypeError(f"{cls.__typename__} must specify at least one alias")

        if parameter is not None and not isinstance(parameter, ParameterSpec):
            raise TypeError(f"{cls.__typename__} 'parameter' must be a parameter-spec")
        if parameter is not None and parameter.kind.variadic:
            raise ValueError(f"{cls.__typename__} 'parameter' cannot be variadic")

        self = super().__new__(cls)
        self._aliases = tuple(sanitized)
        self._parameter = parameter
        self._descr = _sanitize_descr(cls, descr)
        self._default = default
        self._scope = scope if scope is Unset else _sanitize_path(cls, scope)
        return self

    @property
    def name(self):
        """
        the most descriptive alias (the longest one, first declared on ties).
        """
        return max(self._aliases, key=len)

    @property
    def boolean(self):
        """
        True for presence-only options (no parameter).
        """
        return self._parameter is None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fields = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | overrides
        return type(self)(fields.pop("aliases"), **fields)


class CommandSpec(metaclass=SpecType):
    """
    one (sub)command: its path, ordered parameters, description and callback.

    fields
    - path: tuple[str, ...], e.g. ("remote", "add") for "remote.add".
    - parameters: tuple[ParameterSpec, ...] in declaration order.
    - descr: str | None.
    - callback: callable | None.
    """

    __introspectable__ = (
        "path",
        "parameters",
        "descr",
        "callback",
    )

    def __new__(cls, path, /, parameters=(), descr=Unset, callback=None):
        path = _sanitize_path(cls, path)
        if not path:
            raise ValueError(f"{cls.__typename__} path cannot be empty")

        if not isinstance(parameters, Iterable):
            raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable of parameter-specs")
        parameters = tuple(parameters)
        if not all(isinstance(parameter, ParameterSpec) for parameter in parameters):
            raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable of parameter-specs")
        validate_order(parameters, source=".".join(path))

        if callback is not None and not builtins.callable(callback):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")

        self = super().__new__(cls)
        self._path = path
        self._parameters = parameters
        self._descr = _sanitize_descr(cls, descr)
        self._callback = callback
        return self

    @property
    def name(self):
        return ".".join(self._path)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fields = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | overrides
        return type(self)(fields.pop("path"), **fields)


__all__ = (
    "ParameterKind",
    "ParameterSpec",
    "OptionSpec",
    "CommandSpec",
)
