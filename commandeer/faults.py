"""
Commandeer faults (declaration and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the engine
  can report. Codes are grouped by phase so hosts can branch on them and logs
  stay searchable.
- Fault: base exception that carries a message plus read-only options (code,
  title, hint, offending token/spec) and knows how to render itself with rich.
- DeclarationError / ParseError: the two phases, never conflated.
  • declaration faults are programmer errors in the CLI surface; they are
    raised immediately while the program is being declared.
  • parse faults are user-input errors; the core raises them and the shell
    (Program) decides whether to print help and which exit code to use.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The core raises faults directly (options already carry code/title/hint).
- Program.trigger() merges its runtime flags and calls trigger(fault, ...):
  in non-shell mode the fault is raised, in shell mode it is rendered via rich
  and the process exits with status 1.
"""
import copy
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, palette

console = Console(stderr=True)

_STYLES = {
    "fault-prog": "bold #E6E6F0",
    "fault-code": "bold #00E5FF",
    "fault-title": "bold #FF4DA6",
    "fault-message": "#C8C8D0",
    "fault-arrow": "dim #9CE19C",
    "fault-hint": "italic #9CE19C",
}


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping
    - parse-time (11xxx): user-input errors surfaced while resolving an argv
      • UNKNOWN_OPTION, MISSING_OPTION_VALUE, TOO_FEW_PARAMETERS, TOO_MANY_PARAMETERS
    - declaration-time (21xxx): programmer errors while declaring the surface
      • INVALID_PATTERN, INVALID_PARAMETER_ORDER, DUPLICATE_COMMAND, DUPLICATE_ALIAS
    """
    # --- parse-time: options (111xx) ---
    UNKNOWN_OPTION              = 11111
    MISSING_OPTION_VALUE        = 11117

    # --- parse-time: positionals (112xx) ---
    TOO_FEW_PARAMETERS          = 11121
    TOO_MANY_PARAMETERS         = 11122

    # --- declaration-time: grammar (211xx) ---
    INVALID_PATTERN             = 21101
    INVALID_PARAMETER_ORDER     = 21102

    # --- declaration-time: registry (212xx) ---
    DUPLICATE_COMMAND           = 21201
    DUPLICATE_ALIAS             = 21202

    def normalize(self):
        """
        label for this code: __main__.__codes__[code] when the host maps it,
        otherwise the number as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Fault(Exception):
    """
    base type for every commandeer error.

    carries
    - message: one-sentence, lowercased description of what went wrong.
    - options: read-only mapping with at least 'code', 'title' and 'hint', plus
      whatever context the raiser had (token, pattern, option, command, ...).
      runtime flags (shell, fancy, colorful, prog) are merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        styler, text = palette(_STYLES, colorful=self.options.get("colorful", True))
        prog = self.options.get("prog", getattr(__import__("__main__"), "__prog__", "commandeer"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        title = str(self.options.get("title", "error")).title()

        header = Text.assemble(
            "[ ", text(prog, styler("fault-prog")),
            " | ", text(code, styler("fault-code")),
            " | ", text(title, styler("fault-title")), " ]",
        )
        body = [text(self.message, styler("fault-message"))]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", styler("fault-arrow")), text(hint, styler("fault-hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeclarationError(Fault): ...
class InvalidPatternError(DeclarationError): ...
class InvalidParameterOrderError(DeclarationError): ...
class DuplicateCommandError(DeclarationError): ...
class DuplicateAliasError(DeclarationError): ...


class ParseError(Fault): ...
class UnknownOptionError(ParseError): ...
class MissingOptionValueError(ParseError): ...
class TooFewParametersError(ParseError): ...
class TooManyParametersError(ParseError): ...


def trigger(fault, /, **options):
    """
    merge runtime options into a fault and surface it.

    the fault is copied with copy.replace(fault, **options), then its
    __trigger__ decides: raise (shell=False) or print and exit 1 (shell=True).
    """
    if not all(callable(getattr(fault, name, None)) for name in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    return the host's documentation for a code (__main__.__docs__), or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "Fault",
    "DeclarationError",
    "InvalidPatternError",
    "InvalidParameterOrderError",
    "DuplicateCommandError",
    "DuplicateAliasError",
    "ParseError",
    "UnknownOptionError",
    "MissingOptionValueError",
    "TooFewParametersError",
    "TooManyParametersError",
    "trigger",
    "getdoc",
)
