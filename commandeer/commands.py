"""
Commandeer program layer: declare, render and run a command-line surface.

What this module provides
- Program: the declaration object application code talks to.
  • command(pattern, descr, callback) / option(pattern, descr, default) feed
    the program's own Registry (fluent, each call returns the program).
  • set_version / set_description / set_default_handler fill the metadata.
  • parse(argv) runs the pure parse pipeline and returns a ParseResult.
  • run(argv) parses and dispatches: version and help short-circuit, then the
    matched command's callback (or the default handler) is called with the
    option namespace and the positional parameters.
  • Rich-based help and version rendering, color-aware and palette-driven.

- invoke(object, prompt): convenience runner for anything with __invoke__.

Quick start
    from commandeer import Program

    def add(options, *files):
        print("adding", files, "verbosely" if options["verbose"] else "")

    program = (
        Program("git")
        .set_version("0.0.1")
        .option("-v, --verbose", "Enable verbosity", False)
        .command("add [files ...]", "Add file contents to the index", add)
    )

    if __name__ == "__main__":
        program.run()

Dispatch policy (run)
- parse faults: shell mode prints the help and the fault to stderr and exits
  with status 1; otherwise the fault is raised.
- --version: print the version (exit 0 in shell mode).
- --help, or nothing to call: print the help (exit 0 when asked for, 1 when
  there was nothing to run).
- otherwise: callback(namespace, *parameters), where namespace maps
  keyify(alias) → value for every option in the parse result.
"""
import builtins
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .faults import *
from .parser import parse
from .registry import Registry
from .utils import *


_STYLES = {
    # usage and description
    "usage-label": "bold #00E6FF",
    "program-name": "bold #FF4D94",
    "usage-section": "bold #36C5F0",
    "description-section": "italic #A3A3A3",

    # tables
    "table-title": "bold #FFFFFF",
    "table-border": "#4B5563",
    "option-name": "bold #00E6FF",
    "command-name": "bold #36C5F0",
    "metavar": "bold #FFD600",
    "variadic-metavar": "bold italic #FFD600",
    "argument-description": "#9CA3AF",
    "default-value": "#22C55E",
    "scope": "#737373",

    "version": "bold #22C55E",
    "panel-title": "bold #FF4D94",
}


class Program:
    """
    High-level program object owning one Registry.

    Responsibilities
    - Declaration: fluent command()/option() wrappers around the registry,
      plus version/description/default-handler metadata.
    - Parsing: parse(argv) delegates to commandeer.parser.parse.
    - Rendering: help/version output via Rich (see _helper/_versioner).
    - Invocation: run(argv) (alias __invoke__) dispatches the parse result.

    Runtime flags
    - shell: when True, faults are printed and the process exits; when False,
      faults are raised and nothing exits (useful for embedding and tests).
    - fancy: wrap help and faults in Rich panels.
    - colorful: apply the palette; when False, output is plain text.
    """

    @property
    def name(self):
        """
        The declared name, else __main__.__prog__, else the script basename.
        """
        if self._name is not Unset:
            return self._name
        fallback = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "commandeer"
        return getattr(__import__("__main__"), "__prog__", fallback)

    descr = mirror("descr")
    version = mirror("version")
    registry = mirror("registry")
    fallback = mirror("fallback")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, /, *, shell=True, fancy=False, colorful=True):
        if not isinstance(name, str | Unset):
            raise TypeError("program 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("program 'name' cannot be empty")

        self._name = name
        self._descr = None
        self._version = None
        self._fallback = None
        self._registry = Registry()
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        self._registry.option("--help", "Print usage information")
        self._registry.option("--version", "Print version information")

    def __repr__(self):
        return "program(name=%r, version=%r, registry=%r)" % (self.name, self._version, self._registry)

    def command(self, pattern, descr=Unset, callback=None, /):
        """
        Declare a (sub)command from a pattern such as "remote.add <addr>".

        Options declared right after it belong to this command.
        """
        if not isinstance(pattern, str):
            raise TypeError("program command pattern must be a string")
        if callback is not None and not builtins.callable(callback):
            raise TypeError("program command callback must be callable")
        self._registry.command(pattern, descr, callback)
        return self

    def option(self, pattern, descr=Unset, default=Unset, /):
        """
        Declare an option from a pattern such as "-c, --config <key>".

        The option is global when declared before any command, otherwise it
        belongs to the most recently declared command.
        """
        if not isinstance(pattern, str):
            raise TypeError("program option pattern must be a string")
        self._registry.option(pattern, descr, default)
        return self

    def set_version(self, version, /):
        if not isinstance(version, str):
            raise TypeError("program version must be a string")
        elif not (version := version.strip()):
            raise ValueError("program version cannot be empty")
        self._version = version
        return self

    def set_description(self, descr, /):
        if not isinstance(descr, str):
            raise TypeError("program description must be a string")
        elif not (descr := descr.strip()):
            raise ValueError("program description cannot be empty")
        self._descr = descr
        return self

    def set_default_handler(self, callback, /):
        """
        Register the handler called when no command matches.

        It receives the option namespace followed by every positional token.
        """
        if not builtins.callable(callback):
            raise TypeError("program default handler must be callable")
        self._fallback = callback
        return self

    def parse(self, argv, /):
        """
        Resolve argv (program path excluded) without printing or exiting.
        """
        return parse(argv, self._registry)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this program's runtime flags merged in.

        In shell mode the help is printed to stderr first, then the fault is
        rendered and the process exits; otherwise the fault is raised.
        """
        if self._shell:
            self._helper(stderr=True)
        trigger(
            fault,
            **options,
            prog=self.name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def _exit(self, status):
        if self._shell:
            sys.exit(status)

    def _tokenize(self, prompt):
        """
        Normalize the run() input into a list of argv tokens.

        - Unset: sys.argv[1:].
        - str: shell-style split (shlex.split).
        - Iterable[str]: used as-is (items are not trimmed; argv is exact).
        """
        if prompt is Unset:
            return sys.argv[1:]
        if isinstance(prompt, str):
            return shlex.split(prompt)
        if isinstance(prompt, Iterable):
            tokens = list(prompt)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("run() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("run() argument must be a string or an iterable of strings")

    def run(self, argv=Unset, /):
        """
        Parse argv and dispatch it; returns whatever the called handler returns.
        """
        tokens = self._tokenize(argv)
        try:
            result = self.parse(tokens)
        except ParseError as fault:
            return self.trigger(fault)

        if result.options.get("--version"):
            self._versioner()
            return self._exit(0)

        if result.command is not None:
            callback = result.command.callback
        else:
            callback = self._fallback

        if result.options.get("--help") or callback is None:
            asked = bool(result.options.get("--help"))
            self._helper(stderr=not asked)
            return self._exit(0 if asked else 1)

        namespace = {keyify(alias): value for alias, value in result.options.items()}
        return callback(namespace, *result.parameters)

    __invoke__ = run

    def _render(self):
        """
        Build the help renderable: usage, description, options and commands.
        """
        styler, text = palette(_STYLES, colorful=self._colorful)

        def metavar(parameter):
            return text(str(parameter), styler("variadic-metavar" if parameter.kind.variadic else "metavar"))

        renders = []

        usage = Text()
        usage.append("usage", styler("usage-label")).append(":")
        usage.append(" ")
        usage.append(text(self.name, styler("program-name")))
        if self._registry.commands:
            usage.append(" ").append(text("[command ...]", styler("usage-section")))
        if self._registry.options:
            usage.append(" ").append(text("[options]", styler("usage-section")))
        renders.append(usage.append("\n"))

        if self._descr:
            renders.append(text(self._descr, styler("description-section")).append("\n"))

        if options := self._registry.options:
            table = Table(
                "aliases", "parameter", "help", "default",
                title=text("options", styler("table-title")),
                box=ROUNDED,
                style=styler("table-border"),
                header_style=styler("table-title"),
            )
            for option in options:
                # short aliases first, then long ones, each group in declaration order
                aliases = sorted(option.aliases, key=lambda alias: alias.startswith("--"))
                descr = text(option.descr, styler("argument-description"))
                if option.scope:
                    descr = Text.assemble(descr, " " if descr else "", text("(%s)" % " ".join(option.scope), styler("scope")))
                table.add_row(
                    Text(", ").join(text(alias, styler("option-name")) for alias in aliases),
                    metavar(option.parameter) if option.parameter is not None else Text(""),
                    descr,
                    text(repr(option.default), styler("default-value")) if option.default is not Unset else Text(""),
                )
            renders.append(table)

        if commands := self._registry.commands:
            table = Table(
                "command", "parameters", "help",
                title=text("commands", styler("table-title")),
                box=ROUNDED,
                style=styler("table-border"),
                header_style=styler("table-title"),
            )
            for command in commands.values():
                table.add_row(
                    text(" ".join(command.path), styler("command-name")),
                    Text(" ").join(metavar(parameter) for parameter in command.parameters),
                    text(command.descr, styler("argument-description")),
                )
            renders.append(table)

        renderable = Group(*renders)
        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.name} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )
        return renderable

    def _helper(self, *, stderr=False):
        """
        Render the help to stdout (or stderr when reporting a problem).
        """
        Console(stderr=stderr).print(self._render())

    def _versioner(self):
        """
        Render "<name> <version>" to stdout.
        """
        styler, text = palette(_STYLES, colorful=self._colorful)
        Console().print(Text.assemble(
            text(self.name, styler("program-name")),
            " ",
            text(self._version or "unknown", styler("version")),
        ))

    def format_help(self, *, width=80):
        """
        Return the help as plain text (no colors), e.g. for embedding or tests.
        """
        console = Console(width=width, color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self._render())
        return capture.get()


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for programs.

    - object: anything providing __invoke__(prompt) (a Program, typically).
    - prompt: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Program",
    "invoke",
)
