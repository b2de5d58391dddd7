"""
Declaration registry: the commands and options of one command-line surface.

Responsibilities
- Accumulate CommandSpec/OptionSpec entries while the program is declared.
- Enforce uniqueness: one command per path, one option per alias.
- Track the current scope (path of the most recently registered command) so
  options declared right after a command belong to it; options declared
  before any command are global.
- Keep a single alias → OptionSpec index, updated on every registration, so
  resolution never rescans the option list per token.

Ownership
- A Registry is an explicit object owned by the caller (usually a Program).
  There is no module-level instance. It is mutated during declaration only and
  treated as read-only once parsing starts.
"""
import copy
import logging

from .faults import *
from .grammar import parse_command_pattern, parse_option_pattern
from .specs import CommandSpec, OptionSpec
from .utils import *

logger = logging.getLogger(__name__)


class Registry:
    """
    commands and options of one command-line surface.

    read-only views
    - commands: mapping of dotted path → CommandSpec, in registration order.
    - options: tuple of OptionSpec, in registration order.
    - aliases: mapping of alias → OptionSpec.
    - scope: path of the most recently registered command (() before any).
    """

    commands = mirror("commands")
    options = mirror("options")
    aliases = mirror("aliases")
    scope = mirror("scope")

    def __init__(self):
        self._commands = {}
        self._options = []
        self._aliases = {}
        self._scope = ()

    def __repr__(self):
        return "registry(commands=%r, options=%r)" % (list(self._commands), [option.aliases for option in self._options])

    def __len__(self):
        return len(self._commands) + len(self._options)

    def register_command(self, spec, /):
        """
        add a command; it becomes the current scope.

        raises
        - TypeError when spec is not a CommandSpec.
        - DuplicateCommandError when the path is already registered.
        """
        if not isinstance(spec, CommandSpec):
            raise TypeError("register_command() argument must be a command-spec")
        if spec.name in self._commands:
            raise DuplicateCommandError(
                "command %r is already registered" % spec.name,
                title="duplicate command",
                code=FaultCode.DUPLICATE_COMMAND,
                hint="declare each command path once",
                command=spec,
            )
        self._commands[spec.name] = spec
        self._scope = spec.path
        logger.debug("registered command %r, scope is now %r", spec.name, spec.name)
        return spec

    def register_option(self, spec, /):
        """
        add an option; an option without a scope is bound to the current one.

        returns the registered (possibly scope-bound) spec.

        raises
        - TypeError when spec is not an OptionSpec.
        - DuplicateAliasError when any alias is already registered.
        """
        if not isinstance(spec, OptionSpec):
            raise TypeError("register_option() argument must be an option-spec")
        for alias in spec.aliases:
            if (owner := self._aliases.get(alias)) is not None:
                raise DuplicateAliasError(
                    "alias %r is already registered by option %r" % (alias, ", ".join(owner.aliases)),
                    title="duplicate alias",
                    code=FaultCode.DUPLICATE_ALIAS,
                    hint="pick another spelling for %r" % alias,
                    token=alias,
                    option=owner,
                )
        if spec.scope is Unset:
            spec = copy.replace(spec, scope=self._scope)
        self._options.append(spec)
        for alias in spec.aliases:
            self._aliases[alias] = spec
        logger.debug("registered option %r in scope %r", spec.name, ".".join(spec.scope) or "<global>")
        return spec

    def command(self, pattern, /, descr=Unset, callback=None):
        """
        parse a command pattern and register the resulting spec.
        """
        path, parameters = parse_command_pattern(pattern)
        return self.register_command(CommandSpec(path, parameters, descr, callback))

    def option(self, pattern, /, descr=Unset, default=Unset):
        """
        parse an option pattern and register the resulting spec in the current scope.
        """
        aliases, parameter = parse_option_pattern(pattern)
        return self.register_option(OptionSpec(aliases, parameter, descr, default))

    def lookup(self, alias, /):
        """
        return the option owning the alias; KeyError when none does.
        """
        return self._aliases[alias]

    def find(self, path, /):
        """
        return the command registered under a path (tuple or dotted string), or None.
        """
        return self._commands.get(path if isinstance(path, str) else ".".join(path))

    def scoped(self, command, /):
        """
        yield the options in scope for a matched command (or for no command).

        global options are always in scope; a command-scoped option is in scope
        when its owning path is a prefix of the matched command's path.
        """
        path = command.path if command is not None else ()
        for option in self._options:
            if path[:len(option.scope)] == option.scope:
                yield option


__all__ = (
    "Registry",
)
