"""
Parser module behavioral tests (the full parse pipeline on a git-like surface).

Scope
- Validate command matching, parameters, option maps and leftover tokens.
- Validate that parse faults propagate without printing or exiting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandeer import Registry, parse
from commandeer.faults import (
    ParseError,
    UnknownOptionError,
    MissingOptionValueError,
    TooFewParametersError,
    TooManyParametersError,
)


class TestParse(TestCase):
    """Behavioral tests for parse()."""

    def setUp(self):
        self.registry = Registry()
        self.registry.option("-v, --verbose", "Enable verbosity")
        self.registry.command("init", "Create an empty repository")
        self.registry.command("add [files ...]", "Add file contents to the index")
        self.registry.command("cp <src> <dest>", "Copy a file")
        self.registry.command("remote.add [addr]", "Add a remote")
        self.registry.option("-c, --config <key>", "Configuration key")

    def testVariadicCommand(self):
        result = parse(["add", "a.txt", "b.txt", "-v"], self.registry)
        self.assertEqual(result.command.name, "add")
        self.assertEqual(result.parameters, ("a.txt", "b.txt"))
        self.assertIs(result.options["-v"], True)
        self.assertIs(result.options["--verbose"], True)
        self.assertEqual(result.leftover, ())

    def testSubcommand(self):
        result = parse(["remote", "add", "origin"], self.registry)
        self.assertEqual(result.command.path, ("remote", "add"))
        self.assertEqual(result.parameters, ("origin",))

    def testBundledAndCompressedOptions(self):
        result = parse(["-vc=prod", "remote", "add"], self.registry)
        self.assertEqual(result.command.name, "remote.add")
        self.assertEqual(result.parameters, ())
        self.assertEqual(result.options["--config"], "prod")
        self.assertIs(result.options["--verbose"], True)

    def testNoArguments(self):
        result = parse([], self.registry)
        self.assertIsNone(result.command)
        self.assertEqual(result.parameters, ())
        self.assertEqual(dict(result.options), {"-v": False, "--verbose": False})

    def testUnmatchedPositionals(self):
        result = parse(["foo", "bar"], self.registry)
        self.assertIsNone(result.command)
        self.assertEqual(result.parameters, ("foo", "bar"))

    def testTerminator(self):
        result = parse(["add", "--", "-v"], self.registry)
        self.assertEqual(result.parameters, ("-v",))
        self.assertEqual(result.leftover, ("-v",))
        self.assertIs(result.options["--verbose"], False)

    def testTooManyParameters(self):
        with self.assertRaises(TooManyParametersError):
            parse(["init", "extra"], self.registry)

    def testTooFewParameters(self):
        with self.assertRaises(TooFewParametersError):
            parse(["cp", "a"], self.registry)

    def testUnknownOption(self):
        with self.assertRaises(UnknownOptionError):
            parse(["--unknown"], self.registry)

    def testMissingOptionValue(self):
        with self.assertRaises(MissingOptionValueError):
            parse(["remote", "add", "-c"], self.registry)

    def testFaultsShareParseError(self):
        with self.assertRaises(ParseError):
            parse(["cp"], self.registry)

    def testOptionsAreReadOnly(self):
        result = parse([], self.registry)
        with self.assertRaises(TypeError):
            result.options["-v"] = True

    def testRegistryTypeChecked(self):
        with self.assertRaises(TypeError):
            parse([], {})


if __name__ == "__main__":
    unittest.main()
