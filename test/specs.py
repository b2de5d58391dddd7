"""
Specs module behavioral tests (parameter, option and command specifications).

Scope
- Validate construction, normalization and rejection rules of every spec.
- Validate read-only introspection, repr and copy.replace() support.
- Validate that spec classes are sealed.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from commandeer import ParameterKind, ParameterSpec, OptionSpec, CommandSpec, Unset
from commandeer.faults import InvalidParameterOrderError


def required(name):
    return ParameterSpec(ParameterKind.REQUIRED, name)


def optional(name):
    return ParameterSpec(ParameterKind.OPTIONAL, name)


class TestParameterKind(TestCase):
    """Behavioral tests for ParameterKind."""

    def testRender(self):
        self.assertEqual(ParameterKind.REQUIRED.render("a"), "<a>")
        self.assertEqual(ParameterKind.OPTIONAL.render("a"), "[a]")
        self.assertEqual(ParameterKind.REQUIRED_VARIADIC.render("a"), "<a ...>")
        self.assertEqual(ParameterKind.OPTIONAL_VARIADIC.render("a"), "[a ...]")

    def testRequiredAndVariadic(self):
        self.assertTrue(ParameterKind.REQUIRED_VARIADIC.required)
        self.assertTrue(ParameterKind.REQUIRED_VARIADIC.variadic)
        self.assertFalse(ParameterKind.OPTIONAL.required)
        self.assertFalse(ParameterKind.REQUIRED.variadic)


class TestParameterSpec(TestCase):
    """Behavioral tests for ParameterSpec."""

    def testEqualityAndHash(self):
        self.assertEqual(required("a"), required("a"))
        self.assertNotEqual(required("a"), optional("a"))
        self.assertEqual(len({required("a"), required("a")}), 1)

    def testStr(self):
        self.assertEqual(str(optional("when")), "[when]")

    def testNameMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            ParameterSpec(ParameterKind.REQUIRED, "  ")

    def testKindMustBeParameterKind(self):
        with self.assertRaises(TypeError):
            ParameterSpec("required", "a")

    def testReplace(self):
        self.assertEqual(copy.replace(required("a"), kind=ParameterKind.OPTIONAL), optional("a"))


class TestOptionSpec(TestCase):
    """Behavioral tests for OptionSpec."""

    def testDefaults(self):
        option = OptionSpec(("-v", "--verbose"))
        self.assertTrue(option.boolean)
        self.assertIsNone(option.parameter)
        self.assertIsNone(option.descr)
        self.assertIs(option.default, Unset)
        self.assertIs(option.scope, Unset)

    def testNameIsLongestAlias(self):
        self.assertEqual(OptionSpec(("-v", "--verbose")).name, "--verbose")

    def testBlankDescrBecomesNone(self):
        self.assertIsNone(OptionSpec(("-v",), descr="   ").descr)
        self.assertEqual(OptionSpec(("-v",), descr=" Be loud ").descr, "Be loud")

    def testAliasesMustNotBeAString(self):
        with self.assertRaises(TypeError):
            OptionSpec("-v")

    def testAtLeastOneAlias(self):
        with self.assertRaises(TypeError):
            OptionSpec(())

    def testAliasNeedsDash(self):
        with self.assertRaises(ValueError):
            OptionSpec(("verbose",))

    def testDuplicateAliasesRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec(("-v", "-v"))

    def testVariadicParameterRejected(self):
        with self.assertRaises(ValueError):
            OptionSpec(("--files",), ParameterSpec(ParameterKind.OPTIONAL_VARIADIC, "files"))

    def testReplaceBindsScope(self):
        option = OptionSpec(("-c", "--config"), required("key"), "Config key", "dev")
        bound = copy.replace(option, scope="remote.add")
        self.assertEqual(bound.scope, ("remote", "add"))
        self.assertEqual(bound.aliases, ("-c", "--config"))
        self.assertEqual(bound.parameter, required("key"))
        self.assertEqual(bound.descr, "Config key")
        self.assertEqual(bound.default, "dev")
        self.assertIs(option.scope, Unset)

    def testReadOnly(self):
        option = OptionSpec(("-v",))
        with self.assertRaises(AttributeError):
            option.aliases = ("-x",)

    def testRepr(self):
        self.assertTrue(repr(OptionSpec(("-v",))).startswith("option-spec(aliases=('-v',)"))

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Subclass(OptionSpec):  # NOQA: F-841
                pass


class TestCommandSpec(TestCase):
    """Behavioral tests for CommandSpec."""

    def testDottedPathIsSplit(self):
        command = CommandSpec("remote.add", (required("addr"),))
        self.assertEqual(command.path, ("remote", "add"))
        self.assertEqual(command.name, "remote.add")

    def testEmptyPathRejected(self):
        with self.assertRaises(ValueError):
            CommandSpec(())
        with self.assertRaises(ValueError):
            CommandSpec("remote..add")

    def testParametersMustBeSpecs(self):
        with self.assertRaises(TypeError):
            CommandSpec("add", ("<files>",))

    def testParameterOrderEnforced(self):
        with self.assertRaises(InvalidParameterOrderError):
            CommandSpec("cmd", (optional("a"), required("b")))

    def testCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            CommandSpec("cmd", (), callback="nope")

    def testReplaceKeepsFields(self):
        def callback(options):
            pass

        command = CommandSpec("init", (), "Create a repository", callback)
        renamed = copy.replace(command, path=("setup",))
        self.assertEqual(renamed.path, ("setup",))
        self.assertEqual(renamed.descr, "Create a repository")
        self.assertIs(renamed.callback, callback)


if __name__ == "__main__":
    unittest.main()
