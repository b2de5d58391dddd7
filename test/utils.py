"""
Tests for the commandeer utilities.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, copying, pickling, finality).
- coalesce() preserving legitimate falsey values.
- rename(), mirror(), pluralize() and keyify() behavior.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from rich.text import Text

from commandeer.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPickleKeepIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnionWithTypes(self) -> None:
        """
        str | Unset works in isinstance checks.
        """
        self.assertTrue(isinstance("name", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(3, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass


class HelpersTest(TestCase):
    """
    Test suite for the functional helpers.
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")

    def testRenameFunctionForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(5, "name")

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            name = mirror("name")

            def __init__(self):
                self._items = ["a", "b"]
                self._table = {"a": 1}
                self._name = "holder"

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.name, "holder")
        with self.assertRaises(AttributeError):
            holder.name = "other"

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("parameter"), "parameters")
        self.assertEqual(pluralize("alias"), "aliases")
        self.assertEqual(pluralize("Entry"), "Entries")
        self.assertEqual(pluralize("command option"), "command options")
        self.assertEqual(pluralize("child"), "children")

    def testKeyify(self) -> None:
        self.assertEqual(keyify("--dry-run"), "dry_run")
        self.assertEqual(keyify("-v"), "v")
        self.assertEqual(keyify("--Config"), "Config")

    def testPaletteDropsStylesWhenColorless(self) -> None:
        styler, text = palette({"name": "bold red"}, colorful=False)
        self.assertEqual(styler("name"), "")
        self.assertEqual(text("value", "bold red").style, "")
        self.assertEqual(text(Text("value", style="bold")).plain, "value")

    def testPaletteKeepsStyles(self) -> None:
        styler, text = palette({"name": "bold red"})
        self.assertEqual(styler("name"), "bold red")
        self.assertEqual(styler("unknown"), "")
        self.assertEqual(text("value", styler("name")).style, "bold red")
        self.assertEqual(text(None).plain, "")

    def testKeyifyRejectsBareDashes(self) -> None:
        with self.assertRaises(ValueError):
            keyify("--")
        with self.assertRaises(TypeError):
            keyify(None)


if __name__ == "__main__":
    unittest.main()
