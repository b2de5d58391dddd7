"""
Tokens module behavioral tests (argument vector normalization).

Scope
- Validate bundled short flags and compressed "flag=value" forms.
- Validate that "--" stops normalization and that plain tokens pass through.
- Validate idempotence and input type checks.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandeer.tokens import TERMINATOR, expand, normalize


class TestNormalize(TestCase):
    """Behavioral tests for normalize()."""

    def testBundledShortFlags(self):
        self.assertEqual(normalize(["-abc"]), ["-a", "-b", "-c"])

    def testCompressedLongForm(self):
        self.assertEqual(normalize(["--config=prod"]), ["--config", "prod"])

    def testCompressedShortForm(self):
        self.assertEqual(normalize(["-c=prod"]), ["-c", "prod"])

    def testBundledAndCompressed(self):
        self.assertEqual(normalize(["-vc=prod"]), ["-v", "-c", "prod"])

    def testEmptyCompressedValue(self):
        self.assertEqual(normalize(["--name="]), ["--name", ""])

    def testValueKeepsLaterEqualSigns(self):
        self.assertEqual(normalize(["--define=key=value"]), ["--define", "key=value"])

    def testTerminatorStopsNormalization(self):
        self.assertEqual(normalize(["-ab", TERMINATOR, "-cd", "--x=y"]), ["-a", "-b", "--", "-cd", "--x=y"])

    def testPlainTokensPassThrough(self):
        argv = ["remote", "add", "-v", "--verbose", "-", "a.txt"]
        self.assertEqual(normalize(argv), argv)

    def testIdempotent(self):
        for argv in (
                ["-abc", "x"],
                ["-vc=prod", "--config=a=b"],
                ["--", "-abc"],
                ["add", "-x", "--name="],
        ):
            with self.subTest(argv=argv):
                once = normalize(argv)
                self.assertEqual(normalize(once), once)

    def testInputIsNotMutated(self):
        argv = ["-abc"]
        normalize(argv)
        self.assertEqual(argv, ["-abc"])

    def testStringRejected(self):
        with self.assertRaises(TypeError):
            normalize("-abc")

    def testNonStringItemRejected(self):
        with self.assertRaises(TypeError):
            normalize(["-a", 1])


class TestExpand(TestCase):
    """Behavioral tests for expand()."""

    def testNormalFormReturnsNone(self):
        self.assertIsNone(expand("--verbose"))
        self.assertIsNone(expand("-v"))
        self.assertIsNone(expand("file"))

    def testSingleRewrite(self):
        self.assertEqual(expand("-vc=prod"), ["-vc", "prod"])


if __name__ == "__main__":
    unittest.main()
