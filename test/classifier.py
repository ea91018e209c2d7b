"""
Classifier behavioral tests (token shapes and the single parse pass).

Scope
- Validate split(): which raw tokens are long candidates, short clusters or
  positionals, and how '=' payloads are separated.
- Validate classify(): spec updates, positional ordering, fault collection
  with token and 1-based position.

Conventions
- Test method names follow CamelCase per project convention.
- Specs are fresh per test (setUp) because classify() mutates them.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import (
    Flag,
    Option,
    Registry,
    PositionalQueue,
    ValueKind,
    TokenKind,
    split,
    classify,
    InvalidFlagError,
    CannotCarryValueError,
    WrongValueTypeError,
    EmptyValueWarning,
)


class TestSplit(TestCase):
    """Behavioral tests for token shapes."""

    def testLongForms(self):
        token = split("--help")
        self.assertIs(token.kind, TokenKind.LONG)
        self.assertEqual(token.name, "--help")
        self.assertIsNone(token.payload)

        token = split("--min=5=6")
        self.assertIs(token.kind, TokenKind.LONG)
        self.assertEqual(token.name, "--min")
        self.assertEqual(token.payload, "5=6")

    def testShortClusters(self):
        token = split("-abc=")
        self.assertIs(token.kind, TokenKind.SHORT)
        self.assertEqual(token.name, "-abc")
        self.assertEqual(token.cluster, "abc")
        self.assertEqual(token.payload, "")

    def testPositionalShapes(self):
        for raw in ("", "-", "-=x", "5", "file.txt", "a=b"):
            with self.subTest(raw=raw):
                token = split(raw)
                self.assertIs(token.kind, TokenKind.POSITIONAL)
                self.assertEqual(token.name, raw)
                self.assertIsNone(token.payload)
                self.assertEqual(token.cluster, "")

    def testDoubleDashIsALongCandidate(self):
        self.assertIs(split("--").kind, TokenKind.LONG)

    def testNegativeNumberIsAShortCluster(self):
        self.assertIs(split("-5").kind, TokenKind.SHORT)

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            split(5)


class TestClassify(TestCase):
    """Behavioral tests for classify()."""

    def setUp(self):
        self.a = Flag("-a", "--all")
        self.b = Flag("-b", "--brief")
        self.c = Flag("-c", "--color")
        self.m = Option("-m", "--min", type=ValueKind.INT, default=1)
        self.registry = Registry(self.a, self.b, self.c, self.m)
        self.queue = PositionalQueue()

    def classify(self, *tokens):
        return classify(tokens, self.registry, self.queue)

    def testCluster(self):
        self.assertEqual(self.classify("-abc"), [])
        self.assertTrue(self.a.triggered and self.b.triggered and self.c.triggered)
        self.assertFalse(self.m.triggered)

    def testUnknownCharacterInCluster(self):
        faults = self.classify("-abz")
        self.assertEqual(len(faults), 1)
        fault, = faults
        self.assertIsInstance(fault, InvalidFlagError)
        self.assertEqual(fault.character, "z")
        self.assertEqual(fault.name, "-z")
        self.assertEqual(fault.token, "-abz")
        self.assertEqual(fault.index, 1)
        self.assertTrue(self.a.triggered and self.b.triggered)

    def testClusterPayloadGoesToLastCharacter(self):
        self.assertEqual(self.classify("-abm=5"), [])
        self.assertTrue(self.m.triggered)
        self.assertEqual(self.m.value, 5)

    def testClusterPayloadOnFlag(self):
        fault, = self.classify("-ma=5")
        self.assertIsInstance(fault, CannotCarryValueError)
        self.assertEqual(fault.token, "-ma=5")
        self.assertTrue(self.m.triggered)
        self.assertEqual(self.m.value, 1)

    def testShortAndLongAssignment(self):
        self.assertEqual(self.classify("-m=5"), [])
        self.assertEqual(self.m.value, 5)
        self.assertEqual(self.classify("--min=-7"), [])
        self.assertEqual(self.m.value, -7)

    def testBareOptionOnlyTriggers(self):
        self.assertEqual(self.classify("--min"), [])
        self.assertTrue(self.m.triggered)
        self.assertEqual(self.m.value, 1)

    def testValueOnLongFlag(self):
        fault, = self.classify("--all=yes")
        self.assertIsInstance(fault, CannotCarryValueError)
        self.assertEqual(fault.value, "yes")
        self.assertTrue(self.a.triggered)

    def testWrongValueType(self):
        fault, = self.classify("x", "--min=abc")
        self.assertIsInstance(fault, WrongValueTypeError)
        self.assertEqual(fault.index, 2)
        self.assertEqual(fault.token, "--min=abc")
        self.assertIsInstance(fault.__cause__, ValueError)
        self.assertEqual(self.m.value, 1)

    def testEmptyPayloadWarns(self):
        fault, = self.classify("--min=")
        self.assertIsInstance(fault, EmptyValueWarning)
        self.assertTrue(self.m.triggered)
        self.assertEqual(self.m.value, 1)

    def testUnknownLongFlags(self):
        faults = self.classify("--", "--nope", "--all")
        self.assertEqual([fault.name for fault in faults], ["--", "--nope"])
        self.assertEqual([fault.index for fault in faults], [1, 2])
        self.assertTrue(self.a.triggered)

    def testPositionalOrder(self):
        self.assertEqual(self.classify("x", "-a", "y", "--min=3", "-", "z"), [])
        self.assertEqual(list(self.queue), ["x", "y", "-", "z"])

    def testFaultsInOrder(self):
        faults = self.classify("--nope", "--min=x", "-q")
        self.assertEqual([type(fault) for fault in faults], [InvalidFlagError, WrongValueTypeError, InvalidFlagError])
        self.assertEqual([fault.index for fault in faults], [1, 2, 3])


if __name__ == "__main__":
    unittest.main()
