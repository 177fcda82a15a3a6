"""
Value tests (consume and accumulate, without the parse loop).

Scope
- Validate where consume() takes a value from for each arity.
- Validate integer coercion.
- Validate accumulate() per kind.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from collections import deque
from unittest import TestCase

from getoptions import Definition, Kind, Arity, Mode, MissingArgumentError, ConversionError, MalformedMapEntryError
from getoptions.accumulators import accumulate, reset
from getoptions.consumers import consume, convert


class TestConsume(TestCase):
    """Behavioral tests for consume()."""

    def testNoArityConsumesNothing(self):
        tokens = deque(["next"])
        definition = Definition("flag", kind=Kind.BOOLEAN, default=False)
        self.assertIsNone(consume(definition, "inline", tokens))
        self.assertEqual(list(tokens), ["next"])

    def testRequiredPrefersInlineValue(self):
        tokens = deque(["next"])
        definition = Definition("name", kind=Kind.STRING, default="")
        self.assertEqual(consume(definition, "inline", tokens), "inline")
        self.assertEqual(list(tokens), ["next"])

    def testRequiredTakesNextTokenVerbatim(self):
        tokens = deque(["--other", "tail"])
        definition = Definition("name", kind=Kind.STRING, default="")
        self.assertEqual(consume(definition, None, tokens), "--other")
        self.assertEqual(list(tokens), ["tail"])

    def testRequiredAtEndOfInput(self):
        definition = Definition("name", kind=Kind.STRING, default="")
        with self.assertRaises(MissingArgumentError) as context:
            consume(definition, None, deque())
        self.assertEqual(context.exception.name, "name")

    def testOptionalFallsBackToDefault(self):
        definition = Definition("name", kind=Kind.STRING, arity=Arity.OPTIONAL, default="fallback")
        self.assertEqual(consume(definition, None, deque()), "fallback")
        tokens = deque(["-x"])
        self.assertEqual(consume(definition, None, tokens), "fallback")
        self.assertEqual(list(tokens), ["-x"])

    def testOptionalLookaheadFollowsMode(self):
        definition = Definition("name", kind=Kind.STRING, arity=Arity.OPTIONAL, default="fallback")
        self.assertEqual(consume(definition, None, deque(["value"]), Mode.BUNDLING), "value")
        self.assertEqual(consume(definition, None, deque(["--value"]), Mode.BUNDLING), "fallback")

    def testEmptyInlineValueIsAValue(self):
        definition = Definition("name", kind=Kind.STRING, arity=Arity.OPTIONAL, default="fallback")
        self.assertEqual(consume(definition, "", deque()), "")


class TestConvert(TestCase):
    """Behavioral tests for convert()."""

    def setUp(self):
        self.integer = Definition("int", kind=Kind.INTEGER, default=0)

    def testStringsPassThrough(self):
        self.assertEqual(convert(Definition("s", kind=Kind.STRING, default=""), "007"), "007")

    def testSignedDigits(self):
        for literal, value in (("0", 0), ("-12", -12), ("+3", 3), ("0042", 42)):
            with self.subTest(literal=literal):
                self.assertEqual(convert(self.integer, literal), value)

    def testRejectsNonDigits(self):
        for literal in ("hello", "1e3", "0x10", "12 ", "-", "١٢"):
            with self.subTest(literal=literal):
                with self.assertRaises(ConversionError) as context:
                    convert(self.integer, literal)
                self.assertEqual(context.exception.options["literal"], literal)


class TestAccumulate(TestCase):
    """Behavioral tests for accumulate() per kind."""

    def definition(self, kind, default):
        definition = Definition("opt", kind=kind, default=default)
        reset(definition)
        return definition

    def testBooleanStoresTrue(self):
        definition = self.definition(Kind.BOOLEAN, True)
        accumulate(definition, None)
        self.assertIs(definition.var.value, True)

    def testNegatableFollowsSpelling(self):
        definition = self.definition(Kind.NEGATABLE_BOOLEAN, True)
        accumulate(definition, None, negated=True)
        self.assertIs(definition.var.value, False)
        accumulate(definition, None)
        self.assertIs(definition.var.value, True)

    def testScalarsOverwrite(self):
        definition = self.definition(Kind.INTEGER, 0)
        accumulate(definition, 1)
        accumulate(definition, 2)
        self.assertEqual(definition.var.value, 2)

    def testListAppends(self):
        definition = self.definition(Kind.STRING_LIST, ["a"])
        accumulate(definition, "b")
        accumulate(definition, "a")
        self.assertEqual(definition.var.value, ["a", "b", "a"])

    def testMapSplitsAtFirstEquals(self):
        definition = self.definition(Kind.STRING_MAP, {"k": "old"})
        accumulate(definition, "k=v=w")
        accumulate(definition, "=empty")
        self.assertEqual(definition.var.value, {"k": "v=w", "": "empty"})

    def testMapRejectsEntryWithoutEquals(self):
        definition = self.definition(Kind.STRING_MAP, {})
        with self.assertRaises(MalformedMapEntryError):
            accumulate(definition, "novalue")
        self.assertEqual(definition.var.value, {})

    def testResetDoesNotShareDefault(self):
        definition = self.definition(Kind.STRING_LIST, [])
        accumulate(definition, "x")
        reset(definition)
        self.assertEqual(definition.var.value, [])
        self.assertEqual(definition.default, ())


if __name__ == "__main__":
    unittest.main()
