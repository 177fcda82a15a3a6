"""
Name resolution tests (exact, prefix, ambiguous, unknown).

Scope
- Validate that exact spellings beat prefixes, that a unique prefix resolves,
  and that shared prefixes are ambiguous.
- Validate aliases and the implicit "no-" spellings of negatable booleans.

Conventions
- Test method names follow CamelCase per project convention.
- Registries are built directly from Definitions (no parser involved).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from getoptions import Definition, Kind, Exact, Prefix, Ambiguous, Unknown, resolve
from getoptions.registry import Registry


def registry(*definitions):
    built = Registry()
    for definition in definitions:
        built.register(definition)
    return built


def boolean(name, *aliases):
    return Definition(name, *aliases, kind=Kind.BOOLEAN, default=False)


def negatable(name, *aliases):
    return Definition(name, *aliases, kind=Kind.NEGATABLE_BOOLEAN, default=False)


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testExactCanonicalName(self):
        match = resolve("flag", registry(boolean("flag")))
        self.assertIsInstance(match, Exact)
        self.assertEqual(match.definition.name, "flag")
        self.assertFalse(match.negated)

    def testExactAlias(self):
        match = resolve("h", registry(boolean("flag", "f", "h")))
        self.assertIsInstance(match, Exact)
        self.assertEqual(match.definition.name, "flag")

    def testUniquePrefix(self):
        match = resolve("fl", registry(boolean("flag")))
        self.assertIsInstance(match, Prefix)
        self.assertEqual(match.spelling, "flag")
        self.assertEqual(match.definition.name, "flag")

    def testSharedPrefixIsAmbiguous(self):
        match = resolve("fl", registry(boolean("flag"), boolean("fleg")))
        self.assertIsInstance(match, Ambiguous)
        self.assertEqual(match.candidates, ("flag", "fleg"))

    def testExactBeatsPrefix(self):
        match = resolve("flag", registry(boolean("flag"), boolean("flagger")))
        self.assertIsInstance(match, Exact)
        self.assertEqual(match.definition.name, "flag")

    def testAliasPrefixAmbiguousWithOtherName(self):
        match = resolve("ve", registry(boolean("verbose"), boolean("quiet", "very-quiet")))
        self.assertIsInstance(match, Ambiguous)
        self.assertEqual(match.candidates, ("verbose", "very-quiet"))

    def testUnknownName(self):
        self.assertEqual(resolve("zzz", registry(boolean("flag"))), Unknown("zzz"))

    def testEmptyNameIsUnknown(self):
        self.assertEqual(resolve("", registry(boolean("flag"))), Unknown(""))

    def testMatchingIsCaseSensitive(self):
        self.assertIsInstance(resolve("FL", registry(boolean("flag"))), Unknown)

    def testNegatedSpellingExact(self):
        match = resolve("no-nflag", registry(negatable("nflag")))
        self.assertIsInstance(match, Exact)
        self.assertTrue(match.negated)

    def testNegatedSpellingPrefix(self):
        match = resolve("no-n", registry(negatable("nflag")))
        self.assertIsInstance(match, Prefix)
        self.assertTrue(match.negated)

    def testNegatedSpellingTakesPartInAmbiguity(self):
        match = resolve("n", registry(negatable("nflag")))
        self.assertIsInstance(match, Ambiguous)
        self.assertEqual(match.candidates, ("nflag", "no-nflag"))


if __name__ == "__main__":
    unittest.main()
