"""
Registration table tests.

Scope
- Validate spelling rules for short ("-x") and long ("--name") flags.
- Validate duplicate handling: short claims fail, long claims are replaced with a warning.
- Validate positional declarations are rejected.

Conventions
- Test method names follow CamelCase per project convention.
- Plain objects stand in for actions: the table never inspects them.
"""
import unittest
import warnings
from unittest import TestCase

from optionparser.faults import *
from optionparser.registry import Registry


class TestRegistry(TestCase):
    """Behavioral tests for Registry.register and lookups."""

    def setUp(self):
        self.registry = Registry()
        self.first = object()
        self.second = object()

    def testShortAndLongAreDisjoint(self):
        self.registry.register("-v", self.first)
        self.registry.register("--v", self.second)
        self.assertIs(self.registry.short("v"), self.first)
        self.assertIs(self.registry.long("v"), self.second)

    def testLookupOfUnknownReturnsNone(self):
        self.assertIsNone(self.registry.short("x"))
        self.assertIsNone(self.registry.long("x"))

    def testLongNeedsABody(self):
        with self.assertRaises(InvalidDeclarationError):
            self.registry.register("--", self.first)

    def testShortNeedsExactlyOneCharacter(self):
        for name in ("-", "-ab"):
            with self.subTest(name=name):
                with self.assertRaises(InvalidDeclarationError) as context:
                    self.registry.register(name, self.first)
                self.assertIsInstance(context.exception, ValueError)

    def testDuplicateShortRejected(self):
        self.registry.register("-v", self.first)
        with self.assertRaises(DuplicateDeclarationError):
            self.registry.register("-v", self.second)
        self.assertIs(self.registry.short("v"), self.first)

    def testDuplicateShortRejectedForSameAction(self):
        self.registry.register("-v", self.first)
        with self.assertRaises(DuplicateDeclarationError) as context:
            self.registry.register("-v", self.first)
        self.assertEqual(context.exception.name, "-v")

    def testDuplicateLongReplacedWithWarning(self):
        self.registry.register("--mode", self.first)
        with self.assertWarns(DuplicateLongFlagWarning) as context:
            self.registry.register("--mode", self.second)
        self.assertEqual(context.warning.name, "--mode")
        self.assertIs(self.registry.long("mode"), self.second)

    def testPositionalRejected(self):
        with self.assertRaises(PositionalDeclarationError) as context:
            self.registry.register("FILE", self.first)
        self.assertIsInstance(context.exception, NotImplementedError)

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            self.registry.register(b"-v", self.first)

    def testRegisterAllClaimsEveryName(self):
        self.registry.register_all(("-v", "--verbose"), self.first)
        self.assertIs(self.registry.short("v"), self.first)
        self.assertIs(self.registry.long("verbose"), self.first)

    def testRegisterAllIsAtomic(self):
        self.registry.register("-q", self.first)
        for names in (("-v", "--verbose", "FILE"), ("-v", "--verbose", "-q"), ("-v", "--verbose", "-v")):
            with self.subTest(names=names):
                with self.assertRaises(OptionParserException):
                    self.registry.register_all(names, self.second)
                self.assertIsNone(self.registry.short("v"))
                self.assertIsNone(self.registry.long("verbose"))
        self.assertIs(self.registry.short("q"), self.first)

    def testRegisterAllRejectsNonStringsBeforeClaiming(self):
        with self.assertRaises(TypeError):
            self.registry.register_all(("-v", 3), self.first)
        self.assertNotIn("-v", self.registry)

    def testRejectedClaimDoesNotWarn(self):
        self.registry.register("--mode", self.first)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with self.assertRaises(PositionalDeclarationError):
                self.registry.register_all(("--mode", "MODE"), self.second)
        self.assertIs(self.registry.long("mode"), self.first)

    def testKeyStripsOnlyThePrefix(self):
        self.assertEqual(Registry.key("-v"), "v")
        self.assertEqual(Registry.key("--verbose"), "verbose")
        self.assertEqual(Registry.key("---x"), "-x")

    def testContains(self):
        self.registry.register("-v", self.first)
        self.registry.register("--verbose", self.first)
        self.assertIn("-v", self.registry)
        self.assertIn("--verbose", self.registry)
        self.assertNotIn("--v", self.registry)
        self.assertNotIn("verbose", self.registry)

    def testTablesAreReadOnlyViews(self):
        self.registry.register("-v", self.first)
        with self.assertRaises(TypeError):
            self.registry.shortflags["x"] = self.second
        self.assertEqual(dict(self.registry.shortflags), {"v": self.first})


if __name__ == "__main__":
    unittest.main()
