"""
Fault taxonomy and rendering tests.

Scope
- Validate messages, names and suggested return codes of every fault.
- Validate the rich rendering (header, message, position, hint) and the
  __main__ customization hooks (__prog__, __codes__).
- Validate printandexit() terminates with the fault's return code.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured on a colorless console for deterministic output.
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from optionparser import faults
from optionparser.faults import *


def render(fault, **options):
    console = Console(color_system=None, force_terminal=False, width=200)
    with console.capture() as capture:
        console.print(fault.render(colorful=False, **options))
    return capture.get()


class TestTaxonomy(TestCase):

    def testParseFaultsAreUsageErrors(self):
        for fault in (
            InvalidOptionError("z"),
            MissingArgumentError("name"),
            UnexpectedArgumentError("verbose"),
            InvalidArgumentError("size", "big"),
            UnexpectedPositionalError("file.txt"),
            MissingRequiredOptionError(["-N", "--name"]),
        ):
            with self.subTest(fault=type(fault).__name__):
                self.assertIsInstance(fault, OptionParserException)
                self.assertEqual(fault.returncode, 2)

    def testDeclarationFaultsAreProgrammingErrors(self):
        self.assertIsInstance(InvalidDeclarationError("bad"), ValueError)
        self.assertIsInstance(DuplicateDeclarationError("-v"), ValueError)
        self.assertIsInstance(PositionalDeclarationError("FILE"), NotImplementedError)
        for fault in (InvalidDeclarationError("bad"), DuplicateDeclarationError("-v"), PositionalDeclarationError("FILE")):
            with self.subTest(fault=type(fault).__name__):
                self.assertEqual(fault.returncode, 1)

    def testGetoptStyleMessages(self):
        self.assertEqual(str(InvalidOptionError("z")), "invalid option -- 'z'")
        self.assertEqual(MissingArgumentError("name").message, "option '--name' requires an argument")
        self.assertEqual(MissingArgumentError("I").message, "option '-I' requires an argument")
        self.assertEqual(UnexpectedArgumentError("verbose").message, "option '--verbose' doesn't allow an argument")
        self.assertEqual(MissingRequiredOptionError(["-N", "--name"]).message, "missing required option -N/--name")

    def testMatchedSpellingOverridesTheGuess(self):
        fault = MissingArgumentError("n", spelling="--n")
        self.assertEqual(fault.message, "option '--n' requires an argument")
        self.assertEqual(fault.name, "n")
        self.assertEqual(UnexpectedArgumentError("q", spelling="--q").spelling, "--q")
        self.assertIn("'--s'", InvalidArgumentError("s", "big", spelling="--s").message)

    def testCodesAreStable(self):
        self.assertEqual(InvalidOptionError("z").code, FaultCode.INVALID_OPTION)
        self.assertEqual(FaultCode.INVALID_OPTION.normalize(), "10111")
        self.assertEqual(DuplicateLongFlagWarning("--x").code, FaultCode.DUPLICATE_LONG_FLAG)


class TestRendering(TestCase):

    def setUp(self):
        patcher = mock.patch.object(sys.modules["__main__"], "__prog__", "tool", create=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testHeaderMessageAndHint(self):
        fault = MissingArgumentError("name")
        output = render(fault)
        self.assertIn("[ tool — 10112 | Missing Argument ]", output)
        self.assertIn("option '--name' requires an argument", output)
        self.assertIn("→ pass a value after it (for example: --name <value>)", output)

    def testPositionIsRendered(self):
        fault = InvalidOptionError("z")
        fault.index = 2
        self.assertIn("invalid option -- 'z' (at second position)", render(fault))

    def testFancyPanel(self):
        output = render(InvalidOptionError("z"), fancy=True)
        self.assertIn("Invalid Option", output)
        self.assertIn("invalid option -- 'z'", output)

    def testHostRelabelsCodes(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.INVALID_OPTION: "E-OPT"}, create=True):
            self.assertIn("[ tool — E-OPT | Invalid Option ]", render(InvalidOptionError("z")))

    def testRichProtocol(self):
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            console.print(InvalidOptionError("z"))
        self.assertIn("invalid option -- 'z'", capture.get())

    def testPrintAndExit(self):
        stream = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=stream, color_system=None, width=200)):
            with self.assertRaises(SystemExit) as context:
                UnexpectedArgumentError("verbose").printandexit(colorful=False)
        self.assertEqual(context.exception.code, 2)
        self.assertIn("option '--verbose' doesn't allow an argument", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
