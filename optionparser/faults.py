"""
optionparser faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault.
- OptionParserException: base error; carries a message, a suggested process
  return code and rendering options (title, hint, index).
- Declaration faults (raised while options are being declared): programming
  errors, return code 1.
- Parse faults (raised by the dispatch loop or on read): usage errors,
  return code 2.
- DuplicateLongFlagWarning: emitted when a long spelling is re-registered.

Presentation
- Faults are plain exceptions; the parser never prints or exits.
- printandexit() is the thin error-to-exit adapter: it renders the fault with
  rich on stderr and terminates with the fault's return code.
- Host applications may customize rendering from __main__:
  • __prog__   program label shown in the header (default: basename of argv[0]).
  • __styles__ style overrides (keys as in the defaults below).
  • __codes__  relabeling of fault codes (see FaultCode.normalize).
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declarations (1010x): INVALID_DECLARATION, DUPLICATE_DECLARATION,
      POSITIONAL_DECLARATION
    - switches (1011x): INVALID_OPTION, MISSING_ARGUMENT, UNEXPECTED_ARGUMENT,
      INVALID_ARGUMENT
    - positionals (1012x): UNEXPECTED_POSITIONAL
    - reads (1013x): MISSING_REQUIRED_OPTION
    - warnings (2011x): DUPLICATE_LONG_FLAG
    """
    # --- declaration errors ---
    INVALID_DECLARATION     = 10101
    DUPLICATE_DECLARATION   = 10102
    POSITIONAL_DECLARATION  = 10103

    # --- switch errors ---
    INVALID_OPTION          = 10111
    MISSING_ARGUMENT        = 10112
    UNEXPECTED_ARGUMENT     = 10113
    INVALID_ARGUMENT        = 10114

    # --- positional errors ---
    UNEXPECTED_POSITIONAL   = 10121

    # --- read errors ---
    MISSING_REQUIRED_OPTION = 10131

    # --- warnings ---
    DUPLICATE_LONG_FLAG     = 20111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _spelling(name, spelling):
    """
    the spelling shown in messages: as matched when the dispatcher knows it,
    otherwise restored from the name ('v' → '-v', 'verbose' → '--verbose').
    """
    if spelling is not None:
        return spelling
    return ("-" if len(name) == 1 else "--") + name


class OptionParserException(Exception):
    """
    base class of every optionparser error.

    attributes
    - message: human-readable, getopt-style description.
    - returncode: suggested process exit status.
    - title/code/hint: rendering metadata (see __rich__).
    - index: 1-based position of the offending token, when known.
    """
    title = "option parser error"
    code = None
    hint = None

    def __init__(self, message, returncode, /, *, hint=None):
        super().__init__(message)
        self.message = message
        self.returncode = returncode
        self.index = None
        if hint is not None:
            self.hint = hint

    def __rich__(self):
        return self.render()

    def render(self, *, colorful=True, fancy=False):
        """
        build a rich renderable for this fault.

        layout
        - header: "[ <prog> — <code> | <Title> ]"
        - message, then " → hint" when a hint is available.
        - fancy wraps everything in a Panel titled with the header.
        """
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "optionparser")
        code = self.code.normalize() if self.code is not None else str(self.returncode)

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code, "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = self.message
        if self.index is not None:
            message = "%s (at %s position)" % (message, ordinal(self.index))

        body = [text(message, "error-message")]
        if self.hint:
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def printandexit(self, *, colorful=True, fancy=False):
        """
        render this fault on stderr and terminate the process with its return code.
        """
        console.print(self.render(colorful=colorful, fancy=fancy))
        sys.exit(self.returncode)


# --- declaration faults ---

class InvalidDeclarationError(OptionParserException, ValueError):
    title = "invalid declaration"
    code = FaultCode.INVALID_DECLARATION

    def __init__(self, message, /):
        super().__init__(message, 1)


class DuplicateDeclarationError(OptionParserException, ValueError):
    title = "duplicate declaration"
    code = FaultCode.DUPLICATE_DECLARATION

    def __init__(self, name, /):
        super().__init__("short flag %r already in use" % name, 1)
        self.name = name


class PositionalDeclarationError(OptionParserException, NotImplementedError):
    title = "positional declaration"
    code = FaultCode.POSITIONAL_DECLARATION

    def __init__(self, name, /):
        super().__init__("registration of positional arguments is not supported -- %r" % name, 1)
        self.name = name


# --- parse faults ---

class InvalidOptionError(OptionParserException):
    title = "invalid option"
    code = FaultCode.INVALID_OPTION

    def __init__(self, name, /):
        super().__init__("invalid option -- %r" % name, 2)
        self.name = name


class MissingArgumentError(OptionParserException):
    title = "missing argument"
    code = FaultCode.MISSING_ARGUMENT

    def __init__(self, name, /, *, spelling=None):
        spelling = _spelling(name, spelling)
        super().__init__(
            "option %r requires an argument" % spelling, 2,
            hint="pass a value after it (for example: %s <value>)" % spelling
        )
        self.name = name
        self.spelling = spelling


class UnexpectedArgumentError(OptionParserException):
    title = "unexpected argument"
    code = FaultCode.UNEXPECTED_ARGUMENT

    def __init__(self, name, /, *, spelling=None):
        spelling = _spelling(name, spelling)
        super().__init__(
            "option %r doesn't allow an argument" % spelling, 2,
            hint="remove everything from '=' (for example: %s)" % spelling
        )
        self.name = name
        self.spelling = spelling


class InvalidArgumentError(OptionParserException):
    title = "invalid argument"
    code = FaultCode.INVALID_ARGUMENT

    def __init__(self, name, argument, /, *, spelling=None):
        spelling = _spelling(name, spelling)
        super().__init__("invalid argument %r for option %r" % (argument, spelling), 2)
        self.name = name
        self.spelling = spelling
        self.argument = argument


class UnexpectedPositionalError(OptionParserException):
    title = "unexpected positional"
    code = FaultCode.UNEXPECTED_POSITIONAL

    def __init__(self, token, /):
        super().__init__(
            "unexpected positional argument %r" % token, 2,
            hint="positional arguments are not supported; pass values through options"
        )
        self.token = token


class MissingRequiredOptionError(OptionParserException):
    title = "missing required option"
    code = FaultCode.MISSING_REQUIRED_OPTION

    def __init__(self, names, /):
        super().__init__("missing required option %s" % "/".join(names), 2)
        self.names = tuple(names)


# --- warnings ---

class DuplicateLongFlagWarning(UserWarning):
    """
    a long spelling was registered twice; the latest registration wins.
    """
    code = FaultCode.DUPLICATE_LONG_FLAG

    def __init__(self, name, /):
        super().__init__("long flag %r re-registered; the previous declaration is replaced" % name)
        self.name = name


__all__ = (
    "FaultCode",
    "OptionParserException",
    "InvalidDeclarationError",
    "DuplicateDeclarationError",
    "PositionalDeclarationError",
    "InvalidOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "InvalidArgumentError",
    "UnexpectedPositionalError",
    "MissingRequiredOptionError",
    "DuplicateLongFlagWarning",
)
