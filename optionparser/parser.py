r"""
optionparser parser: declare options, then read them.

What this module provides
- OptionParser: owns the argument vector, the registration table and the
  single parse pass.
  • action(...) / action_with_argument(...): the two primitive declarations.
  • flag / counter / argument / accumulator / mapping: common shapes built
    on the primitives.
  • parse(): the one-shot latch. The first read of any action runs the pass;
    every later read (or explicit call) reuses the cached outcome, including
    a cached fault.

- Class-level declarations: the module-level flag/counter/argument/... return
  descriptors that can be placed in an OptionParser subclass body. Each
  instance binds them to fresh actions and attribute reads go through the
  latch, so declaration order and read order are independent.

Token grammar (one pass, left to right)
- "--name=value" / "--name value": long option; the value is attached after
  '=' (possibly empty) or taken from the next token for value-taking options.
  Argument-free options reject any '=' form.
- "-abc": bundled short options, each resolved in turn.
  "-Ifoo" attaches "foo" to -I; "-I foo" consumes the next token.
- anything else is a positional argument, which is not supported.

Quick example:
    from optionparser import OptionParser, flag, argument, accumulator

    class Options(OptionParser):
        verbose = flag("-v", "--verbose", help="chatty output")
        size = argument("-s", "--size", type=int).default(8)
        includes = accumulator("-I", help="header search path")

    options = Options(["-v", "-Iinclude", "--size=16"])
    try:
        print(options.verbose, options.size, options.includes)
    except OptionParserException as exception:
        exception.printandexit()
"""
import logging
import sys
import threading
from collections.abc import Mapping
from types import MappingProxyType

from .actions import Action, WithArgument, WithoutArgument
from .faults import *
from .holder import orelse
from .registry import Registry
from .utils import Unset, rename

logger = logging.getLogger(__name__)


class OptionParser:
    """
    parser of command-line options for one argument vector.

    lifecycle
    - construction: copy the argument vector, bind class-level declarations.
    - declaration: action(...) and friends register spellings.
    - parse: triggered by the first read; runs exactly once.
    - afterwards: state is read-only; new declarations are rejected.

    parameters
    - args: iterable of str, the process arguments without the program name
      (defaults to sys.argv[1:]).
    """
    __declarations__ = MappingProxyType({})

    def __init__(self, args=None, /):
        args = tuple(sys.argv[1:] if args is None else args)
        for arg in args:
            if not isinstance(arg, str):
                raise TypeError("OptionParser() arguments must be strings")
        self.args = args

        self._registry = Registry()
        self._actions = []
        self._parsed = False
        self._parsing = False
        self._fault = None
        self._latch = threading.RLock()

        self._bindings = {}
        for name, declaration in type(self).__declarations__.items():
            self._bindings[name] = declaration.bind(self)

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        # collect class-level declarations, letting subclasses override bases by name
        declarations = {}
        for base in reversed(cls.__mro__):
            for name, object in vars(base).items():
                if isinstance(object, Declaration):
                    declarations[name] = object
        cls.__declarations__ = MappingProxyType(declarations)

    @property
    def parsed(self):
        """
        whether the parse pass has run (successfully or not).
        """
        return self._parsed

    @property
    def registry(self):
        return self._registry

    @property
    def actions(self):
        return tuple(self._actions)

    @property
    def bindings(self):
        """
        read-only mapping of class-level attribute names to their actions.
        """
        return MappingProxyType(self._bindings)

    def values(self):
        """
        return {attribute: value} for every class-level declaration.

        raises the cached parse fault, or MissingRequiredOptionError for the
        first declaration without a value.
        """
        return {name: action.value for name, action in self._bindings.items()}

    # --- declarations ---

    def _declare(self, cls, names, help, handler):
        if self._parsed:
            raise InvalidDeclarationError("cannot declare %s after parsing" % "/".join(map(str, names)))
        if not names:
            raise InvalidDeclarationError("an option must have at least one name")
        action = cls(self, help=help, handler=handler)
        self._registry.register_all(names, action)
        action.names.extend(names)
        self._actions.append(action)
        return action

    def action(self, *names, help=None, handler):
        """
        declare an argument-free option.

        handler(value, name) -> new value, where value is the previous Holder
        (or None) and name the matched spelling without its "-" or "--" prefix.
        """
        return self._declare(WithoutArgument, names, help, handler)

    def action_with_argument(self, *names, help=None, handler):
        """
        declare an argument-taking option.

        handler(value, name, argument) -> new value, where argument is the
        attached text ("--name=text", "--name text", "-Ntext" or "-N text").
        """
        return self._declare(WithArgument, names, help, handler)

    def flag(self, *names, help=None):
        """
        boolean switch: False unless one of its spellings is present.
        """
        return self.action(*names, help=help, handler=rename(lambda value, name: True, "flag")).default(False)

    def counter(self, *names, help=None):
        """
        occurrence counter (e.g. -vvv → 3), 0 when absent.
        """
        return self.action(
            *names, help=help, handler=rename(lambda value, name: orelse(value, int) + 1, "counter")
        ).default(0)

    def argument(self, *names, help=None, type=str):
        """
        value-taking option converted with `type`; the last occurrence wins.

        required unless a default is applied.
        """
        if not callable(type):
            raise TypeError("argument() 'type' must be callable")
        return self.action_with_argument(
            *names, help=help, handler=rename(lambda value, name, argument: type(argument), "argument")
        )

    def accumulator(self, *names, help=None, type=str):
        """
        repeatable value-taking option collecting every converted value in order.

        empty list when absent.
        """
        if not callable(type):
            raise TypeError("accumulator() 'type' must be callable")

        @rename("accumulator")
        def handler(value, name, argument):
            # a fresh list per occurrence; earlier values are never mutated
            return orelse(value, list) + [type(argument)]

        return self.action_with_argument(*names, help=help, handler=handler).default([])

    def mapping(self, choices, /, *, help=None):
        """
        map spellings to values, e.g. {"--fast": Mode.FAST, "--small": Mode.SMALL}.

        the value of the last spelling present wins; required unless a default
        is applied.
        """
        if not isinstance(choices, Mapping):
            raise TypeError("mapping() argument must be a mapping of spellings to values")

        lookup = {}
        for spelling, value in choices.items():
            if not isinstance(spelling, str):
                raise TypeError("option names must be strings")
            body = Registry.key(spelling)
            if body in lookup and lookup[body] != value:
                raise InvalidDeclarationError("spellings sharing the name %r map to different values" % body)
            lookup[body] = value

        return self.action(*choices, help=help, handler=rename(lambda value, name: lookup[name], "mapping"))

    # --- parsing ---

    def parse(self):
        """
        run the parse pass once; re-raise its fault on every call if it failed.
        """
        with self._latch:
            if self._parsing:
                raise RuntimeError("options cannot be read while they are being parsed")
            if not self._parsed:
                self._parsing = True
                try:
                    self._parse_options()
                except Exception as exception:
                    logger.debug("parsing failed: %s", exception)
                    self._fault = exception
                finally:
                    self._parsing = False
                    self._parsed = True
        if self._fault is not None:
            raise self._fault
        return self

    def _parse_options(self):
        logger.debug("parsing %d argument(s) against %r", len(self.args), self._registry)
        index = 0
        while index < len(self.args):
            arg = self.args[index]
            nextarg = self.args[index + 1] if index + 1 < len(self.args) else None
            try:
                if arg.startswith("--"):
                    consumed = self._parse_long_option(arg[2:], nextarg)
                elif arg.startswith("-"):
                    consumed = self._parse_short_options(arg[1:], nextarg)
                else:
                    consumed = self._parse_positional(arg)
            except OptionParserException as exception:
                if exception.index is None:
                    exception.index = index + 1
                raise
            # skip the next token too when it was taken as an attached value
            if consumed:
                index += 1
            index += 1
        logger.debug("parsed %d action(s)", len(self._actions))

    def _parse_long_option(self, arg, nextarg):
        name, equals, attached = arg.partition("=")
        spelling = "--" + name
        if not equals:
            attached = nextarg

        match self._registry.long(name):
            case None:
                raise InvalidOptionError(name)
            case WithArgument() as action:
                if attached is None:
                    raise MissingArgumentError(name, spelling=spelling)
                action.parse(name, attached, spelling=spelling)
                return not equals
            case WithoutArgument() as action:
                if equals:
                    raise UnexpectedArgumentError(name, spelling=spelling)
                action.parse(name, spelling=spelling)
                return False
            case action:
                raise TypeError(f"unexpected action type {type(action).__name__!r}")

    def _parse_short_options(self, arg, nextarg):
        for position, key in enumerate(arg):
            spelling = "-" + key
            match self._registry.short(key):
                case None:
                    raise InvalidOptionError(key)
                case WithArgument() as action:
                    # the rest of the run is the argument; without a rest, the next token is
                    if position == len(arg) - 1:
                        if nextarg is None:
                            raise MissingArgumentError(key, spelling=spelling)
                        action.parse(key, nextarg, spelling=spelling)
                        return True
                    action.parse(key, arg[position + 1:], spelling=spelling)
                    return False
                case WithoutArgument() as action:
                    action.parse(key, spelling=spelling)
                case action:
                    raise TypeError(f"unexpected action type {type(action).__name__!r}")
        return False

    def _parse_positional(self, arg):
        raise UnexpectedPositionalError(arg)

    def __repr__(self):
        return f"{type(self).__name__}(args={self.args!r}, parsed={self._parsed!r})"

    def __rich_repr__(self):
        yield "args", self.args
        yield "parsed", self._parsed
        for name, action in self._bindings.items():
            yield name, action


class Declaration:
    """
    class-level option declaration (descriptor).

    stores the arguments of one OptionParser declaration method; every parser
    instance replays it to obtain its own action. reading the attribute on an
    instance returns that action's value (running the parse pass if needed).
    """

    def __init__(self, method, names, options, /):
        self._method = method
        self._names = names
        self._options = options
        self._default = Unset
        self._name = None

    def default(self, value, /):
        """
        set the default applied to every bound action; returns self.
        """
        self._default = value
        return self

    def bind(self, parser, /):
        action = getattr(parser, self._method)(*self._names, **self._options)
        if self._default is not Unset:
            action.default(self._default)
        return action

    def __set_name__(self, owner, name):
        self._name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._bindings[self._name].value

    def __set__(self, instance, value):
        raise AttributeError(f"option {self._name!r} is read-only")

    def __repr__(self):
        return f"{self._method}({', '.join(map(repr, self._names))})"


def action(*names, help=None, handler):
    """
    class-level form of OptionParser.action.
    """
    return Declaration("action", names, {"help": help, "handler": handler})


def action_with_argument(*names, help=None, handler):
    """
    class-level form of OptionParser.action_with_argument.
    """
    return Declaration("action_with_argument", names, {"help": help, "handler": handler})


def flag(*names, help=None):
    return Declaration("flag", names, {"help": help})


def counter(*names, help=None):
    return Declaration("counter", names, {"help": help})


def argument(*names, help=None, type=str):
    return Declaration("argument", names, {"help": help, "type": type})


def accumulator(*names, help=None, type=str):
    return Declaration("accumulator", names, {"help": help, "type": type})


def mapping(choices, /, *, help=None):
    return Declaration("mapping", (choices,), {"help": help})


__all__ = (
    "OptionParser",
    "Declaration",
    "action",
    "action_with_argument",
    "flag",
    "counter",
    "argument",
    "accumulator",
    "mapping",
)
