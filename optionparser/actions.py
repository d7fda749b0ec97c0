r"""
optionparser actions: the units of behavior bound to option spellings.

Overview
- Action[_T] is a closed variant with exactly two cases:
  • WithoutArgument[_T]: toggle/count-style; handler(value, name) -> _T.
  • WithArgument[_T]: value-taking; handler(value, name, argument) -> _T.
  The dispatch loop matches on these two cases; further subclassing is
  rejected so a third kind can never fall through unhandled.

- State
  • Each action owns a holder: None until the first invocation (or default),
    then Holder(result). Every invocation feeds the previous holder to the
    handler and stores the new result, which is how accumulation is expressed:
        counter:     lambda value, name: orelse(value, int) + 1
        accumulator: lambda value, name, argument: orelse(value, list) + [argument]
        last-wins:   lambda value, name, argument: argument

- Reading
  • Action.value triggers the owning parser's single parse pass (if it has not
    run yet) and returns the held value, or raises MissingRequiredOptionError.

Quick example:
    >>> parser = OptionParser(["-v", "--name=zaphod"])
    >>> verbose = parser.action("-v", handler=lambda value, name: True)
    >>> who = parser.action_with_argument("--name", handler=lambda value, name, argument: argument)
    >>> who.value
    'zaphod'
"""
import logging
from typing import Generic, TypeVar

from .faults import *
from .holder import Holder

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class Action(Generic[_T]):
    """
    base of the two action variants (not instantiable on its own).

    attributes
    - names: every spelling this action was registered under, in order.
    - help: optional description (not parsed, kept for help renderers).
    - handler: the update function.
    - holder: Holder | None, the current state.
    """
    __sealed__ = False

    def __init__(self, parser, /, *, help=None, handler):
        if type(self) is Action:
            raise TypeError("Action cannot be instantiated directly; use WithArgument or WithoutArgument")
        if not callable(handler):
            raise TypeError("action handler must be callable")
        if help is not None and not isinstance(help, str):
            raise TypeError("action help must be a string")
        self._parser = parser
        self._holder = None
        self.names = []
        self.help = help
        self.handler = handler

    def __init_subclass__(cls, **options):
        if Action.__sealed__:
            raise TypeError(f"type {cls.__mro__[1].__name__!r} is not an acceptable base type")
        super().__init_subclass__(**options)

    @property
    def holder(self):
        return self._holder

    @property
    def value(self):
        """
        the parsed value of this action.

        the first read (of this or any other action of the same parser) runs
        the parse pass; later reads return the cached outcome.
        """
        self._parser.parse()
        if self._holder is None:
            raise MissingRequiredOptionError(self.names)
        return self._holder.value

    def default(self, value, /):
        """
        pre-seed the holder; the default is the previous value seen by the
        first invocation. returns self for chaining.
        """
        if self._parser.parsed:
            raise InvalidDeclarationError("cannot set a default for %s after parsing" % "/".join(self.names))
        self._holder = Holder(value)
        return self

    def __repr__(self):
        return f"{type(self).__name__}(names={self.names!r}, help={self.help!r}, holder={self._holder!r})"

    def __rich_repr__(self):
        yield "names", self.names
        yield "help", self.help, None
        yield "holder", self._holder


class WithoutArgument(Action[_T]):
    """
    argument-free action: invoked once per occurrence of any of its spellings.
    """

    def parse(self, name, /, *, spelling=None):
        logger.debug("invoking %s for %r", type(self).__name__, spelling or name)
        self._holder = Holder(self.handler(self._holder, name))


class WithArgument(Action[_T]):
    """
    argument-taking action: invoked once per occurrence with its attached argument.

    a ValueError raised by the handler (typically a failed conversion such as
    int("x")) is reported as InvalidArgumentError chained to the original.
    """

    def parse(self, name, argument, /, *, spelling=None):
        logger.debug("invoking %s for %r with %r", type(self).__name__, spelling or name, argument)
        try:
            result = self.handler(self._holder, name, argument)
        except OptionParserException:
            raise
        except ValueError as exception:
            raise InvalidArgumentError(name, argument, spelling=spelling) from exception
        self._holder = Holder(result)


# Close the variant: the dispatch loop handles exactly these two cases.
Action.__sealed__ = True


__all__ = (
    "Action",
    "WithoutArgument",
    "WithArgument",
)
