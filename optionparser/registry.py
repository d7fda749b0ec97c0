"""
Registration table mapping option spellings to actions.

Two disjoint key spaces:
- short flags: "-x"  → key "x" (exactly one character after one hyphen).
- long flags:  "--x" → key "x" (at least one character after two hyphens).

Rules
- a short character can be claimed only once, even by the same action.
- a long name can be claimed again: the latest registration wins, and the
  replacement is reported with DuplicateLongFlagWarning.
- spellings without a hyphen prefix would declare positional arguments,
  which are not supported.
- the spellings of one declaration are claimed together: if any of them is
  rejected, none is registered.
"""
import logging
import threading
import warnings
from types import MappingProxyType

from .faults import *

logger = logging.getLogger(__name__)


class Registry:
    """
    lookup tables for one parser.

    registration is serialized with a lock so options may be declared from
    concurrent initializers; lookups happen during the single-threaded parse
    pass and are not locked.
    """

    def __init__(self):
        self._shortflags = {}
        self._longflags = {}
        self._lock = threading.Lock()

    @property
    def shortflags(self):
        return MappingProxyType(self._shortflags)

    @property
    def longflags(self):
        return MappingProxyType(self._longflags)

    @staticmethod
    def key(name, /):
        """
        return the table key of the spelling `name` ('--verbose' → 'verbose', '-v' → 'v').

        this is also the name handed to handlers when the spelling is matched.
        """
        return name[2:] if name.startswith("--") else name[1:]

    def register(self, name, action, /):
        """
        claim the spelling `name` for `action`.

        raises
        - TypeError: name is not a string.
        - InvalidDeclarationError: "--" without a body, or "-" with anything
          other than exactly one character.
        - DuplicateDeclarationError: short character already claimed.
        - PositionalDeclarationError: no hyphen prefix.
        """
        self._claim((name,), action)

    def register_all(self, names, action, /):
        """
        claim every spelling of `names` for `action`, or none of them.

        every name is validated before the tables change, so a failing name
        leaves no earlier name registered. raises as register().
        """
        self._claim(tuple(names), action)

    def _claim(self, names, action):
        for name in names:
            if not isinstance(name, str):
                raise TypeError("option names must be strings")

        with self._lock:
            shortflags = {}
            longflags = {}
            for name in names:
                if name.startswith("--"):
                    if len(name) <= 2:
                        raise InvalidDeclarationError(
                            "illegal long flag %r -- must have at least one character after hyphen" % name
                        )
                    longflags.setdefault(self.key(name), []).append(name)
                elif name.startswith("-"):
                    if len(name) != 2:
                        raise InvalidDeclarationError(
                            "illegal short flag %r -- can only have one character after hyphen" % name
                        )
                    key = self.key(name)
                    if key in self._shortflags or key in shortflags:
                        raise DuplicateDeclarationError(name)
                    shortflags[key] = name
                else:
                    raise PositionalDeclarationError(name)

            replaced = []
            for key, spellings in longflags.items():
                if (previous := self._longflags.get(key)) is not None:
                    logger.warning("long flag %r re-registered (was %r)", spellings[0], previous)
                    replaced.append(spellings[0])
                # a name repeated within one claim replaces itself
                replaced.extend(spellings[1:])
                self._longflags[key] = action
            for key in shortflags:
                self._shortflags[key] = action

        # report at the caller of OptionParser.action
        for name in replaced:
            warnings.warn(DuplicateLongFlagWarning(name), stacklevel=5)
        logger.debug("registered %s", "/".join(names))

    def short(self, key, /):
        """
        return the action claiming the short character `key`, or None.
        """
        return self._shortflags.get(key)

    def long(self, key, /):
        """
        return the action claiming the long name `key`, or None.
        """
        return self._longflags.get(key)

    def __contains__(self, name):
        if not isinstance(name, str):
            return False
        if name.startswith("--"):
            return name[2:] in self._longflags
        if name.startswith("-"):
            return name[1:] in self._shortflags
        return False

    def __repr__(self):
        return f"Registry(short={sorted(self._shortflags)!r}, long={sorted(self._longflags)!r})"


__all__ = (
    "Registry",
)
