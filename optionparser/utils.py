import functools
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" parameter.

    intent
    - marks a class-level declaration without a default, since None is a
      valid default value.
    - never stored inside a Holder: held values are always real values.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process-wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    """

    @functools.cache
    def __new__(cls):
        """
        return the singleton instance (process-wide).
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls):
        """
        disallow subclassing to keep sentinel semantics stable.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    - callable → renamed in place and returned.
    - str      → returns a decorator that renames a future callable to that string.

    generated handlers (flag, counter, accumulator, ...) go through this so
    tracebacks show "counter" instead of "OptionParser.counter.<locals>.handler".
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


_ORDINALS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def ordinal(number):
    """
    spell a 1-based position: words up to ten, then 11th, 21st, 22nd, 23rd, ...
    """
    if 1 <= number <= len(_ORDINALS):
        return _ORDINALS[number - 1]
    if number % 100 in (11, 12, 13):
        return f"{number}th"
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


__all__ = (
    "UnsetType",
    "Unset",
    "rename",
    "ordinal",
)
