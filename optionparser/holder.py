"""
Value cells for option state.

A `Holder` wraps exactly one value. The absence of a value is expressed by the
absence of a holder (``None``), never by a special value inside one, so that
falsy results (``False``, ``0``, ``""``, ``[]``) and even ``None`` itself are
legitimate option values:

    >>> orelse(None, lambda: 0)
    0
    >>> orelse(Holder(None), lambda: 0) is None
    True

Holders are immutable; an action replaces its holder on every invocation.
"""
from typing import Generic, TypeVar

_T = TypeVar("_T")


class Holder(Generic[_T]):
    """
    single-slot immutable container.

    notes
    - equality and hashing follow the wrapped value.
    - subclassing is blocked: a holder is only ever a holder.
    """
    __slots__ = ("_value",)

    def __init__(self, value, /):
        object.__setattr__(self, "_value", value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value, /):
        raise AttributeError("holder is immutable")

    def __eq__(self, other):
        if not isinstance(other, Holder):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((Holder, self._value))

    def __repr__(self):
        return f"Holder({self._value!r})"

    def __rich_repr__(self):
        """
        rich pretty-printing hook: rendered as Holder(<value>).
        """
        yield self._value

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Holder' is not an acceptable base type")


def orelse(holder, factory, /):
    """
    return the held value, or ``factory()`` when there is no holder.

    `factory` is only called for the empty case, so it may build fresh
    mutable objects (e.g. ``list``) without sharing them between calls.
    """
    if holder is None:
        return factory()
    return holder.value


__all__ = (
    "Holder",
    "orelse",
)
