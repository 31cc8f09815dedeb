"""Argument patterns and the case-equality rule used for matching."""

from __future__ import annotations

import abc
import dataclasses as dc
import re
import typing as t


class Comparator(abc.ABC):
    """Pattern that decides for itself whether an actual value matches."""

    __slots__ = ()

    @abc.abstractmethod
    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""


@dc.dataclass(frozen=True, slots=True)
class Any(Comparator):
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True


@dc.dataclass(frozen=True, slots=True)
class IsA(Comparator):
    """Match instances of ``typ``."""

    typ: type | tuple[type, ...]

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)


@dc.dataclass(frozen=True, slots=True, init=False)
class Regex(Comparator):
    """Match strings in which ``pattern`` is found."""

    pattern: str
    _compiled: re.Pattern[str] = dc.field(repr=False, compare=False)

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        compiled = re.compile(pattern)
        object.__setattr__(self, "pattern", compiled.pattern)
        object.__setattr__(self, "_compiled", compiled)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        if not isinstance(value, str):
            return False
        return self._compiled.search(value) is not None


@dc.dataclass(frozen=True, slots=True)
class Contains(Comparator):
    """Match containers holding ``item``."""

    item: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        try:
            return self.item in value  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith(Comparator):
    """Match strings beginning with ``prefix``."""

    prefix: str

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class InRange(Comparator):
    """Match values between ``low`` and ``high``, both inclusive."""

    low: t.Any
    high: t.Any

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``low <= value <= high``."""
        try:
            return bool(self.low <= value <= self.high)
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[t.Any], object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))


def case_equals(pattern: object, actual: object) -> bool:
    """Return ``True`` when *actual* satisfies *pattern*.

    Comparators decide for themselves, ranges test membership, compiled
    regular expressions search strings, classes test ``isinstance`` and any
    other value is compared with ``==``.
    """
    if isinstance(pattern, Comparator):
        return bool(pattern(actual))
    if isinstance(pattern, range):
        try:
            return actual in pattern
        except TypeError:
            return False
    if isinstance(pattern, re.Pattern):
        return isinstance(actual, str) and pattern.search(actual) is not None
    if isinstance(pattern, type):
        return isinstance(actual, pattern)
    return bool(pattern == actual)


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "InRange",
    "IsA",
    "Predicate",
    "Regex",
    "StartsWith",
    "case_equals",
]
