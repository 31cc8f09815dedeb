"""Failure types raised by mockr."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .handlers import CallHandler


class MockrError(AssertionError):
    """Base class for failures signalled by a mock.

    Deriving from :class:`AssertionError` lets both pytest and unittest report
    these as test failures rather than errors.
    """


class _CallError(MockrError):
    """Failure raised while routing a call through the double."""

    def __init__(
        self,
        message: str,
        *,
        method_name: str,
        args: tuple[object, ...] = (),
        kwargs: t.Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.method_name = method_name
        self.args_received = args
        self.kwargs_received = dict(kwargs or {})


class UnknownMethodError(_CallError):
    """The double received a call to a method that was never registered."""


class NoMatchingHandlerError(_CallError):
    """No registered handler accepted the actual arguments."""


class DuplicateExpectationCallError(MockrError):
    """An already satisfied expectation was matched a second time."""

    def __init__(self, message: str, *, handler: CallHandler) -> None:
        super().__init__(message)
        self.handler = handler


class UnmetExpectationError(MockrError):
    """Verification found expectations that were never satisfied."""

    def __init__(self, message: str, *, missing: t.Sequence[CallHandler]) -> None:
        super().__init__(message)
        self.missing = list(missing)


__all__ = [
    "DuplicateExpectationCallError",
    "MockrError",
    "NoMatchingHandlerError",
    "UnknownMethodError",
    "UnmetExpectationError",
]
