"""Call handlers: one registered argument pattern and its response."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._format import format_call
from .comparators import case_equals

Response = t.Callable[[], object]
Listener = t.Callable[["CallHandler"], None]


def _no_value() -> None:
    return None


@dc.dataclass(eq=False, slots=True)
class CallHandler:
    """Argument patterns, response producer and optional listener for a call.

    Handlers compare by identity so two handlers with identical patterns stay
    distinct members of a mock's satisfied set.
    """

    method_name: str
    arg_patterns: tuple[object, ...] = ()
    kwarg_patterns: dict[str, object] = dc.field(default_factory=dict)
    response: Response = _no_value
    listener: Listener | None = None
    owner: str | None = None

    # ------------------------------------------------------------------
    # Response configuration
    # ------------------------------------------------------------------
    def runs(self, producer: Response) -> CallHandler:
        """Compute the return value by calling *producer* with no arguments."""
        if not callable(producer):
            msg = f"response producer must be callable, got {type(producer).__name__}"
            raise TypeError(msg)
        self.response = producer
        return self

    def returns(self, value: object) -> CallHandler:
        """Return *value* from every matching call."""
        return self.runs(lambda: value)

    def raises(self, exc: BaseException | type[BaseException]) -> CallHandler:
        """Raise *exc* from every matching call."""

        def _raise() -> t.NoReturn:
            raise exc

        return self.runs(_raise)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------
    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object] | None = None
    ) -> bool:
        """Return ``True`` if the actual arguments satisfy every paired pattern."""
        return self._first_mismatch(args, kwargs or {}) is None

    def explain_mismatch(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object] | None = None
    ) -> str:
        """Return why the arguments were rejected, or an empty string."""
        return self._first_mismatch(args, kwargs or {}) or ""

    def _first_mismatch(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> str | None:
        expected = len(self.arg_patterns)
        if len(args) > expected:
            return (
                f"expected at most {expected} positional argument(s), "
                f"got {len(args)}"
            )
        # zip() stops at the shorter sequence; unpaired patterns are unchecked.
        for index, (pattern, actual) in enumerate(
            zip(self.arg_patterns, args, strict=False)
        ):
            if not case_equals(pattern, actual):
                return f"arg[{index}]={actual!r} did not match {pattern!r}"
        for key, actual in kwargs.items():
            if key not in self.kwarg_patterns:
                return f"unexpected keyword argument {key!r}"
            pattern = self.kwarg_patterns[key]
            if not case_equals(pattern, actual):
                return f"{key}={actual!r} did not match {pattern!r}"
        return None

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------
    def notify(self) -> None:
        """Tell the listener, if any, that this handler was selected."""
        if self.listener is not None:
            self.listener(self)

    def invoke(self) -> object:
        """Notify the listener and return the response producer's value."""
        self.notify()
        return self.response()

    def describe(self) -> str:
        """Return the registered call shape, e.g. ``gauge.pressure('psi')``."""
        return format_call(
            self.method_name, self.arg_patterns, self.kwarg_patterns, owner=self.owner
        )

    def __str__(self) -> str:
        return f"call to {self.describe()}"
