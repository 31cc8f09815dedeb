"""Verification of mandatory expectations for :class:`~mockr.mock.Mock`."""

from __future__ import annotations

import typing as t

from ._format import format_sections, numbered
from .errors import UnmetExpectationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .handlers import CallHandler


class ExpectationVerifier:
    """Check that every expectation was satisfied."""

    def __init__(self, expectations: t.Sequence[CallHandler]) -> None:
        self._expectations = expectations

    def missing(self, satisfied: t.Collection[CallHandler]) -> list[CallHandler]:
        """Return unsatisfied expectations in registration order."""
        return [exp for exp in self._expectations if exp not in satisfied]

    def verify(self, satisfied: t.Collection[CallHandler]) -> None:
        """Raise :class:`UnmetExpectationError` naming the first missing call."""
        missing = self.missing(satisfied)
        if not missing:
            return
        done = [exp.describe() for exp in self._expectations if exp in satisfied]
        msg = format_sections(
            "Unmet expectation.",
            [
                ("Expected", missing[0].describe()),
                ("Missing expectations", numbered([m.describe() for m in missing])),
                ("Satisfied expectations", numbered(done)),
            ],
        )
        raise UnmetExpectationError(msg, missing=missing)
