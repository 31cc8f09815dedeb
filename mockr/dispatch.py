"""Per-method dispatch tables selecting the first matching handler."""

from __future__ import annotations

import logging
import typing as t

from ._format import format_call, format_sections, numbered
from .errors import NoMatchingHandlerError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .handlers import CallHandler

logger = logging.getLogger(__name__)


class DispatchTable:
    """Ordered handlers registered for a single method name."""

    def __init__(self, method_name: str, *, owner: str | None = None) -> None:
        self.method_name = method_name
        self.owner = owner
        self.handlers: list[CallHandler] = []

    def __len__(self) -> int:
        return len(self.handlers)

    def __repr__(self) -> str:
        return f"DispatchTable({self.method_name!r}, handlers={len(self.handlers)})"

    def add(self, handler: CallHandler) -> CallHandler:
        """Append *handler* after every previously registered one."""
        self.handlers.append(handler)
        return handler

    def select(
        self,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object] | None = None,
    ) -> CallHandler:
        """Return the earliest registered handler accepting the arguments.

        Raises
        ------
        NoMatchingHandlerError
            When no handler accepts the arguments.
        """
        for handler in self.handlers:
            if handler.matches(args, kwargs):
                return handler
        raise self._no_match(tuple(args), kwargs or {})

    def resolve(
        self,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
        block: t.Callable[..., object] | None = None,
    ) -> object:
        """Invoke the first matching handler and return its response.

        A *block* is matched as one extra trailing positional argument.
        """
        actual = (*args, block) if block is not None else tuple(args)
        handler = self.select(actual, kwargs)
        logger.debug("Dispatching %s to %s", self.method_name, handler.describe())
        return handler.invoke()

    def _no_match(
        self, args: tuple[object, ...], kwargs: t.Mapping[str, object]
    ) -> NoMatchingHandlerError:
        reasons = [
            f"{handler.describe()}\n{handler.explain_mismatch(args, kwargs)}"
            for handler in self.handlers
        ]
        msg = format_sections(
            "No matching handler.",
            [
                (
                    "Actual call",
                    format_call(self.method_name, args, kwargs, owner=self.owner),
                ),
                ("Registered handlers", numbered(reasons)),
            ],
        )
        return NoMatchingHandlerError(
            msg, method_name=self.method_name, args=args, kwargs=kwargs
        )
