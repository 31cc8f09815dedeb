"""The :class:`Mock` controller: registration, dispatch and verification."""

from __future__ import annotations

import logging
import threading
import types
import typing as t

from ._format import format_call, format_sections
from .dispatch import DispatchTable
from .double import Double, install_method, make_double_type
from .errors import DuplicateExpectationCallError, UnknownMethodError
from .handlers import CallHandler
from .recorder import CallRecorder
from .verifiers import ExpectationVerifier

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


class Mock:
    """Programmable test double with optional stubs and mandatory expectations.

    Stubs may be called any number of times and are never verified.
    Expectations must be matched exactly once before :meth:`verify` is
    called; a second match fails immediately.

    Example
    -------
    >>> gauge = Mock(name="gauge")
    >>> _ = gauge.expects.pressure().returns(95)
    >>> gauge.double.pressure()
    95
    >>> gauge.verify()
    """

    def __init__(
        self,
        initializer: t.Callable[[Mock], object] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        """Create a mock and optionally configure it.

        Parameters
        ----------
        initializer:
            Called with the new mock so stubs and expectations can be
            registered in one expression.
        name:
            Label used in failure messages and in the double's ``repr``.
        """
        self.name = name
        self._lock = threading.RLock()
        self._tables: dict[str, DispatchTable] = {}
        self.expectations: list[CallHandler] = []
        self.satisfied: set[CallHandler] = set()
        self._double_type = make_double_type(self)
        self.double: Double = self._double_type()
        if initializer is not None:
            initializer(self)

    def __repr__(self) -> str:
        return (
            f"Mock(name={self.name!r}, methods={sorted(self._tables)!r}, "
            f"expectations={len(self.expectations)})"
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    @property
    def stubs(self) -> CallRecorder:
        """Record stubs with call syntax: ``mock.stubs.ping().returns("pong")``."""
        return CallRecorder(self.stub)

    @property
    def expects(self) -> CallRecorder:
        """Record expectations with call syntax: ``mock.expects.commit()``."""
        return CallRecorder(self.expect)

    @property
    def dispatch_tables(self) -> t.Mapping[str, DispatchTable]:
        """Return a read-only view of the per-method dispatch tables."""
        return types.MappingProxyType(self._tables)

    def stub(
        self, method_name: str, /, *patterns: object, **kw_patterns: object
    ) -> CallHandler:
        """Register an optional, repeatable call to *method_name*."""
        with self._lock:
            handler = self._new_handler(method_name, patterns, kw_patterns)
            self._table_for(method_name).add(handler)
        logger.debug("Registered stub %s", handler.describe())
        return handler

    def expect(
        self, method_name: str, /, *patterns: object, **kw_patterns: object
    ) -> CallHandler:
        """Register a call to *method_name* that must happen exactly once."""
        with self._lock:
            handler = self._new_handler(
                method_name, patterns, kw_patterns, listener=self._mark_satisfied
            )
            self._table_for(method_name).add(handler)
            self.expectations.append(handler)
        logger.debug("Registered expectation %s", handler.describe())
        return handler

    def _new_handler(
        self,
        method_name: str,
        patterns: tuple[object, ...],
        kw_patterns: dict[str, object],
        *,
        listener: t.Callable[[CallHandler], None] | None = None,
    ) -> CallHandler:
        if not isinstance(method_name, str) or not method_name.isidentifier():
            msg = f"method name must be an identifier, got {method_name!r}"
            raise ValueError(msg)
        return CallHandler(
            method_name,
            patterns,
            dict(kw_patterns),
            listener=listener,
            owner=self.name,
        )

    def _table_for(self, method_name: str) -> DispatchTable:
        table = self._tables.get(method_name)
        if table is None:
            install_method(self._double_type, method_name)
            table = self._tables[method_name] = DispatchTable(
                method_name, owner=self.name
            )
        return table

    def _mark_satisfied(self, handler: CallHandler) -> None:
        if handler in self.satisfied:
            msg = format_sections(
                "Unexpected extra call.",
                [("Expected once", handler.describe())],
            )
            raise DuplicateExpectationCallError(msg, handler=handler)
        self.satisfied.add(handler)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(
        self,
        method_name: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
        *,
        block: t.Callable[..., object] | None = None,
    ) -> object:
        """Route a call through the dispatch table for *method_name*."""
        with self._lock:
            table = self._tables.get(method_name)
            if table is None:
                actual = (*args, block) if block is not None else tuple(args)
                msg = format_sections(
                    "Unknown method.",
                    [
                        (
                            "Actual call",
                            format_call(method_name, actual, kwargs, owner=self.name),
                        ),
                        (
                            "Registered methods",
                            ", ".join(sorted(self._tables)) or "(none)",
                        ),
                    ],
                )
                raise UnknownMethodError(
                    msg, method_name=method_name, args=actual, kwargs=kwargs
                )
            return table.resolve(args, kwargs, block)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify(self) -> None:
        """Fail with :class:`UnmetExpectationError` if an expectation is missing."""
        with self._lock:
            ExpectationVerifier(self.expectations).verify(self.satisfied)
        logger.debug(
            "Verified %d expectation(s) on %s", len(self.expectations), self
        )

    def use(self, consumer: t.Callable[[Double], T]) -> T:
        """Call *consumer* with the double, then verify.

        Verification is skipped when *consumer* raises.
        """
        result = consumer(self.double)
        self.verify()
        return result

    def __enter__(self) -> Double:
        """Return the double; :meth:`verify` runs on a clean exit."""
        return self.double

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.verify()
