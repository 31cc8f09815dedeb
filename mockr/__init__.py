"""Mock objects with stubbed and expected calls, verified after the test.

A :class:`Mock` owns a *double* handed to the code under test. Calls on the
double are matched against registered argument patterns in registration
order; :meth:`Mock.verify` checks that every expected call happened once.
"""

from __future__ import annotations

from .comparators import (
    Any,
    Comparator,
    Contains,
    InRange,
    IsA,
    Predicate,
    Regex,
    StartsWith,
    case_equals,
)
from .dispatch import DispatchTable
from .double import Double
from .errors import (
    DuplicateExpectationCallError,
    MockrError,
    NoMatchingHandlerError,
    UnknownMethodError,
    UnmetExpectationError,
)
from .handlers import CallHandler
from .mock import Mock
from .recorder import CallRecorder
from .registry import MockRegistry
from .testcase import MockTestCase

__all__ = [
    "Any",
    "CallHandler",
    "CallRecorder",
    "Comparator",
    "Contains",
    "DispatchTable",
    "Double",
    "DuplicateExpectationCallError",
    "InRange",
    "IsA",
    "Mock",
    "MockRegistry",
    "MockTestCase",
    "MockrError",
    "NoMatchingHandlerError",
    "Predicate",
    "Regex",
    "StartsWith",
    "UnknownMethodError",
    "UnmetExpectationError",
    "case_equals",
]
