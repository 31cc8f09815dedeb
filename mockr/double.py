"""The stand-in object handed to code under test."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .mock import Mock

# Attributes the double machinery itself relies on.
RESERVED_NAMES: frozenset[str] = frozenset(
    {
        "__class__",
        "__del__",
        "__delattr__",
        "__dict__",
        "__getattr__",
        "__getattribute__",
        "__init__",
        "__init_subclass__",
        "__new__",
        "__setattr__",
        "__slots__",
        "__weakref__",
        "_mockr_mock",
    }
)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class Double:
    """Base class for doubles; each :class:`Mock` derives a private subclass.

    Registered method names are installed on that subclass, so stubbed
    special methods such as ``__len__`` or ``__call__`` behave through the
    usual builtins. Any other public name resolves to a callable that fails
    with :class:`~mockr.errors.UnknownMethodError` once it is called.
    """

    __slots__ = ()
    _mockr_mock: t.ClassVar[Mock | None] = None

    def __getattr__(self, name: str) -> t.Callable[..., object]:
        mock = type(self)._mockr_mock
        if mock is None or _is_dunder(name):
            raise AttributeError(name)

        def unregistered(*args: object, **kwargs: object) -> object:
            return mock.dispatch(name, args, kwargs)

        unregistered.__name__ = name
        return unregistered

    def __repr__(self) -> str:
        mock = type(self)._mockr_mock
        name = mock.name if mock is not None else None
        return f"<Double {name!r}>" if name else "<Double>"


def make_double_type(mock: Mock) -> type[Double]:
    """Create the private :class:`Double` subclass for *mock*."""
    return type(
        "Double",
        (Double,),
        {"__slots__": (), "_mockr_mock": mock, "__module__": __name__},
    )


def install_method(double_type: type[Double], method_name: str) -> None:
    """Route calls to *method_name* on instances of *double_type* to its mock."""
    if method_name in RESERVED_NAMES:
        msg = f"{method_name!r} is reserved and cannot be stubbed or expected"
        raise ValueError(msg)
    mock = double_type._mockr_mock
    if mock is None:
        msg = "install_method() requires a double type created by make_double_type()"
        raise TypeError(msg)

    def forward(self: Double, *args: object, **kwargs: object) -> object:
        return mock.dispatch(method_name, args, kwargs)

    forward.__name__ = method_name
    forward.__qualname__ = f"Double.{method_name}"
    setattr(double_type, method_name, forward)
