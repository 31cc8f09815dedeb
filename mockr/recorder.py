"""Fluent capture of call shapes using ordinary call syntax."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .handlers import CallHandler

    OnCall = t.Callable[..., CallHandler]


class CallRecorder:
    """Forward ``recorder.name(*args, **kwargs)`` to a registration callback.

    ``mock.stubs.greet("bob").returns("hi bob")`` is equivalent to
    ``mock.stub("greet", "bob").returns("hi bob")``. Only special
    ``__dunder__`` names are left alone so identity and reflection keep
    working.
    """

    __slots__ = ("__on_call",)

    def __init__(self, on_call: OnCall) -> None:
        object.__setattr__(self, "_CallRecorder__on_call", on_call)

    def __getattribute__(self, name: str) -> t.Any:
        if name.startswith("__") and name.endswith("__"):
            return object.__getattribute__(self, name)
        on_call = object.__getattribute__(self, "_CallRecorder__on_call")

        def record(*args: object, **kwargs: object) -> CallHandler:
            return on_call(name, *args, **kwargs)

        record.__name__ = name
        return record

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} does not support attribute assignment"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        on_call = object.__getattribute__(self, "_CallRecorder__on_call")
        return f"CallRecorder({getattr(on_call, '__name__', on_call)!r})"
