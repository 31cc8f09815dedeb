"""Formatting helpers shared by failure messages."""

from __future__ import annotations

import typing as t
from textwrap import indent


def format_args(
    args: t.Sequence[object], kwargs: t.Mapping[str, object] | None = None
) -> str:
    """Render positional and keyword values the way a call would show them."""
    parts = [repr(arg) for arg in args]
    if kwargs:
        parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return ", ".join(parts)


def format_call(
    name: str,
    args: t.Sequence[object] = (),
    kwargs: t.Mapping[str, object] | None = None,
    *,
    owner: str | None = None,
) -> str:
    """Return ``owner.name(args)`` for use in messages."""
    target = f"{owner}.{name}" if owner else name
    return f"{target}({format_args(args, kwargs)})"


def numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def format_sections(title: str, sections: t.Sequence[tuple[str, str]]) -> str:
    """Join *title* and the non-empty labelled *sections* into one message."""
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)
