"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

pytest_plugins = ("mockr.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def debug_mockr_logging(
    caplog: pytest.LogCaptureFixture,
) -> t.Generator[None, None, None]:
    """Capture mockr debug records so failing tests show dispatch decisions."""
    with caplog.at_level(logging.DEBUG, logger="mockr"):
        yield
