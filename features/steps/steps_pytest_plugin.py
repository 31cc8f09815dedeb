"""Steps for testing the pytest plugin."""

from __future__ import annotations

import shutil
import subprocess
import sys
import tempfile
import typing as t
from pathlib import Path

from behave import given, then, when  # type: ignore[attr-defined]


class BehaveContext(t.Protocol):
    """Behave step context for plugin tests."""

    test_file: Path
    tmpdir: Path
    result: subprocess.CompletedProcess[str]


SATISFIED_TEST = """
def test_example(mockr):
    gauge = mockr.new_mock(name="gauge")
    gauge.expects.pressure().returns(95)
    assert gauge.double.pressure() == 95
"""

UNMET_TEST = """
def test_example(mockr):
    gauge = mockr.new_mock(name="gauge")
    gauge.expects.pressure().returns(95)
"""


def _write_test_file(context: BehaveContext, source: str) -> None:
    tmpdir = Path(tempfile.mkdtemp())
    context.test_file = tmpdir / "test_example.py"
    context.tmpdir = tmpdir
    context.test_file.write_text(source)


@given("a temporary test file that satisfies its expectations")
def step_create_satisfied_file(context: BehaveContext) -> None:
    """Write a pytest file whose expectation is met."""
    _write_test_file(context, SATISFIED_TEST)


@given("a temporary test file that leaves an expectation unmet")
def step_create_unmet_file(context: BehaveContext) -> None:
    """Write a pytest file whose expectation is never called."""
    _write_test_file(context, UNMET_TEST)


@when("I run pytest on the file")
def step_run_pytest(context: BehaveContext) -> None:
    """Execute pytest on the generated file with the plugin enabled."""
    result = subprocess.run(  # noqa: S603
        [
            sys.executable,
            "-m",
            "pytest",
            "-p",
            "mockr.pytest_plugin",
            "--rootdir",
            str(context.tmpdir),
            str(context.test_file),
        ],
        capture_output=True,
        text=True,
        check=False,
        cwd=context.tmpdir,
    )
    context.result = result
    shutil.rmtree(context.tmpdir)


@then("the run should pass")
def step_check_pass(context: BehaveContext) -> None:
    """Assert that pytest exited successfully."""
    assert context.result.returncode == 0, context.result.stdout  # noqa: S101


@then("the run should fail")
def step_check_fail(context: BehaveContext) -> None:
    """Assert that pytest reported the unmet expectation."""
    assert context.result.returncode != 0  # noqa: S101
    assert "gauge.pressure()" in context.result.stdout  # noqa: S101
