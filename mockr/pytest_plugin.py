"""Pytest plugin providing the ``mockr`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .errors import MockrError
from .registry import MockRegistry

logger = logging.getLogger(__name__)

_OPTION = "mockr_verify_on_teardown"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("mockr")
    group.addoption(
        "--mockr-verify-on-teardown",
        action="store_true",
        dest=_OPTION,
        default=None,
        help=(
            "Verify every mock created through the mockr fixture during "
            "teardown. Overrides the ini setting."
        ),
    )
    group.addoption(
        "--no-mockr-verify-on-teardown",
        action="store_false",
        dest=_OPTION,
        default=None,
        help="Skip automatic verification of mockr fixture mocks.",
    )
    parser.addini(
        _OPTION,
        "Verify mocks created through the mockr fixture during teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "mockr(verify_on_teardown: bool = True): override automatic "
            "verification of mockr fixture mocks for a single test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Remember each phase report so teardown can tell if the test failed."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _verify_on_teardown(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture should verify its mocks during teardown."""
    # Priority order: marker > fixture param > CLI option > INI setting
    marker = request.node.get_closest_marker("mockr")
    if marker is not None and "verify_on_teardown" in marker.kwargs:
        return bool(marker.kwargs["verify_on_teardown"])

    param_value = _get_param_verify_on_teardown(request)
    if param_value is not None:
        return param_value

    cli_value = request.config.getoption(_OPTION)
    if cli_value is not None:
        return bool(cli_value)

    return bool(request.config.getini(_OPTION))


def _get_param_verify_on_teardown(request: pytest.FixtureRequest) -> bool | None:
    """Return the indirect fixture parameter override if present."""
    param = getattr(request, "param", None)
    if param is None:
        return None
    if isinstance(param, bool):
        return param
    if isinstance(param, dict):
        if "verify_on_teardown" in param:
            return bool(param["verify_on_teardown"])
        msg = (
            "mockr fixture param dict must contain 'verify_on_teardown' key, "
            f"got keys: {list(param)}"
        )
        raise TypeError(msg)
    msg = (
        "mockr fixture param must be a bool or dict with 'verify_on_teardown' "
        f"key, got {type(param).__name__}"
    )
    raise TypeError(msg)


def _failed_call_report(item: pytest.Item) -> pytest.TestReport | None:
    """Return the call-phase report when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    if rep_call is not None and rep_call.failed:
        return rep_call
    return None


@pytest.fixture
def mockr(request: pytest.FixtureRequest) -> t.Generator[MockRegistry, None, None]:
    """Provide a :class:`MockRegistry` whose mocks are verified at teardown."""
    registry = MockRegistry()
    verify = _verify_on_teardown(request)
    yield registry
    if not verify:
        return
    try:
        registry.verify_all()
    except MockrError as err:
        logger.exception("Error during mockr verification")
        rep_call = _failed_call_report(request.node)
        if rep_call is not None:
            # Keep the original failure; show verification as extra context.
            rep_call.sections.append(
                ("mockr verification", f"{type(err).__name__}: {err}")
            )
            return
        pytest.fail(f"{type(err).__name__}: {err}", pytrace=False)
