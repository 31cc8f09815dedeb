"""Unit tests for :class:`mockr.mock.Mock`."""

from __future__ import annotations

import collections.abc
import threading

import pytest

from mockr import (
    DuplicateExpectationCallError,
    IsA,
    Mock,
    NoMatchingHandlerError,
    UnknownMethodError,
    UnmetExpectationError,
)


# ----------------------------------------------------------------------
# Stubs
# ----------------------------------------------------------------------
def test_stub_without_arguments_returns_none() -> None:
    """An unconfigured stub returns ``None``."""
    mock = Mock()
    mock.stub("ping")
    assert mock.double.ping() is None


def test_stub_can_be_called_repeatedly() -> None:
    """Stubs answer every call and never affect verification."""
    mock = Mock()
    mock.stub("ping").returns("pong")
    assert mock.double.ping() == "pong"
    assert mock.double.ping() == "pong"
    mock.verify()


def test_initializer_configures_mock() -> None:
    """The initializer receives the mock before it is returned."""
    mock = Mock(lambda m: m.stub("ping").returns("pong"))
    assert mock.double.ping() == "pong"


def test_stub_same_method_with_different_arguments() -> None:
    """Handlers for one method are selected by their argument patterns."""
    mock = Mock()
    mock.stub("last_name", "marlon").returns("brando")
    mock.stub("last_name", "jimmy").returns("cagney")
    assert mock.double.last_name("jimmy") == "cagney"
    assert mock.double.last_name("marlon") == "brando"


def test_unmatched_arguments_fail() -> None:
    """A registered method with no matching handler fails loudly."""
    mock = Mock()
    mock.stub("greet", "alice").returns("hi alice")
    mock.stub("greet", "bob").returns("hi bob")
    assert mock.double.greet("bob") == "hi bob"
    with pytest.raises(NoMatchingHandlerError, match="greet\\('carol'\\)"):
        mock.double.greet("carol")


def test_range_patterns() -> None:
    """Ranges match by membership."""
    mock = Mock()
    mock.stub("score", range(1, 6)).returns("low")
    mock.stub("score", range(6, 11)).returns("high")
    assert mock.double.score(3) == "low"
    assert mock.double.score(8) == "high"


def test_keyword_patterns() -> None:
    """Keyword arguments are matched by name."""
    mock = Mock()
    mock.stub("connect", "db", timeout=IsA(int)).returns("conn")
    assert mock.double.connect("db", timeout=5) == "conn"
    with pytest.raises(NoMatchingHandlerError, match="timeout"):
        mock.double.connect("db", timeout="5")


def test_stub_shadowing_object_methods() -> None:
    """Names provided by ``object`` can be stubbed, including special methods."""
    mock = Mock()
    mock.stub("__str__").returns("foobar")
    mock.stub("__len__").returns(3)
    mock.stub("__call__", 1).returns("called")
    assert str(mock.double) == "foobar"
    assert len(mock.double) == 3
    assert mock.double(1) == "called"


def test_stubs_do_not_leak_between_mocks() -> None:
    """Each mock installs methods on its own double type."""
    first, second = Mock(), Mock()
    first.stub("ping").returns("pong")
    assert type(first.double) is not type(second.double)
    with pytest.raises(UnknownMethodError):
        second.double.ping()


def test_reserved_names_cannot_be_registered() -> None:
    """Names the double relies on are rejected."""
    mock = Mock()
    with pytest.raises(ValueError, match="reserved"):
        mock.stub("__getattr__")
    assert "__getattr__" not in mock.dispatch_tables


def test_method_names_must_be_identifiers() -> None:
    """Registration validates the method name."""
    with pytest.raises(ValueError, match="identifier"):
        Mock().stub("not a name")


# ----------------------------------------------------------------------
# Unknown methods
# ----------------------------------------------------------------------
def test_unknown_method_fails_with_arguments() -> None:
    """Calling a never-registered method reports its name and arguments."""
    mock = Mock(name="bird")
    with pytest.raises(UnknownMethodError) as excinfo:
        mock.double.fly("south", speed=3)
    err = excinfo.value
    assert err.method_name == "fly"
    assert err.args_received == ("south",)
    assert err.kwargs_received == {"speed": 3}
    assert "bird.fly('south', speed=3)" in str(err)


def test_unknown_method_is_distinct_from_no_match() -> None:
    """UnknownMethodError and NoMatchingHandlerError are separate failures."""
    assert not issubclass(UnknownMethodError, NoMatchingHandlerError)
    assert not issubclass(NoMatchingHandlerError, UnknownMethodError)


def test_unregistered_special_names_raise_attribute_error() -> None:
    """Special method lookups keep normal Python semantics."""
    double = Mock().double
    assert not hasattr(double, "__deepcopy__")
    with pytest.raises(TypeError):
        len(double)  # type: ignore[arg-type]


def test_late_registration_reaches_earlier_lookup() -> None:
    """A method fetched before registration dispatches once registered."""
    mock = Mock()
    ping = mock.double.ping
    mock.stub("ping").returns("pong")
    assert ping() == "pong"


# ----------------------------------------------------------------------
# Expectations and verification
# ----------------------------------------------------------------------
def test_expectation_called_once_verifies() -> None:
    """An expectation matched once satisfies verification."""
    mock = Mock()
    mock.expect("bing")
    assert mock.double.bing() is None
    mock.verify()


def test_expectation_not_called_fails_verification() -> None:
    """Verification names the unmet expectation."""
    mock = Mock()
    mock.expect("bing")
    with pytest.raises(UnmetExpectationError, match="bing\\(\\)") as excinfo:
        mock.verify()
    assert [h.method_name for h in excinfo.value.missing] == ["bing"]


def test_expectation_called_twice_fails_immediately() -> None:
    """The second match of a satisfied expectation raises."""
    mock = Mock()
    handler = mock.expect("commit")
    mock.double.commit()
    with pytest.raises(DuplicateExpectationCallError) as excinfo:
        mock.double.commit()
    assert excinfo.value.handler is handler


def test_duplicate_call_does_not_produce_response() -> None:
    """The listener fails before the response producer is evaluated."""
    calls: list[str] = []
    mock = Mock()
    mock.expect("commit").runs(lambda: calls.append("ran"))
    mock.double.commit()
    with pytest.raises(DuplicateExpectationCallError):
        mock.double.commit()
    assert calls == ["ran"]


def test_identical_expectations_are_tracked_separately() -> None:
    """Two expectations with the same shape need a match each."""
    mock = Mock()
    first = mock.expect("tick")
    mock.expect("tick")
    mock.double.tick()
    with pytest.raises(UnmetExpectationError) as excinfo:
        mock.verify()
    assert first in mock.satisfied
    assert excinfo.value.missing == [mock.expectations[1]]
    # The earlier handler is already satisfied, so a second call fails
    # rather than falling through to the later handler.
    with pytest.raises(DuplicateExpectationCallError):
        mock.double.tick()


def test_verify_reports_first_missing_expectation() -> None:
    """Only the first missing expectation is named as the expected call."""
    mock = Mock(name="repo")
    mock.expect("load", 1)
    mock.expect("save", 2)
    with pytest.raises(UnmetExpectationError) as excinfo:
        mock.verify()
    message = str(excinfo.value)
    assert "Expected:\n  repo.load(1)" in message
    assert "2. repo.save(2)" in message


def test_verify_without_expectations_always_succeeds() -> None:
    """Stub activity never affects verification."""
    Mock().verify()
    mock = Mock()
    mock.stub("ping")
    mock.verify()
    mock.double.ping()
    mock.verify()


def test_stub_and_expectation_for_same_method() -> None:
    """Stubs and expectations share the method's dispatch table."""
    mock = Mock()
    mock.stub("get", "cached").returns(1)
    mock.expect("get", "fresh").returns(2)
    assert mock.double.get("cached") == 1
    assert mock.double.get("cached") == 1
    assert mock.double.get("fresh") == 2
    mock.verify()


# ----------------------------------------------------------------------
# Dispatch entry point
# ----------------------------------------------------------------------
def test_dispatch_with_block() -> None:
    """A block is matched as a trailing positional argument."""
    mock = Mock()
    mock.stub("each", IsA(collections.abc.Callable)).returns("done")
    assert mock.dispatch("each", block=lambda item: item) == "done"
    with pytest.raises(NoMatchingHandlerError):
        mock.dispatch("each", ("item",), block=lambda item: item)


def test_dispatch_unknown_method() -> None:
    """dispatch() reports unknown names, including any block."""
    mock = Mock()
    mock.stub("ping")
    with pytest.raises(UnknownMethodError, match="Registered methods:\n  ping"):
        mock.dispatch("fly", (1,))


# ----------------------------------------------------------------------
# use() and context manager
# ----------------------------------------------------------------------
def test_use_verifies_after_consumer() -> None:
    """use() fails when the consumer leaves expectations unmet."""
    mock = Mock()
    mock.expect("some_method")
    mock.expect("some_other_method")
    with pytest.raises(UnmetExpectationError, match="some_other_method"):
        mock.use(lambda double: double.some_method())


def test_use_returns_consumer_result() -> None:
    """use() passes the double and returns the consumer's value."""
    mock = Mock(lambda m: m.expect("ping").returns("pong"))
    assert mock.use(lambda double: double.ping()) == "pong"


def test_use_skips_verify_when_consumer_raises() -> None:
    """A consumer failure propagates instead of the verification failure."""
    mock = Mock(lambda m: m.expect("never"))

    def consumer(double: object) -> None:
        msg = "boom"
        raise RuntimeError(msg)

    with pytest.raises(RuntimeError, match="boom"):
        mock.use(consumer)


def test_context_manager_verifies_on_clean_exit() -> None:
    """Leaving the block without an error verifies the mock."""
    mock = Mock(lambda m: m.expect("save"))
    with pytest.raises(UnmetExpectationError), mock:
        pass
    with mock as double:
        double.save()


def test_context_manager_skips_verify_on_error() -> None:
    """An exception inside the block is not replaced by verification."""
    mock = Mock(lambda m: m.expect("save"))
    with pytest.raises(KeyError), mock:
        raise KeyError("x")


# ----------------------------------------------------------------------
# Threads
# ----------------------------------------------------------------------
def test_expectation_satisfied_once_across_threads() -> None:
    """Concurrent calls satisfy an expectation exactly once."""
    mock = Mock(lambda m: m.expect("commit"))
    errors: list[BaseException] = []

    def worker() -> None:
        try:
            mock.double.commit()
        except DuplicateExpectationCallError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(errors) == 7
    mock.verify()


def test_repr_lists_methods() -> None:
    """The mock and its double have informative reprs."""
    mock = Mock(name="gauge")
    mock.stub("pressure")
    assert repr(mock) == "Mock(name='gauge', methods=['pressure'], expectations=0)"
    assert repr(mock.double) == "<Double 'gauge'>"
    assert repr(Mock().double) == "<Double>"
