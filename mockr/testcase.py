"""unittest integration: verify every mock a test created during teardown."""

from __future__ import annotations

import typing as t
import unittest

from .registry import MockRegistry

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .mock import Mock


class MockTestCase(unittest.TestCase):
    """TestCase whose :meth:`tearDown` verifies the mocks from :meth:`new_mock`.

    Subclasses overriding ``tearDown`` must call ``super().tearDown()``.
    """

    _mockr_registry: MockRegistry | None = None

    def new_mock(
        self,
        initializer: t.Callable[[Mock], object] | None = None,
        *,
        name: str | None = None,
    ) -> Mock:
        """Create a mock that is verified automatically after the test."""
        if self._mockr_registry is None:
            self._mockr_registry = MockRegistry()
        return self._mockr_registry.new_mock(initializer, name=name)

    def verify_all_mocks(self) -> None:
        """Verify every mock created so far by this test."""
        if self._mockr_registry is None:
            return
        self._mockr_registry.verify_all()

    def tearDown(self) -> None:  # noqa: D102
        try:
            self.verify_all_mocks()
        finally:
            self._mockr_registry = None
            super().tearDown()
