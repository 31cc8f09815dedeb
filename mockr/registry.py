"""Track the mocks created for one test so they can be verified together."""

from __future__ import annotations

import logging
import typing as t

from .mock import Mock

logger = logging.getLogger(__name__)


class MockRegistry:
    """Factory remembering every :class:`Mock` it creates."""

    def __init__(self) -> None:
        self._mocks: list[Mock] = []

    def __iter__(self) -> t.Iterator[Mock]:
        return iter(self._mocks)

    def __len__(self) -> int:
        return len(self._mocks)

    def __call__(
        self,
        initializer: t.Callable[[Mock], object] | None = None,
        *,
        name: str | None = None,
    ) -> Mock:
        """Alias for :meth:`new_mock` so the fixture can be called directly."""
        return self.new_mock(initializer, name=name)

    def new_mock(
        self,
        initializer: t.Callable[[Mock], object] | None = None,
        *,
        name: str | None = None,
    ) -> Mock:
        """Create, remember and return a new :class:`Mock`."""
        mock = Mock(initializer, name=name)
        self._mocks.append(mock)
        return mock

    def verify_all(self) -> None:
        """Verify every registered mock in creation order.

        The first failure propagates; later mocks are not checked.
        """
        for mock in self._mocks:
            mock.verify()
        logger.debug("Verified %d mock(s)", len(self._mocks))

    def clear(self) -> None:
        """Forget every registered mock."""
        self._mocks.clear()
