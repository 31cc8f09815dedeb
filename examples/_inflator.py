"""Code under test for the examples: an automatic bicycle tyre inflator."""

from __future__ import annotations

import typing as t

STEP_PSI = 5


class Gauge(t.Protocol):
    def pressure(self) -> int: ...


class Valve(t.Protocol):
    def pump(self, psi: int) -> None: ...

    def close(self) -> None: ...


class Pump:
    """Inflate a tyre to a target pressure in fixed increments."""

    def __init__(self, gauge: Gauge, valve: Valve) -> None:
        self.gauge = gauge
        self.valve = valve

    def inflate_to(self, target: int) -> int:
        """Pump until the gauge reads at least *target*; return the strokes used."""
        strokes = 0
        while self.gauge.pressure() < target:
            self.valve.pump(STEP_PSI)
            strokes += 1
        self.valve.close()
        return strokes
