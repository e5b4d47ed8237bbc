from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass
class ExpansionStats:
    """Lightweight time/counter aggregator for one expansion.

    Counter keys used by the driver: ``combinations`` (spin assignments
    evaluated), ``terms`` (non-zero determinants emitted) and ``zero``
    (assignments with a vanishing coefficient).
    """

    times: dict[str, float] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=dict)

    def add_time(self, key: str, dt: float) -> None:
        self.times[key] = float(self.times.get(key, 0.0)) + float(dt)

    def inc(self, key: str, n: int = 1) -> None:
        self.counts[key] = int(self.counts.get(key, 0)) + int(n)

    def get(self, key: str) -> int:
        return int(self.counts.get(key, 0))

    @contextmanager
    def timer(self, key: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.add_time(key, time.perf_counter() - t0)

    def summary(self) -> str:
        return (
            f"{self.get('terms')} determinants from {self.get('combinations')} spin assignments"
            f" ({self.get('zero')} with zero coefficient) in {self.times.get('expand', 0.0):.3f} s"
        )
