"""Per-stage workload and timing tallies for featurization.

Every stage keeps a running tally: how often it ran, how often it raised,
how long it took, and stage-specific workload counters such as points
resampled or grid cells set. Counters let slow calls be traced back to
large inputs rather than to the algorithms themselves.
"""

from __future__ import annotations

import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class StageTally:
    """Running totals for one stage."""
    name: str
    calls: int = 0
    failures: int = 0
    total_ms: float = 0.0
    slowest_ms: float = 0.0
    counters: Counter = field(default_factory=Counter)

    def add(self, **counts: int):
        """Add workload counts, e.g. ``tally.add(points_in=40, points_out=16)``."""
        self.counters.update(counts)

    @property
    def avg_ms(self) -> float:
        return self.total_ms / self.calls if self.calls else 0.0

    def per_call(self, counter: str) -> float:
        """Average of a workload counter over successful calls."""
        return self.counters[counter] / self.calls if self.calls else 0.0

    def as_dict(self) -> dict:
        return {
            "calls": self.calls,
            "failures": self.failures,
            "avg_ms": round(self.avg_ms, 3),
            "slowest_ms": round(self.slowest_ms, 3),
            **dict(self.counters),
        }


class FeatureProfiler:
    """Collects StageTally records keyed by stage name.

    Usage:
        profiler = FeatureProfiler()
        with profiler.stage("rasterize") as tally:
            vector = rasterize(gesture, 16)
            tally.add(cells_set=int(np.count_nonzero(vector)))
        print(profiler.report())

    A call that raises counts as a failure; its time and counters are
    discarded.
    """

    def __init__(self):
        self._tallies: dict[str, StageTally] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[StageTally]:
        tally = self._tallies.setdefault(name, StageTally(name))
        pending = StageTally(name)

        t0 = time.perf_counter()
        try:
            yield pending
        except Exception:
            tally.failures += 1
            raise
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        tally.calls += 1
        tally.total_ms += elapsed_ms
        tally.slowest_ms = max(tally.slowest_ms, elapsed_ms)
        tally.counters.update(pending.counters)

    def tally(self, name: str) -> StageTally | None:
        return self._tallies.get(name)

    def report(self) -> dict[str, dict]:
        """Tallies of every stage seen so far, in first-use order."""
        return {name: t.as_dict() for name, t in self._tallies.items()}

    def reset(self):
        self._tallies.clear()
