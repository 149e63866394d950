import threading
import time
from dataclasses import dataclass, field, replace
from typing import Dict


OK = "ok"


@dataclass
class OutcomeStats:
    count: int = 0
    fetch_ms_sum: float = 0.0
    fetch_ms_max: float = 0.0

    @property
    def avg_fetch_ms(self) -> float:
        return self.fetch_ms_sum / max(1, self.count)


@dataclass
class FetchTotals:
    bytes: int = 0
    # keyed by OK or the error class name
    outcomes: Dict[str, OutcomeStats] = field(default_factory=dict)

    @property
    def requests(self) -> int:
        return sum(s.count for s in self.outcomes.values())

    @property
    def errors(self) -> int:
        return sum(s.count for kind, s in self.outcomes.items() if kind != OK)


class Metrics:
    """Per-outcome request counts and latencies for fetch_data calls."""

    def __init__(self):
        self._totals = FetchTotals()
        self._lock = threading.Lock()
        self._start = time.time()

    def record_fetch(self, outcome: str, bytes_read: int, fetch_ms: float) -> None:
        with self._lock:
            stats = self._totals.outcomes.setdefault(outcome, OutcomeStats())
            stats.count += 1
            stats.fetch_ms_sum += fetch_ms
            stats.fetch_ms_max = max(stats.fetch_ms_max, fetch_ms)
            self._totals.bytes += max(0, bytes_read)

    def snapshot(self) -> tuple[FetchTotals, float]:
        with self._lock:
            t = FetchTotals(
                bytes=self._totals.bytes,
                outcomes={kind: replace(s) for kind, s in self._totals.outcomes.items()},
            )
        elapsed = max(1e-6, time.time() - self._start)
        return t, elapsed

    def summary(self) -> str:
        totals, elapsed = self.snapshot()
        parts = [f"requests={totals.requests}", f"errors={totals.errors}", f"KB={totals.bytes / 1024:.2f}"]
        for kind in sorted(totals.outcomes):
            stats = totals.outcomes[kind]
            parts.append(f"{kind}={stats.count}@{stats.avg_fetch_ms:.1f}ms")
        parts.append(f"elapsed_s={elapsed:.2f}")
        return ", ".join(parts)
