from __future__ import annotations
import threading
from typing import Dict, Iterable

from .reference import Outcome


class Totals:
    """Per-run counters shared by all workers.

    Every update goes through `record`, which holds the lock only for the
    counter arithmetic.
    """

    def __init__(self, outcomes: Iterable[Outcome]):
        self._lock = threading.Lock()
        self.outcomes = tuple(outcomes)
        self._counts: Dict[Outcome, int] = {o: 0 for o in self.outcomes}
        self._files = 0
        self._bytes = 0

    def record(self, outcome: Outcome, nbytes: int = 0):
        if outcome not in self._counts:
            raise ValueError(f"outcome {outcome.name} not tracked by this run")
        if nbytes < 0:
            raise ValueError("byte count cannot be negative")
        with self._lock:
            self._files += 1
            self._bytes += nbytes
            self._counts[outcome] += 1

    @property
    def files(self) -> int:
        with self._lock:
            return self._files

    @property
    def bytes(self) -> int:
        with self._lock:
            return self._bytes

    def count(self, outcome: Outcome) -> int:
        with self._lock:
            return self._counts.get(outcome, 0)

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "files": self._files,
                "bytes": self._bytes,
                "counts": dict(self._counts),
            }

    def complete(self) -> bool:
        snap = self.snapshot()
        return sum(snap["counts"].values()) == snap["files"]
