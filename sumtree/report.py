from __future__ import annotations
import sys
import threading

from .reference import Outcome


class Reporter:
    """Line protocol on stdout. One line per non-silent file plus a summary."""

    def __init__(self, silent: Outcome, stream=None):
        self.silent = silent
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def format(self, result) -> str | None:
        o = result.outcome
        if o is self.silent:
            return None
        if o is Outcome.ADDED:
            return f"A {result.digest}\t{result.path}"
        if o is Outcome.CONFLICT:
            return f"C {result.digest}\t{result.stored}\t{result.path}"
        if o is Outcome.MISSING:
            return str(result.path)
        if o is Outcome.ERROR:
            return f"E {result.error}\t{result.path}"
        return None

    def _write(self, line: str):
        with self._lock:
            print(line, file=self.stream, flush=True)

    def emit(self, result):
        line = self.format(result)
        if line is not None:
            self._write(line)

    def summary(self, totals) -> str:
        snap = totals.snapshot()
        parts = ", ".join(f"{snap['counts'][o]} {o.label}" for o in totals.outcomes)
        line = f"{snap['files']} files ({snap['bytes']} bytes) scanned: {parts}"
        self._write(line)
        return line
