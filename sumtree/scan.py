from __future__ import annotations
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .digest import DEFAULT_ALGORITHM, DEFAULT_BLOCK_SIZE, file_digest
from .errors import SumtreeError
from .fs import iter_files
from .pool import WorkerPool
from .reference import Outcome
from .report import Reporter
from .stats import Totals
from .utils import debug, warn


@dataclass(frozen=True)
class FileResult:
    path: Path
    outcome: Outcome
    digest: Optional[str] = None
    stored: Optional[str] = None
    size: int = 0
    error: Optional[str] = None


def check_file(path: Path, reference, algo: str = DEFAULT_ALGORITHM,
               block_size: int = DEFAULT_BLOCK_SIZE) -> FileResult:
    """Hash one file and resolve it against the reference.

    Per-file failures come back as an ERROR result instead of raising.
    """
    try:
        digest, size = file_digest(path, algo, block_size)
    except SumtreeError as e:
        return FileResult(path, Outcome.ERROR, error=str(e))
    try:
        res = reference.resolve(path, digest)
    except (SumtreeError, OSError) as e:
        return FileResult(path, Outcome.ERROR, digest=digest, size=size, error=str(e))
    return FileResult(path, res.outcome, digest=digest, stored=res.stored, size=size)


def scan_tree(root: Path, reference, *,
              workers: int = 10,
              queue_size: int = 10,
              algo: str = DEFAULT_ALGORITHM,
              block_size: int = DEFAULT_BLOCK_SIZE,
              reporter: Optional[Reporter] = None,
              ignore: Sequence[str] = ()) -> Totals:
    """Walk root on one thread, hash on `workers` threads, return the totals.

    Returns only after the walk has finished and every queued path has
    been processed.
    """
    totals = Totals(reference.outcomes)
    if reporter is None:
        reporter = Reporter(reference.silent)

    def handle(path: Path):
        result = check_file(path, reference, algo, block_size)
        totals.record(result.outcome, result.size)
        reporter.emit(result)

    pool = WorkerPool(handle, workers=workers, queue_size=queue_size)
    walk_exc = []

    def feed():
        try:
            for p in iter_files(root, reference.excluded_suffix, ignore):
                if not pool.submit(p):
                    debug("walk stopped: pool cancelled")
                    break
        except Exception as e:
            warn(f"walk of {root} aborted: {e}")
            walk_exc.append(e)
        finally:
            pool.close()

    pool.start()
    walker = threading.Thread(target=feed, name="sumtree-walker", daemon=True)
    walker.start()
    try:
        walker.join()
        pool.join()
    except KeyboardInterrupt:
        pool.cancel()
        walker.join()
        pool.join()
        raise
    if walk_exc:
        raise walk_exc[0]
    return totals
