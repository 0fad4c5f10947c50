from __future__ import annotations
import fnmatch
import os
import stat
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .utils import warn


def matches_any(rel: str, patterns: Sequence[str]) -> bool:
    for pat in patterns:
        if fnmatch.fnmatch(rel, pat):
            return True
    return False


def _log_walk_error(e: OSError):
    warn(f"skipping {e.filename}: {e.strerror or e}")


def iter_files(root: Path, exclude_suffix: Optional[str] = None,
               ignore: Sequence[str] = ()) -> Iterable[Path]:
    """Yield regular files under root, never following symlinks.

    Unreadable directories and entries are logged and skipped.
    """
    root = Path(root)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        d = Path(dirpath)
        rel_dir = Path(os.path.relpath(dirpath, root))
        if ignore:
            dirnames[:] = [
                dn for dn in dirnames
                if not matches_any((rel_dir / dn).as_posix(), ignore)
            ]
        dirnames.sort()
        for fn in sorted(filenames):
            if exclude_suffix and fn.endswith(exclude_suffix):
                continue
            if ignore and matches_any((rel_dir / fn).as_posix(), ignore):
                continue
            p = d / fn
            try:
                st = os.lstat(p)
            except OSError as e:
                _log_walk_error(e)
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            yield p
