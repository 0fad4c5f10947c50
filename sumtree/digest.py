from __future__ import annotations
import difflib
import hashlib
from pathlib import Path
from typing import Tuple

from .errors import ConfigError, OpenError, ReadError

DEFAULT_ALGORITHM = "md5"
# matches common coreutils I/O block size
DEFAULT_BLOCK_SIZE = 32 * 1024


def validate_algorithm(name: str) -> str:
    """Return the normalized algorithm name or raise ConfigError.

    Variable-length digests (shake_*) are rejected since a sidecar or
    manifest entry has to have one fixed length.
    """
    algo = (name or "").lower()
    available = sorted(a for a in hashlib.algorithms_available if not a.startswith("shake"))
    if algo in available:
        return algo
    msg = f"unsupported algorithm '{name}'"
    close = difflib.get_close_matches(algo, available, n=1)
    if close:
        msg += f"; did you mean '{close[0]}'?"
    raise ConfigError(msg)


def file_digest(path: Path, algo: str = DEFAULT_ALGORITHM,
                block_size: int = DEFAULT_BLOCK_SIZE) -> Tuple[str, int]:
    """Hash a file in chunks. Returns (hexdigest, bytes read)."""
    h = hashlib.new(algo)
    total = 0
    try:
        f = open(path, "rb")
    except OSError as e:
        raise OpenError(path, f"open {path}: {e.strerror or e}") from e
    with f:
        try:
            for chunk in iter(lambda: f.read(block_size), b""):
                h.update(chunk)
                total += len(chunk)
        except OSError as e:
            raise ReadError(path, f"read {path}: {e.strerror or e}") from e
    return h.hexdigest(), total
