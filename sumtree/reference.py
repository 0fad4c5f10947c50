from __future__ import annotations
import csv
import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional, Tuple

from .errors import ManifestLoadError, SidecarReadError, SidecarWriteError
from .utils import warn


class Outcome(enum.Enum):
    MATCH = "matches"
    ADDED = "added"
    CONFLICT = "conflicts"
    ERROR = "errors"
    FOUND = "found"
    MISSING = "missing"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Resolution:
    outcome: Outcome
    stored: Optional[str] = None


class SidecarReference:
    """Compare each file against a `<path><ext>` file next to it.

    A missing sidecar is created with the computed digest and reported as
    ADDED. Existing sidecars are only ever read.
    """

    outcomes: Tuple[Outcome, ...] = (Outcome.MATCH, Outcome.ADDED, Outcome.CONFLICT, Outcome.ERROR)
    silent = Outcome.MATCH

    def __init__(self, ext: str = ".md5", strict: bool = False):
        if not ext.startswith("."):
            ext = "." + ext
        self.ext = ext
        self.strict = strict

    @property
    def excluded_suffix(self) -> str:
        return self.ext

    def sidecar_for(self, path: Path) -> Path:
        return Path(f"{path}{self.ext}")

    def resolve(self, path: Path, digest: str) -> Resolution:
        sidecar = self.sidecar_for(path)
        try:
            stored = sidecar.read_bytes()
        except FileNotFoundError:
            self._write(sidecar, digest)
            return Resolution(Outcome.ADDED)
        except OSError as e:
            raise SidecarReadError(path, f"{sidecar}: {e.strerror or e}") from e

        if stored == digest.encode("ascii"):
            return Resolution(Outcome.MATCH)
        return Resolution(Outcome.CONFLICT, stored.decode("utf-8", errors="replace"))

    def _write(self, sidecar: Path, digest: str):
        try:
            fd = os.open(sidecar, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o444)
            with os.fdopen(fd, "wb") as f:
                f.write(digest.encode("ascii"))
        except OSError as e:
            if self.strict:
                raise SidecarWriteError(sidecar, f"{sidecar}: {e.strerror or e}") from e
            warn(f"could not write {sidecar}: {e.strerror or e}")


def load_manifest(path: Path) -> FrozenSet[str]:
    """Read the first column of a tab-separated file into a set."""
    hashes = set()
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            for row in csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE):
                if row:
                    hashes.add(row[0])
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ManifestLoadError(path, f"cannot load manifest {path}: {e}") from e
    return frozenset(hashes)


class ManifestReference:
    """Look each digest up in a set loaded once from a manifest."""

    outcomes: Tuple[Outcome, ...] = (Outcome.FOUND, Outcome.MISSING, Outcome.ERROR)
    silent = Outcome.FOUND
    excluded_suffix = None

    def __init__(self, hashes):
        self.hashes = frozenset(hashes)

    @classmethod
    def from_file(cls, path: Path) -> "ManifestReference":
        return cls(load_manifest(path))

    def __len__(self):
        return len(self.hashes)

    def __contains__(self, digest: str) -> bool:
        return digest in self.hashes

    def resolve(self, path: Path, digest: str) -> Resolution:
        if digest in self.hashes:
            return Resolution(Outcome.FOUND)
        return Resolution(Outcome.MISSING)
