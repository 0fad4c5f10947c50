from __future__ import annotations

import hashlib
import os
import types
from pathlib import Path

import pytest


# Small helper to mimic argparse.Namespace
def ns(**kwargs):
    base = dict(root=None, workers=None, queue_size=None, algo=None, config=None)
    base.update(kwargs)
    return types.SimpleNamespace(**base)


def md5(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode()
    return hashlib.md5(data).hexdigest()


@pytest.fixture
def sandbox(tmp_path: Path):
    """
    Create a sandbox with:
      - root/ (the tree that gets scanned)
      - etc/  (manifests and configs, outside the scanned tree)
    """
    root = tmp_path / "root"
    etc = tmp_path / "etc"
    for p in (root, etc):
        p.mkdir(parents=True, exist_ok=True)
    return {"root": root, "etc": etc}


@pytest.fixture
def cfg_default():
    return {
        "workers": 10,
        "queue_size": 10,
        "algorithm": "md5",
        "block_size": 32 * 1024,
        "sidecar_ext": None,
        "strict_sidecar": False,
        "ignore": [],
    }


def write_file(p: Path, data: bytes | str, mtime: float | None = None):
    p.parent.mkdir(parents=True, exist_ok=True)
    mode = "wb" if isinstance(data, (bytes, bytearray)) else "w"
    with open(p, mode) as f:
        f.write(data)
    if mtime is not None:
        os.utime(p, (mtime, mtime))
    return p


def summary_counts(line: str) -> dict:
    """Parse '<n> files (<b> bytes) scanned: 1 matches, 2 added, ...'."""
    head, _, tail = line.partition(" scanned: ")
    files, _, rest = head.partition(" files (")
    out = {"files": int(files), "bytes": int(rest.split()[0])}
    for part in tail.split(", "):
        n, label = part.split(" ", 1)
        out[label] = int(n)
    return out


@pytest.fixture
def tree(sandbox):
    """Three small files in nested directories."""
    root = sandbox["root"]
    write_file(root / "a.txt", "alpha")
    write_file(root / "sub" / "b.txt", "bravo")
    write_file(root / "sub" / "deep" / "c.bin", b"\x00\x01\x02")
    return root
