from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Optional

from .digest import DEFAULT_ALGORITHM, DEFAULT_BLOCK_SIZE, validate_algorithm
from .errors import ConfigError
from .utils import debug, debug_enabled, info, warn

# ---------------------------------------------------------------------------
# Default configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG = {
    "workers": 10,
    "queue_size": 10,

    "algorithm": DEFAULT_ALGORITHM,
    "block_size": DEFAULT_BLOCK_SIZE,

    # None = "." + algorithm, so md5 gives ".md5"
    "sidecar_ext": None,
    # promote a failed sidecar write from ADDED to ERROR
    "strict_sidecar": False,

    # fnmatch patterns relative to the scan root
    "ignore": [],
}

# ---------------------------------------------------------------------------
# Loader: deep-merge user config over defaults
# ---------------------------------------------------------------------------

def load_config(path: Optional[Path]) -> dict:
    """Load config from JSON file and deep-merge into DEFAULT_CONFIG."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)

    if not path:
        debug("using DEFAULT_CONFIG (no --config provided)")
        return cfg

    path = Path(path)
    if not path.exists():
        warn(f"config not found at {path}; using defaults")
        return cfg

    try:
        with path.open("r", encoding="utf-8") as f:
            user = json.load(f)
    except (OSError, ValueError) as e:
        warn(f"failed to read config {path}: {e}; using defaults")
        return cfg

    if not isinstance(user, dict):
        warn(f"config {path} is not a JSON object; using defaults")
        return cfg

    def merge(a: dict, b: dict):
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                merge(a[k], v)
            else:
                a[k] = v

    merge(cfg, user)

    info(f"loaded config: {path}")
    if debug_enabled():
        debug(f"merged config: {cfg}")

    return cfg


def sidecar_ext(cfg: dict, algo: str) -> str:
    ext = cfg.get("sidecar_ext") or f".{algo}"
    return ext if ext.startswith(".") else "." + ext


def scan_settings(args, cfg: dict) -> dict:
    """CLI flags over config values. Raises ConfigError on bad values."""

    def pick(name, key):
        v = getattr(args, name, None)
        return cfg[key] if v is None else v

    workers = int(pick("workers", "workers"))
    queue_size = int(pick("queue_size", "queue_size"))
    if workers < 1:
        raise ConfigError(f"worker count must be at least 1, got {workers}")
    if queue_size < 1:
        raise ConfigError(f"queue size must be at least 1, got {queue_size}")
    block_size = int(cfg["block_size"])
    if block_size < 1:
        raise ConfigError(f"block_size must be positive, got {block_size}")

    algo = validate_algorithm(pick("algo", "algorithm"))
    return {
        "root": Path(getattr(args, "root", None) or "."),
        "workers": workers,
        "queue_size": queue_size,
        "algo": algo,
        "block_size": block_size,
        "ignore": list(cfg.get("ignore") or []),
    }
