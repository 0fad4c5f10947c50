from __future__ import annotations
import os
import sys


def _emit(tag: str, msg: str):
    try:
        print(f"[{tag}] {msg}", file=sys.stderr)
    except BrokenPipeError:
        pass


def debug_enabled() -> bool:
    return os.getenv("SUMTREE_DEBUG") == "1"


def debug(msg: str):
    if debug_enabled():
        _emit("debug", msg)


def info(msg: str):
    _emit("info", msg)


def warn(msg: str):
    _emit("warn", msg)


def error(msg: str):
    _emit("error", msg)
