from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .commands import check, missing
from .utils import debug


def _scan_options() -> argparse.ArgumentParser:
    # defaults = None so config can supply values
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-c", "--config", type=Path, help="Path to JSON config.")
    common.add_argument("-n", dest="workers", type=int, default=None,
                        help="Size of worker pool (default 10).")
    common.add_argument("--root", default=None,
                        help="Directory to scan (default: current directory).")
    common.add_argument("--algo", default=None, help="Hash algorithm (default md5).")
    common.add_argument("--queue-size", dest="queue_size", type=int, default=None,
                        help="Capacity of the path queue between walker and workers.")
    return common


def build_parser() -> argparse.ArgumentParser:
    common = _scan_options()
    p = argparse.ArgumentParser(
        prog="sumtree",
        description="Verify a file tree against stored content checksums.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- check ---
    ch = sub.add_parser("check", parents=[common],
                        help="Create or compare a <file>.md5 sidecar for every file.")
    ch.add_argument("--strict", action="store_true", default=None,
                    help="Count a failed sidecar write as an error.")

    # --- missing ---
    mi = sub.add_parser("missing", parents=[common],
                        help="List files whose checksum is not in a TSV manifest.")
    mi.add_argument("manifest", help="Tab-separated file, checksum in the first column.")

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    debug(f"parsed args: {args}")

    cfg = load_config(getattr(args, "config", None))

    if args.cmd == "check":
        return check.run(args, cfg)
    if args.cmd == "missing":
        return missing.run(args, cfg)

    parser.print_help()
    return 1


def checksum_main(argv=None) -> int:
    """Entry point for the `checksum` script."""
    return main(["check", *(sys.argv[1:] if argv is None else argv)])


def list_missing_main(argv=None) -> int:
    """Entry point for the `list-missing` script."""
    return main(["missing", *(sys.argv[1:] if argv is None else argv)])


if __name__ == "__main__":
    sys.exit(main())
