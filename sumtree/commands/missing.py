from __future__ import annotations
from pathlib import Path

from ..config import scan_settings
from ..errors import ConfigError, ManifestLoadError
from ..reference import ManifestReference, Outcome
from ..report import Reporter
from ..scan import scan_tree
from ..utils import debug, error


def run(args, cfg):
    try:
        s = scan_settings(args, cfg)
    except ConfigError as e:
        error(str(e))
        return 2
    if not s["root"].is_dir():
        error(f"not a directory: {s['root']}")
        return 2

    # nothing to compare against without a manifest; abort before any worker starts
    try:
        ref = ManifestReference.from_file(Path(args.manifest))
    except ManifestLoadError as e:
        error(str(e))
        return 2
    debug(f"missing root={s['root']} manifest={args.manifest} hashes={len(ref)}")

    reporter = Reporter(ref.silent)
    try:
        totals = scan_tree(
            s["root"], ref,
            workers=s["workers"], queue_size=s["queue_size"],
            algo=s["algo"], block_size=s["block_size"],
            reporter=reporter, ignore=s["ignore"],
        )
    except KeyboardInterrupt:
        error("interrupted")
        return 130
    reporter.summary(totals)

    return 1 if totals.count(Outcome.ERROR) else 0
