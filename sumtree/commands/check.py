from __future__ import annotations

from ..config import scan_settings, sidecar_ext
from ..errors import ConfigError
from ..reference import Outcome, SidecarReference
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

    strict = bool(getattr(args, "strict", None) or cfg["strict_sidecar"])
    ref = SidecarReference(sidecar_ext(cfg, s["algo"]), strict=strict)
    debug(f"check root={s['root']} algo={s['algo']} sidecar={ref.ext} workers={s['workers']}")

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

    if totals.count(Outcome.ERROR) or totals.count(Outcome.CONFLICT):
        return 1
    return 0
