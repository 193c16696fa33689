#!/usr/bin/env python3
"""Watch the two GesBox volume sources and print the synchronized table.

Fetches the sample snapshot, aligns both sources, prints the status
line, the latest-reading summary and the table, then repeats every
poll interval.

Usage
-----
Optionally set environment variables and run::

    export GESBOX_ENDPOINT_URL="https://script.google.com/macros/s/.../exec"
    python scripts/watch_volumes.py

Options::

    --url URL            Data source endpoint (overrides GESBOX_ENDPOINT_URL)
    --tolerance SECONDS  Matching window for nearest-match strategies
    --threshold PERCENT  Discrepancy alert threshold
    --strategy NAME      nearest_forward | nearest_symmetric | forward_fill | last_known
    --interval SECONDS   Poll interval
    --once               Refresh a single time and exit
    --json               Output each snapshot as machine-readable JSON
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygesbox import AlignmentStrategy, GesboxConfig, MonitorSnapshot, VolumeMonitor  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _fmt(value: float | None, digits: int = 3, missing: str = "---") -> str:
    if value is None:
        return missing
    return f"{value:.{digits}f}"


def _render(snapshot: MonitorSnapshot, status: str, config: GesboxConfig) -> str:
    out: list[str] = [_section("pygesbox watch_volumes"), f"  status    : {status}"]

    summary = snapshot.summary
    percent = summary.discrepancy_percent
    out.append(f"  {config.fields.source_a:<10}: {_fmt(summary.last_a)}")
    out.append(f"  {config.fields.source_b:<10}: {_fmt(summary.last_b)}")
    out.append(f"  gap       : {_fmt(percent, 2, 'N/A')}{'%' if percent is not None else ''}")
    if summary.alert:
        out.append(f"  !! ALERT: discrepancy above {summary.alert_threshold_percent:g}%")

    out.append(_section(f"SYNCHRONIZED ({len(snapshot.table)} rows)"))
    header = f"  {'time (UTC)':<19}  {config.fields.source_a:>12}  {config.fields.source_b:>12}  {'diff':>10}  {'diff %':>8}"
    out.append(header)
    for row in snapshot.table:
        out.append(
            f"  {row.time_label:<19}  {_fmt(row.value_a):>12}  {_fmt(row.value_b):>12}"
            f"  {_fmt(row.difference, 3, 'N/A'):>10}  {_fmt(row.difference_percent, 2, 'N/A'):>8}"
        )
    return "\n".join(out)


def _print_snapshot(snapshot: MonitorSnapshot, monitor: VolumeMonitor, *, json_mode: bool) -> None:
    if json_mode:
        print(snapshot.model_dump_json(indent=2))
    else:
        print(_render(snapshot, monitor.status, monitor.config))


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Poll the GesBox data source and print the synchronized volumes.",
    )
    parser.add_argument("--url", help="Data source endpoint URL")
    parser.add_argument("--tolerance", type=int, help="Matching window in seconds")
    parser.add_argument("--threshold", type=float, help="Discrepancy alert threshold in percent")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in AlignmentStrategy],
        help="Alignment strategy",
    )
    parser.add_argument("--interval", type=float, help="Poll interval in seconds")
    parser.add_argument("--once", action="store_true", help="Refresh once and exit")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["endpoint_url"] = args.url
    if args.tolerance is not None:
        overrides["tolerance_seconds"] = args.tolerance
    if args.threshold is not None:
        overrides["alert_threshold_percent"] = args.threshold
    if args.strategy:
        overrides["strategy"] = args.strategy
    if args.interval is not None:
        overrides["poll_interval"] = args.interval

    config = GesboxConfig.from_env(**overrides)

    def on_snapshot(snapshot: MonitorSnapshot) -> None:
        _print_snapshot(snapshot, monitor, json_mode=args.json_mode)

    monitor = VolumeMonitor(config, on_snapshot=on_snapshot)
    async with monitor:
        await monitor.run(iterations=1 if args.once else None)
        if monitor.last_error is not None:
            print(monitor.status, file=sys.stderr)
            if args.once:
                sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
