#!/usr/bin/env python3
"""Replay recorded telemetry through the rest cycle detector.

Reads a JSON-lines file where every line is one telemetry payload (either a
flat sample or ``{"charge": {...}, "stream": {...}}``), feeds the samples in
order to a detector and prints each emitted rest cycle.

Usage
-----
::

    python scripts/replay_samples.py samples.jsonl
    python scripts/replay_samples.py samples.jsonl --window 22:00-06:00 --json

Window and threshold defaults come from ``RESTCYCLE_*`` environment
variables; command-line options override them.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import time, timedelta
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrestcycle import (  # noqa: E402
    CycleState,
    LatestValue,
    RestCycle,
    RestCycleDetector,
    RestCycleError,
    RestCycleHistory,
    RestMonitorConfig,
    TelemetryFeed,
    TelemetrySample,
)
from pyrestcycle.ingestion.states import sample_from_payload, sample_from_states  # noqa: E402


def _parse_window(text: str) -> tuple[time, time]:
    start, sep, end = text.partition("-")
    if not sep:
        raise argparse.ArgumentTypeError("window must look like HH:MM-HH:MM")
    try:
        return time.fromisoformat(start.strip()), time.fromisoformat(end.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _payload_to_sample(payload: dict[str, Any]) -> TelemetrySample:
    if "charge" in payload:
        return sample_from_states(payload["charge"], payload.get("stream"))
    return sample_from_payload(payload)


def _format_cycle(cycle: RestCycle) -> str:
    loss = cycle.range_loss_per_hour
    loss_text = f"{loss:.2f}/h" if loss is not None else "n/a"
    return (
        f"{cycle.start_time.isoformat()} -> {cycle.end_time.isoformat() if cycle.end_time else '?'}"
        f"  {cycle.duration}  range {cycle.start_range} -> {cycle.end_range} ({loss_text})"
        f"  soc {cycle.start_soc} -> {cycle.end_soc}"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay telemetry samples and print detected rest cycles.")
    parser.add_argument("input", help="JSON-lines file of telemetry payloads")
    parser.add_argument("--window", type=_parse_window, help="Active window as HH:MM-HH:MM")
    parser.add_argument("--time-zone", help="IANA zone for reading sample wall-clock times")
    parser.add_argument("--voltage-threshold", type=float, help="Idle voltage threshold")
    parser.add_argument("--min-rest-minutes", type=float, help="Minimum rest duration in minutes")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.window is not None:
        overrides["window_enabled"] = True
        overrides["window_from"], overrides["window_to"] = args.window
    if args.time_zone:
        overrides["time_zone"] = args.time_zone
    if args.voltage_threshold is not None:
        overrides["voltage_threshold"] = args.voltage_threshold
    if args.min_rest_minutes is not None:
        overrides["min_rest_period"] = timedelta(minutes=args.min_rest_minutes)

    try:
        config = RestMonitorConfig.from_env(**overrides)
        feed = TelemetryFeed()
        sink: LatestValue[RestCycle] = LatestValue()
        history = RestCycleHistory(sink)
        detector = RestCycleDetector.from_config(feed, sink, config)

        with Path(args.input).open(encoding="utf-8") as handle:
            for line_no, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    feed.publish(_payload_to_sample(json.loads(line)))
                except json.JSONDecodeError as exc:
                    print(f"line {line_no}: invalid JSON: {exc}", file=sys.stderr)
                    return 1
    except RestCycleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if detector.state is CycleState.CYCLE_OPEN:
        print("note: a rest cycle was still open at end of input and was not emitted", file=sys.stderr)
    detector.close()

    if args.json_mode:
        print(json.dumps([cycle.model_dump(mode="json") for cycle in history.cycles], indent=2))
        return 0

    for cycle in history.cycles:
        print(_format_cycle(cycle))
    avg = history.average_range_loss_per_hour
    print(f"{len(history)} rest cycle(s), total {history.total_rest_time}", end="")
    print(f", average loss {avg:.2f}/h" if avg is not None else "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
