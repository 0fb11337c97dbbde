#!/usr/bin/env python3
"""Passive push probe for the inventory backend.

Connects to the STOMP-over-WebSocket endpoint, subscribes to
``/topic/rfid`` and ``/topic/alerts`` and prints every decoded event.
With ``--dashboard`` it also runs a headless :class:`Dashboard` and
prints which state cells change.

Use this to check that readers and shelf scales are publishing, and how
often.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrfid import Dashboard, RfidClient, RfidConfig  # noqa: E402

_LOG = logging.getLogger("push_probe")


@dataclass
class TopicCounter:
    """Arrival bookkeeping for one push topic."""

    count: int = 0
    first_seen: float | None = None
    last_seen: float | None = None
    longest_gap: float = 0.0


@dataclass
class ProbeStats:
    started_at: float
    topics: dict[str, TopicCounter] = field(default_factory=dict)
    quiet_reported_at: float | None = None

    @property
    def total_messages(self) -> int:
        return sum(counter.count for counter in self.topics.values())

    @property
    def last_seen(self) -> float | None:
        seen = [counter.last_seen for counter in self.topics.values() if counter.last_seen is not None]
        return max(seen) if seen else None

    def record(self, topic: str, now: float) -> float | None:
        """Count one message on *topic*; return the gap since that topic's previous one."""
        counter = self.topics.setdefault(topic, TopicCounter())
        gap = None if counter.last_seen is None else now - counter.last_seen
        counter.count += 1
        counter.first_seen = counter.first_seen or now
        counter.last_seen = now
        if gap is not None:
            counter.longest_gap = max(counter.longest_gap, gap)
        return gap


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Passive push probe for the RFID and alert topics.",
    )
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--idle-report-seconds",
        type=int,
        default=60,
        help="Print idle notice each N seconds without messages.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Pretty-print the raw event payload.",
    )
    parser.add_argument(
        "--dashboard",
        action="store_true",
        help="Run a headless dashboard and print state cell changes.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


def _clock(timestamp: float | None) -> str:
    if timestamp is None:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


def _print_summary(stats: ProbeStats) -> None:
    elapsed = time.time() - stats.started_at
    print(f"[probe] {stats.total_messages} message(s) in {elapsed:.1f}s")
    for topic, counter in sorted(stats.topics.items()):
        print(
            f"[probe]   {topic:<14} count={counter.count:<5} first={_clock(counter.first_seen)} "
            f"last={_clock(counter.last_seen)} longest_gap={counter.longest_gap:.1f}s"
        )


async def _run(args: argparse.Namespace) -> int:
    config = RfidConfig.from_env(push_enabled=True)
    stats = ProbeStats(started_at=time.time())
    stop = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    def report(topic: str, raw: dict[str, Any]) -> None:
        now = time.time()
        gap = stats.record(topic, now)
        since = "first on topic" if gap is None else f"+{gap:.1f}s"
        print(f"[probe] {_clock(now)} {topic} #{stats.topics[topic].count} ({since})")
        print(json.dumps(raw, indent=2 if args.json else None, ensure_ascii=False, sort_keys=True))

    _LOG.debug("Probe starting duration=%s dashboard=%s", args.duration, args.dashboard)
    print(f"[probe] Connecting to {config.ws_url}")
    async with RfidClient(config) as client:
        client.rfid_events.subscribe(lambda event: report("/topic/rfid", event.raw))
        client.alerts.subscribe(lambda alert: report("/topic/alerts", alert.raw))

        dashboard: Dashboard | None = None
        if args.dashboard:
            dashboard = Dashboard(client, config)
            dashboard.changes.subscribe(lambda cell: print(f"[probe] cell changed: {cell}"))
            await dashboard.start()
        else:
            client.connect_push()

        deadline = stats.started_at + args.duration if args.duration > 0 else None
        try:
            while not stop.is_set():
                now = time.time()
                if deadline is not None and now >= deadline:
                    print(f"[probe] Reached --duration={args.duration}s, stopping.")
                    break

                quiet_for = now - (stats.last_seen or stats.started_at)
                reported_for = now - (stats.quiet_reported_at or stats.started_at)
                if 0 < args.idle_report_seconds <= min(quiet_for, reported_for):
                    runtime = client.push_runtime
                    state = "connected" if runtime is not None and runtime.is_connected else "not connected"
                    print(f"[probe] quiet for {quiet_for:.0f}s, push {state}")
                    stats.quiet_reported_at = now

                with contextlib.suppress(TimeoutError):
                    await asyncio.wait_for(stop.wait(), timeout=1.0)
        finally:
            if dashboard is not None:
                await dashboard.close()

    _print_summary(stats)
    return 0



def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(_main())
