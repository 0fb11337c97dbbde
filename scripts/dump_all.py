#!/usr/bin/env python3
"""Dump all data the pyrfid library can fetch.

Calls every read-only endpoint and lists the parsed model fields of each
record, followed by any payload keys no model field picked up. The JSON
output keeps the raw payloads as well.

Usage
-----
Point it at a backend and run::

    export RFID_BASE_URL="http://localhost:8080"
    python scripts/dump_all.py

Options::

    --limit N            Number of recent events to fetch (default: 15)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --skip-events        Skip the recent events endpoint
    --skip-products      Skip the products endpoint
    --skip-shelves       Skip the shelves endpoint
    --skip-alerts        Skip the open alerts endpoint
    --skip-store-stock   Skip the store stock endpoint
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrfid import RfidClient, RfidConfig, RfidError  # noqa: E402


def _banner(title: str) -> str:
    return f"\n### {title} " + "#" * max(4, 56 - len(title))


def _render_model(label: str, model: BaseModel, out: list[str]) -> dict[str, Any]:
    """Append one ``field = value`` line per parsed field; return the parsed dict."""
    parsed = model.model_dump(mode="json")
    width = max((len(name) for name in parsed), default=0)
    out.append(f"\n  [{label}]")
    out.extend(f"    {name:<{width}} = {value!r}" for name, value in parsed.items())
    known = {info.alias or name for name, info in type(model).model_fields.items()}
    unparsed = sorted(set(getattr(model, "raw", {})) - known)
    if unparsed:
        out.append(f"    (not parsed: {', '.join(unparsed)})")
    return parsed


async def _dump_section(
    title: str,
    fetch: Callable[[], Awaitable[Any]],
    out: list[str],
) -> dict[str, Any]:
    """Fetch one endpoint and render every model it returns."""
    out.append(_banner(title))
    try:
        result = await fetch()
    except RfidError as exc:
        out.append(f"  request failed: {exc}")
        return {"error": str(exc)}

    models = result if isinstance(result, list) else [result]
    out.append(f"  {len(models)} record(s)")
    records = [
        {"parsed": _render_model(f"{title.lower()} {index}", model, out), "raw": model.raw}
        for index, model in enumerate(models, start=1)
    ]
    return {"records": records}


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump all data pyrfid can fetch for debugging / development.",
    )
    parser.add_argument("--limit", type=int, default=15, help="Number of recent events to fetch")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--skip-events", action="store_true", help="Skip recent events endpoint")
    parser.add_argument("--skip-products", action="store_true", help="Skip products endpoint")
    parser.add_argument("--skip-shelves", action="store_true", help="Skip shelves endpoint")
    parser.add_argument("--skip-alerts", action="store_true", help="Skip open alerts endpoint")
    parser.add_argument("--skip-store-stock", action="store_true", help="Skip store stock endpoint")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = RfidConfig.from_env(push_enabled=False)
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "base_url": config.base_url,
    }

    out: list[str] = []
    out.append(_banner("pyrfid dump_all"))
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  base_url  : {config.base_url}")

    async with RfidClient(config) as client:
        sections: list[tuple[str, str, Callable[[], Awaitable[Any]], bool]] = [
            ("stats", "STATS", client.get_stats, False),
            ("events", "RECENT EVENTS", lambda: client.get_recent_events(args.limit), args.skip_events),
            ("products", "PRODUCTS", client.get_products_with_stock, args.skip_products),
            ("shelves", "SHELVES", client.get_shelves, args.skip_shelves),
            ("alerts", "OPEN ALERTS", client.get_open_alerts, args.skip_alerts),
            ("store_stock", "STORE STOCK", client.get_store_stock, args.skip_store_stock),
        ]
        for key, title, fetch, skipped in sections:
            if skipped:
                continue
            result[key] = await _dump_section(title, fetch, out)

    payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if args.json_mode:
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return

    print("\n".join(out))
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"JSON written to {args.output}")


if __name__ == "__main__":
    asyncio.run(main())
