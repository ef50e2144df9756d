#!/usr/bin/env python3
"""Dump every per-year configuration robocourse can load.

Loads all configured years from a site root and prints the parsed
documents together with any warnings, so a broken or missing YAML file
shows up before it reaches the site.

Usage
-----
::

    export ROBOCOURSE_BASE_URL="http://localhost:8000"
    python scripts/dump_configs.py

Options::

    --base-url URL      Site root (default: $ROBOCOURSE_BASE_URL)
    --year YEAR         Only print this year (repeatable)
    --json              Output as machine-readable JSON
    --output FILE       Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from robocourse import ConfigManager, LoaderConfig, RobocourseError  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def main() -> int:
    parser = argparse.ArgumentParser(description="Dump all per-year YAML configuration.")
    parser.add_argument("--base-url", help="Site root serving config/years/...")
    parser.add_argument("--year", action="append", dest="years", help="Only print this year (repeatable)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    config = LoaderConfig.from_env(**overrides)

    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "base_url": config.base_url,
        "years": {},
    }
    out: list[str] = [_section("robocourse dump_configs"), f"  base_url  : {config.base_url}"]

    async with ConfigManager(config) as manager:
        try:
            report = await manager.initialize()
        except RobocourseError as exc:
            print(f"!! initialization failed: {exc}", file=sys.stderr)
            return 1

        result["skipped"] = report.skipped
        for year, reason in report.skipped.items():
            out.append(f"  !! {year} skipped: {reason}")

        for year in args.years or manager.get_available_years():
            try:
                year_config = manager.get_config(year)
            except RobocourseError as exc:
                out.append(f"  !! {year}: {exc}")
                continue
            result["years"][year] = year_config.model_dump(by_alias=True)
            out.append(_section(f"YEAR {year}"))
            out.append(f"  imgpath   : {year_config.imgpath}")
            for warning in year_config.warnings:
                out.append(f"  !! {warning.document}: {warning.message}")
            for name in ("robot", "course", "sensors", "rules"):
                out.append(f"  ── {name} ──")
                out.append(json.dumps(year_config.document(name), indent=2, default=str, ensure_ascii=False))

    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    else:
        payload = "\n".join(out)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
