"""Command-line interface for runnercache.

Provides ``runnercache restore`` and ``runnercache save``.
"""

from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path
import sys

from pydantic import ValidationError as SettingsValidationError
from rich.console import Console

from runnercache.core.archive import split_patterns
from runnercache.core.caching import (
    CacheError,
    CacheService,
    RestoreOptions,
    RestoreOutcome,
    RestoreResult,
    SaveOutcome,
)
from runnercache.core.config import CacheSettings, load_settings
from runnercache.core.utils.logging import configure_logging

console = Console()


def _load_settings(config_path: str | None) -> CacheSettings:
    """Load settings and configure logging, exiting on invalid configuration."""
    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except (FileNotFoundError, ValueError, SettingsValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        sys.exit(1)

    configure_logging(
        level=settings.logging.level,
        format_string=settings.logging.format,
        structured=settings.logging.structured,
    )
    return settings


def _write_outputs(outputs: dict[str, str], output_file: str | None) -> None:
    """Append ``name=value`` lines to the runner's output file, if any."""
    if not output_file:
        return
    with open(output_file, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(f"{name}={value}\n")


def _restore_outputs(result: RestoreResult) -> dict[str, str]:
    outputs = {
        "cache-hit": "true" if result.cache_hit else "false",
        "cache-primary-key": result.primary_key,
    }
    if result.matched_key is not None:
        outputs["cache-matched-key"] = result.matched_key
    return outputs


async def run_restore_async(settings: CacheSettings, args: argparse.Namespace) -> int:
    """Restore a cache entry and report the outcome.

    Returns:
        Process exit code
    """
    service = CacheService(settings)
    try:
        result = await service.restore(
            split_patterns(args.path),
            args.key,
            split_patterns(args.restore_key or []),
            RestoreOptions(lookup_only=args.lookup_only),
        )
    except CacheError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    _write_outputs(_restore_outputs(result), os.environ.get("GITHUB_OUTPUT"))

    if result.outcome == RestoreOutcome.HIT:
        console.print(f"[green]✅ Cache restored from key:[/green] {result.matched_key}")
        return 0

    if result.outcome == RestoreOutcome.UNAVAILABLE:
        console.print("[yellow]Cache not available, continuing without cache[/yellow]")
    elif result.outcome == RestoreOutcome.FAILED:
        console.print(f"[yellow]Cache restore failed: {result.error}[/yellow]")
    else:
        console.print(f"[yellow]Cache not found for key:[/yellow] {args.key}")

    if args.fail_on_cache_miss:
        console.print(
            f"[red]ERROR: Failed to restore cache entry. Exiting as fail-on-cache-miss is set. "
            f"Input key: {args.key}[/red]"
        )
        return 1
    return 0


async def run_save_async(settings: CacheSettings, args: argparse.Namespace) -> int:
    """Save a cache entry and report the outcome.

    Returns:
        Process exit code
    """
    service = CacheService(settings)
    try:
        result = await service.save(split_patterns(args.path), args.key)
    except CacheError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    if result.outcome == SaveOutcome.SAVED:
        console.print(f"[green]✅ Cache saved with key:[/green] {args.key}")
    elif result.outcome == SaveOutcome.UNAVAILABLE:
        console.print("[yellow]Cache not available, nothing saved[/yellow]")
    else:
        console.print(f"[yellow]Cache not saved: {result.error}[/yellow]")
    return 0


def run_restore(args: argparse.Namespace) -> None:
    """Run the restore command."""
    settings = _load_settings(args.config)
    sys.exit(asyncio.run(run_restore_async(settings, args)))


def run_save(args: argparse.Namespace) -> None:
    """Run the save command."""
    settings = _load_settings(args.config)
    sys.exit(asyncio.run(run_save_async(settings, args)))


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="runnercache",
        description="runnercache - content-key artifact cache for CI runners",
    )
    p.add_argument("--config", default=None, help="Optional settings file (.json/.yaml)")
    sub = p.add_subparsers(dest="cmd", required=True)

    restore = sub.add_parser("restore", help="Restore paths from the cache")
    restore.add_argument(
        "--path", action="append", required=True, help="Path or glob to restore (repeatable)"
    )
    restore.add_argument("--key", required=True, help="Primary key probed first")
    restore.add_argument(
        "--restore-key",
        action="append",
        help="Fallback key probed in order after a primary miss (repeatable)",
    )
    restore.add_argument(
        "--lookup-only",
        action="store_true",
        help="Check for a cache entry without downloading it",
    )
    restore.add_argument(
        "--fail-on-cache-miss",
        action="store_true",
        help="Exit with an error when no entry is restored",
    )

    save = sub.add_parser("save", help="Save paths to the cache")
    save.add_argument(
        "--path", action="append", required=True, help="Path or glob to cache (repeatable)"
    )
    save.add_argument("--key", required=True, help="Key to save under")

    return p


def main() -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args()

    if args.cmd == "restore":
        run_restore(args)
    elif args.cmd == "save":
        run_save(args)


if __name__ == "__main__":
    main()
