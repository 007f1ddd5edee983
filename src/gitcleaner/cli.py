"""CLI interface for gitcleaner."""

from __future__ import annotations

import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

import click

from gitcleaner.config import CONFIG_FILE_NAME, resolve_patterns
from gitcleaner.core.engine import clean_catalog, scan_catalog
from gitcleaner.core.matcher import MatchError
from gitcleaner.models.junk_entry import JunkEntry
from gitcleaner.models.pattern_set import PatternSet
from gitcleaner.utils import bytes_to_human

NO_JUNK_MESSAGE = "No junk files found! Your project is clean."


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _package_version() -> str:
    try:
        return version("gitcleaner")
    except PackageNotFoundError:
        return "0.0.0"


def _load_patterns(quiet: bool) -> PatternSet:
    pattern_set = resolve_patterns()
    if pattern_set.is_custom and not quiet:
        click.echo(f"{click.style('✅', bold=True)} Loaded custom patterns from {CONFIG_FILE_NAME}")
    return pattern_set


def _scan_or_report(pattern_set: PatternSet, as_json: bool) -> list[JunkEntry] | None:
    """Run the scan, printing the error and returning None if matching fails."""
    try:
        return scan_catalog(pattern_set.patterns)
    except MatchError as e:
        if as_json:
            click.echo(json.dumps({"status": "error", "error": str(e), "entries": []}))
        else:
            click.echo(f"Error scanning for junk files: {e}", err=True)
            click.echo("No files were scanned.")
        return None


def _entry_dict(entry: JunkEntry) -> dict:
    return {
        "path": str(entry.path),
        "size_bytes": entry.size_bytes,
        "is_directory": entry.is_directory,
    }


def _format_entry(entry: JunkEntry) -> str:
    return f"{entry.display_path} ({bytes_to_human(entry.size_bytes)})"


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(version=_package_version(), prog_name="gitcleaner")
@click.pass_context
def main(ctx: click.Context, verbose: int) -> None:
    """Clean junk files and folders from your projects."""
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        click.echo("Please specify a command. Use --help for available commands.")
        click.echo(ctx.get_help())
        ctx.exit(2)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(as_json: bool) -> None:
    """Scan for junk files and folders (never deletes)."""
    pattern_set = _load_patterns(quiet=as_json)

    if not as_json:
        click.echo(f"{click.style('🔍', bold=True)} Scanning for junk files...\n")

    catalog = _scan_or_report(pattern_set, as_json)
    if catalog is None:
        sys.exit(1)

    total = sum(e.size_bytes for e in catalog)

    if as_json:
        data = {
            "status": "clean" if not catalog else "found",
            "total_bytes": total,
            "entries": [_entry_dict(e) for e in catalog],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not catalog:
        click.echo(f"{click.style('✨', bold=True)} {NO_JUNK_MESSAGE}")
        return

    click.echo("Found junk:")
    for entry in catalog:
        click.echo(f"- {_format_entry(entry)}")

    click.echo(f"\nTotal: {click.style(bytes_to_human(total), fg='green', bold=True)}")
    click.echo(f"\n{click.style('💡', bold=True)} Run 'gitcleaner clean' to delete these files")


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--dry-run", "-d", is_flag=True, help="Preview what would be deleted without deleting")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clean(dry_run: bool, as_json: bool) -> None:
    """Delete junk files and folders."""
    pattern_set = _load_patterns(quiet=as_json)

    if not as_json:
        if dry_run:
            click.echo(f"{click.style('🔍', bold=True)} Would delete junk files...\n")
        else:
            click.echo(f"{click.style('🧹', bold=True)} Cleaning junk files...\n")

    catalog = _scan_or_report(pattern_set, as_json)
    if catalog is None:
        sys.exit(1)

    if not catalog and not as_json:
        click.echo(f"{click.style('✨', bold=True)} {NO_JUNK_MESSAGE}")

    def on_entry(entry: JunkEntry, error: str | None) -> None:
        if as_json:
            return
        if error is not None:
            click.echo(
                f"- {click.style('Failed to delete', fg='red')} {entry.display_path}: {error}",
                err=True,
            )
        elif dry_run:
            click.echo(f"- Would delete: {_format_entry(entry)}")
        else:
            click.echo(f"- {click.style('Deleted', fg='green')}: {_format_entry(entry)}")

    result = clean_catalog(catalog, dry_run=dry_run, on_entry=on_entry)

    if as_json:
        data = {
            "status": "dry_run" if dry_run else "cleaned",
            "deleted_count": result.deleted_count,
            "freed_bytes": result.freed_bytes,
            "entries": [_entry_dict(e) for e in result.deleted],
            "errors": [{"path": str(e.path), "error": msg} for e, msg in result.errors],
        }
        click.echo(json.dumps(data, indent=2))
        return

    freed = click.style(bytes_to_human(result.freed_bytes), fg="green", bold=True)
    if dry_run:
        click.echo(f"\n{click.style('📋', bold=True)} Would clean {result.deleted_count} items ({freed} would free)")
    else:
        click.echo(f"\n{click.style('✅', bold=True)} Cleaned {result.deleted_count} items ({freed} freed)")
        if result.errors:
            click.echo(
                f"{click.style('!', fg='yellow')} {len(result.errors)} item(s) could not be deleted",
                err=True,
            )
