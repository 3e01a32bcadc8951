"""CLI entry point for timewalk."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import click

from timewalk.config import ConfigError, load_config, resolve_vault_root
from timewalk.index import DailyNoteIndex, RebuildError
from timewalk.timeline import GapItem, NavItem
from timewalk.vault.source import VaultSource


# Default config template
CONFIG_TEMPLATE = """\
vault:
  root: .          # Vault directory, relative to the project root
  folder: ""       # Where new daily notes are created, e.g. "0C. Calendarish"

calendar:
  first_day_of_week: Monday

timeline:
  viewport_size: 10

metadata:
  enabled: false
  namespace: dn-
  properties: |
    date: {YYYY-MM-DD}
    week: {WYYYY}-W{WW}
    month: {MM}
    year: {YYYY}
"""

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

project_root_option = click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root directory (default: cwd).",
)

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _open(project_root: str) -> tuple[dict, VaultSource, DailyNoteIndex]:
    """Load config and build the index, exiting with a message on failure."""
    root = Path(project_root)
    try:
        config = load_config(root)
    except ConfigError as exc:
        click.echo(f"Error: {exc}")
        raise SystemExit(1)

    source = VaultSource(resolve_vault_root(config, root), config["vault"]["folder"])
    index = DailyNoteIndex(source, build=False)
    try:
        index.rebuild()
    except RebuildError as exc:
        click.echo(f"Error: {exc}")
        raise SystemExit(1)
    return config, source, index


def _item_to_dict(entry: NavItem) -> dict[str, Any]:
    if isinstance(entry, GapItem):
        return {"type": "gap", "date": entry.date.isoformat(), "gap_count": entry.gap_count}
    return {
        "type": "note",
        "date": entry.date.isoformat(),
        "path": entry.item.identifier,
        "is_active": entry.is_active,
        "is_current": entry.is_current,
    }


def _stamp(config: dict, source: VaultSource, identifier: str, day: date) -> bool:
    from timewalk.metadata import apply_properties, build_properties

    meta = config["metadata"]
    props = build_properties(
        day,
        namespace=meta["namespace"],
        properties_text=meta["properties"],
        first_day=config["calendar"]["first_day_of_week"],
    )
    return apply_properties(source.resolve(identifier), props)


@click.group()
def cli() -> None:
    """Timewalk: navigate dated daily notes."""


@cli.command()
@project_root_option
def init(project_root: str) -> None:
    """Initialize .timewalk/ directory with a default config."""
    root = Path(project_root)
    config_dir = root / ".timewalk"

    if config_dir.exists():
        click.echo(f".timewalk/ already exists at {config_dir}")
        raise SystemExit(1)

    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"
    config_path.write_text(CONFIG_TEMPLATE)
    click.echo(f"Created {config_path}")

    # Load config through the standard path to validate it
    load_config(root)
    click.echo("\nTimewalk initialized. Edit .timewalk/config.yaml to customize paths.")


@cli.command()
@project_root_option
@click.option("--active", type=DATE_TYPE, default=None, help="Active note date (YYYY-MM-DD).")
@click.option("--today", type=DATE_TYPE, default=None, help="Override today (YYYY-MM-DD).")
@click.option("--json", "as_json", is_flag=True, help="Print the timeline as JSON.")
@click.option("--all", "show_all", is_flag=True, help="Show every entry, not just the viewport.")
def timeline(
    project_root: str,
    active: datetime | None,
    today: datetime | None,
    as_json: bool,
    show_all: bool,
) -> None:
    """Show daily notes with missing days collapsed into gaps."""
    from timewalk.timeline import locate, viewport

    config, _, index = _open(project_root)
    current = today.date() if today else _today()
    focus = active.date() if active else current
    items = index.build_timeline(focus, current)
    if not show_all:
        size = config["timeline"]["viewport_size"]
        items = viewport(items, locate(items, focus), size)

    if as_json:
        click.echo(json.dumps([_item_to_dict(i) for i in items], indent=2))
        return

    if not items:
        click.echo("No daily notes found.")
        return

    for entry in items:
        if isinstance(entry, GapItem):
            label = "1 missing day" if entry.is_placeholder else f"{entry.gap_count} missing days"
            click.echo(f"  {entry.date.isoformat()}  ... {label}")
        else:
            marker = ">" if entry.is_active else " "
            today_flag = "  (today)" if entry.is_current else ""
            click.echo(f"{marker} {entry.date.isoformat()}  {entry.item.identifier}{today_flag}")


@cli.command()
@project_root_option
@click.argument("day", type=DATE_TYPE)
def find(project_root: str, day: datetime) -> None:
    """Print the daily note for DAY (YYYY-MM-DD)."""
    _, _, index = _open(project_root)
    identifier = index.find_item(day.date())
    if identifier is None:
        click.echo(f"No daily note for {day.date().isoformat()}")
        raise SystemExit(1)
    click.echo(identifier)


@cli.command()
@project_root_option
@click.argument("day", type=DATE_TYPE)
@click.option(
    "--direction",
    type=click.Choice(["previous", "next"]),
    default="next",
    show_default=True,
)
def adjacent(project_root: str, day: datetime, direction: str) -> None:
    """Print the previous or next daily note relative to DAY."""
    _, _, index = _open(project_root)
    identifier = index.get_adjacent(day.date(), direction)
    if identifier is None:
        click.echo(f"No {direction} daily note for {day.date().isoformat()}")
        raise SystemExit(1)
    click.echo(identifier)


@cli.command("date-for")
@project_root_option
@click.argument("path")
def date_for(project_root: str, path: str) -> None:
    """Print the date of the daily note at vault-relative PATH."""
    _, _, index = _open(project_root)
    day = index.get_date_for(path)
    if day is None:
        click.echo(f"Not a daily note: {path}")
        raise SystemExit(1)
    click.echo(day.isoformat())


@cli.command()
@project_root_option
@click.argument("day", type=DATE_TYPE, required=False)
@click.option("--offset", type=int, default=0, help="Shift by this many weeks.")
def week(project_root: str, day: datetime | None, offset: int) -> None:
    """Show the week containing DAY and which days have notes."""
    from timewalk.weeks import dates_in_week, shift_weeks, week_number

    config, _, index = _open(project_root)
    first_day = config["calendar"]["first_day_of_week"]
    anchor = shift_weeks(day.date() if day else _today(), offset)

    click.echo(f"W{week_number(anchor, first_day)}")
    for d in dates_in_week(anchor, first_day):
        identifier = index.find_item(d)
        status = identifier if identifier else "-"
        click.echo(f"  {d.strftime('%a')} {d.isoformat()}  {status}")


@cli.command()
@project_root_option
@click.argument("day", type=DATE_TYPE)
def create(project_root: str, day: datetime) -> None:
    """Create the daily note for DAY unless one already exists."""
    config, source, index = _open(project_root)
    existing = index.find_item(day.date())
    if existing is not None:
        click.echo(existing)
        return

    identifier = source.create_item(day.date())
    if config["metadata"]["enabled"]:
        _stamp(config, source, identifier, day.date())
    click.echo(identifier)


@cli.command()
@project_root_option
@click.argument("path")
def stamp(project_root: str, path: str) -> None:
    """Write date metadata into the frontmatter of the note at PATH."""
    config, source, index = _open(project_root)
    day = index.get_date_for(path)
    if day is None:
        click.echo(f"Not a daily note: {path}")
        raise SystemExit(1)
    if not source.resolve(path).exists():
        click.echo(f"File not found: {path}")
        raise SystemExit(1)

    try:
        changed = _stamp(config, source, path, day)
    except ValueError as exc:
        click.echo(f"Error: {path}: {exc}")
        raise SystemExit(1)
    click.echo(f"Updated {path}" if changed else f"Unchanged {path}")


@cli.command()
@project_root_option
def watch(project_root: str) -> None:
    """Watch the vault and keep the index current (foreground)."""
    import logging
    import signal
    import time

    from timewalk.vault.watcher import VaultWatcher

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    log = logging.getLogger("timewalk.watch")

    config, source, index = _open(project_root)

    def on_rebuild(rel_path: str, snapshot: object) -> None:
        if not config["metadata"]["enabled"]:
            return
        day = index.get_date_for(rel_path)
        if day is not None and source.resolve(rel_path).is_file():
            try:
                _stamp(config, source, rel_path, day)
            except (OSError, ValueError) as exc:
                log.warning("Could not update metadata for %s: %s", rel_path, exc)

    watcher = VaultWatcher(index, source.root, on_rebuild=on_rebuild)

    running = True

    def _shutdown(signum: int, frame: object) -> None:
        nonlocal running
        log.info("Received signal %d, shutting down...", signum)
        running = False

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    click.echo(f"Watching {source.root} ({index.snapshot.indexed} daily notes)...")
    watcher.start()
    while running:
        time.sleep(1)
    watcher.stop()
    log.info("Timewalk watcher stopped")
