from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from linksnap.anchor import list_snapshots, resolve_anchor
from linksnap.config import (
    RunContext,
    SOURCE_ENV,
    TARGET_ENV,
    can_change_ownership,
)
from linksnap.filters import build_path_filter
from linksnap.labels import parse_label, today_label, validate_label
from linksnap.models import SnapshotResult, SourceEntry
from linksnap.preconditions import validate_roots
from linksnap.walker import build_snapshot


app = typer.Typer(help="LinkSnap: dated hardlink snapshots of a directory tree")
console = Console()


def _shorten_path(path: str, max_len: int = 64) -> str:
    if len(path) <= max_len:
        return path
    keep = max_len - 3
    head = keep // 2
    tail = keep - head
    return f"{path[:head]}...{path[-tail:]}"


def _render_summary(result: SnapshotResult, context: RunContext) -> None:
    table = Table(title=f"Snapshot {result.today_label}")
    table.add_column("Action")
    table.add_column("Entries", justify="right")

    table.add_row("Hardlinked (unchanged)", str(len(result.linked_paths)))
    table.add_row("Copied (new or changed)", str(len(result.copied_paths)))
    table.add_row("Symlinks", str(len(result.symlink_paths)))
    table.add_row("Directories created", str(len(result.created_directories)))
    if result.excluded_paths:
        table.add_row("Excluded", str(len(result.excluded_paths)))
    table.add_row("Warnings", str(len(result.warnings)))

    console.print(table)
    console.print(f"Anchor: {context.anchor_root}")
    console.print(f"Snapshot: {context.today_root}")


def _render_path_summary(title: str, paths: list[str], style: str) -> None:
    if not paths:
        return
    console.print(Text(f"{title} ({len(paths)}):", style=style))
    for path in paths:
        console.print(f"  {path}")


def _run(
    source: str,
    target: str,
    today: str | None,
    anchor: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    *,
    verbose: bool,
) -> int:
    try:
        today_value = validate_label(today) if today else today_label()
        parse_label(today_value)
        source_root, target_root = validate_roots(source, target)
        anchor_value = resolve_anchor(target_root, today_value, override=anchor)
        context = RunContext(
            source_root=source_root,
            target_root=target_root,
            today_label=today_value,
            anchor_label=anchor_value,
            can_chown=can_change_ownership(),
            path_filter=build_path_filter(include, exclude),
        )
    except (OSError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    console.print(
        f"Snapshotting [bold]{context.source_root}[/bold] into [bold]{context.today_root}[/bold] ..."
    )
    if not context.can_chown:
        console.print("[yellow]Not running as root: file ownership will not be preserved.[/yellow]")

    try:
        with console.status("Walking source tree...") as status:

            def _on_entry(entry: SourceEntry) -> None:
                status.update(f"Walking source tree... {_shorten_path(entry.path)}")

            result = build_snapshot(context, on_entry=_on_entry)
    except KeyboardInterrupt:
        console.print(
            f"[yellow]Snapshot interrupted.[/yellow] {context.today_root} is partial and may be "
            "picked as an anchor by the next run."
        )
        return 130
    except OSError as exc:
        console.print(f"[red]Snapshot failed:[/red] {exc}")
        return 1

    if verbose:
        _render_path_summary("Copied", result.copied_paths, "green")
        _render_path_summary("Hardlinked", result.linked_paths, "cyan")
        _render_path_summary("Symlinked", result.symlink_paths, "cyan")
    _render_summary(result, context)

    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}")
    if not result.has_warnings:
        console.print("[green]Snapshot complete.[/green]")
    return 0


@app.command()
def run(
    source: str = typer.Argument(
        ...,
        envvar=SOURCE_ENV,
        help="Directory tree to snapshot.",
    ),
    target: str = typer.Argument(
        ...,
        envvar=TARGET_ENV,
        help="Directory holding the dated YYYYMM/DD snapshots.",
    ),
    today: str | None = typer.Option(
        None,
        "--today",
        help="Label of the snapshot to build (YYYYMM/DD). Defaults to the current date.",
    ),
    anchor: str | None = typer.Option(
        None,
        "--anchor",
        help="Label of the snapshot to hardlink against (YYYYMM/DD). "
        "Defaults to the most recent snapshot of the last 60 days.",
    ),
    include: list[str] | None = typer.Option(
        None,
        "--include",
        help="Include glob pattern(s) for paths to snapshot (repeatable).",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        help="Exclude glob pattern(s) for paths to skip (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="List every copied, hardlinked and symlinked path.",
    ),
) -> None:
    """Build today's snapshot, hardlinking files unchanged since the anchor snapshot."""
    raise typer.Exit(
        code=_run(
            source,
            target,
            today,
            anchor,
            tuple(include or ()),
            tuple(exclude or ()),
            verbose=verbose,
        )
    )


@app.command("list")
def list_command(
    target: str = typer.Argument(
        ...,
        envvar=TARGET_ENV,
        help="Directory holding the dated YYYYMM/DD snapshots.",
    ),
) -> None:
    """List the dated snapshots found under a target root."""
    target_root = Path(target).expanduser().resolve()
    if not target_root.is_dir():
        console.print(f"[red]Target root is not a directory: {target_root}[/red]")
        raise typer.Exit(code=1)

    labels = list_snapshots(target_root)
    if not labels:
        console.print("[yellow]No snapshots found.[/yellow]")
        return
    _render_path_summary("Snapshots", labels, "green")
