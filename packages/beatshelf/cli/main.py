"""Command-line interface for beatshelf.

Each invocation opens a session (device -> library -> playlists), runs one
command against the reconciliation engine, and persists dirty playlists
before exiting when the command changed anything.
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from beatshelf.core.config.loader import load_app_config
from beatshelf.core.engine import EngineSummary
from beatshelf.core.ranking import SortKey
from beatshelf.core.session import BeatshelfSession
from beatshelf.core.utils.logging import configure_logging

console = Console()


def print_summary(summary: EngineSummary) -> None:
    console.print(f"[bold]Library:[/bold] {summary.library} levels")
    console.print(
        f"[bold]Playlists:[/bold] {summary.playlists} "
        f"({summary.songs_in_playlists} songs in all playlists)"
    )
    console.print(f"[bold]Available:[/bold] {summary.available} not in any playlist")
    if summary.dirty:
        console.print(f"[yellow]Unsaved playlists:[/yellow] {summary.dirty}")


def cmd_scan(session: BeatshelfSession, args: argparse.Namespace) -> int:
    summary = session.load(force=args.force)
    if not session.device_available:
        console.print("[yellow]Device not found, showing cached library[/yellow]")
    print_summary(summary)
    return 0


def cmd_available(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    engine = session.engine
    if args.sort:
        engine.sort_available(SortKey(args.sort), descending=args.desc)
    if args.search:
        engine.search_available(args.search)

    table = Table(title="Available levels")
    table.add_column("#", justify="right")
    table.add_column("Level")
    table.add_column("BPM", justify="right")
    table.add_column("Id")
    rows = engine.available if args.limit is None else engine.available[: args.limit]
    for index, item in enumerate(rows):
        table.add_row(str(index), item.display_label, f"{item.beats_per_minute:g}", item.id or "")
    console.print(table)
    return 0


def cmd_playlists(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    table = Table(title="Playlists")
    table.add_column("Title")
    table.add_column("Songs", justify="right")
    table.add_column("File")
    for playlist in session.engine.playlists:
        table.add_row(playlist.title, str(len(playlist.songs)), playlist.file_name)
    console.print(table)
    return 0


def cmd_show(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    engine = session.engine
    index = engine.find_playlist(args.title)
    if index is None:
        console.print(f"[red]ERROR: No playlist titled '{args.title}'[/red]")
        return 1

    playlist = engine.playlists[index]
    console.print(f"[bold]{playlist.title}[/bold]")
    if playlist.description:
        console.print(playlist.description)
    for song_index, song in enumerate(playlist.songs):
        item = engine.resolve_song(song)
        label = item.display_label if item else "Unknown"
        marker = "" if item else f" [dim]({song.name}, {song.hash})[/dim]"
        console.print(f"{song_index:>4}  {label}{marker}")
    return 0


def cmd_create(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    if session.engine.create_playlist(args.title, args.description) is None:
        console.print(f"[red]ERROR: Playlist '{args.title}' already exists[/red]")
        return 1
    return _save(session)


def cmd_add(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    engine = session.engine
    playlist_index = engine.find_playlist(args.title)
    if playlist_index is None:
        console.print(f"[red]ERROR: No playlist titled '{args.title}'[/red]")
        return 1

    missing = []
    for item_id in args.item_ids:
        available_index = engine.available_index(item_id)
        if available_index is None:
            missing.append(item_id)
        elif engine.add_to_playlist(playlist_index, available_index) is None:
            missing.append(item_id)

    for item_id in missing:
        console.print(f"[yellow]Not available: {item_id}[/yellow]")
    exit_code = _save(session)
    return 1 if missing else exit_code


def cmd_remove(session: BeatshelfSession, args: argparse.Namespace) -> int:
    session.load()
    engine = session.engine
    playlist_index = engine.find_playlist(args.title)
    if playlist_index is None:
        console.print(f"[red]ERROR: No playlist titled '{args.title}'[/red]")
        return 1
    if engine.remove_from_playlist(playlist_index, args.song_index) is None:
        console.print(f"[red]ERROR: No song #{args.song_index} in '{args.title}'[/red]")
        return 1
    return _save(session)


def _save(session: BeatshelfSession) -> int:
    if not session.device_available:
        console.print("[red]ERROR: Device not found, nothing saved[/red]")
        return 1

    report = session.save()
    for file_name in report.written:
        console.print(f"[green]Saved[/green] {file_name}")
    for file_name in report.failed:
        console.print(f"[red]Can't save[/red] {file_name}")
    return 0 if report.ok else 1


COMMANDS = {
    "scan": cmd_scan,
    "available": cmd_available,
    "playlists": cmd_playlists,
    "show": cmd_show,
    "create": cmd_create,
    "add": cmd_add,
    "remove": cmd_remove,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="beatshelf",
        description="beatshelf - manage custom level playlists on a mounted headset",
    )
    p.add_argument("--config", default=None, help="Path to config (.yaml/.yml/.json)")
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    scan = sub.add_parser("scan", help="Load the library and print a summary")
    scan.add_argument("--force", action="store_true", help="Ignore the cache and rescan")

    available = sub.add_parser("available", help="List levels not in any playlist")
    available.add_argument("--sort", choices=[key.value for key in SortKey], default=None)
    available.add_argument("--desc", action="store_true", help="Sort descending")
    available.add_argument("--search", default="", help="Rank by closeness to this name")
    available.add_argument("--limit", type=int, default=None)

    sub.add_parser("playlists", help="List playlists")

    show = sub.add_parser("show", help="List the songs of a playlist")
    show.add_argument("title")

    create = sub.add_parser("create", help="Create a playlist")
    create.add_argument("title")
    create.add_argument("--description", default=None)

    add = sub.add_parser("add", help="Add available levels to a playlist")
    add.add_argument("title")
    add.add_argument("item_ids", nargs="+", metavar="ITEM_ID")

    remove = sub.add_parser("remove", help="Remove a song from a playlist by position")
    remove.add_argument("title")
    remove.add_argument("song_index", type=int)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_app_config(args.config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1

    configure_logging(config.logging, level=args.log_level)

    session = BeatshelfSession(app_config=config)
    return COMMANDS[args.cmd](session, args)


if __name__ == "__main__":
    sys.exit(main())
