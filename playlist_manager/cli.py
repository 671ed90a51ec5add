"""Command-line interface for Playlist Manager."""

from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.settings import Settings
from .core.sorting import SortKey
from .exceptions import PlaylistManagerError
from .models.result import (
    LoadReport,
    OperationResult,
    PlaybackEvent,
    PlaylistEntry,
    ResultStatus,
    SearchMatch,
)
from .models.song import Song
from .service import PlaylistService
from .utils.platform import get_config_dir

app = typer.Typer(help="Linked-list playlist manager")
console = Console()

# Outcomes that are reported but are not errors
SOFT_STATUSES = {
    ResultStatus.NOT_FOUND,
    ResultStatus.NOTHING_TO_SHUFFLE,
    ResultStatus.NOTHING_PLAYING,
    ResultStatus.NO_UNDO_AVAILABLE,
    ResultStatus.MALFORMED_RECORD,
}

MENU = """
[bold cyan]=== Main Menu ===[/bold cyan]
 1. Display playlist
 2. Add song
 3. Delete song
 4. Sort playlist
 5. Search song
 6. Shuffle playlist
 7. Play next
 8. Play previous
 9. Loop current song
10. Save playlist
11. Undo last action
12. Remove duplicates
 0. Exit"""

SORT_CHOICES = {
    "1": SortKey.TITLE,
    "2": SortKey.ARTIST,
    "3": SortKey.ALBUM,
    "4": SortKey.DURATION,
    "5": SortKey.GENRE,
}


def get_service(config_path: Optional[Path] = None) -> PlaylistService:
    """Create a playlist service from file or default settings."""
    return PlaylistService(config_path=config_path)


def open_playlist(
    service: PlaylistService,
    playlist: Optional[str],
    create_missing: bool = False
) -> None:
    """Load a playlist into the service, exiting on a missing or unreadable file."""
    try:
        report = service.load(playlist, create_missing=create_missing)
    except (FileNotFoundError, PlaylistManagerError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    print_load_report(report)


def print_load_report(report: LoadReport) -> None:
    if report.source is None:
        return
    print_result(report.as_result())
    if report.skipped and report.loaded:
        console.print(f"[yellow]Skipped {len(report.skipped)} malformed row(s)[/yellow]")


def print_result(result: OperationResult) -> None:
    """Print an operation outcome in a colour matching its status."""
    if result.ok:
        console.print(f"[green]{escape(result.message)}[/green]")
    elif result.status in SOFT_STATUSES:
        console.print(f"[yellow]{escape(result.message)}[/yellow]")
    else:
        console.print(f"[red]Error: {escape(result.message)}[/red]")


def print_playback(result: OperationResult) -> None:
    if PlaybackEvent.PLAYLIST_END_REACHED in result.events:
        console.print("[cyan]=== Playlist End Reached - Starting From Beginning ===[/cyan]")
    print_result(result)


def playlist_table(entries: Iterable[PlaylistEntry], title: str = "Current Playlist") -> Table:
    """Build a table of playlist entries, marking the song now playing."""
    table = Table(title=title)
    table.add_column("", width=2)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Duration", justify="right")
    table.add_column("Album")
    table.add_column("Genre")

    for entry in entries:
        song = entry.song
        table.add_row(
            "=>" if entry.is_current else "",
            str(entry.position),
            escape(song.title),
            escape(song.artist),
            song.duration_str,
            escape(song.album),
            escape(song.genre)
        )

    return table


def sorted_table(songs: List[Song], key: SortKey) -> Table:
    table = Table(title=f"Playlist Sorted by {key.value.title()}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Duration", justify="right")
    table.add_column("Genre")

    for number, song in enumerate(songs, start=1):
        table.add_row(
            str(number),
            escape(song.title),
            escape(song.artist),
            song.duration_str,
            escape(song.genre)
        )

    return table


def search_table(matches: List[SearchMatch], term: str) -> Table:
    table = Table(title=f"Songs Similar to '{escape(term)}'")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Duration", justify="right")
    table.add_column("Album")
    table.add_column("Genre")
    table.add_column("Distance", justify="right")

    for match in matches:
        song = match.song
        table.add_row(
            str(match.position),
            escape(song.title),
            escape(song.artist),
            song.duration_str,
            escape(song.album),
            escape(song.genre),
            str(match.distance)
        )

    return table


def show_playlist(service: PlaylistService) -> None:
    if service.sequence.is_empty():
        console.print("[yellow]Playlist is empty.[/yellow]")
        return

    console.print(playlist_table(service.sequence.entries()))
    console.print(f"Total: {service.sequence.count()}")


def show_sorted(service: PlaylistService, key: SortKey) -> None:
    result = service.sequence.sorted_by(key)
    if not result.ok:
        print_result(result)
        return
    console.print(sorted_table(result.data, key))


def show_search(service: PlaylistService, term: str, max_distance: int) -> None:
    result = service.sequence.search(term, max_distance)
    if not result.ok:
        print_result(result)
        return
    console.print(f"Found {len(result.data)} similar songs")
    console.print(search_table(result.data, term))


def write_back(service: PlaylistService) -> None:
    """Save a one-shot command's changes to the file they came from."""
    result = service.save(allow_empty=True)
    if not result.ok:
        print_result(result)
        raise typer.Exit(1)


def finish_mutation(service: PlaylistService, result: OperationResult) -> None:
    print_result(result)
    if result.status in SOFT_STATUSES:
        return
    if not result.ok:
        raise typer.Exit(1)
    write_back(service)


# Interactive session

def prompt_song(service: PlaylistService) -> Optional[Song]:
    """Ask for each song field; returns None if the duration is invalid."""
    console.print("\n[bold cyan]=== Add New Song ===[/bold cyan]")
    title = typer.prompt("Title")
    artist = typer.prompt("Artist")
    album = typer.prompt("Album")
    duration = typer.prompt("Duration (MM:SS)")
    genre = typer.prompt("Genre")

    try:
        return Song.create(
            id=service.sequence.next_id(),
            title=title.strip(),
            artist=artist.strip(),
            album=album.strip(),
            duration=duration,
            genre=genre.strip()
        )
    except ValueError as e:
        console.print(f"[red]Error adding song: {escape(str(e))}[/red]")
        return None


def interactive_delete(service: PlaylistService) -> None:
    console.print("\n[bold cyan]=== Delete Song ===[/bold cyan]")
    console.print("1. Delete by title")
    console.print("2. Delete by position")
    choice = typer.prompt("Choose").strip()

    if choice == "1":
        print_result(service.sequence.delete_by_title(typer.prompt("Enter song title").strip()))
    elif choice == "2":
        raw_index = typer.prompt("Enter position (index)").strip()
        try:
            index = int(raw_index)
        except ValueError:
            console.print(f"[red]Error: '{escape(raw_index)}' is not a number[/red]")
            return
        print_result(service.sequence.delete_by_index(index))
    else:
        console.print("[yellow]Invalid choice.[/yellow]")


def interactive_sort(service: PlaylistService) -> None:
    console.print("\n[bold cyan]=== Sort Playlist ===[/bold cyan]")
    for number, key in SORT_CHOICES.items():
        console.print(f"{number}. Sort by {key.value.title()}")
    key = SORT_CHOICES.get(typer.prompt("Choose").strip())

    if key is None:
        console.print("[yellow]Invalid choice.[/yellow]")
        return
    show_sorted(service, key)


def interactive_loop(service: PlaylistService) -> None:
    """Loop the current song until the user presses Enter."""
    result = service.start_loop(lambda line: console.print(f"\t{escape(line)}"))
    if not result.ok:
        print_result(result)
        return

    try:
        console.input("[cyan]=== Looping (Press Enter To Stop) ===[/cyan]\n")
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        service.stop_loop()
    console.print("[cyan]=== Loop Stopped ===[/cyan]")


def interactive_save(service: PlaylistService) -> None:
    default = service.source_path.stem if service.source_path else None
    name = typer.prompt("Enter filename (without .csv)", default=default).strip()
    print_result(service.save(name))


def run_menu(service: PlaylistService) -> None:
    """Read menu choices until the user exits."""
    while True:
        console.print(MENU)
        choice = typer.prompt("\nChoose option").strip().lower()
        sequence = service.sequence

        if choice == "1":
            show_playlist(service)
        elif choice == "2":
            song = prompt_song(service)
            if song is not None:
                print_result(sequence.add(song))
        elif choice == "3":
            interactive_delete(service)
        elif choice == "4":
            interactive_sort(service)
        elif choice == "5":
            term = typer.prompt("Enter search term")
            show_search(service, term, service.settings.search.max_distance)
        elif choice == "6":
            print_result(sequence.shuffle())
        elif choice == "7":
            print_playback(sequence.play_next())
        elif choice == "8":
            print_playback(sequence.play_previous())
        elif choice == "9":
            interactive_loop(service)
        elif choice == "10":
            interactive_save(service)
        elif choice == "11":
            print_result(sequence.undo())
        elif choice == "12":
            print_result(sequence.remove_duplicates())
        elif choice == "0":
            console.print("Goodbye!")
            return
        else:
            console.print("[yellow]Invalid option. Try again.[/yellow]")


# Commands

@app.command()
def shell(
    playlist: Optional[str] = typer.Argument(
        None,
        help="Playlist name or CSV path (defaults to the configured playlist)"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Start the interactive playlist menu."""
    service = get_service(config)
    console.print("[bold cyan]=== Playlist Manager ===[/bold cyan]")
    open_playlist(service, playlist, create_missing=True)

    try:
        run_menu(service)
    except (KeyboardInterrupt, typer.Abort):
        console.print("\nGoodbye!")
    finally:
        service.stop_loop()


@app.command()
def show(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Display a playlist."""
    service = get_service(config)
    open_playlist(service, playlist)
    show_playlist(service)


@app.command()
def add(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    title: str = typer.Option(..., "--title", "-t", help="Song title"),
    artist: str = typer.Option(..., "--artist", "-a", help="Song artist"),
    album: str = typer.Option(..., "--album", help="Album name"),
    duration: str = typer.Option(..., "--duration", "-d", help="Duration as MM:SS"),
    genre: str = typer.Option(..., "--genre", "-g", help="Genre"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Append a song to a playlist file."""
    service = get_service(config)
    open_playlist(service, playlist)

    try:
        song = Song.create(
            id=service.sequence.next_id(),
            title=title,
            artist=artist,
            album=album,
            duration=duration,
            genre=genre
        )
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    finish_mutation(service, service.sequence.add(song))


@app.command()
def delete(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Exact title to delete"),
    index: Optional[int] = typer.Option(None, "--index", "-i", help="Zero-based position to delete"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Delete a song by title or position."""
    if (title is None) == (index is None):
        console.print("[red]Error: give exactly one of --title or --index[/red]")
        raise typer.Exit(1)

    service = get_service(config)
    open_playlist(service, playlist)

    if title is not None:
        result = service.sequence.delete_by_title(title)
    else:
        result = service.sequence.delete_by_index(index)

    finish_mutation(service, result)


@app.command()
def sort(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    by: SortKey = typer.Option(SortKey.TITLE, "--by", "-b", case_sensitive=False, help="Field to sort by"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Show a playlist sorted by a field (the file is not changed)."""
    service = get_service(config)
    open_playlist(service, playlist)
    show_sorted(service, by)


@app.command()
def search(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    term: str = typer.Argument(..., help="Title to search for"),
    max_distance: Optional[int] = typer.Option(
        None,
        "--max-distance",
        "-m",
        min=0,
        help="Largest accepted edit distance (default from config)"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Fuzzy search song titles."""
    service = get_service(config)
    open_playlist(service, playlist)

    if max_distance is None:
        max_distance = service.settings.search.max_distance
    show_search(service, term, max_distance)


@app.command()
def shuffle(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Shuffle a playlist file in place."""
    service = get_service(config)
    open_playlist(service, playlist)
    finish_mutation(service, service.sequence.shuffle())


@app.command()
def dedupe(
    playlist: str = typer.Argument(..., help="Playlist name or CSV path"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """Remove duplicate songs (same title and artist) from a playlist file."""
    service = get_service(config)
    open_playlist(service, playlist)
    finish_mutation(service, service.sequence.remove_duplicates())


@app.command(name="list-saved")
def list_saved(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """List playlists saved in the playlists directory."""
    service = get_service(config)
    saved = service.store.list_saved()

    if not saved:
        console.print("[yellow]No saved playlists[/yellow]")
        console.print(f"\nPlaylists directory: {service.store.playlists_dir}")
        return

    table = Table(title="Saved Playlists")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Path")

    for number, path in enumerate(saved):
        table.add_row(str(number), escape(path.stem), escape(str(path)))

    console.print(table)


@app.command()
def init_config(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file"
    )
):
    """Initialize a configuration file with defaults."""
    if output is None:
        output = get_config_dir() / 'config.yaml'

    if output.exists():
        overwrite = typer.confirm(
            f"Config file already exists at {output}. Overwrite?",
            default=False
        )
        if not overwrite:
            console.print("[yellow]Cancelled[/yellow]")
            return

    settings = Settings()
    settings.save(output)

    console.print(f"[green]Configuration file created: {output}[/green]")
    console.print("\nEdit this file to customize your settings")


if __name__ == "__main__":
    app()
