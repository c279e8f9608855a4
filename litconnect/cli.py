"""
Command-line interface for LitConnect.

Provides commands for:
- Browsing the book catalog and its timeline
- Analyzing text against selected books
- Translating text through MyMemory with a quality review
- Managing the analysis history and the saved draft

Usage:
    litconnect books --genre poetry
    litconnect analyze --text "Between two languages..." --book 8 --book 5
    litconnect translate --text "Hola mundo" --source es --target en
    litconnect history list
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from litconnect import __version__
from litconnect.catalog import Catalog, group_by_period, load_catalog, timeline_stats
from litconnect.config import APP_NAME
from litconnect.errors import LitConnectError
from litconnect.models import AnalysisOptions, AnalysisResult
from litconnect.session import AnalysisSession
from litconnect.storage import LocalStorage
from litconnect.translate.languages import (
    AUTO_DETECT,
    get_all_languages,
    get_language_name,
    is_supported,
)

app = typer.Typer(
    name="litconnect",
    help="LitConnect: connect your writing to Latinx literature",
    add_completion=False,
)
history_app = typer.Typer(help="View and manage saved analyses.")
draft_app = typer.Typer(help="Save, show or clear the text draft.")
app.add_typer(history_app, name="history")
app.add_typer(draft_app, name="draft")

console = Console()
logger = logging.getLogger("litconnect")

CATALOG_OPTION = typer.Option(
    None, "--catalog", "-c",
    help="Book catalog JSON (defaults to the bundled catalog)",
)


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """LitConnect: literary connections and translation review."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def fail(message: str) -> None:
    console.print(f"[red]Error:[/] {escape(message)}", style="bold")
    raise typer.Exit(1)


def open_catalog(path: Optional[Path]) -> Catalog:
    try:
        return load_catalog(path)
    except LitConnectError as e:
        fail(str(e))


def open_session(catalog_path: Optional[Path] = None) -> AnalysisSession:
    return AnalysisSession(open_catalog(catalog_path), LocalStorage())


def read_text(text: Optional[str], input_file: Optional[Path]) -> str:
    if text:
        return text
    if input_file:
        if not input_file.exists():
            fail(f"File not found: {input_file}")
        return input_file.read_text(encoding="utf-8")
    fail("Provide either --text or --input")


# Catalog


@app.command()
def books(
    search: str = typer.Option("", "--search", "-s", help="Title, author, theme or abstract substring"),
    genre: str = typer.Option("", "--genre", "-g", help="Genre, e.g. 'poetry'"),
    theory: str = typer.Option("", "--theory", "-t", help="Connecting theory, e.g. 'Borderlands Theory'"),
    years: str = typer.Option("", "--years", "-y", help="Inclusive year range, e.g. 1980-2000"),
    facets: bool = typer.Option(False, "--facets", help="List the genres and theories to filter by"),
    catalog_path: Optional[Path] = CATALOG_OPTION,
):
    """Browse and filter the book catalog."""
    catalog = open_catalog(catalog_path)
    if facets:
        console.print(f"[bold]Genres:[/] {', '.join(catalog.genres())}")
        console.print(f"[bold]Theories:[/] {', '.join(catalog.theories())}")
        return

    try:
        matches = catalog.filter(search=search, genre=genre, theory=theory, year_range=years)
    except ValueError as e:
        fail(str(e))

    if not matches:
        console.print("[yellow]No books match your filters.[/]")
        return

    table = Table(title=f"Catalog ({len(matches)} of {len(catalog)} books)")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Author")
    table.add_column("Year", justify="right")
    table.add_column("Country")
    table.add_column("Genre", style="green")
    table.add_column("Theories", style="dim")
    for book in matches:
        table.add_row(
            str(book.id), book.title, book.author, str(book.year),
            book.country, book.genre, ", ".join(book.connecting_theory),
        )
    console.print(table)


@app.command()
def timeline(catalog_path: Optional[Path] = CATALOG_OPTION):
    """Show the catalog grouped into historical periods."""
    catalog = open_catalog(catalog_path)
    for period in group_by_period(catalog.books):
        console.print(f"\n[bold cyan]{period.name}[/]")
        for book in sorted(period.books, key=lambda b: b.year):
            console.print(f"  {book.year}  {book.title} [dim]({book.author}, {book.country})[/]")

    stats = timeline_stats(catalog.books)
    console.print(
        f"\n[dim]{stats.total} books · {stats.year_span} year span · "
        f"{stats.countries} countries · {stats.genres} genres[/]"
    )


# Analysis


def print_result(result: AnalysisResult) -> None:
    conn = result.connections
    console.print(Panel(escape(result.user_text), title="Your text", expand=False))
    console.print("[bold]Compared with:[/] " + "; ".join(f"{b.title} ({b.author})" for b in result.books))

    if conn.themes:
        table = Table(title="Thematic connections")
        table.add_column("Theme", style="cyan")
        table.add_column("Book")
        table.add_column("Author", style="dim")
        for c in conn.themes:
            table.add_row(c.term, c.book, c.author)
        console.print(table)

    if conn.theories:
        table = Table(title="Theoretical frameworks")
        table.add_column("Theory", style="cyan")
        table.add_column("Book")
        table.add_column("Author", style="dim")
        for c in conn.theories:
            table.add_row(c.term, c.book, c.author)
        console.print(table)

    if conn.temporal:
        t = conn.temporal
        console.print(
            f"\n[bold]Temporal:[/] average {t.average}, range {t.range_label}, span {t.time_span} years"
        )
        for label, count in t.distribution.items():
            if count:
                console.print(f"  {label}: {count}")

    if conn.geographic:
        console.print(f"[bold]Geographic:[/] {', '.join(conn.geographic)}")
    if conn.genres:
        console.print(f"[bold]Genres:[/] {', '.join(conn.genres)}")

    if conn.linguistic:
        ling = conn.linguistic
        console.print(
            f"[bold]Linguistic:[/] {ling.word_count} words, {ling.unique_words} unique, "
            f"average length {ling.average_word_length:.1f}"
        )
        if ling.top_words:
            console.print(f"  Top words: {', '.join(ling.top_words)}")

    for heading, notes, style in (
        ("How AI enhances this analysis", result.enhancements, "green"),
        ("What AI cannot capture", result.limitations, "yellow"),
    ):
        console.print(f"\n[bold {style}]{heading}[/]")
        for note in notes:
            console.print(f"  [bold]{note.title}:[/] {note.description}")


@app.command()
def analyze(
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Text to analyze"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Read the text from a file"),
    book_ids: List[int] = typer.Option([], "--book", "-b", help="Book id to compare with (repeatable)"),
    search: str = typer.Option("", "--search", "-s", help="Also compare with books whose title, author or genre matches"),
    use_draft: bool = typer.Option(False, "--draft", help="Analyze the saved draft"),
    no_themes: bool = typer.Option(False, "--no-themes", help="Skip thematic connections"),
    no_theories: bool = typer.Option(False, "--no-theories", help="Skip theoretical frameworks"),
    no_temporal: bool = typer.Option(False, "--no-temporal", help="Skip temporal statistics"),
    no_geographic: bool = typer.Option(False, "--no-geographic", help="Skip geographic spread"),
    no_genres: bool = typer.Option(False, "--no-genres", help="Skip genre spread"),
    no_linguistic: bool = typer.Option(False, "--no-linguistic", help="Skip linguistic patterns"),
    no_save: bool = typer.Option(False, "--no-save", help="Do not add the result to history"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    catalog_path: Optional[Path] = CATALOG_OPTION,
):
    """Analyze text against selected books."""
    session = open_session(catalog_path)
    if use_draft:
        content = session.load_draft()
        if not content:
            fail("No saved draft.")
    else:
        content = read_text(text, input_file)

    options = AnalysisOptions(
        themes=not no_themes,
        theory=not no_theories,
        temporal=not no_temporal,
        geographic=not no_geographic,
        genre=not no_genres,
        linguistic=not no_linguistic,
    )
    if search:
        found = session.catalog.search(search)
        if not found:
            fail(f"No books match {search!r}")
        book_ids = list(book_ids) + [b.id for b in found]

    try:
        for book_id in book_ids:
            session.select(book_id)
        result = session.generate(content, options, save=not no_save)
    except LitConnectError as e:
        fail(str(e))

    if as_json:
        console.print_json(data=result.to_dict())
    else:
        print_result(result)


# Translation


@app.command()
def translate(
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Text to translate"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Read the text from a file"),
    output_file: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the translation to a file"),
    source_lang: str = typer.Option(AUTO_DETECT, "--source", "-s", help="Source language code, 'auto' or 'spanglish'"),
    target_lang: str = typer.Option("en", "--target", "-l", help="Target language code"),
    review: bool = typer.Option(True, "--review/--no-review", help="Show the quality review"),
):
    """Translate text through MyMemory and review the result."""
    from litconnect.translate.service import TranslationService

    for code in (source_lang, target_lang):
        if not is_supported(code):
            fail(f"Unsupported language code: {code}. Run 'litconnect languages' for the list.")
    if target_lang == AUTO_DETECT:
        fail("The target language cannot be 'auto'")

    content = read_text(text, input_file)
    service = TranslationService()
    try:
        with console.status("Translating..."):
            report = asyncio.run(service.translate_and_review(content, source_lang, target_lang))
    except LitConnectError as e:
        fail(str(e))
    finally:
        service.client.close()

    if report.error:
        fail(report.error)

    if report.detected:
        console.print(f"[dim]Detected language: {get_language_name(report.source_lang)}[/]")
    console.print(
        f"\n[bold]{get_language_name(report.source_lang)} → {get_language_name(report.target_lang)}[/]\n"
    )
    console.print(report.translation, markup=False)

    if output_file:
        output_file.write_text(report.translation, encoding="utf-8")
        console.print(f"\n[green]Saved to:[/] {output_file}")

    if review and report.quality:
        quality = report.quality
        style = {"good": "green", "moderate": "yellow", "poor": "red"}[quality.quality]
        table = Table(title=f"Quality: [{style}]{quality.quality}[/]")
        table.add_column("Aspect", style="cyan")
        table.add_column("Notes")
        for aspect, notes in (
            ("Grammar", quality.grammar),
            ("Structure", quality.structure),
            ("Meaning", quality.meaning),
        ):
            table.add_row(aspect, "\n".join(notes) or "-")
        console.print(table)


@app.command()
def languages():
    """List supported language codes."""
    table = Table(title="Supported languages")
    table.add_column("Code", style="cyan")
    table.add_column("Language")
    for code, name in get_all_languages():
        table.add_row(code, name)
    console.print(table)


# History


@history_app.command("list")
def history_list():
    """List saved analyses, newest first."""
    entries = open_session().history.entries
    if not entries:
        console.print("[yellow]No saved analyses.[/]")
        return

    table = Table(title=f"History ({len(entries)} entries)")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Books", style="cyan")
    table.add_column("Text")
    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.timestamp[:19].replace("T", " "),
            ", ".join(b["title"] for b in entry.books),
            entry.user_text,
        )
    console.print(table)


@history_app.command("show")
def history_show(entry_id: int = typer.Argument(..., help="History entry id")):
    """Show a saved analysis."""
    session = open_session()
    try:
        session.restore(entry_id)
    except LitConnectError as e:
        fail(str(e))
    if session.last_result is None:
        fail(f"History entry {entry_id} has no stored analysis")
    print_result(session.last_result)


@history_app.command("delete")
def history_delete(entry_id: int = typer.Argument(..., help="History entry id")):
    """Delete one saved analysis."""
    if not open_session().history.delete(entry_id):
        fail(f"No history entry with id {entry_id}")
    console.print(f"[green]Deleted entry {entry_id}[/]")


@history_app.command("clear")
def history_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete all saved analyses."""
    if not yes and not typer.confirm("Are you sure you want to clear all history?"):
        raise typer.Exit(0)
    open_session().history.clear()
    console.print("[green]History cleared[/]")


@history_app.command("export")
def history_export(
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Directory for the export file"),
):
    """Export the history as a JSON file."""
    try:
        path = open_session().history.export(directory)
    except LitConnectError as e:
        fail(str(e))
    console.print(f"[green]Exported to:[/] {path}")


# Draft


@draft_app.command("save")
def draft_save(
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Draft text"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Read the draft from a file"),
):
    """Save a text draft."""
    session = open_session()
    try:
        session.save_draft(read_text(text, input_file))
    except LitConnectError as e:
        fail(str(e))
    console.print(f"[green]Draft saved[/] [dim]({escape(str(session.storage.path))})[/]")


@draft_app.command("show")
def draft_show():
    """Print the saved draft."""
    content = open_session().load_draft()
    if not content:
        console.print("[yellow]No saved draft.[/]")
        return
    console.print(content, markup=False)


@draft_app.command("clear")
def draft_clear():
    """Remove the saved draft."""
    open_session().clear_draft()
    console.print("[green]Draft cleared[/]")


if __name__ == "__main__":
    app()
