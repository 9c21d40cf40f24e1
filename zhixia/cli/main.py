"""Main CLI entry point using Typer."""
import asyncio
from pathlib import Path
from typing import List, Optional
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from .. import __version__
from ..config import get_settings
from ..config.constants import CONFIRM_DELETE_PROJECT
from ..editor import EditorSession
from ..exceptions import ZhixiaError
from ..models import Chapter
from ..storage import JsonFileBackend, ProjectStore
from ..utils.logging import setup_logging


app = typer.Typer(
    name="zhixia",
    help="Zhixia - chapter-based writing workspace",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def get_store() -> ProjectStore:
    """Build the store described by the current settings."""
    settings = get_settings()
    return ProjectStore(JsonFileBackend(settings.data_file), key=settings.storage_key)


def _confirmer(assume_yes: bool):
    if assume_yes:
        return lambda message: True
    return lambda message: Confirm.ask(message, console=console)


def _open_session(project_id: str, assume_yes: bool = False) -> EditorSession:
    try:
        return EditorSession(get_store(), project_id, confirm=_confirmer(assume_yes))
    except ZhixiaError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _resolve_chapter(session: EditorSession, ref: str) -> Chapter:
    """Find a chapter by id or by 1-based position in chapter order."""
    for chapter in session.chapters:
        if chapter.id == ref:
            return chapter

    if ref.isdigit():
        ordered = sorted(session.chapters, key=lambda c: c.order)
        index = int(ref) - 1
        if 0 <= index < len(ordered):
            return ordered[index]

    console.print(f"[red]Chapter not found: {ref}[/red]")
    raise typer.Exit(1)


def _chapter_table(session: EditorSession) -> Table:
    direction = "正序" if session.sort_ascending else "倒序"
    table = Table(title=f"{session.project_title} ({direction})")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Chars", justify="right")

    for chapter in session.display_chapters:
        marker = "▶ " if chapter.id == session.selected_chapter_id else ""
        table.add_row(
            str(chapter.order + 1),
            f"{marker}{chapter.title}",
            chapter.id,
            f"{chapter.length:,}"
        )
    return table


@app.command(help="List projects")
def projects():
    """List all projects."""
    items = get_store().list_projects()

    if not items:
        console.print("[yellow]No projects found[/yellow]")
        console.print("[dim]Create one with: zhixia new <title>[/dim]")
        return

    table = Table(title="Projects")
    table.add_column("Title", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Chapters", justify="right")
    table.add_column("Words", justify="right")
    table.add_column("Updated")

    for p in items:
        table.add_row(
            p.title,
            p.id,
            str(len(p.chapters)),
            f"{p.word_count:,}" if p.word_count > 0 else "—",
            p.last_modified
        )

    console.print(table)


@app.command(help="Create a new project")
def new(title: str = typer.Argument(..., help="Project title")):
    """Create a new project."""
    try:
        project = get_store().create_project(title)
    except ValueError as e:
        console.print(f"[red]Error creating project: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Created project: {project.title}[/green]")
    console.print(f"[dim]ID: {project.id}[/dim]")


@app.command(help="Rename a project")
def rename(
    project_id: str = typer.Argument(..., help="Project ID"),
    title: str = typer.Argument(..., help="New title")
):
    """Rename a project."""
    store = get_store()
    if store.get_project(project_id) is None:
        console.print(f"[yellow]No project {project_id}, nothing renamed[/yellow]")
        return

    try:
        store.rename_project(project_id, title)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Renamed to: {title.strip()}[/green]")


@app.command(help="Delete a project")
def delete(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")
):
    """Delete a project after confirmation."""
    store = get_store()
    if store.get_project(project_id) is None:
        console.print(f"[yellow]No project {project_id}, nothing deleted[/yellow]")
        return

    if not _confirmer(yes)(CONFIRM_DELETE_PROJECT):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_project(project_id)
    console.print(f"[green]✓ Deleted project {project_id}[/green]")


@app.command(help="List a project's chapters")
def chapters(
    project_id: str = typer.Argument(..., help="Project ID"),
    desc: bool = typer.Option(False, "--desc", "-d", help="Show in descending order")
):
    """Show chapters in display order."""
    session = _open_session(project_id)
    if not session.chapters:
        console.print("[yellow]No chapters yet[/yellow]")
        console.print(f"[dim]Add one with: zhixia add-chapter {project_id}[/dim]")
        return

    if desc:
        session.toggle_sort_order()
    console.print(_chapter_table(session))


@app.command(name="add-chapter", help="Append a new chapter")
def add_chapter(project_id: str = typer.Argument(..., help="Project ID")):
    """Append an empty chapter."""
    session = _open_session(project_id)
    chapter = session.add_chapter()
    console.print(f"[green]✓ Added {chapter.title}[/green]")
    console.print(f"[dim]ID: {chapter.id}[/dim]")


@app.command(name="delete-chapter", help="Delete a chapter")
def delete_chapter(
    project_id: str = typer.Argument(..., help="Project ID"),
    chapter: str = typer.Argument(..., help="Chapter ID or position"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")
):
    """Delete a chapter and renumber the rest."""
    session = _open_session(project_id, assume_yes=yes)
    target = _resolve_chapter(session, chapter)

    if not session.delete_chapter(target.id):
        console.print("[dim]Cancelled[/dim]")
        return

    console.print(f"[green]✓ Deleted {target.title}[/green]")


@app.command(name="edit-chapter", help="Edit a chapter's title or content")
def edit_chapter(
    project_id: str = typer.Argument(..., help="Project ID"),
    chapter: str = typer.Argument(..., help="Chapter ID or position"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read content from file")
):
    """Replace a chapter's title and/or content."""
    if content is not None and file is not None:
        console.print("[red]Use either --content or --file, not both[/red]")
        raise typer.Exit(1)

    if file is not None:
        try:
            content = file.read_text(encoding='utf-8')
        except OSError as e:
            console.print(f"[red]Cannot read {file}: {e}[/red]")
            raise typer.Exit(1)

    if title is None and content is None:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    session = _open_session(project_id)
    target = _resolve_chapter(session, chapter)
    session.update_chapter(target.id, title=title, content=content)

    console.print(f"[green]✓ Updated {title if title is not None else target.title}[/green]")


@app.command(help="Generate text for a chapter (stubbed)")
def generate(
    project_id: str = typer.Argument(..., help="Project ID"),
    chapter: str = typer.Argument(..., help="Chapter ID or position"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model ID"),
    template: str = typer.Option("continue", "--template", "-T", help="Prompt template ID"),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Custom prompt"),
    refs: Optional[List[str]] = typer.Option(None, "--ref", "-r", help="Referenced chapter ID or position"),
    apply: bool = typer.Option(False, "--apply", "-a", help="Append the result to the chapter")
):
    """Run the writing panel against a chapter."""
    from ..assist import StubAssistClient, WritingPanel

    session = _open_session(project_id)
    target = _resolve_chapter(session, chapter)
    session.select_chapter(target.id)

    try:
        panel = WritingPanel(StubAssistClient(), model_id=model or get_settings().default_model)
        panel.select_template(template)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(1)

    panel.select_prompt(panel.template.prompts[0])
    if prompt:
        panel.custom_prompt = prompt
    for ref in refs or []:
        panel.toggle_reference(_resolve_chapter(session, ref).id)

    with console.status("[cyan]Generating...[/cyan]"):
        text = asyncio.run(panel.run())

    console.print(Panel(text, title=f"{panel.template.name} · {panel.model.name}"))

    if apply:
        panel.apply(session)
        console.print(f"[green]✓ Appended to {target.title}[/green]")


@app.command(help="Analyze a chapter (stubbed)")
def analyze(
    project_id: str = typer.Argument(..., help="Project ID"),
    chapter: str = typer.Argument(..., help="Chapter ID or position"),
    method: str = typer.Option("breakdown", "--method", "-M", help="Analysis method ID"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model ID"),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Analysis prompt")
):
    """Run the analysis panel against a chapter."""
    from ..assist import AnalysisPanel, StubAssistClient

    session = _open_session(project_id)
    target = _resolve_chapter(session, chapter)

    try:
        panel = AnalysisPanel(StubAssistClient(), model_id=model or get_settings().default_model)
        panel.select_method(method)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        raise typer.Exit(1)

    panel.select_prompt(prompt or panel.method.prompts[0])

    with console.status("[cyan]Analyzing...[/cyan]"):
        report = asyncio.run(panel.run(target))

    console.print(Markdown(report))


@app.command(help="Show version information")
def version():
    """Show version information."""
    console.print(f"[cyan]Zhixia v{__version__}[/cyan]")
    console.print("[dim]Chapter-based writing workspace[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log to console as well"),
    show_version: bool = typer.Option(False, "--version", "-v", help="Show version")
):
    """
    Zhixia - chapter-based writing workspace.

    Run without arguments to list projects.
    """
    if show_version:
        console.print(f"[cyan]Zhixia v{__version__}[/cyan]")
        raise typer.Exit()

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    setup_logging(level=settings.log_level, console_output=verbose)

    if ctx.invoked_subcommand is None:
        projects()


if __name__ == "__main__":
    app()
