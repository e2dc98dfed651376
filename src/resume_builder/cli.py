"""CLI interface using typer + rich."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from resume_builder.analysis.keyword_matcher import match_keywords
from resume_builder.clients.suggestion_client import SuggestionClient, SuggestionError
from resume_builder.config import AVAILABLE_THEMES, load_config
from resume_builder.export.docx_builder import generate_docx
from resume_builder.export.extractor import (
    build_resume_blocks,
    extract_blocks,
    resume_filename,
)
from resume_builder.export.pdf_renderer import render_html_preview, render_pdf
from resume_builder.models.blocks import Heading, ListItem
from resume_builder.models.resume import default_resume
from resume_builder.parsers.resume_loader import load_resume, save_resume
from resume_builder.richtext.canonical import canonicalize
from resume_builder.richtext.ingest import suggestion_to_markup
from resume_builder.richtext.surface import EditableSurface

app = typer.Typer(
    name="resume-builder",
    help="Resume builder with sanitized rich-text fields and DOCX/PDF export",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

EXPORT_FORMATS = ("docx", "pdf", "html")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        force=True,
    )


def _load(file: Path):
    if not file.exists():
        console.print(f"[red]Resume file not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        return load_resume(file)
    except ValueError as e:
        console.print(f"[red]Could not read {file}: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def init(
    output: Path = typer.Argument(Path("resume.yaml"), help="Where to write the sample resume"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write the sample resume to start editing from."""
    if output.exists() and not force:
        console.print(f"[yellow]{output} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)
    save_resume(default_resume(), output)
    console.print(f"[green]Sample resume written: {output}[/green]")


@app.command()
def sanitize(
    markup: str = typer.Argument(None, help="Markup to clean"),
    file: Path = typer.Option(None, "--file", help="Read markup from a file"),
) -> None:
    """Print the canonical form of a rich-text value."""
    if file is not None:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        markup = file.read_text(encoding="utf-8")
    if markup is None:
        console.print("[red]Pass markup or --file[/red]")
        raise typer.Exit(1)

    value = canonicalize(markup)
    typer.echo(value)

    surface = EditableSurface(value, options=load_config().editor.to_options())
    options = surface.options
    if surface.is_over_limit:
        err_console.print(
            f"[yellow]{surface.character_count}/{options.character_limit} characters "
            f"(over the limit)[/yellow]"
        )
    elif options.show_character_count:
        err_console.print(f"{surface.character_count}/{options.character_limit} characters")


@app.command()
def blocks(
    file: Path = typer.Argument(help="Resume file (.yaml/.json)"),
    markup: bool = typer.Option(False, "--markup", help="Treat FILE as one rich-text field"),
    preserve_lines: bool = typer.Option(False, "--preserve-lines", help="One paragraph per line"),
) -> None:
    """Show the export blocks a resume (or one field) produces."""
    if markup:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        raw = file.read_text(encoding="utf-8")
        result = extract_blocks(canonicalize(raw), preserve_lines=preserve_lines)
    else:
        result = build_resume_blocks(_load(file))

    table = Table(title="Export blocks")
    table.add_column("Kind")
    table.add_column("Level", justify="right")
    table.add_column("Text")
    for block in result:
        if isinstance(block, Heading):
            table.add_row("heading", str(block.level), block.text)
        elif isinstance(block, ListItem):
            table.add_row("list item", str(block.indent_level), block.text)
        else:
            table.add_row("paragraph" + (" (bold)" if block.bold else ""), "", block.text)
    console.print(table)


@app.command()
def suggest(
    kind: str = typer.Argument(help="summary, description or skills"),
    job_title: str = typer.Option(None, "--job-title", "-j", help="Job title to suggest for"),
    markup: bool = typer.Option(False, "--markup", help="Show the markup inserted into the editor"),
) -> None:
    """List the canned suggestions for a field."""
    config = load_config()
    client = SuggestionClient(default_job_title=config.suggestions.default_job_title)
    try:
        suggestions = client.fetch(kind, job_title)
    except SuggestionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    title = client.resolve_job_title(job_title)
    for i, text in enumerate(suggestions, 1):
        body = suggestion_to_markup(text) if markup and kind != "skills" else text
        console.print(Panel(body, title=f"{title} #{i}"))


@app.command()
def export(
    file: Path = typer.Argument(help="Resume file (.yaml/.json)"),
    fmt: str = typer.Option("docx", "--format", "-f", help="docx, pdf or html"),
    output_dir: Path = typer.Option(None, "--output", "-o", help="Output directory"),
    theme: str = typer.Option(None, "--theme", "-t", help=f"One of {', '.join(AVAILABLE_THEMES)}"),
) -> None:
    """Export the resume as DOCX, PDF or HTML."""
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format {fmt!r}; choose {', '.join(EXPORT_FORMATS)}[/red]")
        raise typer.Exit(1)

    config = load_config()
    resume = _load(file)
    out_dir = output_dir or config.export.resolved_output_dir
    out_path = out_dir / resume_filename(resume, fmt)
    theme = theme or config.export.theme

    try:
        if fmt == "docx":
            generate_docx(
                resume,
                out_path,
                font_name=config.export.font_name,
                font_size=config.export.font_size,
            )
        elif fmt == "pdf":
            pdf_bytes = render_pdf(resume, theme=theme)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(pdf_bytes)
        else:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(render_html_preview(resume, theme=theme), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Exported: {out_path}[/green]")


@app.command()
def preview(
    file: Path = typer.Argument(help="Resume file (.yaml/.json)"),
    theme: str = typer.Option(None, "--theme", "-t", help="Preview theme"),
    color: str = typer.Option("default", "--color", help="Accent color"),
    open_browser: bool = typer.Option(True, "--open/--no-open", help="Open in the browser"),
) -> None:
    """Render the resume to HTML and open it in the browser."""
    resume = _load(file)
    theme = theme or load_config().export.theme
    html_path = file.with_suffix(".html")
    html_path.write_text(render_html_preview(resume, theme=theme, color=color), encoding="utf-8")

    console.print(f"[green]HTML written: {html_path}[/green]")
    if open_browser:
        webbrowser.open(html_path.resolve().as_uri())


@app.command()
def keywords(
    file: Path = typer.Argument(help="Resume file (.yaml/.json)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
) -> None:
    """Check which of the job description's keywords the resume mentions."""
    if not jd.exists():
        console.print(f"[red]Job description not found: {jd}[/red]")
        raise typer.Exit(1)

    result = match_keywords(_load(file), jd.read_text(encoding="utf-8"))
    color = "green" if result.score >= 70 else "yellow"
    console.print(
        Panel(
            f"[bold {color}]Match rate: {result.score}%[/bold {color}]\n"
            f"Matched: {', '.join(result.matched_keywords) or '-'}\n"
            f"Missing: {', '.join(result.missing_keywords) or '-'}",
            title="Keyword match",
        )
    )


if __name__ == "__main__":
    app()
