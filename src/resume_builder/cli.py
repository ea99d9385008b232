"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import load_config
from resume_builder.export.pdf_renderer import PdfRenderError, render_pdf
from resume_builder.export.plain_text import to_plain_text
from resume_builder.models.events import PersonalFieldChanged, apply_event
from resume_builder.models.resume import ResumeDocument
from resume_builder.parsers.resume_loader import load_resume, save_resume
from resume_builder.pipeline.text_tailor import TailoringError, TextTailor
from resume_builder.templates.styles import TemplateId, list_template_styles

app = typer.Typer(
    name="resume-builder",
    help="Build templated resumes as PDF or plain text",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_or_exit(resume: Path) -> ResumeDocument:
    try:
        return load_resume(resume)
    except FileNotFoundError:
        console.print(f"[red]Resume file not found: {resume}[/red]")
        raise typer.Exit(1)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Could not read resume file {resume}: {e}[/red]")
        raise typer.Exit(1)


def _write_pdf(document: ResumeDocument, template: TemplateId, output: Path) -> None:
    try:
        export = render_pdf(document, template, filename=output.name)
    except PdfRenderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(export.content)
    console.print(
        f"[green]PDF saved: {output}[/green] "
        f"[dim]({export.page_count} page(s), {template.value} template)[/dim]"
    )


@app.command()
def pdf(
    resume: Path = typer.Argument(help="Resume file (.yaml/.yml/.json)"),
    template: TemplateId = typer.Option(None, "--template", "-t", help="Visual template"),
    output: Path = typer.Option(None, "--output", "-o", help="Output PDF path"),
) -> None:
    """Render a resume file to PDF."""
    config = load_config()
    document = _load_or_exit(resume)
    template = template or TemplateId(config.export.default_template)
    output = output or resume.with_suffix(".pdf")
    _write_pdf(document, template, output)


@app.command()
def text(
    resume: Path = typer.Argument(help="Resume file (.yaml/.yml/.json)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
) -> None:
    """Print a resume file as plain text."""
    document = _load_or_exit(resume)
    content = to_plain_text(document)
    if output is None:
        typer.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"[green]Text saved: {output}[/green]")


@app.command()
def tailor(
    instruction: str = typer.Argument(help="What to tailor the resume for"),
    resume: Path = typer.Option(None, "--resume", help="Resume file to update"),
    apply: bool = typer.Option(False, "--apply", help="Write the result into the resume summary"),
) -> None:
    """Ask the AI to tailor resume text for a target role."""
    if apply and resume is None:
        console.print("[red]--apply needs --resume[/red]")
        raise typer.Exit(1)
    document = _load_or_exit(resume) if resume is not None else None

    config = load_config()
    llm = LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_attempts)
    text_tailor = TextTailor(
        llm,
        model=config.llm.model,
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )

    with console.status("Tailoring..."):
        try:
            result = asyncio.run(text_tailor.tailor(instruction))
        except TailoringError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    console.print(Panel(result, title="Tailored text"))

    if apply and document is not None:
        apply_event(document, PersonalFieldChanged("summary", result))
        save_resume(document, resume)
        console.print(f"[green]Summary updated: {resume}[/green]")


@app.command()
def templates() -> None:
    """List the available templates."""
    for style in list_template_styles():
        console.print(f"  [bold]{style.id.value}[/bold]: {style.name} - {style.description}")


@app.command()
def preview(
    resume: Path = typer.Argument(help="Resume file (.yaml/.yml/.json)"),
    template: TemplateId = typer.Option(TemplateId.MODERN, "--template", "-t", help="Visual template"),
) -> None:
    """Render a resume to PDF and open it in the browser."""
    document = _load_or_exit(resume)
    output = resume.with_suffix(".pdf")
    _write_pdf(document, template, output)
    webbrowser.open(output.resolve().as_uri())


if __name__ == "__main__":
    app()
