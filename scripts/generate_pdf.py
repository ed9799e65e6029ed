#!/usr/bin/env python3
"""
PDF Generation CLI

Renders markdown assignments to PDF with the cover page, direction-aware theme
and compression used by the web front end.

Commands:
    generate - Generate one PDF from a markdown file
    find     - List documents for course codes under the documents root
    batch    - Generate every document for course codes
    folder   - Generate every markdown file in one folder
    serve    - Run the JSON API and the font endpoint
    history  - Show recent generation events

Examples:\n

    generate_pdf.py generate md_storage/1423_1.md --name Ali --roll R1 --semester S1

    generate_pdf.py generate 1423_1.md --student student.yaml

    generate_pdf.py find 1423 1424

    generate_pdf.py batch 1423 1424 --student student.yaml --workers 2

    generate_pdf.py serve
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from folio.contexts.intake.batch import find_matches
from folio.contexts.intake.request import RenderRequest, StudentConfig
from folio.contexts.rendering.batch import BatchReport, generate_batch, generate_folder
from folio.contexts.rendering.discovery import BrowserDiscovery
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.contexts.rendering.pipeline import GenerationPipeline
from folio.contexts.rendering.settings import load_render_settings
from folio.serving.fonts import FONT_PORT, FontServer
from folio.utils.event_logging import (
    GENERATION_COMPLETED,
    GENERATION_FAILED,
    get_recent_events,
)
from folio.utils.timestamp import format_timestamp

load_dotenv()
DOCS_PATH = Path(os.getenv("FOLIO_DOCS_PATH", "md_storage"))
API_PORT = int(os.getenv("FOLIO_API_PORT", "3000"))

app = typer.Typer(
    help="Generate assignment PDFs from markdown",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


StudentFile = Annotated[
    Optional[Path],
    typer.Option("--student", "-s", help="YAML file with name/roll/semester (+ *_localized)"),
]
NameOpt = Annotated[Optional[str], typer.Option("--name", help="Student name")]
RollOpt = Annotated[Optional[str], typer.Option("--roll", help="Registration number")]
SemesterOpt = Annotated[Optional[str], typer.Option("--semester", help="Semester")]
OutputOpt = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", help="Output root (default: FOLIO_OUTPUT_PATH)"),
]
RootOpt = Annotated[
    Path, typer.Option("--root", "-r", help="Documents root (default: FOLIO_DOCS_PATH)")
]
NoCompressOpt = Annotated[
    bool, typer.Option("--no-compress", help="Skip Ghostscript compression")
]


def _load_student(
    student_file: Optional[Path],
    name: Optional[str],
    roll: Optional[str],
    semester: Optional[str],
) -> StudentConfig:
    data = {}
    if student_file is not None:
        data = OmegaConf.to_container(OmegaConf.load(student_file), resolve=True) or {}
    overrides = {"name": name, "roll": roll, "semester": semester}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return StudentConfig.from_dict(data)


def _build_pipeline(output: Optional[Path], no_compress: bool) -> GenerationPipeline:
    overrides = {"compression": {"enabled": False}} if no_compress else None
    settings = load_render_settings(overrides=overrides)
    chromium = BrowserDiscovery.from_settings(settings.browser).resolve()
    setup_rendering_logger(chromium_path=chromium)
    return GenerationPipeline(settings=settings, output_root=output)


def _report(report: BatchReport) -> None:
    for item in report.items:
        if item.result.success:
            typer.secho(f"  ✓ {item.relative_path} -> {item.result.path}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"  ✗ {item.relative_path}: {item.result.error}", fg=typer.colors.RED)
    typer.echo(f"\n{report.succeeded}/{len(report.items)} succeeded\n")


@app.command("generate")
def generate_command(
    markdown_file: Annotated[Path, typer.Argument(help="Markdown file to render")],
    student_file: StudentFile = None,
    name: NameOpt = None,
    roll: RollOpt = None,
    semester: SemesterOpt = None,
    output: OutputOpt = None,
    no_compress: NoCompressOpt = False,
    no_font_server: Annotated[
        bool, typer.Option("--no-font-server", help="Do not start the font endpoint")
    ] = False,
):
    """
    Generate one PDF.

    The filename decides course code and assignment number (e.g. 1423_2.md).
    """
    if not markdown_file.is_file():
        typer.secho(f"Error: file not found: {markdown_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    config = _load_student(student_file, name, roll, semester)
    pipeline = _build_pipeline(output, no_compress)

    font_server = None if no_font_server else FontServer(port=FONT_PORT)
    if font_server:
        font_server.start()

    typer.secho(f"\nGenerating: {markdown_file.name}", fg=typer.colors.BLUE, bold=True)
    try:
        result = pipeline.generate(
            RenderRequest(
                content=markdown_file.read_text(encoding="utf-8"),
                config=config,
                filename=markdown_file.name,
            ),
            source="cli",
        )
    finally:
        if font_server:
            font_server.stop()

    if result.success:
        typer.secho("✓ PDF generated", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {result.path}")
        typer.echo(f"  Direction: {result.direction.value}")
        typer.echo(f"  Compressed: {result.compressed}")
        if result.page_count is not None:
            typer.echo(f"  Pages: {result.page_count}")
    else:
        typer.secho(f"✗ Generation failed: {result.error}", fg=typer.colors.RED, bold=True)
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("find")
def find_command(
    codes: Annotated[List[str], typer.Argument(help="Course codes (e.g. 1423 1424)")],
    root: RootOpt = DOCS_PATH,
):
    """List documents named <code>_<n>.md anywhere under the documents root."""
    matches = find_matches(root, codes, extension="md")
    if not matches:
        typer.secho("No matching documents.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=0)
    for match in matches:
        typer.echo(f"  [{match.code}] {match.relative_path}")
    typer.echo(f"\n{len(matches)} documents")


@app.command("batch")
def batch_command(
    codes: Annotated[List[str], typer.Argument(help="Course codes (e.g. 1423 1424)")],
    root: RootOpt = DOCS_PATH,
    student_file: StudentFile = None,
    name: NameOpt = None,
    roll: RollOpt = None,
    semester: SemesterOpt = None,
    output: OutputOpt = None,
    no_compress: NoCompressOpt = False,
    workers: Annotated[
        int, typer.Option("--workers", "-w", help="Documents rendered concurrently", min=1, max=8)
    ] = 1,
):
    """Generate every document matching the course codes."""
    config = _load_student(student_file, name, roll, semester)
    pipeline = _build_pipeline(output, no_compress)

    font_server = FontServer(port=FONT_PORT)
    font_server.start()
    try:
        report = generate_batch(root, codes, config, pipeline=pipeline, workers=workers)
    finally:
        font_server.stop()

    _report(report)
    raise typer.Exit(code=0 if report.failed == 0 else 1)


@app.command("folder")
def folder_command(
    relative_dir: Annotated[str, typer.Argument(help="Folder relative to the documents root")],
    root: RootOpt = DOCS_PATH,
    student_file: StudentFile = None,
    name: NameOpt = None,
    roll: RollOpt = None,
    semester: SemesterOpt = None,
    output: OutputOpt = None,
    no_compress: NoCompressOpt = False,
):
    """Generate every markdown file directly inside a folder."""
    config = _load_student(student_file, name, roll, semester)
    pipeline = _build_pipeline(output, no_compress)

    font_server = FontServer(port=FONT_PORT)
    font_server.start()
    try:
        report = generate_folder(root, relative_dir, config, pipeline=pipeline)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    finally:
        font_server.stop()

    if not report.items:
        typer.secho("No markdown files in that folder.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=0)
    _report(report)
    raise typer.Exit(code=0 if report.failed == 0 else 1)


@app.command("serve")
def serve_command(
    host: Annotated[str, typer.Option("--host", help="API bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="API port")] = API_PORT,
    font_port: Annotated[int, typer.Option("--font-port", help="Font endpoint port")] = FONT_PORT,
):
    """Run the JSON API, with the font endpoint in the background."""
    import uvicorn

    from folio.contexts.templating.themes import ThemeStore
    from folio.serving.api import app as api_app
    from folio.serving.logger import setup_serving_logger

    setup_serving_logger(api_port=port, font_port=font_port)
    DOCS_PATH.mkdir(parents=True, exist_ok=True)
    ThemeStore().ensure_initialized()

    font_server = FontServer(port=font_port)
    font_server.start()
    try:
        uvicorn.run(api_app, host=host, port=port)
    finally:
        font_server.stop()


@app.command("history")
def history_command(
    n: Annotated[int, typer.Option("--last", "-n", help="Number of events")] = 10,
    document: Annotated[Optional[str], typer.Option("--document", "-d", help="Filter by filename")] = None,
    source: Annotated[Optional[str], typer.Option("--source", help="api, cli or batch")] = None,
    failed: Annotated[bool, typer.Option("--failed", help="Only failed generations")] = False,
):
    """Show recent generation events from the pipeline event log."""
    event_type = GENERATION_FAILED if failed else None
    events = get_recent_events(n=n, document=document, event_type=event_type, source=source)
    if not events:
        typer.secho("No events.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=0)

    colors = {
        GENERATION_COMPLETED: typer.colors.GREEN,
        GENERATION_FAILED: typer.colors.RED,
    }
    for event in events:
        line = (
            f"{format_timestamp(event.get('timestamp', ''))}  "
            f"{event.get('event_type', '?'):<22} {event.get('document') or '(unnamed)'}"
        )
        detail = event.get("path") or event.get("error")
        if detail:
            line += f"  {detail}"
        typer.secho(line, fg=colors.get(event.get("event_type")))


if __name__ == "__main__":
    app()
