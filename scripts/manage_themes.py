#!/usr/bin/env python3
"""
Command-line interface for managing document themes.

Themes are named CSS stylesheets stored per language (english / urdu) in the
theme file (FOLIO_THEME_FILE, default themes.json). One theme per language is
active; "Default" always exists and cannot be deleted.

Commands:
    list     - List themes for a language (or both)
    show     - Print a theme's CSS
    save     - Create or replace a theme from a CSS file
    activate - Make a theme active
    delete   - Delete a theme
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from folio.contexts.templating.themes import ENGLISH, URDU, ThemeStore, normalize_language
from folio.exceptions import ProtectedResourceError, ThemeNotFoundError

app = typer.Typer(
    add_completion=False,
    help="Manage document themes (themes.json)",
    invoke_without_command=True,
)

LangArg = Annotated[str, typer.Argument(help="Theme language: english or urdu")]
NameArg = Annotated[str, typer.Argument(help="Theme name")]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _lang_or_exit(lang: str) -> str:
    try:
        return normalize_language(lang)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("list")
def list_command(
    lang: Annotated[Optional[str], typer.Argument(help="english or urdu (default: both)")] = None,
):
    """List stored themes, marking the active one."""
    themes = ThemeStore().load()
    languages = [_lang_or_exit(lang)] if lang else [ENGLISH, URDU]
    for language in languages:
        typer.secho(f"\n{language}", fg=typer.colors.BLUE, bold=True)
        active = themes.active(language)
        for name in themes.themes(language):
            marker = " (active)" if name == active else ""
            typer.echo(f"  {name}{marker}")
    typer.echo("")


@app.command("show")
def show_command(lang: LangArg, name: NameArg):
    """Print a theme's CSS."""
    css = ThemeStore().load().themes(_lang_or_exit(lang)).get(name)
    if css is None:
        typer.secho(f"Error: no theme named '{name}'\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(css)


@app.command("save")
def save_command(
    lang: LangArg,
    name: NameArg,
    css_file: Annotated[Path, typer.Argument(help="CSS file with the theme")],
    activate: Annotated[bool, typer.Option("--activate", "-a", help="Also make it active")] = False,
):
    """Create or replace a theme."""
    language = _lang_or_exit(lang)
    store = ThemeStore()
    store.save(language, name, css_file.read_text(encoding="utf-8"))
    if activate:
        store.activate(language, name)
    typer.secho(f"✓ Saved {language} theme '{name}'", fg=typer.colors.GREEN)


@app.command("activate")
def activate_command(lang: LangArg, name: NameArg):
    """Make a theme active for its language."""
    try:
        ThemeStore().activate(_lang_or_exit(lang), name)
    except ThemeNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Activated '{name}'", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(lang: LangArg, name: NameArg):
    """Delete a theme (Default is protected)."""
    try:
        ThemeStore().delete(_lang_or_exit(lang), name)
    except ProtectedResourceError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Deleted '{name}'", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
