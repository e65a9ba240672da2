"""
CLI: ``guidebook config`` — configuration inspection.
"""

from __future__ import annotations

import json

import typer
from rich.table import Table

from guidebook.cli.utils import console, err_console, load_settings, print_json

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show the effective configuration."""
    if format not in ("table", "json", "env"):
        err_console.print(f"[red]Unknown format:[/red] {format}. Use: table, json, env")
        raise typer.Exit(1)

    settings = load_settings()

    if format == "json":
        print_json(settings.model_dump(mode="json"))
        return

    values = settings.model_dump(mode="json")

    if format == "env":
        for key, value in sorted(values.items()):
            rendered = json.dumps(value) if isinstance(value, list) else value
            if isinstance(value, bool):
                rendered = "true" if value else "false"
            typer.echo(f"GUIDEBOOK_{key.upper()}={rendered}")
        return

    console.print(f"[bold]Project Root:[/bold] {settings.project_root}")
    console.print(f"[bold]Config File:[/bold] {settings.config_file or '(none)'}")
    console.print(f"[bold]Content Root:[/bold] {settings.content_root}")

    table = Table()
    table.add_column("Setting")
    table.add_column("Value", overflow="fold")
    for key, value in values.items():
        table.add_row(key, ", ".join(map(str, value)) if isinstance(value, list) else str(value))
    console.print(table)
