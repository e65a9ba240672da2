"""
Root Typer application for the guidebook CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from guidebook.cli.utils import load_settings
from guidebook.core.logging import LOG_LEVELS, configure_logging

app = Typer(
    name="guidebook",
    help="guidebook — front matter and link checks for a Markdown guide corpus.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("guidebook")
        except PackageNotFoundError:
            from guidebook import __version__ as v
        typer.echo(f"guidebook {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help=f"Log level: {', '.join(LOG_LEVELS)} (defaults to the log_level setting).",
    ),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines on stderr."),
) -> None:
    """guidebook CLI — lint and browse a Markdown guide corpus."""
    settings = load_settings()
    try:
        configure_logging(
            level=log_level or settings.log_level,
            json_format=True if log_json else settings.json_logs,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


# ── Sub-command registration ─────────────────────────────────────────────

from guidebook.cli.config import app as config_app  # noqa: E402
from guidebook.cli.docs import app as docs_app  # noqa: E402
from guidebook.cli.lint import lint_cmd, rules_cmd  # noqa: E402

app.command("lint")(lint_cmd)
app.command("rules")(rules_cmd)
app.add_typer(docs_app, name="docs", help="Browse documents, links and navigation.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
