"""
CLI: ``guidebook lint`` and ``guidebook rules``.

Lint loads the configured corpus (or the directory given on the command
line) and reports every diagnostic, grouped by file.
"""

from __future__ import annotations

import dataclasses
import re
from pathlib import Path

import typer
from rich.markup import escape

from guidebook.cli.utils import (
    SEVERITY_STYLES,
    cli_errors,
    console,
    load_settings,
    open_corpus,
    output_items,
    print_json,
)
from guidebook.core.errors import ValidationError

CODE_RE = re.compile(r"^[A-Z]+\d+$")

# ── guidebook lint ───────────────────────────────────────────────────────


def lint_cmd(
    directory: Path | None = typer.Argument(
        None,
        help="Content directory (defaults to the configured content_dir).",
    ),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero on warnings too."),
    no_infos: bool = typer.Option(False, "--no-infos", help="Hide info-level diagnostics."),
    disable: list[str] | None = typer.Option(
        None,
        "--disable",
        "-d",
        help="Diagnostic code to suppress (repeatable), e.g. --disable I003.",
    ),
) -> None:
    """Lint a content directory for front-matter and link problems.

    Example:
        guidebook lint
        guidebook lint content/guides --json
        guidebook lint --strict --disable I003
    """
    from guidebook.lint.linter import LintOptions, lint_corpus

    extra_codes = {code.strip().upper() for code in disable or []}
    malformed = sorted(code for code in extra_codes if not CODE_RE.match(code))
    if malformed:
        with cli_errors():
            raise ValidationError(
                f"Not a diagnostic code: {', '.join(malformed)} (expected e.g. I003)",
                field="--disable",
                value=malformed,
            )

    options = LintOptions.from_settings(load_settings())
    options = dataclasses.replace(
        options,
        disabled_rules=options.disabled_rules | extra_codes,
        include_infos=options.include_infos and not no_infos,
    )

    corpus = open_corpus(directory)
    result = lint_corpus(corpus, options)

    if json_out:
        print_json(result.to_dict())
    else:
        for path, diagnostics in result.by_path().items():
            console.print(f"[bold]{escape(path or str(corpus.root))}[/bold]")
            for d in diagnostics:
                style = SEVERITY_STYLES[d.severity.value]
                line = f"{d.line:>4}" if d.line is not None else "    "
                console.print(f"  {line}  [{style}]{d.code}[/{style}]  {escape(d.message)}")
                if d.suggestion:
                    console.print(f"              [dim]{escape(d.suggestion)}[/dim]")
        style = "green" if result.passed else "red"
        console.print(f"[{style}]{escape(result.summary())}[/{style}]")

    if not result.passed:
        raise typer.Exit(code=1)
    if strict and result.warnings:
        raise typer.Exit(code=1)


# ── guidebook rules ──────────────────────────────────────────────────────


def rules_cmd(
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List diagnostic codes and the lint rules that are registered."""
    from guidebook.lint.linter import RULE_CATALOG, list_lint_rules

    codes = [
        {"code": info.code, "severity": info.severity.value, "description": info.description}
        for info in RULE_CATALOG
    ]
    if json_out:
        print_json({"codes": codes, "rules": list_lint_rules()})
        return

    output_items(codes, title="Diagnostic codes")
    console.print(f"\n[dim]{len(list_lint_rules())} rules registered[/dim]")
