"""
CLI: ``guidebook docs`` — browse the corpus.

Read-only views over the loaded documents: listings in reading order,
a single document's outline, its links with resolution status, and the
category navigation tree.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.tree import Tree

from guidebook.cli.utils import cli_errors, console, open_corpus, output_items, print_dict, print_json
from guidebook.content.corpus import UNCATEGORIZED, Corpus
from guidebook.content.document import Document

app = typer.Typer(no_args_is_help=True)

DIR_OPTION = typer.Option(None, "--dir", help="Content directory (defaults to content_dir).")


def _find(corpus: Corpus, slug: str) -> Document:
    with cli_errors():
        return corpus.document(slug)


# ── guidebook docs list ──────────────────────────────────────────────────


@app.command("list")
def list_docs(
    directory: Path | None = typer.Argument(None, help="Content directory."),
    category: str | None = typer.Option(None, "--category", "-c", help="Only this category."),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List documents in reading order."""
    corpus = open_corpus(directory)
    documents = corpus.ordered(category) if category else corpus.ordered()
    output_items(
        [d.summary() for d in documents],
        as_json=json_out,
        title=f"{len(documents)} documents",
        empty="No documents.",
    )


# ── guidebook docs show ──────────────────────────────────────────────────


def _detail(corpus: Corpus, document: Document) -> dict[str, Any]:
    previous, following = corpus.neighbors(document)
    fm = document.front_matter
    return {
        **document.summary(),
        "subTitle": fm.sub_title or "",
        "excerpt": fm.excerpt or "",
        "featureImage": fm.feature_image or "",
        "layout": fm.layout or "",
        "sections": [
            {"level": s.level, "title": s.title, "anchor": s.anchor, "line": s.line}
            for s in document.sections
        ],
        "code_samples": len(document.code_samples),
        "languages": document.outline.languages,
        "links": len(document.links),
        "edip_stages": document.edip_stages,
        "previous": previous.slug if previous else None,
        "next": following.slug if following else None,
        "backlinks": [d.slug for d in corpus.backlinks(document)],
    }


@app.command("show")
def show_doc(
    slug: str = typer.Argument(..., help="Document slug, e.g. guides/react/hooks."),
    directory: Path | None = DIR_OPTION,
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """Show a document's metadata, outline and neighbors."""
    corpus = open_corpus(directory)
    document = _find(corpus, slug)
    detail = _detail(corpus, document)

    if json_out:
        print_json(detail)
        return

    sections = detail.pop("sections")
    print_dict(
        {
            **detail,
            "languages": ", ".join(detail["languages"]) or "-",
            "edip_stages": ", ".join(detail["edip_stages"]) or "-",
            "backlinks": ", ".join(detail["backlinks"]) or "-",
        },
        title=document.title,
    )
    if sections:
        console.print("\n[bold]Sections:[/bold]")
        for s in sections:
            indent = "  " * s["level"]
            console.print(f"{indent}{escape(s['title'])} [dim]#{escape(s['anchor'])}[/dim]")


# ── guidebook docs links ─────────────────────────────────────────────────


@app.command("links")
def show_links(
    slug: str = typer.Argument(..., help="Document slug."),
    directory: Path | None = DIR_OPTION,
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List every link in a document with its resolution status."""
    corpus = open_corpus(directory)
    document = _find(corpus, slug)

    rows = []
    for link in document.links:
        resolution = corpus.resolve(document, link.target)
        target = corpus.by_path(resolution.path) if resolution.path else None
        rows.append(
            {
                "line": link.line,
                "target": link.target,
                "style": link.style.value,
                "kind": resolution.kind.value,
                "status": resolution.status,
                "resolves_to": target.slug if target else (str(resolution.path or "")),
                "reason": resolution.reason or "",
            }
        )
    output_items(rows, as_json=json_out, title=document.relative_path, empty="No links.")


# ── guidebook docs nav ───────────────────────────────────────────────────


@app.command("nav")
def show_nav(
    directory: Path | None = typer.Argument(None, help="Content directory."),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """Show the category navigation tree in reading order."""
    corpus = open_corpus(directory)
    categories = corpus.categories()

    if json_out:
        print_json(
            {name: [d.slug for d in documents] for name, documents in categories.items()}
        )
        return

    tree = Tree(f"[bold]{escape(str(corpus.root))}[/bold]")
    for name, documents in categories.items():
        branch = tree.add(f"[cyan]{escape(name)}[/cyan]" if name != UNCATEGORIZED else "[dim]uncategorized[/dim]")
        for d in documents:
            order = f"{d.order}. " if d.order is not None else ""
            branch.add(f"{order}{escape(d.title)} [dim]({escape(d.slug or '/')})[/dim]")
    console.print(tree)
