"""
Document model.

A :class:`Document` is one Markdown file of the corpus: its location, the
raw front-matter mapping, the typed :class:`FrontMatter` view, the body, and
(lazily) the structural outline of the body.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path, PurePosixPath
from typing import Any

from guidebook.content.frontmatter import FieldProblem, FrontMatter
from guidebook.content.markdown import (
    CodeSample,
    Link,
    MarkdownOutline,
    Section,
    edip_stages,
    scan_markdown,
)

INDEX_NAMES = ("index", "README")
MARKDOWN_SUFFIXES = (".md", ".markdown")


def slug_for(path: Path, root: Path) -> str:
    """Slug of a document path relative to the content root.

    ``guides/react/hooks.md`` -> ``guides/react/hooks``;
    ``guides/react/index.md`` -> ``guides/react``; the root index -> ``""``.
    """
    relative = PurePosixPath(path.resolve().relative_to(root.resolve()).as_posix())
    if relative.suffix in MARKDOWN_SUFFIXES:
        relative = relative.with_suffix("")
    if relative.name in INDEX_NAMES:
        relative = relative.parent
    slug = relative.as_posix()
    return "" if slug == "." else slug


@dataclass
class Document:
    """A Markdown document with front matter.

    Attributes:
        path: Absolute path of the file.
        root: Content root the document was loaded from.
        metadata: Raw front-matter mapping; ``None`` if the file has no
            front-matter block.
        front_matter: Typed view of the keys that validated.
        problems: Keys whose values failed type validation.
        body: Markdown text after the front matter.
        body_line: File line where ``body`` starts.
        key_lines: File line of each top-level front-matter key.
    """

    path: Path
    root: Path
    metadata: dict[str, Any] | None
    front_matter: FrontMatter
    body: str
    body_line: int = 1
    problems: list[FieldProblem] = field(default_factory=list)
    key_lines: dict[str, int] = field(default_factory=dict)

    @cached_property
    def slug(self) -> str:
        return slug_for(self.path, self.root)

    @property
    def relative_path(self) -> str:
        return self.path.resolve().relative_to(self.root.resolve()).as_posix()

    @property
    def has_front_matter(self) -> bool:
        return self.metadata is not None

    # ── Front-matter shortcuts ───────────────────────────────────

    @property
    def title(self) -> str:
        return self.front_matter.title or self.slug or self.relative_path

    @property
    def category(self) -> str | None:
        return self.front_matter.category

    @property
    def layout(self) -> str | None:
        return self.front_matter.layout

    @property
    def order(self) -> int | None:
        return self.front_matter.order

    @property
    def date(self) -> dt.date | None:
        return self.front_matter.date

    # ── Body outline ─────────────────────────────────────────────

    @cached_property
    def outline(self) -> MarkdownOutline:
        return scan_markdown(self.body, first_line=self.body_line)

    @property
    def sections(self) -> list[Section]:
        return self.outline.sections

    @property
    def code_samples(self) -> list[CodeSample]:
        return self.outline.code_samples

    @property
    def links(self) -> list[Link]:
        return self.outline.links

    @property
    def anchors(self) -> set[str]:
        return self.outline.anchors

    @property
    def edip_stages(self) -> list[str]:
        return edip_stages(self.sections)

    def summary(self) -> dict[str, Any]:
        """Flat description used by CLI listings."""
        return {
            "slug": self.slug,
            "title": self.title,
            "category": self.category or "",
            "order": self.order,
            "date": self.date.isoformat() if self.date else "",
            "path": self.relative_path,
        }

    def __repr__(self) -> str:
        return f"Document({self.relative_path!r})"


__all__ = ["INDEX_NAMES", "MARKDOWN_SUFFIXES", "Document", "slug_for"]
