"""
Corpus - the set of documents under one content root.

Documents are independent; the corpus adds the cross-document views:
reading order, categories, previous/next navigation, and the link graph
built from soft cross-references in prose.

Ordering::

    order (ascending, missing last) → date (oldest first, missing last)
        → title (case-insensitive) → slug

Example::

    corpus = load_corpus("content")
    for category, documents in corpus.categories().items():
        print(category, [d.slug for d in documents])

    previous, following = corpus.neighbors(corpus.document("guides/react/hooks"))
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any

from guidebook.content.document import MARKDOWN_SUFFIXES, Document
from guidebook.content.links import LinkKind, LinkResolution, resolve_link
from guidebook.core.errors import DocumentNotFoundError, GuidebookError

UNCATEGORIZED = "uncategorized"

_ALL = object()


@dataclass(frozen=True)
class LoadFailure:
    """A file under the content root that could not be loaded."""

    path: Path
    error: GuidebookError

    @property
    def line(self) -> int | None:
        return self.error.context.line


def sort_key(document: Document) -> tuple[Any, ...]:
    """Reading-order key for a document."""
    return (
        document.order is None,
        document.order if document.order is not None else 0,
        document.date is None,
        document.date or dt.date.min,
        document.title.lower(),
        document.slug,
    )


def _group(document: Document) -> str:
    return document.category or UNCATEGORIZED


class Corpus:
    """Documents loaded from a content root, plus the files that failed."""

    def __init__(
        self,
        root: Path | str,
        documents: Iterable[Document] = (),
        failures: Iterable[LoadFailure] = (),
        *,
        site_prefix: str = "",
        static_roots: Iterable[Path] = (),
    ):
        self.root = Path(root).resolve()
        self.site_prefix = site_prefix
        self.static_roots: list[Path] = [Path(p).resolve() for p in static_roots]
        self.failures: list[LoadFailure] = list(failures)
        self._documents: list[Document] = sorted(documents, key=lambda d: (d.slug, d.relative_path))
        self._by_path: dict[Path, Document] = {d.path.resolve(): d for d in self._documents}
        self._by_slug: dict[str, Document] = {}
        self.slug_collisions: dict[str, list[Document]] = {}
        for document in self._documents:
            if document.slug in self._by_slug:
                group = self.slug_collisions.setdefault(document.slug, [self._by_slug[document.slug]])
                group.append(document)
            else:
                self._by_slug[document.slug] = document

    # ── Collection protocol ──────────────────────────────────────

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and self.get(slug) is not None

    def __repr__(self) -> str:
        return f"Corpus({str(self.root)!r}, documents={len(self)}, failures={len(self.failures)})"

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    # ── Lookup ───────────────────────────────────────────────────

    def get(self, slug: str) -> Document | None:
        """Find a document by slug; tolerates ``.md`` suffixes and slashes."""
        key = slug.strip().strip("/")
        for suffix in MARKDOWN_SUFFIXES:
            if key.endswith(suffix):
                key = key[: -len(suffix)]
        if key in self._by_slug:
            return self._by_slug[key]
        for index_name in ("index", "README"):
            if key == index_name:
                return self._by_slug.get("")
            if key.endswith("/" + index_name):
                return self._by_slug.get(key[: -len(index_name) - 1])
        return None

    def document(self, slug: str) -> Document:
        """Like :meth:`get` but raises when the slug is unknown.

        Raises:
            DocumentNotFoundError: No document has this slug.
        """
        document = self.get(slug)
        if document is None:
            raise DocumentNotFoundError(slug)
        return document

    def by_path(self, path: Path | str) -> Document | None:
        return self._by_path.get(Path(path).resolve())

    # ── Ordering and navigation ──────────────────────────────────

    def ordered(self, category: Any = _ALL) -> list[Document]:
        """Documents in reading order, optionally limited to one category.

        ``category=None`` and ``category="uncategorized"`` both select
        documents without a category (and any that name it explicitly).
        """
        documents: Iterable[Document] = self._documents
        if category is not _ALL:
            wanted = category or UNCATEGORIZED
            documents = [d for d in documents if _group(d) == wanted]
        return sorted(documents, key=sort_key)

    def categories(self) -> dict[str, list[Document]]:
        """Category name to documents in reading order.

        Categories are sorted by name; uncategorized documents come last.
        """
        names = sorted({_group(d) for d in self._documents} - {UNCATEGORIZED})
        grouped = {name: self.ordered(name) for name in names}
        uncategorized = self.ordered(UNCATEGORIZED)
        if uncategorized:
            grouped[UNCATEGORIZED] = uncategorized
        return grouped

    def neighbors(self, document: Document) -> tuple[Document | None, Document | None]:
        """Previous and next document within ``document``'s category."""
        siblings = self.ordered(_group(document))
        index = next((i for i, sibling in enumerate(siblings) if sibling is document), None)
        if index is None:
            return None, None
        previous = siblings[index - 1] if index > 0 else None
        following = siblings[index + 1] if index + 1 < len(siblings) else None
        return previous, following

    # ── Links ────────────────────────────────────────────────────

    def resolve(self, document: Document, target: str) -> LinkResolution:
        """Resolve a link target written in ``document``."""
        return resolve_link(
            document.path,
            target,
            self.root,
            site_prefix=self.site_prefix,
            static_roots=self.static_roots,
        )

    def link_target(self, document: Document, target: str) -> Document | None:
        """The corpus document a link lands on, if any."""
        resolution = self.resolve(document, target)
        if resolution.path is None:
            return None
        return self.by_path(resolution.path)

    @cached_property
    def link_graph(self) -> dict[str, set[str]]:
        """Relative path to the relative paths of other documents it links to.

        Files that share a slug keep separate entries.
        """
        graph: dict[str, set[str]] = {}
        for document in self._documents:
            targets: set[str] = set()
            for link in document.links:
                resolution = self.resolve(document, link.target)
                if resolution.kind is not LinkKind.INTERNAL or resolution.path is None:
                    continue
                target = self.by_path(resolution.path)
                if target is not None and target is not document:
                    targets.add(target.relative_path)
            graph[document.relative_path] = targets
        return graph

    def backlinks(self, document: Document) -> list[Document]:
        """Documents that link to ``document``."""
        return [
            other
            for other in self._documents
            if other is not document
            and document.relative_path in self.link_graph.get(other.relative_path, set())
        ]


__all__ = ["UNCATEGORIZED", "Corpus", "LoadFailure", "sort_key"]
