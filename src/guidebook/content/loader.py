"""
Document and corpus loading.

Reads Markdown files from disk, splits and parses their front matter, and
assembles a :class:`Corpus`.

File walking is deterministic (sorted paths) so that diagnostics and
listings come out in a stable order. Directories whose name appears in
``exclude_dirs`` are never descended into.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from guidebook.content.corpus import Corpus, LoadFailure
from guidebook.content.document import Document
from guidebook.content.frontmatter import (
    front_matter_key_lines,
    parse_front_matter,
    validate_front_matter,
)
from guidebook.core.errors import (
    ContentError,
    CorpusNotFoundError,
    DocumentNotFoundError,
    FrontMatterError,
    GuidebookError,
    ParseError,
)
from guidebook.core.settings import GuidebookSettings

logger = structlog.get_logger()

DEFAULT_PATTERN = "**/*.md"
DEFAULT_EXCLUDE_DIRS = (".git", "node_modules", "_site", ".venv", "__pycache__")


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)


def load_document(path: Path | str, root: Path | str | None = None) -> Document:
    """
    Load a single Markdown document.

    Args:
        path: Path to the Markdown file
        root: Content root (defaults to the file's directory)

    Returns:
        Parsed Document

    Raises:
        DocumentNotFoundError: If the file doesn't exist
        FrontMatterError: If the front matter is malformed
        ParseError: If the file is not valid UTF-8
        ContentError: If the file cannot be read
    """
    path = Path(path)
    root = Path(root) if root is not None else path.parent
    display = _display_path(path, root)

    if not path.is_file():
        raise DocumentNotFoundError(str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError("File is not valid UTF-8", cause=exc).with_context(path=display) from exc
    except OSError as exc:
        raise ContentError(f"Cannot read file: {exc.strerror or exc}", cause=exc).with_context(
            path=display
        ) from exc

    try:
        metadata, body, body_line = parse_front_matter(text)
    except FrontMatterError as exc:
        exc.with_context(path=display)
        raise

    front_matter, problems = validate_front_matter(metadata or {})

    document = Document(
        path=path.resolve(),
        root=root.resolve(),
        metadata=metadata,
        front_matter=front_matter,
        body=body,
        body_line=body_line,
        problems=problems,
        key_lines=front_matter_key_lines(text),
    )

    logger.debug(
        "loader.document_loaded",
        path=display,
        has_front_matter=document.has_front_matter,
        problems=len(problems),
    )
    return document


def iter_document_paths(
    directory: Path,
    pattern: str = DEFAULT_PATTERN,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> list[Path]:
    """Sorted document paths under ``directory`` matching ``pattern``."""
    excluded = set(exclude_dirs)
    paths: list[Path] = []
    for path in directory.glob(pattern):
        if not path.is_file():
            continue
        relative_parts = path.relative_to(directory).parts[:-1]
        if excluded.intersection(relative_parts):
            continue
        paths.append(path)
    return sorted(paths)


def load_corpus(
    directory: Path | str,
    *,
    pattern: str = DEFAULT_PATTERN,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
    ignore_errors: bool = True,
    site_prefix: str = "",
    static_roots: Iterable[Path | str] = (),
) -> Corpus:
    """
    Load every document under a content directory.

    Args:
        directory: Content root to scan
        pattern: Glob pattern for document files
        exclude_dirs: Directory names to skip
        ignore_errors: If True, record failing files as LoadFailure instead of raising
        site_prefix: URL prefix used when resolving ``/``-rooted links
        static_roots: Directories holding site assets outside the content root

    Returns:
        Corpus of loaded documents and load failures

    Raises:
        CorpusNotFoundError: If ``directory`` is not a directory
        GuidebookError: The first load error, when ``ignore_errors`` is False
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise CorpusNotFoundError(str(directory))

    root = directory.resolve()
    logger.debug("loader.scan", directory=str(root), pattern=pattern)

    documents: list[Document] = []
    failures: list[LoadFailure] = []

    for path in iter_document_paths(root, pattern, exclude_dirs):
        try:
            documents.append(load_document(path, root))
        except GuidebookError as exc:
            if not ignore_errors:
                raise
            logger.warning("loader.file_error", path=_display_path(path, root), error=exc.message)
            failures.append(LoadFailure(path=path, error=exc))

    logger.info(
        "loader.corpus_loaded",
        directory=str(root),
        documents=len(documents),
        failures=len(failures),
    )

    return Corpus(
        root,
        documents,
        failures,
        site_prefix=site_prefix,
        static_roots=[Path(p) for p in static_roots],
    )


def load_configured_corpus(
    settings: GuidebookSettings,
    directory: Path | str | None = None,
) -> Corpus:
    """Load the corpus described by ``settings``.

    ``directory`` overrides ``settings.content_root`` (e.g. a CLI argument).
    """
    return load_corpus(
        Path(directory) if directory is not None else settings.content_root,
        pattern=settings.pattern,
        exclude_dirs=settings.exclude_dirs,
        site_prefix=settings.site_prefix,
        static_roots=settings.static_roots,
    )


__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "DEFAULT_PATTERN",
    "iter_document_paths",
    "load_configured_corpus",
    "load_corpus",
    "load_document",
]
