"""Content layer: front matter, Markdown structure, documents and the corpus.

Architecture::

    frontmatter.py   split + parse the YAML block, typed FrontMatter model
    markdown.py      sections, fenced code samples and links of a body
    document.py      Document (one file) and slug rules
    links.py         link classification and on-disk resolution
    corpus.py        Corpus: ordering, categories, navigation, link graph
    loader.py        load_document / load_corpus
"""

from guidebook.content.corpus import UNCATEGORIZED, Corpus, LoadFailure
from guidebook.content.document import Document
from guidebook.content.frontmatter import (
    FieldProblem,
    FrontMatter,
    parse_front_matter,
    validate_front_matter,
)
from guidebook.content.links import LinkKind, LinkResolution, classify_link, resolve_link
from guidebook.content.loader import load_configured_corpus, load_corpus, load_document
from guidebook.content.markdown import CodeSample, Link, Section, scan_markdown

__all__ = [
    "UNCATEGORIZED",
    "CodeSample",
    "Corpus",
    "Document",
    "FieldProblem",
    "FrontMatter",
    "Link",
    "LinkKind",
    "LinkResolution",
    "LoadFailure",
    "Section",
    "classify_link",
    "load_configured_corpus",
    "load_corpus",
    "load_document",
    "parse_front_matter",
    "resolve_link",
    "scan_markdown",
    "validate_front_matter",
]
