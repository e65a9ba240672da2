"""Content Linter — static checks for a Markdown corpus.

Catches authoring mistakes *before* the corpus is handed to a site
generator: missing or mistyped front matter, broken cross-references,
unclosed code fences, guides that skip an EDIP stage. Extensible via a
rule registry so a corpus can add house-style checks.

Architecture::

    lint_corpus(corpus, options)
    │
    ├── document rules (run once per document)
    │   ├── _check_front_matter_present     E001
    │   ├── _check_required_keys            E003
    │   ├── _check_field_types              E004
    │   ├── _check_links                    E005, W002
    │   ├── _check_unknown_keys             W001
    │   ├── _check_empty_body               W005
    │   ├── _check_feature_image            W006
    │   ├── _check_unclosed_fences          W007
    │   ├── _check_code_languages           I001
    │   └── _check_edip_structure           I002
    │
    ├── corpus rules (run once)
    │   ├── _check_load_failures            E002
    │   ├── _check_duplicate_order          W003
    │   ├── _check_duplicate_titles         W004
    │   ├── _check_slug_collisions          W008
    │   └── _check_orphans                  I003
    │
    └── (custom rules via register_lint_rule)
    │
    ▼
    LintResult
    ├── diagnostics: list[LintDiagnostic]
    ├── passed → bool (no errors)
    ├── errors / warnings / infos
    └── summary() → str

Example::

    from guidebook.content import load_corpus
    from guidebook.lint import lint_corpus

    result = lint_corpus(load_corpus("content"))
    if not result.passed:
        for d in result.errors:
            print(d)

See Also:
    guidebook.cli.lint — ``guidebook lint`` command
"""

from __future__ import annotations

import difflib
from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

from guidebook.content.corpus import Corpus
from guidebook.content.document import Document
from guidebook.content.links import LinkKind, classify_link
from guidebook.content.loader import load_corpus
from guidebook.content.markdown import EDIP_STAGES
from guidebook.core.errors import ValidationError
from guidebook.core.logging import LogContext
from guidebook.core.settings import (
    DEFAULT_OPTIONAL_KEYS,
    DEFAULT_REQUIRED_KEYS,
    GuidebookSettings,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Diagnostic model
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Severity level for a lint diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class LintDiagnostic:
    """A single lint finding.

    Attributes:
        code: Short identifier (e.g. ``"E003"``).
        severity: ``error``, ``warning``, or ``info``.
        message: Human-readable description.
        path: Document path relative to the content root (if applicable).
        line: 1-based line in ``path`` (if known).
        suggestion: Recommended fix (optional).
    """

    code: str
    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None
    suggestion: str | None = None

    @property
    def location(self) -> str:
        if self.path is None:
            return ""
        return f"{self.path}:{self.line}" if self.line is not None else self.path

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.value.upper()}"
        location = f" {self.location}" if self.location else ""
        hint = f" ({self.suggestion})" if self.suggestion else ""
        return f"{prefix}{location}: {self.message}{hint}"


@dataclass
class LintResult:
    """Aggregated result of linting a corpus.

    Attributes:
        root: Content root that was linted.
        document_count: Number of documents checked.
        diagnostics: All findings from all rules.
    """

    root: str
    document_count: int = 0
    diagnostics: list[LintDiagnostic] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if there are no error-level diagnostics."""
        return not any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def errors(self) -> list[LintDiagnostic]:
        """Error-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintDiagnostic]:
        """Warning-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintDiagnostic]:
        """Info-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.INFO]

    def codes(self) -> list[str]:
        """Codes of all diagnostics, in report order."""
        return [d.code for d in self.diagnostics]

    def by_path(self) -> dict[str, list[LintDiagnostic]]:
        """Diagnostics grouped by document path (corpus-wide ones under ``""``)."""
        grouped: dict[str, list[LintDiagnostic]] = defaultdict(list)
        for d in self.diagnostics:
            grouped[d.path or ""].append(d)
        return dict(grouped)

    def summary(self) -> str:
        """One-line summary of the lint result."""
        counts = {
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "infos": len(self.infos),
        }
        status = "PASS" if self.passed else "FAIL"
        parts = [f"{status}: {self.document_count} documents in {self.root}"]
        for label, count in counts.items():
            if count:
                parts.append(f"{count} {label}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "passed": self.passed,
            "document_count": self.document_count,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "info_count": len(self.infos),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def __str__(self) -> str:
        lines = [self.summary()]
        for d in self.diagnostics:
            lines.append(f"  {d}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LintOptions:
    """Knobs that change what the built-in rules check."""

    required_keys: tuple[str, ...] = tuple(DEFAULT_REQUIRED_KEYS)
    optional_keys: tuple[str, ...] = tuple(DEFAULT_OPTIONAL_KEYS)
    edip_exempt_layouts: tuple[str, ...] = ("post", "newsletter")
    check_anchors: bool = True
    check_feature_images: bool = True
    disabled_rules: frozenset[str] = frozenset()
    include_infos: bool = True

    @property
    def known_keys(self) -> tuple[str, ...]:
        """Configured keys plus the keys the front-matter model understands."""
        keys = (*self.required_keys, *self.optional_keys, *DEFAULT_REQUIRED_KEYS, *DEFAULT_OPTIONAL_KEYS)
        return tuple(dict.fromkeys(keys))

    @classmethod
    def from_settings(cls, settings: GuidebookSettings) -> LintOptions:
        return cls(
            required_keys=tuple(settings.required_keys),
            optional_keys=tuple(settings.optional_keys),
            edip_exempt_layouts=tuple(settings.edip_exempt_layouts),
            check_anchors=settings.check_anchors,
            check_feature_images=settings.check_feature_images,
            disabled_rules=frozenset(settings.disabled_rules),
            include_infos=settings.include_infos,
        )


@dataclass(frozen=True)
class RuleContext:
    """What a rule sees besides the document under inspection."""

    corpus: Corpus
    options: LintOptions


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

# Document rules take (document, context); corpus rules take (context)
DocumentRule = Callable[[Document, RuleContext], list[LintDiagnostic]]
CorpusRule = Callable[[RuleContext], list[LintDiagnostic]]

DOCUMENT_SCOPE = "document"
CORPUS_SCOPE = "corpus"

_RULES: list[tuple[str, str, Callable[..., list[LintDiagnostic]]]] = []


@dataclass(frozen=True)
class RuleInfo:
    """Catalogue entry describing one built-in diagnostic code."""

    code: str
    severity: Severity
    description: str


RULE_CATALOG: tuple[RuleInfo, ...] = (
    RuleInfo("E001", Severity.ERROR, "Document has no front-matter block."),
    RuleInfo("E002", Severity.ERROR, "Document could not be loaded (malformed front matter, unreadable file)."),
    RuleInfo("E003", Severity.ERROR, "Required front-matter key is missing or empty."),
    RuleInfo("E004", Severity.ERROR, "Front-matter key has an invalid value."),
    RuleInfo("E005", Severity.ERROR, "Internal link does not resolve."),
    RuleInfo("W001", Severity.WARNING, "Unknown front-matter key."),
    RuleInfo("W002", Severity.WARNING, "Link fragment does not match a heading anchor."),
    RuleInfo("W003", Severity.WARNING, "Two documents in the same category share an order value."),
    RuleInfo("W004", Severity.WARNING, "Two documents share a title."),
    RuleInfo("W005", Severity.WARNING, "Document body is empty."),
    RuleInfo("W006", Severity.WARNING, "Local featureImage does not exist."),
    RuleInfo("W007", Severity.WARNING, "Fenced code block is never closed."),
    RuleInfo("W008", Severity.WARNING, "Several files map to the same slug."),
    RuleInfo("I001", Severity.INFO, "Fenced code sample has no language tag."),
    RuleInfo("I002", Severity.INFO, "Guide is missing one or more EDIP stages."),
    RuleInfo("I003", Severity.INFO, "Document is not linked from any other document."),
    RuleInfo("X001", Severity.WARNING, "A lint rule raised an exception."),
)


def register_lint_rule(
    name: str,
    rule: Callable[..., list[LintDiagnostic]],
    *,
    scope: str = DOCUMENT_SCOPE,
) -> None:
    """Register a custom lint rule.

    Parameters
    ----------
    name
        Human-readable rule name (e.g. ``"check_house_style"``).
    rule
        For ``scope="document"``: callable taking ``(Document, RuleContext)``.
        For ``scope="corpus"``: callable taking ``(RuleContext)``.
        Either returns a list of ``LintDiagnostic`` objects.
    scope
        ``"document"`` or ``"corpus"``.
    """
    if scope not in (DOCUMENT_SCOPE, CORPUS_SCOPE):
        raise ValidationError(
            f"Unknown rule scope: {scope!r} (use 'document' or 'corpus')",
            field="scope",
            value=scope,
        )
    _RULES.append((name, scope, rule))
    logger.debug("lint.rule_registered", rule=name, scope=scope)


def list_lint_rules() -> list[str]:
    """Return names of all registered lint rules (built-in + custom)."""
    return (
        [name for name, _ in _BUILT_IN_DOCUMENT_RULES]
        + [name for name, _ in _BUILT_IN_CORPUS_RULES]
        + [name for name, _, _ in _RULES]
    )


def clear_custom_rules() -> None:
    """Remove all custom lint rules (built-in rules are preserved)."""
    _RULES.clear()


# ---------------------------------------------------------------------------
# Built-in document rules
# ---------------------------------------------------------------------------

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _key_line(document: Document, key: str) -> int:
    return document.key_lines.get(key, 1)


def _check_front_matter_present(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """E001: Document has no front-matter block."""
    if document.has_front_matter:
        return []
    return [
        LintDiagnostic(
            code="E001",
            severity=Severity.ERROR,
            message="Document has no front matter.",
            path=document.relative_path,
            line=1,
            suggestion="Start the file with a '---' delimited YAML block.",
        )
    ]


def _check_required_keys(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """E003: Required front-matter key is missing or empty."""
    if document.metadata is None:
        return []
    diagnostics: list[LintDiagnostic] = []
    for key in ctx.options.required_keys:
        if key not in document.metadata:
            diagnostics.append(
                LintDiagnostic(
                    code="E003",
                    severity=Severity.ERROR,
                    message=f"Required front-matter key '{key}' is missing.",
                    path=document.relative_path,
                    line=1,
                    suggestion=f"Add '{key}: ...' to the front matter.",
                )
            )
        elif _is_blank(document.metadata[key]):
            diagnostics.append(
                LintDiagnostic(
                    code="E003",
                    severity=Severity.ERROR,
                    message=f"Required front-matter key '{key}' is empty.",
                    path=document.relative_path,
                    line=_key_line(document, key),
                )
            )
    return diagnostics


def _check_field_types(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """E004: Front-matter key has an invalid value."""
    if document.metadata is None:
        return []
    diagnostics: list[LintDiagnostic] = []
    for problem in document.problems:
        # blank required keys are already E003
        if problem.key in ctx.options.required_keys and _is_blank(problem.value):
            continue
        diagnostics.append(
            LintDiagnostic(
                code="E004",
                severity=Severity.ERROR,
                message=f"Invalid value for '{problem.key}': {problem.message}.",
                path=document.relative_path,
                line=_key_line(document, problem.key),
            )
        )
    return diagnostics


def _check_unknown_keys(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """W001: Unknown front-matter key (likely a typo)."""
    if not document.metadata:
        return []
    known = ctx.options.known_keys
    diagnostics: list[LintDiagnostic] = []
    for key in document.metadata:
        if key in known:
            continue
        close = difflib.get_close_matches(key, known, n=1, cutoff=0.6)
        diagnostics.append(
            LintDiagnostic(
                code="W001",
                severity=Severity.WARNING,
                message=f"Unknown front-matter key '{key}'.",
                path=document.relative_path,
                line=_key_line(document, key),
                suggestion=f"Did you mean '{close[0]}'?" if close else None,
            )
        )
    return diagnostics


def _check_links(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """E005: Broken internal link. W002: Fragment matches no heading."""
    diagnostics: list[LintDiagnostic] = []
    for link in document.links:
        resolution = ctx.corpus.resolve(document, link.target)
        if not resolution.checked:
            continue
        if resolution.path is None:
            diagnostics.append(
                LintDiagnostic(
                    code="E005",
                    severity=Severity.ERROR,
                    message=f"Broken link '{link.target}': {resolution.reason}.",
                    path=document.relative_path,
                    line=link.line,
                )
            )
            continue
        if not ctx.options.check_anchors or not resolution.fragment:
            continue
        target = ctx.corpus.by_path(resolution.path)
        if target is None or resolution.fragment in target.anchors:
            continue
        close = difflib.get_close_matches(resolution.fragment, sorted(target.anchors), n=1)
        diagnostics.append(
            LintDiagnostic(
                code="W002",
                severity=Severity.WARNING,
                message=(
                    f"Link '{link.target}' points to '#{resolution.fragment}', "
                    f"which is not a heading in {target.relative_path}."
                ),
                path=document.relative_path,
                line=link.line,
                suggestion=f"Did you mean '#{close[0]}'?" if close else None,
            )
        )
    return diagnostics


def _check_empty_body(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """W005: Document body is empty."""
    if document.body.strip():
        return []
    return [
        LintDiagnostic(
            code="W005",
            severity=Severity.WARNING,
            message="Document body is empty.",
            path=document.relative_path,
            line=document.body_line,
        )
    ]


def _check_feature_image(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """W006: Local featureImage does not exist."""
    image = document.front_matter.feature_image
    if not ctx.options.check_feature_images or not image:
        return []
    if classify_link(image) is not LinkKind.INTERNAL:
        return []
    resolution = ctx.corpus.resolve(document, image)
    if resolution.path is not None:
        return []
    return [
        LintDiagnostic(
            code="W006",
            severity=Severity.WARNING,
            message=f"featureImage '{image}' does not exist: {resolution.reason}.",
            path=document.relative_path,
            line=_key_line(document, "featureImage"),
            suggestion="Add the image or configure static_dirs for site-rooted assets.",
        )
    ]


def _check_unclosed_fences(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """W007: Fenced code block is never closed."""
    return [
        LintDiagnostic(
            code="W007",
            severity=Severity.WARNING,
            message="Code fence is never closed; the rest of the document is treated as code.",
            path=document.relative_path,
            line=sample.line,
        )
        for sample in document.outline.unclosed_fences
    ]


def _check_code_languages(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """I001: Fenced code sample has no language tag."""
    return [
        LintDiagnostic(
            code="I001",
            severity=Severity.INFO,
            message="Code sample has no language tag.",
            path=document.relative_path,
            line=sample.line,
            suggestion="Tag the fence, e.g. ```python, so it is highlighted.",
        )
        for sample in document.code_samples
        if sample.language is None
    ]


def _check_edip_structure(document: Document, ctx: RuleContext) -> list[LintDiagnostic]:
    """I002: Guide is missing one or more EDIP stages."""
    # the root index is a landing page, not a guide
    if document.slug == "":
        return []
    if document.layout and document.layout in ctx.options.edip_exempt_layouts:
        return []
    present = document.edip_stages
    missing = [stage for stage in EDIP_STAGES if stage not in present]
    if not missing:
        return []
    return [
        LintDiagnostic(
            code="I002",
            severity=Severity.INFO,
            message=f"Guide has no {', '.join(s.capitalize() for s in missing)} section.",
            path=document.relative_path,
            suggestion="Guides follow Explain, Demonstrate, Imitate, Practice.",
        )
    ]


# ---------------------------------------------------------------------------
# Built-in corpus rules
# ---------------------------------------------------------------------------

def _relative(ctx: RuleContext, path: Path) -> str:
    try:
        return path.resolve().relative_to(ctx.corpus.root).as_posix()
    except ValueError:
        return str(path)


def _check_load_failures(ctx: RuleContext) -> list[LintDiagnostic]:
    """E002: Document could not be loaded."""
    return [
        LintDiagnostic(
            code="E002",
            severity=Severity.ERROR,
            message=failure.error.message,
            path=_relative(ctx, failure.path),
            line=failure.line,
        )
        for failure in ctx.corpus.failures
    ]


def _check_duplicate_order(ctx: RuleContext) -> list[LintDiagnostic]:
    """W003: Two documents in the same category share an order value."""
    diagnostics: list[LintDiagnostic] = []
    for category, documents in ctx.corpus.categories().items():
        first_by_order: dict[int, Document] = {}
        for document in documents:
            if document.order is None:
                continue
            first = first_by_order.setdefault(document.order, document)
            if first is document:
                continue
            diagnostics.append(
                LintDiagnostic(
                    code="W003",
                    severity=Severity.WARNING,
                    message=(
                        f"order {document.order} in category '{category}' "
                        f"is also used by {first.relative_path}."
                    ),
                    path=document.relative_path,
                    line=_key_line(document, "order"),
                    suggestion="Give each document in a category a distinct order.",
                )
            )
    return diagnostics


def _check_duplicate_titles(ctx: RuleContext) -> list[LintDiagnostic]:
    """W004: Two documents share a title."""
    diagnostics: list[LintDiagnostic] = []
    first_by_title: dict[str, Document] = {}
    for document in ctx.corpus:
        title = document.front_matter.title
        if not title:
            continue
        first = first_by_title.setdefault(title.casefold(), document)
        if first is document:
            continue
        diagnostics.append(
            LintDiagnostic(
                code="W004",
                severity=Severity.WARNING,
                message=f"Title '{title}' is also used by {first.relative_path}.",
                path=document.relative_path,
                line=_key_line(document, "title"),
            )
        )
    return diagnostics


def _check_slug_collisions(ctx: RuleContext) -> list[LintDiagnostic]:
    """W008: Several files map to the same slug."""
    diagnostics: list[LintDiagnostic] = []
    for slug, documents in ctx.corpus.slug_collisions.items():
        first, *others = documents
        for document in others:
            diagnostics.append(
                LintDiagnostic(
                    code="W008",
                    severity=Severity.WARNING,
                    message=f"Slug '{slug or '/'}' is also produced by {first.relative_path}.",
                    path=document.relative_path,
                    suggestion="Rename one of the files.",
                )
            )
    return diagnostics


def _check_orphans(ctx: RuleContext) -> list[LintDiagnostic]:
    """I003: Document is not linked from any other document."""
    corpus = ctx.corpus
    if len(corpus) < 2:
        return []
    linked: set[str] = set()
    for targets in corpus.link_graph.values():
        linked.update(targets)
    return [
        LintDiagnostic(
            code="I003",
            severity=Severity.INFO,
            message="No other document links here.",
            path=document.relative_path,
            suggestion="Link it from a related guide's Next Steps.",
        )
        for document in corpus
        if document.slug and document.relative_path not in linked
    ]


# Ordered lists of built-in rules
_BUILT_IN_DOCUMENT_RULES: list[tuple[str, DocumentRule]] = [
    ("check_front_matter_present", _check_front_matter_present),
    ("check_required_keys", _check_required_keys),
    ("check_field_types", _check_field_types),
    ("check_unknown_keys", _check_unknown_keys),
    ("check_links", _check_links),
    ("check_empty_body", _check_empty_body),
    ("check_feature_image", _check_feature_image),
    ("check_unclosed_fences", _check_unclosed_fences),
    ("check_code_languages", _check_code_languages),
    ("check_edip_structure", _check_edip_structure),
]

_BUILT_IN_CORPUS_RULES: list[tuple[str, CorpusRule]] = [
    ("check_load_failures", _check_load_failures),
    ("check_duplicate_order", _check_duplicate_order),
    ("check_duplicate_titles", _check_duplicate_titles),
    ("check_slug_collisions", _check_slug_collisions),
    ("check_orphans", _check_orphans),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _rule_failed(rule_name: str, path: str | None) -> LintDiagnostic:
    logger.warning("lint.rule_failed", rule=rule_name, path=path, exc_info=True)
    return LintDiagnostic(
        code="X001",
        severity=Severity.WARNING,
        message=f"Lint rule '{rule_name}' raised an exception.",
        path=path,
    )


def _sort_key(diagnostic: LintDiagnostic) -> tuple[Any, ...]:
    return (diagnostic.path or "", diagnostic.line or 0, diagnostic.code)


def lint_corpus(
    corpus: Corpus,
    options: LintOptions | None = None,
    *,
    extra_rules: Iterable[DocumentRule] | None = None,
) -> LintResult:
    """Run all lint rules against a corpus.

    Parameters
    ----------
    corpus
        The loaded corpus (including its load failures).
    options
        Rule configuration; defaults to ``LintOptions()``.
    extra_rules
        One-shot document rules to run in addition to built-in and
        registered rules.

    Returns
    -------
    LintResult
        Diagnostics from all rules, sorted by path and line.
    """
    options = options or LintOptions()
    ctx = RuleContext(corpus=corpus, options=options)
    result = LintResult(root=str(corpus.root), document_count=len(corpus))

    document_rules: list[tuple[str, Callable[..., list[LintDiagnostic]]]] = list(_BUILT_IN_DOCUMENT_RULES)
    corpus_rules: list[tuple[str, Callable[..., list[LintDiagnostic]]]] = list(_BUILT_IN_CORPUS_RULES)
    for name, scope, rule in _RULES:
        (document_rules if scope == DOCUMENT_SCOPE else corpus_rules).append((name, rule))
    for i, rule in enumerate(extra_rules or ()):
        document_rules.append((f"extra_rule_{i}", rule))

    diagnostics: list[LintDiagnostic] = []
    with LogContext(content_root=str(corpus.root)):
        for document in corpus:
            for rule_name, rule in document_rules:
                try:
                    diagnostics.extend(rule(document, ctx))
                except Exception:
                    diagnostics.append(_rule_failed(rule_name, document.relative_path))

        for rule_name, rule in corpus_rules:
            try:
                diagnostics.extend(rule(ctx))
            except Exception:
                diagnostics.append(_rule_failed(rule_name, None))

    if options.disabled_rules:
        diagnostics = [d for d in diagnostics if d.code not in options.disabled_rules]
    if not options.include_infos:
        diagnostics = [d for d in diagnostics if d.severity != Severity.INFO]

    result.diagnostics = sorted(diagnostics, key=_sort_key)
    logger.info("lint.finished", root=str(corpus.root), summary=result.summary())
    return result


def lint_path(
    directory: Path | str,
    options: LintOptions | None = None,
    *,
    settings: GuidebookSettings | None = None,
) -> LintResult:
    """Load the corpus under ``directory`` and lint it.

    When ``settings`` is given, its loading options (pattern, excluded
    directories, site prefix, static directories) apply and, unless
    ``options`` is passed explicitly, so do its lint options.
    """
    if settings is None:
        corpus = load_corpus(directory)
    else:
        corpus = load_corpus(
            directory,
            pattern=settings.pattern,
            exclude_dirs=settings.exclude_dirs,
            site_prefix=settings.site_prefix,
            static_roots=settings.static_roots,
        )
        options = options or LintOptions.from_settings(settings)
    return lint_corpus(corpus, options)


__all__ = [
    "CORPUS_SCOPE",
    "DOCUMENT_SCOPE",
    "RULE_CATALOG",
    "LintDiagnostic",
    "LintOptions",
    "LintResult",
    "RuleContext",
    "RuleInfo",
    "Severity",
    "clear_custom_rules",
    "lint_corpus",
    "lint_path",
    "list_lint_rules",
    "register_lint_rule",
]
