"""
Structural reading of Markdown bodies.

This is not a renderer. :func:`scan_markdown` walks a document body line by
line and pulls out the three things the linter and the CLI care about:

- **Sections:** ATX headings (``#`` .. ``######``) with GitHub-style anchors
- **Code samples:** fenced blocks (backticks or tildes) with their language
- **Links:** inline links and images, reference definitions, and
  ``href``/``src`` attributes of raw HTML tags

Anything inside a fenced block or an inline code span is ignored when
looking for headings and links. Setext headings (underlined with ``===``)
and indented code blocks are not recognised; the guides use ATX headings
and fenced samples throughout.

Example::

    outline = scan_markdown(document.body, first_line=document.body_line)
    for section in outline.sections:
        print(section.level, section.title, f"#{section.anchor}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

FENCE_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
ATX_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<rest>.*))?$")
ATX_CLOSING_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")

# [text](target "title") and ![alt](src); one level of nested brackets/parens
INLINE_LINK_RE = re.compile(
    r"(?P<bang>!?)\[(?P<text>(?:[^\[\]]|\[[^\[\]]*\])*)\]"
    r"\(\s*(?P<target><[^>\n]*>|(?:[^\s()]|\([^\s()]*\))*)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
REFERENCE_DEF_RE = re.compile(r"^ {0,3}\[(?P<label>[^\]^][^\]]*)\]:\s*(?P<target><[^>]*>|\S+)")
HTML_LINK_RE = re.compile(
    r"<(?:a|img|source|link)\b[^>]*?\b(?:href|src)\s*=\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)')",
    re.IGNORECASE,
)
HTML_TAG_RE = re.compile(r"<[^>]+>")

EDIP_STAGES = ("explain", "demonstrate", "imitate", "practice")
_EDIP_PATTERNS = {
    "explain": re.compile(r"\bexplain\w*|\bexplanation\b"),
    "demonstrate": re.compile(r"\bdemonstrat\w*"),
    "imitate": re.compile(r"\bimitat\w*"),
    "practice": re.compile(r"\bpracti[cs]\w*"),
}


class LinkStyle(str, Enum):
    """How a link was written in the Markdown source."""

    INLINE = "inline"
    IMAGE = "image"
    REFERENCE = "reference"
    HTML = "html"


@dataclass(frozen=True)
class Section:
    """An ATX heading."""

    level: int
    title: str
    anchor: str
    line: int


@dataclass(frozen=True)
class CodeSample:
    """A fenced code block.

    Attributes:
        language: First word of the info string (``None`` when absent).
        code: The block's content without the fences.
        line: File line of the opening fence.
        closed: ``False`` when the fence runs to the end of the document.
    """

    language: str | None
    code: str
    line: int
    closed: bool = True

    @property
    def line_count(self) -> int:
        return len(self.code.splitlines())


@dataclass(frozen=True)
class Link:
    """A hyperlink or embedded resource reference."""

    target: str
    text: str
    line: int
    style: LinkStyle = LinkStyle.INLINE


@dataclass
class MarkdownOutline:
    """Everything :func:`scan_markdown` found in a body."""

    sections: list[Section] = field(default_factory=list)
    code_samples: list[CodeSample] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @property
    def anchors(self) -> set[str]:
        return {section.anchor for section in self.sections}

    @property
    def unclosed_fences(self) -> list[CodeSample]:
        return [sample for sample in self.code_samples if not sample.closed]

    @property
    def languages(self) -> list[str]:
        """Distinct code-sample languages in order of first appearance."""
        seen: list[str] = []
        for sample in self.code_samples:
            if sample.language and sample.language not in seen:
                seen.append(sample.language)
        return seen


def heading_text(title: str) -> str:
    """Plain text of a heading: links become their text, markup is dropped."""
    text = INLINE_LINK_RE.sub(lambda m: m.group("text"), title)
    text = HTML_TAG_RE.sub("", text)
    return text.strip()


def slugify_heading(title: str) -> str:
    """GitHub-style anchor for a heading.

    >>> slugify_heading("Step 2: Build the `Counter` component!")
    'step-2-build-the-counter-component'
    """
    text = heading_text(title).lower()
    text = re.sub(r"[^\w\- ]", "", text)
    return text.replace(" ", "-")


def edip_stage(title: str) -> str | None:
    """Which EDIP stage a heading introduces, if any."""
    text = heading_text(title).lower()
    for stage in EDIP_STAGES:
        if _EDIP_PATTERNS[stage].search(text):
            return stage
    return None


def edip_stages(sections: list[Section]) -> list[str]:
    """EDIP stages covered by ``sections``, in canonical order."""
    found = {stage for stage in (edip_stage(s.title) for s in sections) if stage}
    return [stage for stage in EDIP_STAGES if stage in found]


def _strip_angle_brackets(target: str) -> str:
    if target.startswith("<") and target.endswith(">"):
        return target[1:-1].strip()
    return target


def _mask_code_spans(line: str) -> str:
    return CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), line)


def _fence_language(info: str) -> str | None:
    info = info.strip()
    if not info:
        return None
    word = info.split()[0].strip("{}").lstrip(".")
    return word or None


def _scan_links(line: str, lineno: int) -> list[Link]:
    links: list[Link] = []
    masked = _mask_code_spans(line)

    definition = REFERENCE_DEF_RE.match(masked)
    if definition:
        links.append(
            Link(
                target=_strip_angle_brackets(definition.group("target")),
                text=definition.group("label"),
                line=lineno,
                style=LinkStyle.REFERENCE,
            )
        )
        return links

    for match in INLINE_LINK_RE.finditer(masked):
        links.append(
            Link(
                target=_strip_angle_brackets(match.group("target")),
                text=match.group("text"),
                line=lineno,
                style=LinkStyle.IMAGE if match.group("bang") else LinkStyle.INLINE,
            )
        )
        # images nested in link text: [![alt](img.png)](page.md)
        for inner in INLINE_LINK_RE.finditer(match.group("text")):
            links.append(
                Link(
                    target=_strip_angle_brackets(inner.group("target")),
                    text=inner.group("text"),
                    line=lineno,
                    style=LinkStyle.IMAGE if inner.group("bang") else LinkStyle.INLINE,
                )
            )

    for match in HTML_LINK_RE.finditer(masked):
        target = match.group("dq") if match.group("dq") is not None else match.group("sq")
        links.append(Link(target=target.strip(), text="", line=lineno, style=LinkStyle.HTML))

    return links


def scan_markdown(body: str, first_line: int = 1) -> MarkdownOutline:
    """Extract sections, code samples and links from a Markdown body.

    Args:
        body: Markdown text (front matter already removed).
        first_line: File line number of the first line of ``body``, so that
            reported lines point into the original file.
    """
    outline = MarkdownOutline()
    anchor_counts: dict[str, int] = {}

    fence: str | None = None
    fence_language: str | None = None
    fence_line = 0
    fence_lines: list[str] = []

    for index, line in enumerate(body.splitlines()):
        lineno = first_line + index

        if fence is not None:
            stripped = line.strip()
            if (
                len(line) - len(line.lstrip(" ")) <= 3
                and stripped
                and set(stripped) == {fence[0]}
                and len(stripped) >= len(fence)
            ):
                outline.code_samples.append(
                    CodeSample(fence_language, "\n".join(fence_lines), fence_line)
                )
                fence = None
                fence_lines = []
            else:
                fence_lines.append(line)
            continue

        opening = FENCE_RE.match(line)
        if opening and not (opening.group("fence")[0] == "`" and "`" in opening.group("info")):
            fence = opening.group("fence")
            fence_language = _fence_language(opening.group("info"))
            fence_line = lineno
            continue

        heading = ATX_RE.match(line)
        if heading:
            title = ATX_CLOSING_RE.sub("", heading.group("rest") or "").strip()
            if title:
                base = slugify_heading(title)
                count = anchor_counts.get(base, 0)
                anchor_counts[base] = count + 1
                anchor = base if count == 0 else f"{base}-{count}"
                outline.sections.append(
                    Section(level=len(heading.group("hashes")), title=title, anchor=anchor, line=lineno)
                )

        outline.links.extend(_scan_links(line, lineno))

    if fence is not None:
        outline.code_samples.append(
            CodeSample(fence_language, "\n".join(fence_lines), fence_line, closed=False)
        )

    return outline


__all__ = [
    "EDIP_STAGES",
    "CodeSample",
    "Link",
    "LinkStyle",
    "MarkdownOutline",
    "Section",
    "edip_stage",
    "edip_stages",
    "heading_text",
    "scan_markdown",
    "slugify_heading",
]
