"""
Front matter parsing and validation.

A document opens with a YAML block delimited by ``---`` lines::

    ---
    title: React Hooks
    subTitle: useState, useEffect and friends
    excerpt: Learn the hooks API by building a counter.
    featureImage: /images/react-hooks.png
    date: 2024-03-14
    order: 2
    category: react
    ---

    # Explain
    ...

The closing delimiter may also be ``...`` (YAML end-of-document marker).
Parsing is split in two steps: :func:`parse_front_matter` turns the block
into a plain mapping (raising :class:`FrontMatterError` for YAML that cannot
be read), and :func:`validate_front_matter` checks value types against
:class:`FrontMatter`. Required-ness is deliberately *not* part of the model;
which keys are required is lint configuration.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from guidebook.core.errors import FrontMatterError

BOM = "\ufeff"
OPEN_DELIMITER = "---"
CLOSE_DELIMITERS = ("---", "...")


@dataclass(frozen=True)
class FrontMatterBlock:
    """Result of splitting a document into front matter and body.

    Attributes:
        raw: YAML text between the delimiters, or ``None`` if the document
            has no front-matter block.
        body: Everything after the closing delimiter.
        body_line: 1-based line of the file where ``body`` starts.
    """

    raw: str | None
    body: str
    body_line: int = 1

    @property
    def present(self) -> bool:
        return self.raw is not None


@dataclass(frozen=True)
class FieldProblem:
    """A front-matter key whose value failed type validation."""

    key: str
    message: str
    value: Any = None


def split_front_matter(text: str) -> FrontMatterBlock:
    """Split ``text`` into its front-matter block and body.

    Raises:
        FrontMatterError: The opening delimiter is never closed.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != OPEN_DELIMITER:
        return FrontMatterBlock(raw=None, body=text, body_line=1)

    for index in range(1, len(lines)):
        if lines[index].rstrip() in CLOSE_DELIMITERS:
            return FrontMatterBlock(
                raw="".join(lines[1:index]),
                body="".join(lines[index + 1:]),
                body_line=index + 2,
            )

    raise FrontMatterError(
        "Front matter opened on line 1 is never closed (expected '---' or '...')"
    ).with_context(line=1)


def parse_front_matter(text: str) -> tuple[dict[str, Any] | None, str, int]:
    """Parse the front matter of a document.

    Returns:
        ``(metadata, body, body_line)``. ``metadata`` is ``None`` when the
        document has no front-matter block and ``{}`` when the block is empty.

    Raises:
        FrontMatterError: Unclosed block, invalid YAML, or a block that is
            not a mapping. ``context.line`` points at the offending file line.
    """
    block = split_front_matter(text)
    if block.raw is None:
        return None, block.body, block.body_line

    try:
        data = yaml.safe_load(block.raw)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # block.raw starts on file line 2; marks are 0-based
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(f"Invalid YAML in front matter: {problem}", cause=exc).with_context(
            line=line
        ) from exc

    if data is None:
        return {}, block.body, block.body_line
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping of keys to values, got {type(data).__name__}"
        ).with_context(line=2)

    return {str(key): value for key, value in data.items()}, block.body, block.body_line


KEY_LINE_RE = re.compile(r"^(?P<key>[A-Za-z_][\w.\-]*)\s*:(?:\s|$)")


def front_matter_key_lines(text: str) -> dict[str, int]:
    """File line of each top-level key in the front-matter block.

    Only unindented keys are reported; a document without a (closed) block
    yields an empty mapping.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != OPEN_DELIMITER:
        return {}
    found: dict[str, int] = {}
    for index in range(1, len(lines)):
        if lines[index].rstrip() in CLOSE_DELIMITERS:
            return found
        match = KEY_LINE_RE.match(lines[index])
        if match:
            found.setdefault(match.group("key"), index + 1)
    return {}


class FrontMatter(BaseModel):
    """Typed view of the recognised front-matter keys.

    Field names follow Python conventions; the aliases are the keys as they
    appear in documents (``subTitle``, ``featureImage``). Unrecognised keys
    are kept in ``model_extra``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str | None = Field(default=None, min_length=1)
    sub_title: str | None = Field(default=None, alias="subTitle", min_length=1)
    excerpt: str | None = Field(default=None, min_length=1)
    feature_image: str | None = Field(default=None, alias="featureImage", min_length=1)
    date: dt.date | None = None
    order: int | None = None
    category: str | None = Field(default=None, min_length=1)
    layout: str | None = Field(default=None, min_length=1)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            try:
                return dt.date.fromisoformat(text)
            except ValueError:
                pass
            try:
                return dt.datetime.fromisoformat(text).date()
            except ValueError:
                raise ValueError(f"{value!r} is not an ISO-8601 date (YYYY-MM-DD)") from None
        return value

    @field_validator("order", mode="before")
    @classmethod
    def _reject_bool_order(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("order must be an integer, not a boolean")
        return value

    def to_metadata(self) -> dict[str, Any]:
        """Dump back to document keys (aliases), omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def validate_front_matter(
    metadata: dict[str, Any],
) -> tuple[FrontMatter, list[FieldProblem]]:
    """Validate value types of a front-matter mapping.

    Keys that fail validation are reported as :class:`FieldProblem` and
    left out of the returned model, so the remaining keys are still usable.
    """
    try:
        return FrontMatter.model_validate(metadata), []
    except PydanticValidationError as exc:
        problems: list[FieldProblem] = []
        bad_keys: set[str] = set()
        for error in exc.errors():
            key = str(error["loc"][0]) if error["loc"] else ""
            if key in bad_keys:
                continue
            bad_keys.add(key)
            message = error["msg"].removeprefix("Value error, ")
            problems.append(FieldProblem(key=key, message=message, value=error.get("input")))

    cleaned = {key: value for key, value in metadata.items() if key not in bad_keys}
    return FrontMatter.model_validate(cleaned), problems


__all__ = [
    "FieldProblem",
    "FrontMatter",
    "FrontMatterBlock",
    "front_matter_key_lines",
    "parse_front_matter",
    "split_front_matter",
    "validate_front_matter",
]
