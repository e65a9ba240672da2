"""
Structured error types for guidebook.

Provides a small hierarchy of typed errors that carry a category and a
context (file path, line, front-matter field) so that callers can report
them uniformly, whether they surface in the CLI or in a log line.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different concerns
    - **Rich Context:** Errors know which file and line they are about
    - **Error Chaining:** Preserve the original exception as ``cause``

    Authoring mistakes inside a corpus (a missing ``title``, a broken link)
    are *diagnostics*, not exceptions. Errors are reserved for conditions
    that stop an operation: a file that cannot be read, YAML that cannot be
    parsed, a content directory that does not exist, invalid configuration.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     GuidebookError                        │
        │             (category, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │  ContentError          ParseError        ConfigError     │
        │  (CONTENT)             (PARSE)           (CONFIG)        │
        │      │                     │                 │           │
        │  DocumentNotFound      FrontMatterError  InvalidConfig   │
        │  CorpusNotFound                                          │
        │                                                          │
        │  ValidationError                                         │
        │  (VALIDATION)                                            │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = FrontMatterError("Invalid YAML").with_context(path="guides/a.md", line=3)
    >>> err.context.line
    3
    >>> err.to_dict()["category"]
    'PARSE'

Tags:
    error-handling, exception-hierarchy, error-context, guidebook
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and reporting."""

    CONTENT = "CONTENT"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured context attached to a :class:`GuidebookError`.

    Attributes:
        path: File or directory the error is about.
        line: 1-based line number inside ``path``.
        key: Front-matter key or settings field involved.
        metadata: Any additional key-value context.
    """

    path: str | None = None
    line: int | None = None
    key: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for name in ("path", "line", "key"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class GuidebookError(Exception):
    """
    Base exception for all guidebook errors.

    Every error carries:
    - **category:** :class:`ErrorCategory` for classification
    - **context:** :class:`ErrorContext` with path, line and key
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` to give sensible defaults.

    Examples:
        >>> error = GuidebookError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(path="a.md").context.path
        'a.md'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> GuidebookError:
        """
        Add context to this error (fluent API).

        Usage:
            raise FrontMatterError("Unclosed block").with_context(
                path="guides/react/hooks.md",
                line=1,
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        location = self.context.path
        if location and self.context.line is not None:
            location = f"{location}:{self.context.line}"
        return f"{location}: {self.message}" if location else self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONTENT ERRORS
# =============================================================================


class ContentError(GuidebookError):
    """Error locating or reading content on disk."""

    default_category = ErrorCategory.CONTENT


class DocumentNotFoundError(ContentError):
    """A document path or slug does not exist."""

    def __init__(self, identifier: str, message: str | None = None):
        self.identifier = identifier
        super().__init__(message or f"Document not found: {identifier}")


class CorpusNotFoundError(ContentError):
    """The content directory does not exist or is not a directory."""

    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"Content directory not found: {directory}")


# =============================================================================
# PARSE ERRORS
# =============================================================================


class ParseError(GuidebookError):
    """Error parsing document content."""

    default_category = ErrorCategory.PARSE


class FrontMatterError(ParseError):
    """The YAML front-matter block is malformed."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(GuidebookError):
    """
    Value failed validation.

    Carries the offending ``field`` and ``value`` for reporting.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        if field is not None:
            self.context.key = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(GuidebookError):
    """Configuration error. Configuration must be fixed before running."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")
        self.context.key = key


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "GuidebookError",
    "ContentError",
    "DocumentNotFoundError",
    "CorpusNotFoundError",
    "ParseError",
    "FrontMatterError",
    "ValidationError",
    "ConfigError",
    "InvalidConfigError",
]
