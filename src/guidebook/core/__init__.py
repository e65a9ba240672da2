"""Guidebook core -- errors, settings and logging shared by every layer.

Architecture::

    errors.py      Structured error hierarchy (GuidebookError, FrontMatterError)
    settings.py    GuidebookSettings (pydantic-settings) + guidebook.toml loading
    logging.py     structlog configuration (configure_logging, get_logger)
"""

from guidebook.core.errors import (
    ConfigError,
    ContentError,
    CorpusNotFoundError,
    DocumentNotFoundError,
    ErrorCategory,
    ErrorContext,
    FrontMatterError,
    GuidebookError,
    InvalidConfigError,
    ParseError,
    ValidationError,
)

__all__ = [
    "ConfigError",
    "ContentError",
    "CorpusNotFoundError",
    "DocumentNotFoundError",
    "ErrorCategory",
    "ErrorContext",
    "FrontMatterError",
    "GuidebookError",
    "InvalidConfigError",
    "ParseError",
    "ValidationError",
]
