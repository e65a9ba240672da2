"""
Shared pytest fixtures and configuration for guidebook tests.

This module provides:
- Settings cache, custom lint rule and logging cleanup for test isolation
- The fixture corpus under ``tests/fixtures/content``
- A ``write_doc`` helper for building small corpora in ``tmp_path``

Usage:
    Fixtures are auto-discovered by pytest::

        def test_something(write_doc, tmp_path):
            write_doc("guides/a.md", '''
                ---
                title: A
                ---
                Body
            ''')
"""

import logging
import os
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

# Ensure guidebook package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from guidebook.core.settings import clear_settings_cache  # noqa: E402
from guidebook.lint.linter import clear_custom_rules  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"
CONTENT_DIR = FIXTURES_DIR / "content"


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch):
    """Reset global state and strip GUIDEBOOK_* variables around each test."""
    for key in list(os.environ):
        if key.startswith("GUIDEBOOK_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    clear_custom_rules()
    yield
    clear_settings_cache()
    clear_custom_rules()
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    for handler in list(logging.root.handlers):
        if type(handler) is logging.StreamHandler:
            logging.root.removeHandler(handler)


@pytest.fixture
def content_dir() -> Path:
    """The fixture corpus: a home page, two React guides, a Rust guide and a newsletter."""
    return CONTENT_DIR


def front_matter(**values: object) -> str:
    """A complete front-matter block; ``None`` values are left out."""
    fields = {
        "title": "Guide",
        "subTitle": "A guide",
        "excerpt": "What this guide covers.",
        "featureImage": "https://example.com/cover.png",
        "date": "2024-01-01",
        "order": 1,
    }
    fields.update(values)
    lines = [f"{key}: {value}" for key, value in fields.items() if value is not None]
    return "---\n" + "\n".join(lines) + "\n---\n"


EDIP_BODY = textwrap.dedent(
    """
    # Guide

    ## Explain

    Words.

    ## Demonstrate

    ```python
    print("hi")
    ```

    ## Imitate

    More words.

    ## Practice

    Try it.
    """
)


@pytest.fixture
def write_doc(tmp_path: Path) -> Callable[..., Path]:
    """Write a document under ``tmp_path`` (dedented) and return its path."""

    def _write(relative: str, text: str, *, dedent: bool = True) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        content = textwrap.dedent(text).lstrip("\n") if dedent else text
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_front_matter() -> Callable[..., str]:
    return front_matter


@pytest.fixture
def edip_body() -> str:
    return EDIP_BODY
