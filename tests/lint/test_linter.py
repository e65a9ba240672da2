"""Tests for the content linter — static checks for a Markdown corpus.

Covers:
- LintDiagnostic creation and string representation
- LintResult aggregation, filtering, summary
- All built-in rules (E001–E005, W001–W008, I001–I003)
- Custom rule registration, X001 on failing rules
- Options: disabled codes, infos, required keys
"""

from __future__ import annotations

import pytest

from guidebook.content.loader import load_corpus
from guidebook.core.errors import ValidationError
from guidebook.core.logging import configure_logging
from guidebook.core.settings import GuidebookSettings
from guidebook.lint.linter import (
    RULE_CATALOG,
    LintDiagnostic,
    LintOptions,
    LintResult,
    Severity,
    clear_custom_rules,
    lint_corpus,
    lint_path,
    list_lint_rules,
    register_lint_rule,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lint(tmp_path, options=None, **kwargs):
    return lint_corpus(load_corpus(tmp_path, **kwargs), options)


def _only(result, code):
    return [d for d in result.diagnostics if d.code == code]


@pytest.fixture
def guide(write_doc, make_front_matter, edip_body):
    """Write a complete EDIP guide; front-matter keys can be overridden."""

    def _guide(relative, body=None, **front):
        return write_doc(relative, make_front_matter(**front) + (edip_body if body is None else body), dedent=False)

    return _guide


# ---------------------------------------------------------------------------
# LintDiagnostic
# ---------------------------------------------------------------------------

class TestLintDiagnostic:
    def test_creation(self):
        d = LintDiagnostic(code="E001", severity=Severity.ERROR, message="No front matter.")
        assert d.path is None
        assert d.line is None
        assert d.suggestion is None

    def test_str_with_location(self):
        d = LintDiagnostic(
            code="E003",
            severity=Severity.ERROR,
            message="Missing title.",
            path="guides/a.md",
            line=2,
            suggestion="Add it.",
        )
        assert str(d) == "[E003] ERROR guides/a.md:2: Missing title. (Add it.)"

    def test_str_without_location(self):
        d = LintDiagnostic(code="X001", severity=Severity.WARNING, message="Rule failed.")
        assert str(d) == "[X001] WARNING: Rule failed."

    def test_location_without_line(self):
        d = LintDiagnostic(code="I003", severity=Severity.INFO, message="Orphan.", path="a.md")
        assert d.location == "a.md"

    def test_to_dict(self):
        d = LintDiagnostic(code="W001", severity=Severity.WARNING, message="Unknown.", path="a.md", line=8)
        assert d.to_dict() == {
            "code": "W001",
            "severity": "warning",
            "message": "Unknown.",
            "path": "a.md",
            "line": 8,
            "suggestion": None,
        }

    def test_frozen(self):
        d = LintDiagnostic(code="E001", severity=Severity.ERROR, message="x")
        with pytest.raises(AttributeError):
            d.code = "E002"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# LintResult
# ---------------------------------------------------------------------------

class TestLintResult:
    def _result(self):
        return LintResult(
            root="content",
            document_count=3,
            diagnostics=[
                LintDiagnostic("E005", Severity.ERROR, "Broken.", path="a.md", line=9),
                LintDiagnostic("W005", Severity.WARNING, "Empty.", path="b.md", line=9),
                LintDiagnostic("I001", Severity.INFO, "No language.", path="a.md", line=12),
                LintDiagnostic("X001", Severity.WARNING, "Rule failed."),
            ],
        )

    def test_filters(self):
        result = self._result()
        assert [d.code for d in result.errors] == ["E005"]
        assert [d.code for d in result.warnings] == ["W005", "X001"]
        assert [d.code for d in result.infos] == ["I001"]
        assert not result.passed

    def test_passed_with_warnings_only(self):
        result = LintResult(
            root="content",
            diagnostics=[LintDiagnostic("W005", Severity.WARNING, "Empty.")],
        )
        assert result.passed

    def test_summary(self):
        assert self._result().summary() == (
            "FAIL: 3 documents in content | 1 errors | 2 warnings | 1 infos"
        )
        assert LintResult(root="content").summary() == "PASS: 0 documents in content"

    def test_by_path(self):
        grouped = self._result().by_path()
        assert list(grouped) == ["a.md", "b.md", ""]
        assert [d.code for d in grouped["a.md"]] == ["E005", "I001"]

    def test_to_dict(self):
        data = self._result().to_dict()
        assert data["passed"] is False
        assert data["error_count"] == 1
        assert data["warning_count"] == 2
        assert data["info_count"] == 1
        assert len(data["diagnostics"]) == 4

    def test_str_lists_diagnostics(self):
        text = str(self._result())
        assert text.splitlines()[0].startswith("FAIL")
        assert "  [E005] ERROR a.md:9: Broken." in text


# ---------------------------------------------------------------------------
# Fixture corpus
# ---------------------------------------------------------------------------

class TestFixtureCorpus:
    def test_fixture_corpus_is_clean(self, content_dir):
        result = lint_corpus(load_corpus(content_dir))
        assert result.passed
        assert result.diagnostics == []
        assert result.document_count == 5

    def test_lint_path(self, content_dir):
        result = lint_path(content_dir)
        assert result.passed
        assert result.root == str(content_dir.resolve())


# ---------------------------------------------------------------------------
# Document rules
# ---------------------------------------------------------------------------

class TestFrontMatterRules:
    def test_e001_no_front_matter(self, write_doc, tmp_path):
        write_doc("plain.md", "# Plain\n\nText.\n")
        result = _lint(tmp_path)
        [d] = _only(result, "E001")
        assert d.path == "plain.md"
        assert d.line == 1
        assert _only(result, "E003") == []

    def test_e002_load_failure(self, write_doc, tmp_path):
        write_doc("bad.md", "---\ntitle: [unclosed\n---\nBody\n")
        result = _lint(tmp_path)
        [d] = _only(result, "E002")
        assert d.path == "bad.md"
        assert d.line is not None
        assert "Invalid YAML" in d.message
        assert not result.passed

    def test_e002_unclosed_block(self, write_doc, tmp_path):
        write_doc("open.md", "---\ntitle: A\n\nBody\n")
        [d] = _only(_lint(tmp_path), "E002")
        assert d.line == 1

    def test_e003_missing_key(self, guide, tmp_path):
        guide("a.md", excerpt=None)
        [d] = _only(_lint(tmp_path), "E003")
        assert "'excerpt' is missing" in d.message
        assert d.line == 1
        assert d.suggestion == "Add 'excerpt: ...' to the front matter."

    def test_e003_empty_key(self, guide, tmp_path):
        guide("a.md", title="''")
        result = _lint(tmp_path)
        [d] = _only(result, "E003")
        assert "'title' is empty" in d.message
        assert d.line == 2
        assert _only(result, "E004") == []

    def test_e003_null_key(self, guide, tmp_path):
        guide("a.md", subTitle="")
        [d] = _only(_lint(tmp_path), "E003")
        assert "'subTitle' is empty" in d.message
        assert d.line == 3

    def test_e003_respects_required_keys(self, guide, tmp_path):
        guide("a.md", excerpt=None, featureImage=None)
        result = _lint(tmp_path, LintOptions(required_keys=("title",)))
        assert _only(result, "E003") == []
        assert _only(result, "W001") == []

    def test_e004_invalid_order(self, guide, tmp_path):
        guide("a.md", order="first")
        [d] = _only(_lint(tmp_path), "E004")
        assert d.message.startswith("Invalid value for 'order'")
        assert d.line == 7

    def test_e004_invalid_date(self, guide, tmp_path):
        guide("a.md", date="soon")
        [d] = _only(_lint(tmp_path), "E004")
        assert "ISO-8601" in d.message
        assert d.line == 6

    def test_w001_unknown_key_with_suggestion(self, guide, tmp_path):
        guide("a.md", catgory="react")
        [d] = _only(_lint(tmp_path), "W001")
        assert "'catgory'" in d.message
        assert d.suggestion == "Did you mean 'category'?"
        assert d.line == 8

    def test_w001_unrelated_key_has_no_suggestion(self, guide, tmp_path):
        guide("a.md", tags="react")
        [d] = _only(_lint(tmp_path), "W001")
        assert d.suggestion is None

    def test_optional_keys_are_known(self, guide, tmp_path):
        guide("a.md", category="react", layout="post")
        assert _only(_lint(tmp_path), "W001") == []


class TestLinkRules:
    def test_e005_broken_link(self, guide, tmp_path):
        guide("a.md", body="See [missing](nope.md).\n")
        [d] = _only(_lint(tmp_path), "E005")
        assert d.path == "a.md"
        assert d.line == 9
        assert "'nope.md'" in d.message
        assert "no such file" in d.message

    def test_e005_outside_root(self, guide, tmp_path):
        guide("guides/a.md", body="[up](../../secret.md)\n")
        [d] = _only(_lint(tmp_path), "E005")
        assert "outside the content root" in d.message

    def test_external_links_not_checked(self, guide, tmp_path):
        guide("a.md", body="[x](https://example.com/nope.md) [m](mailto:a@example.com)\n")
        assert _only(_lint(tmp_path), "E005") == []

    def test_w002_bad_fragment(self, guide, tmp_path):
        guide("a.md", body="[B](b.md#setpu)\n", title="A")
        guide("b.md", body="## Setup\n", title="B")
        [d] = _only(_lint(tmp_path), "W002")
        assert d.path == "a.md"
        assert d.suggestion == "Did you mean '#setup'?"

    def test_w002_same_document_anchor(self, guide, tmp_path):
        guide("a.md", body="## Setup\n\n[up](#top)\n")
        [d] = _only(_lint(tmp_path), "W002")
        assert d.line == 11

    def test_good_fragment(self, guide, tmp_path):
        guide("a.md", body="[B](b.md#setup)\n", title="A")
        guide("b.md", body="## Setup\n", title="B")
        assert _only(_lint(tmp_path), "W002") == []

    def test_anchor_check_disabled(self, guide, tmp_path):
        guide("a.md", body="[B](b.md#nowhere)\n", title="A")
        guide("b.md", body="## Setup\n", title="B")
        assert _only(_lint(tmp_path, LintOptions(check_anchors=False)), "W002") == []

    def test_site_prefix(self, guide, tmp_path):
        guide("a.md", body="[B](/docs/b/)\n", title="A")
        guide("b/index.md", title="B")
        assert _only(_lint(tmp_path, site_prefix="/docs"), "E005") == []


class TestBodyRules:
    def test_w005_empty_body(self, guide, tmp_path):
        guide("a.md", body="\n")
        [d] = _only(_lint(tmp_path), "W005")
        assert d.line == 9

    def test_w006_missing_feature_image(self, guide, tmp_path):
        guide("a.md", featureImage="/images/missing.png")
        [d] = _only(_lint(tmp_path), "W006")
        assert d.line == 5
        assert "/images/missing.png" in d.message

    def test_w006_existing_feature_image(self, guide, write_doc, tmp_path):
        write_doc("images/cover.png", "png")
        guide("a.md", featureImage="/images/cover.png")
        assert _only(_lint(tmp_path), "W006") == []

    def test_w006_static_dir(self, guide, tmp_path):
        content = tmp_path / "content"
        static = tmp_path / "static" / "images"
        static.mkdir(parents=True)
        (static / "cover.png").write_text("png")
        guide("content/a.md", featureImage="/images/cover.png")
        corpus = load_corpus(content, static_roots=[tmp_path / "static"])
        assert _only(lint_corpus(corpus), "W006") == []

    def test_w006_disabled(self, guide, tmp_path):
        guide("a.md", featureImage="/images/missing.png")
        assert _only(_lint(tmp_path, LintOptions(check_feature_images=False)), "W006") == []

    def test_w007_unclosed_fence(self, guide, tmp_path):
        guide("a.md", body="Intro\n\n```python\nprint(1)\n")
        [d] = _only(_lint(tmp_path), "W007")
        assert d.line == 11

    def test_i001_code_without_language(self, guide, tmp_path):
        guide("a.md", body="```\nplain\n```\n")
        [d] = _only(_lint(tmp_path), "I001")
        assert d.severity == Severity.INFO
        assert d.line == 9

    def test_i002_missing_stages(self, guide, tmp_path):
        guide("a.md", body="## Explain\n\n## Practice\n")
        [d] = _only(_lint(tmp_path), "I002")
        assert d.message == "Guide has no Demonstrate, Imitate section."

    def test_i002_exempt_layout(self, guide, tmp_path):
        guide("news.md", body="# January\n", layout="newsletter")
        assert _only(_lint(tmp_path), "I002") == []

    def test_i002_skips_root_index(self, guide, tmp_path):
        guide("index.md", title="Home", body="# Welcome\n")
        guide("guides/index.md", title="Guides", order=2, body="# Guides\n")
        assert [d.path for d in _only(_lint(tmp_path), "I002")] == ["guides/index.md"]


# ---------------------------------------------------------------------------
# Corpus rules
# ---------------------------------------------------------------------------

class TestCorpusRules:
    def test_w003_duplicate_order(self, guide, tmp_path):
        guide("a.md", title="A", category="react", order=1)
        guide("b.md", title="B", category="react", order=1)
        guide("c.md", title="C", category="rust", order=1)
        [d] = _only(_lint(tmp_path), "W003")
        assert d.path == "b.md"
        assert d.line == 7
        assert "a.md" in d.message

    def test_w004_duplicate_title(self, guide, tmp_path):
        guide("a.md", title="Hooks")
        guide("b.md", title="hooks", order=2)
        [d] = _only(_lint(tmp_path), "W004")
        assert d.path == "b.md"
        assert d.line == 2

    def test_w008_slug_collision(self, guide, tmp_path):
        guide("a.md", title="A file")
        guide("a/index.md", title="A index", order=2)
        [d] = _only(_lint(tmp_path), "W008")
        assert d.path == "a/index.md"
        assert "a.md" in d.message

    def test_i003_orphans(self, guide, tmp_path):
        guide("a.md", title="A", body=None)
        guide("b.md", title="B", body="[A](a.md)\n")
        [d] = _only(_lint(tmp_path), "I003")
        assert d.path == "b.md"

    def test_i003_ignores_root_index(self, guide, tmp_path):
        guide("index.md", title="Home")
        guide("a.md", title="A", body="[Home](/)\n")
        assert [d.path for d in _only(_lint(tmp_path), "I003")] == ["a.md"]

    def test_i003_single_document(self, guide, tmp_path):
        guide("a.md")
        assert _only(_lint(tmp_path), "I003") == []

    def test_i003_with_colliding_slugs(self, guide, tmp_path):
        guide("a.md", title="A file", body="[B](b.md)\n")
        guide("a/index.md", title="A index", order=2, body="# Index\n")
        guide("b.md", title="B", order=3, body="[A](a.md)\n")
        assert [d.path for d in _only(_lint(tmp_path), "I003")] == ["a/index.md"]


# ---------------------------------------------------------------------------
# Options and ordering
# ---------------------------------------------------------------------------

class TestOptions:
    def test_disabled_rules(self, guide, tmp_path):
        guide("a.md", body="[x](nope.md)\n```\nx\n```\n")
        result = _lint(tmp_path, LintOptions(disabled_rules=frozenset({"E005", "I001"})))
        assert "E005" not in result.codes()
        assert "I001" not in result.codes()
        assert result.passed

    def test_include_infos(self, guide, tmp_path):
        guide("a.md", body="```\nx\n```\n")
        result = _lint(tmp_path, LintOptions(include_infos=False))
        assert result.infos == []

    def test_from_settings(self):
        settings = GuidebookSettings(
            required_keys=["title"],
            disabled_rules=["i003"],
            include_infos=False,
            check_anchors=False,
        )
        options = LintOptions.from_settings(settings)
        assert options.required_keys == ("title",)
        assert options.disabled_rules == frozenset({"I003"})
        assert not options.include_infos
        assert not options.check_anchors

    def test_known_keys(self):
        options = LintOptions(required_keys=("title", "tags"), optional_keys=("draft",))
        assert options.known_keys[:3] == ("title", "tags", "draft")
        assert "featureImage" in options.known_keys

    def test_sorted_by_path_and_line(self, guide, tmp_path):
        guide("b.md", title="B", body="[x](nope.md)\n\n[y](gone.md)\n")
        guide("a.md", title="A", body="[x](nope.md)\n")
        keys = [(d.path, d.line) for d in _lint(tmp_path).errors]
        assert keys == [("a.md", 9), ("b.md", 9), ("b.md", 11)]

    def test_lint_path_with_settings(self, guide, tmp_path):
        guide("a.md", body="```\nx\n```\n", excerpt=None)
        settings = GuidebookSettings(required_keys=["title"], disabled_rules=["I001"])
        result = lint_path(tmp_path, settings=settings)
        assert "E003" not in result.codes()
        assert "I001" not in result.codes()


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

class TestRuleRegistry:
    def test_built_in_rules_listed(self):
        rules = list_lint_rules()
        assert "check_required_keys" in rules
        assert "check_orphans" in rules

    def test_catalog_codes_unique(self):
        codes = [info.code for info in RULE_CATALOG]
        assert len(codes) == len(set(codes))
        assert {"E001", "W008", "I003", "X001"} <= set(codes)

    def test_register_document_rule(self, guide, tmp_path):
        def no_todo(document, ctx):
            if "TODO" not in document.body:
                return []
            return [LintDiagnostic("C100", Severity.WARNING, "TODO left in guide.", path=document.relative_path)]

        register_lint_rule("check_no_todo", no_todo)
        guide("a.md", body="TODO: finish\n")
        assert "check_no_todo" in list_lint_rules()
        assert [d.path for d in _only(_lint(tmp_path), "C100")] == ["a.md"]

    def test_register_corpus_rule(self, guide, tmp_path):
        register_lint_rule(
            "check_size",
            lambda ctx: [LintDiagnostic("C200", Severity.INFO, f"{len(ctx.corpus)} documents.")],
            scope="corpus",
        )
        guide("a.md")
        [d] = _only(_lint(tmp_path), "C200")
        assert d.message == "1 documents."

    def test_clear_custom_rules(self):
        register_lint_rule("temp", lambda document, ctx: [])
        clear_custom_rules()
        assert "temp" not in list_lint_rules()

    def test_unknown_scope(self):
        with pytest.raises(ValidationError) as exc_info:
            register_lint_rule("bad", lambda ctx: [], scope="site")
        assert exc_info.value.field == "scope"

    def test_extra_rules(self, guide, tmp_path):
        guide("a.md")
        result = lint_corpus(
            load_corpus(tmp_path),
            extra_rules=[lambda document, ctx: [LintDiagnostic("C300", Severity.INFO, "extra")]],
        )
        assert "C300" in result.codes()

    def test_failing_document_rule_becomes_x001(self, guide, tmp_path):
        def boom(document, ctx):
            raise RuntimeError("boom")

        register_lint_rule("boom", boom)
        guide("a.md", body="[x](nope.md)\n")
        result = _lint(tmp_path)
        [d] = _only(result, "X001")
        assert d.path == "a.md"
        assert "'boom'" in d.message
        assert "E005" in result.codes()

    def test_failing_corpus_rule_becomes_x001(self, guide, tmp_path):
        def boom(ctx):
            raise KeyError("boom")

        register_lint_rule("boom", boom, scope="corpus")
        guide("a.md")
        [d] = _only(_lint(tmp_path), "X001")
        assert d.path is None

    def test_failing_rule_logged_when_logging_configured(self, guide, tmp_path, capsys):
        def boom(document, ctx):
            raise RuntimeError("boom")

        configure_logging(level="WARNING", json_format=True)
        register_lint_rule("boom", boom)
        guide("a.md")
        [d] = _only(_lint(tmp_path), "X001")
        assert d.path == "a.md"
        err = capsys.readouterr().err
        assert "lint.rule_failed" in err
        assert "RuntimeError" in err
