"""Tests for ``guidebook lint``, ``guidebook rules`` and the root options."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from guidebook.cli import app
from guidebook.lint.linter import RULE_CATALOG, register_lint_rule

runner = CliRunner()


@pytest.fixture(autouse=True)
def _project(tmp_path, monkeypatch):
    """Run every command from an empty project in ``tmp_path``."""
    (tmp_path / "guidebook.toml").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def broken_corpus(write_doc, make_front_matter, edip_body, tmp_path):
    write_doc("content/a.md", make_front_matter() + edip_body + "\nSee [b](b.md).\n", dedent=False)
    return tmp_path / "content"


@pytest.fixture
def info_corpus(write_doc, make_front_matter, edip_body, tmp_path):
    write_doc("content/a.md", make_front_matter() + edip_body + "\n```\nplain\n```\n", dedent=False)
    return tmp_path / "content"


@pytest.fixture
def malformed_corpus(write_doc, make_front_matter, edip_body, tmp_path):
    write_doc("content/good.md", make_front_matter() + edip_body, dedent=False)
    write_doc("content/bad.md", "---\ntitle: [unclosed\n---\nBody\n")
    return tmp_path / "content"


@pytest.fixture
def warning_corpus(write_doc, make_front_matter, tmp_path):
    write_doc("content/a.md", make_front_matter(), dedent=False)
    return tmp_path / "content"


class TestLint:
    def test_fixture_corpus_passes(self, content_dir):
        result = runner.invoke(app, ["lint", str(content_dir)])
        assert result.exit_code == 0, result.output
        assert "PASS: 5 documents" in result.output
        assert "I002" not in result.output

    def test_json(self, content_dir):
        result = runner.invoke(app, ["lint", str(content_dir), "--json"])
        assert result.exit_code == 0
        assert result.stdout.startswith('{\n  "')
        data = json.loads(result.stdout)
        assert data["passed"] is True
        assert data["document_count"] == 5
        assert data["error_count"] == 0
        assert data["diagnostics"] == []

    def test_infos_reported(self, info_corpus):
        result = runner.invoke(app, ["lint", str(info_corpus), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [d["code"] for d in data["diagnostics"]] == ["I001"]
        assert data["diagnostics"][0]["path"] == "a.md"

    def test_no_infos(self, info_corpus):
        result = runner.invoke(app, ["lint", str(info_corpus), "--json", "--no-infos"])
        assert json.loads(result.stdout)["diagnostics"] == []

    def test_disable_is_case_insensitive(self, info_corpus):
        result = runner.invoke(app, ["lint", str(info_corpus), "--json", "-d", "i001"])
        assert json.loads(result.stdout)["info_count"] == 0

    def test_disabled_rules_from_config(self, info_corpus, tmp_path):
        (tmp_path / "guidebook.toml").write_text('disabled_rules = ["I001"]\n', encoding="utf-8")
        result = runner.invoke(app, ["lint", str(info_corpus), "--json"])
        assert json.loads(result.stdout)["diagnostics"] == []

    def test_malformed_disable_code(self, content_dir):
        result = runner.invoke(app, ["lint", str(content_dir), "--disable", "links"])
        assert result.exit_code == 1
        assert "Not a diagnostic code" in result.output

    def test_configured_content_dir(self, content_dir, tmp_path):
        (tmp_path / "guidebook.toml").write_text(
            f"content_dir = {json.dumps(content_dir.as_posix())}\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["lint", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["document_count"] == 5

    def test_errors_exit_one(self, broken_corpus):
        result = runner.invoke(app, ["lint", str(broken_corpus)])
        assert result.exit_code == 1
        assert "E005" in result.output
        assert "FAIL" in result.output

    def test_errors_json(self, broken_corpus):
        result = runner.invoke(app, ["lint", str(broken_corpus), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["passed"] is False
        assert "E005" in [d["code"] for d in data["diagnostics"]]

    def test_malformed_file_reported_as_e002(self, malformed_corpus):
        result = runner.invoke(app, ["lint", str(malformed_corpus)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "E002" in result.output
        assert "bad.md" in result.output
        assert "FAIL" in result.output

    def test_malformed_file_logged_as_json(self, malformed_corpus):
        result = runner.invoke(app, ["--log-json", "lint", str(malformed_corpus)])
        assert result.exit_code == 1
        assert "loader.file_error" in result.output
        assert "E002" in result.output

    def test_failing_rule_reported_as_x001(self, content_dir):
        def boom(document, ctx):
            raise RuntimeError("rule bug")

        register_lint_rule("boom", boom)
        result = runner.invoke(app, ["lint", str(content_dir)])
        assert result.exit_code == 0
        assert "X001" in result.output
        assert "lint.rule_failed" in result.output

    def test_warnings_pass_without_strict(self, warning_corpus):
        result = runner.invoke(app, ["lint", str(warning_corpus)])
        assert result.exit_code == 0
        assert "W005" in result.output

    def test_strict_fails_on_warnings(self, warning_corpus):
        result = runner.invoke(app, ["lint", str(warning_corpus), "--strict"])
        assert result.exit_code == 1

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["lint", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Content directory not found" in result.output

    def test_invalid_config_exits_two(self, content_dir, tmp_path):
        (tmp_path / "guidebook.toml").write_text('colour = "red"\n', encoding="utf-8")
        result = runner.invoke(app, ["lint", str(content_dir)])
        assert result.exit_code == 2
        assert "CONFIG" in result.output


class TestRules:
    def test_table(self):
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "Diagnostic codes" in result.output
        assert "E005" in result.output
        assert "rules registered" in result.output

    def test_json(self):
        result = runner.invoke(app, ["rules", "--json"])
        assert result.stdout.startswith('{\n  "')
        data = json.loads(result.stdout)
        assert [c["code"] for c in data["codes"]] == [info.code for info in RULE_CATALOG]
        assert data["codes"][0] == {
            "code": "E001",
            "severity": "error",
            "description": "Document has no front-matter block.",
        }
        assert "check_links" in data["rules"]


class TestRootOptions:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("guidebook ")

    def test_bad_log_level(self, content_dir):
        result = runner.invoke(app, ["--log-level", "LOUD", "lint", str(content_dir)])
        assert result.exit_code == 2

    def test_log_json_goes_to_stderr(self, content_dir):
        result = runner.invoke(
            app, ["--log-level", "INFO", "--log-json", "lint", str(content_dir), "--json"]
        )
        assert result.exit_code == 0
        assert "lint.finished" in result.output
