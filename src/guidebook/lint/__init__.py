"""Static checks for a guidebook corpus."""

from guidebook.lint.linter import (
    RULE_CATALOG,
    LintDiagnostic,
    LintOptions,
    LintResult,
    RuleContext,
    RuleInfo,
    Severity,
    clear_custom_rules,
    lint_corpus,
    lint_path,
    list_lint_rules,
    register_lint_rule,
)

__all__ = [
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
