"""Static checks for API route modules."""

from app.lint.engine import (
    Diagnostic,
    Rule,
    RuleContext,
    RuleVisitor,
    UnknownRuleError,
    available_rules,
    get_rule,
    lint_file,
    lint_paths,
    lint_source,
)

__all__ = [
    "Diagnostic",
    "Rule",
    "RuleContext",
    "RuleVisitor",
    "UnknownRuleError",
    "available_rules",
    "get_rule",
    "lint_file",
    "lint_paths",
    "lint_source",
]
