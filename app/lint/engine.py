"""Minimal static-analysis host for route-module rules.

Each file is parsed once with the standard library ``ast`` module. For every
rule that applies to the file a fresh visitor walks the whole tree, then the
rule's end-of-file hook runs exactly once. Nothing is shared between files.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Type

logger = logging.getLogger(__name__)

SYNTAX_ERROR_RULE = "syntax-error"

EXCLUDE_DIRS = {
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "node_modules",
    ".mypy_cache",
    ".pytest_cache",
}


class UnknownRuleError(KeyError):
    """Raised when a rule name is not registered."""


@dataclass(frozen=True)
class Diagnostic:
    """A convention violation reported by a rule."""

    path: str
    line: int
    column: int
    rule: str
    message: str

    def format(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: [{self.rule}] {self.message}"

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class RuleContext:
    """Per-file reporting surface handed to a rule."""

    path: str
    rule_name: str
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def report(self, node: ast.AST, message: str) -> None:
        # Module nodes carry no position: file-level reports land on 1:0.
        line = getattr(node, "lineno", 1)
        column = getattr(node, "col_offset", 0)
        self.diagnostics.append(
            Diagnostic(
                path=self.path,
                line=line,
                column=column,
                rule=self.rule_name,
                message=message,
            )
        )


class RuleVisitor(ast.NodeVisitor):
    """Visitor created per file; ``finish`` is the end-of-file event."""

    def __init__(self, context: RuleContext) -> None:
        self.context = context

    def finish(self, module: ast.Module) -> None:
        """Called once after the whole module has been visited."""


class Rule:
    """Base class for lint rules."""

    name: str = ""
    description: str = ""

    def applies_to(self, path: str) -> bool:
        return True

    def create(self, context: RuleContext) -> RuleVisitor:
        raise NotImplementedError("create() must be implemented")


_REGISTRY: Dict[str, Type[Rule]] = {}


def register(rule_cls: Type[Rule]) -> Type[Rule]:
    """Class decorator adding a rule to the registry."""
    if not rule_cls.name:
        raise ValueError(f"{rule_cls.__name__} has no rule name")
    _REGISTRY[rule_cls.name] = rule_cls
    return rule_cls


def available_rules() -> List[Rule]:
    # Importing the rules package populates the registry.
    from app.lint import rules  # noqa: F401

    return [_REGISTRY[name]() for name in sorted(_REGISTRY)]


def get_rule(name: str) -> Rule:
    from app.lint import rules  # noqa: F401

    try:
        return _REGISTRY[name]()
    except KeyError:
        raise UnknownRuleError(name) from None


def normalize_path(path: str | Path) -> str:
    return str(path).replace("\\", "/")


def _file_error(path: str, message: str, line: int = 1, column: int = 0) -> Diagnostic:
    return Diagnostic(
        path=path,
        line=line,
        column=column,
        rule=SYNTAX_ERROR_RULE,
        message=message,
    )


def _check(source: str, path: str, active: Sequence[Rule]) -> List[Diagnostic]:
    try:
        module = ast.parse(source, filename=path)
    except SyntaxError as e:
        return [_file_error(path, f"Could not parse file: {e.msg}", e.lineno or 1, (e.offset or 1) - 1)]
    except ValueError as e:
        # Null bytes raise ValueError instead of SyntaxError before Python 3.12.
        return [_file_error(path, f"Could not parse file: {e}")]

    diagnostics: List[Diagnostic] = []
    for rule in active:
        context = RuleContext(path=path, rule_name=rule.name)
        visitor = rule.create(context)
        visitor.visit(module)
        visitor.finish(module)
        diagnostics.extend(context.diagnostics)

    # Stable sort keeps each rule's reporting order for reports at the same position.
    return sorted(diagnostics, key=lambda d: (d.line, d.column))


def lint_source(source: str, path: str | Path, rules: Sequence[Rule]) -> List[Diagnostic]:
    """Run ``rules`` over one file's source text."""
    filename = normalize_path(path)
    active = [rule for rule in rules if rule.applies_to(filename)]
    if not active:
        logger.debug("No rules apply to %s", filename)
        return []
    return _check(source, filename, active)


def lint_file(path: str | Path, rules: Sequence[Rule]) -> List[Diagnostic]:
    """
    Run ``rules`` over a file on disk.

    Rules are matched against the absolute path, so the result does not depend
    on the working directory. Files no rule applies to are never opened.
    Diagnostics keep the path as given.
    """
    file_path = Path(path)
    filename = normalize_path(file_path)
    absolute = file_path.resolve().as_posix()
    active = [rule for rule in rules if rule.applies_to(absolute)]
    if not active:
        logger.debug("No rules apply to %s", filename)
        return []

    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return [_file_error(filename, f"Could not read file: {e}")]
    return _check(source, filename, active)


def iter_python_files(paths: Iterable[str | Path]) -> Iterator[Path]:
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob("*.py")):
                if any(part in EXCLUDE_DIRS for part in candidate.parts):
                    continue
                yield candidate
        else:
            yield path


def lint_paths(paths: Iterable[str | Path], rules: Sequence[Rule]) -> List[Diagnostic]:
    """Lint every Python file under ``paths``."""
    diagnostics: List[Diagnostic] = []
    checked = 0
    for file_path in iter_python_files(paths):
        diagnostics.extend(lint_file(file_path, rules))
        checked += 1

    logger.debug("Checked %d files, %d diagnostics", checked, len(diagnostics))
    return diagnostics
