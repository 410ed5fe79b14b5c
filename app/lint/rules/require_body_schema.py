"""require-body-schema: body-carrying route handlers need a schema and validation.

In an API route module every module-level handler named after a body-carrying
HTTP method (POST, PUT, PATCH, DELETE) must have a matching ``<Method>Schema``
binding in the same file, and the file must call ``.parse()`` or
``.safeParse()`` at least once.

Matching is by name only. A schema bound anywhere in the file counts, even
inside a block or a function, and any ``.parse()``/``.safeParse()`` call counts
regardless of its receiver. Only handlers defined directly in the module body
are treated as exported; handlers created any other way are not seen.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping

from app.lint.engine import Rule, RuleContext, RuleVisitor, register

ROUTE_DIR_SEGMENT = "/api/"
ROUTE_FILE_SUFFIX = "route.py"

# GET and HEAD carry no body and are never required to declare a schema.
BODY_METHODS = ("POST", "PUT", "PATCH", "DELETE")
SCHEMA_NAMES: Mapping[str, str] = MappingProxyType(
    {method: f"{method.title()}Schema" for method in BODY_METHODS}
)
VALIDATION_METHODS = frozenset({"parse", "safeParse"})

MISSING_SCHEMA_MESSAGE = "API route with {method} method must define a {schema}"
MISSING_VALIDATION_MESSAGE = "Schema validation must be performed using .parse() or .safeParse()"


@dataclass
class MethodRequirement:
    method: str
    required: bool = False
    found: bool = False

    @property
    def expected_schema_name(self) -> str:
        return SCHEMA_NAMES[self.method]


@dataclass
class ScanState:
    requirements: List[MethodRequirement] = field(
        default_factory=lambda: [MethodRequirement(method) for method in BODY_METHODS]
    )
    has_validation_usage: bool = False

    def requirement_for_method(self, method: str) -> MethodRequirement | None:
        for requirement in self.requirements:
            if requirement.method == method:
                return requirement
        return None

    def mark_schema(self, name: str) -> None:
        for requirement in self.requirements:
            if requirement.expected_schema_name == name:
                requirement.found = True

    @property
    def has_any_required_schema(self) -> bool:
        return any(requirement.required for requirement in self.requirements)


def is_route_file(path: str) -> bool:
    """Return True for ``route.py`` modules below an ``api`` directory."""
    return ROUTE_DIR_SEGMENT in path and path.endswith(ROUTE_FILE_SUFFIX)


class RequireBodySchemaVisitor(RuleVisitor):
    def __init__(self, context: RuleContext) -> None:
        super().__init__(context)
        self.state = ScanState()

    # Declarations

    def _bind(self, target: ast.expr) -> None:
        if isinstance(target, ast.Name):
            self.state.mark_schema(target.id)

    def visit_Assign(self, node: ast.Assign) -> None:
        for target in node.targets:
            self._bind(target)
        self.generic_visit(node)

    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        self._bind(node.target)
        self.generic_visit(node)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self.state.mark_schema(node.name)
        self.generic_visit(node)

    # Exported handlers

    def visit_Module(self, node: ast.Module) -> None:
        for statement in node.body:
            if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
                requirement = self.state.requirement_for_method(statement.name)
                if requirement is not None:
                    requirement.required = True
        self.generic_visit(node)

    # Validation calls

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if isinstance(func, ast.Attribute) and func.attr in VALIDATION_METHODS:
            self.state.has_validation_usage = True
        self.generic_visit(node)

    def finish(self, module: ast.Module) -> None:
        for requirement in self.state.requirements:
            if requirement.required and not requirement.found:
                self.context.report(
                    module,
                    MISSING_SCHEMA_MESSAGE.format(
                        method=requirement.method,
                        schema=requirement.expected_schema_name,
                    ),
                )

        if self.state.has_any_required_schema and not self.state.has_validation_usage:
            self.context.report(module, MISSING_VALIDATION_MESSAGE)


@register
class RequireBodySchemaRule(Rule):
    name = "require-body-schema"
    description = "Require method-specific schemas and proper validation in API routes"

    def applies_to(self, path: str) -> bool:
        return is_route_file(path)

    def create(self, context: RuleContext) -> RequireBodySchemaVisitor:
        return RequireBodySchemaVisitor(context)
