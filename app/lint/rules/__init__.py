"""Built-in lint rules."""

from app.lint.rules.require_body_schema import RequireBodySchemaRule

__all__ = [
    "RequireBodySchemaRule",
]
