"""Base class for request body schemas used by the API route modules."""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

SchemaT = TypeVar("SchemaT", bound="RequestSchema")


class SchemaError:
    """Validation failure returned by ``safeParse``."""

    def __init__(self, exc: ValidationError) -> None:
        self.exc = exc

    @property
    def errors(self) -> List[Dict[str, Any]]:
        return self.exc.errors(include_url=False)

    def format(self) -> Dict[str, List[str]]:
        """Field path -> messages, e.g. ``{"logId": ["Field required"]}``."""
        return format_validation_error(self.exc)


@dataclass
class ParseResult(Generic[SchemaT]):
    success: bool
    data: Optional[SchemaT] = None
    error: Optional[SchemaError] = None


def format_validation_error(exc: ValidationError) -> Dict[str, List[str]]:
    formatted: Dict[str, List[str]] = {}
    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error["loc"]) or "_root"
        formatted.setdefault(field, []).append(error["msg"])
    return formatted


class RequestSchema(BaseModel):
    """
    Request body schema.

    ``parse`` raises ``pydantic.ValidationError`` on bad input; the app maps
    that to a 400 with field-level detail. ``safeParse`` never raises and lets
    the handler shape its own error response.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @classmethod
    def parse(cls: Type[SchemaT], data: Any) -> SchemaT:
        return cls.model_validate(data)

    @classmethod
    def safeParse(cls: Type[SchemaT], data: Any) -> ParseResult[SchemaT]:
        try:
            return ParseResult(success=True, data=cls.model_validate(data))
        except ValidationError as e:
            return ParseResult(success=False, error=SchemaError(e))
