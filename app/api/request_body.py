"""Reading JSON request bodies for route handlers."""

import json
from typing import Any

from fastapi import Request

from app.utils.exceptions import ValidationError


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Raises:
        ValidationError: If the body is empty or not valid JSON
    """
    raw = await request.body()
    if not raw:
        raise ValidationError("Request body is required")
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Request body is not valid JSON: {str(e)}") from e
