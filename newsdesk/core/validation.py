"""Turn write payloads into validated schemas with human-readable field messages."""
import json
from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from newsdesk.core.exceptions import InvalidParameter, ValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)

Payload = Union[bytes, str, Mapping[str, Any]]


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if not isinstance(p, int)]
    return ".".join(parts) or "body"


def error_message(error: dict) -> str:
    """Render one pydantic error dict as "<field> <problem>"."""
    field = _field_name(error.get("loc") or ())
    ctx = error.get("ctx") or {}
    kind = error.get("type")
    if kind == "missing":
        return f"{field} is required"
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{field} is required"
        return f"{field} must be at least {ctx.get('min_length')} characters long"
    if kind == "greater_than":
        return f"{field} must be greater than {ctx.get('gt')}"
    if kind == "value_error" and "email" in str(error.get("msg", "")).lower():
        return f"{field} must be a valid email"
    return f"{field} is not valid"


def parse_payload(payload: Payload, stage: str) -> Mapping[str, Any]:
    """Decode a raw JSON request body. Mappings pass through unchanged."""
    if isinstance(payload, Mapping):
        return payload
    try:
        data = json.loads(payload or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise InvalidParameter("body", "Invalid request body", stage=stage)
    if not isinstance(data, dict):
        raise InvalidParameter("body", "Invalid request body", stage=stage)
    return data


def validate_payload(schema: Type[SchemaT], payload: Payload, stage: str) -> SchemaT:
    """Parse and validate payload against schema; all field errors are reported together."""
    data = parse_payload(payload, stage)
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed([error_message(err) for err in e.errors()], stage=stage)
