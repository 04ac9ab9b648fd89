"""
Request body validation returning typed results instead of raising
"""

import json
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> List[dict]:
        return [error.as_dict() for error in self.errors]


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


def field_errors_from(exc: ValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(FieldError(field=loc, message=_clean_message(error["msg"])))
    return errors


def validate_payload(model: Type[T], data: Any) -> ValidationResult[T]:
    """
    Validate a decoded request body against a schema

    Returns a result holding either the parsed model or the field errors.
    """
    if data is None:
        data = {}
    try:
        return ValidationResult(value=model.model_validate(data))
    except ValidationError as exc:
        return ValidationResult(errors=field_errors_from(exc))


def validate_json(model: Type[T], raw: Optional[str], field_name: str = "body") -> ValidationResult[T]:
    """Decode a JSON string (e.g. a multipart form field) and validate it"""
    if raw is None or not raw.strip():
        return ValidationResult(errors=[FieldError(field=field_name, message=f"{field_name} is required")])
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return ValidationResult(errors=[FieldError(field=field_name, message=f"{field_name} must be valid JSON")])
    if not isinstance(data, dict):
        return ValidationResult(errors=[FieldError(field=field_name, message=f"{field_name} must be a JSON object")])
    return validate_payload(model, data)
