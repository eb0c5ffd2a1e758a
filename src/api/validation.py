"""Parsing of untyped request input into typed values.

Every parser either returns a typed value or raises
domain.model.errors.ValidationError naming the offending field.
"""

import re
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from api.models import CreateUserDto
from domain.model.errors import ValidationError

_UUID_V4 = re.compile(
    r'[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}',
    re.IGNORECASE,
)


def parse_identifier(raw: Any) -> UUID:
    """Parse a path identifier in canonical UUID v4 form."""
    if not isinstance(raw, str) or not _UUID_V4.fullmatch(raw):
        raise ValidationError("Invalid id: must be a UUID v4", field='id')
    return UUID(raw)


def format_pydantic_errors(exc, source_prefixed: bool = False) -> list[dict]:
    """Flatten pydantic errors into [{field, type, message}, ...].

    Works on pydantic's ValidationError and FastAPI's RequestValidationError.
    The latter prefixes every location with the request part ('body',
    'path', ...); ``source_prefixed`` drops that prefix. A JSON decode
    failure is reported against the whole payload (field None).
    """
    errors = []
    for error in exc.errors():
        loc = tuple(error.get('loc', ()))
        if source_prefixed:
            loc = loc[1:]
        if error.get('type') == 'json_invalid':
            loc = ()
        field_path = ".".join(str(part) for part in loc if part is not None)
        errors.append({
            "field": field_path or None,
            "type": error.get('type', 'value_error'),
            "message": error.get('msg', ''),
        })
    return errors


def to_validation_error(errors: list[dict]) -> ValidationError:
    """Build the domain ValidationError for flattened errors, naming the first field."""
    first = errors[0] if errors else {"field": None, "type": "value_error", "message": ""}
    if first['type'] == 'json_invalid':
        message = "Invalid request body: malformed JSON"
    elif first['field'] is None:
        message = "Invalid request body: expected a JSON object"
    else:
        message = f"Invalid {first['field']}: {first['message']}"
    return ValidationError(message, field=first['field'], errors=errors)


def parse_create_user_input(raw: Any) -> CreateUserDto:
    """Parse a request body into CreateUserDto.

    Raises:
        ValidationError: body is not an object, or email/password is
            missing or malformed
    """
    try:
        return CreateUserDto.model_validate(raw)
    except PydanticValidationError as e:
        raise to_validation_error(format_pydantic_errors(e)) from e
