"""Shared helpers for payload validation."""
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from paykit.exceptions import InvalidInput

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class CamelPayload(BaseModel):
    """Base payload using camelCase keys on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def error_details(exc: ValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into field/message pairs."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def validate_payload(schema: type[PayloadT], data: Any, entity: str) -> PayloadT:
    """
    Validate a serialized mapping against a payload schema.

    Args:
        schema: Payload class to validate with
        data: Incoming mapping
        entity: Entity name used in error messages

    Returns:
        Validated payload

    Raises:
        InvalidInput: If data is not a mapping or fails validation
    """
    if not isinstance(data, Mapping):
        raise InvalidInput(f"{entity} data must be a mapping, got {type(data).__name__}")

    try:
        return schema.model_validate(dict(data))
    except ValidationError as e:
        details = error_details(e)
        first = details[0] if details else {"field": "", "message": str(e)}
        raise InvalidInput(
            f"Invalid {entity} {first['field']}: {first['message']}",
            metadata={"details": details},
        ) from e
