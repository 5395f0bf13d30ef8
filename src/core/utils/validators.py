"""Request validation utilities."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(
    errors: Sequence[Mapping[str, Any]],
) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses and logs.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field_name = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "valid number" in msg_lower:
            msg = "Must be a number"

        sanitized.append(
            {
                "field": field_name,
                "message": msg,
            }
        )

    return sanitized


@dataclass(frozen=True)
class ParseResult(Generic[ModelT]):
    """Outcome of parsing untrusted input into a model.

    Exactly one of ``value`` and ``errors`` is meaningful: ``value`` when
    ``success`` is true, ``errors`` otherwise.
    """

    success: bool
    value: ModelT | None = None
    errors: list[dict[str, str]] = field(default_factory=list)


def validate_request(model: type[ModelT], data: Mapping[str, Any]) -> ParseResult[ModelT]:
    """Validate request data against a Pydantic model without raising.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        A successful ParseResult holding the model, or a failed one holding
        sanitized error details
    """
    try:
        return ParseResult(success=True, value=model.model_validate(dict(data)))
    except ValidationError as exc:
        return ParseResult(
            success=False,
            errors=sanitize_validation_errors(exc.errors()),
        )
