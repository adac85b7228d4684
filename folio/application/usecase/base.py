"""Shared request/response helpers for use cases."""

from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from folio.domain.error import ValidationError

M = TypeVar("M", bound=BaseModel)


class ApiModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def validate_payload(model: type[M], payload: Any) -> M:
    """Validate an untrusted JSON payload into an input model.

    Args:
        model: Input model class
        payload: Decoded request body

    Returns:
        Validated model instance

    Raises:
        ValidationError: With messages grouped per field
    """
    if not isinstance(payload, dict):
        payload = {}

    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        issues: dict[str, list[str]] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "body"
            issues.setdefault(field, []).append(error["msg"])
        raise ValidationError(issues) from e
