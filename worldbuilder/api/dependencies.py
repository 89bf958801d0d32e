# worldbuilder/api/dependencies.py
from typing import Any, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from worldbuilder.errors import ValidationError
from worldbuilder.schemas.base import describe_validation_error

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Dependency returning the JSON object body, or ``{}`` when the body is
    empty. Bodies are parsed by hand so that authorization can run before
    any field validation.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def parse(model: Type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model``, raising the domain 400 on failure."""
    try:
        return model.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_error(e))
