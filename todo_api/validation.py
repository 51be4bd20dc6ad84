"""
Todo API - Validated Request Gate
===================================

What:  Turns a raw request body into a payload that satisfies every declared
       field constraint, or rejects the request before any handler runs.
How:   Two steps over one pydantic pass:
       1. Parse: the bytes must be JSON with the payload's shape and types.
          Any shape/type error → MalformedBodyError (400).
       2. Validate: declared constraints (min/max length, ...). Any
          violation → ValidationFailedError (422) listing each one.
       A body with both kinds of error fails at step 1.
Who:   Every mutating route declares its payload as
       `payload: CreateTodo = Depends(ValidatedJson(CreateTodo))`.

Status codes:
    FastAPI's own body parsing answers every body problem with 422; routes
    read bodies through this gate instead so that "not the expected JSON"
    (400) and "JSON that breaks a rule" (422) stay distinct.
"""

import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from todo_api.exceptions import MalformedBodyError, ValidationFailedError

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# Pydantic error types produced by declarative constraints. Everything else
# (json_invalid, missing, string_type, bool_type, model_type, ...) is a
# shape/type error and belongs to the parse step.
CONSTRAINT_ERROR_TYPES = frozenset({
    "string_too_short",
    "string_too_long",
    "string_pattern_mismatch",
    "too_short",
    "too_long",
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "value_error",
})


def _describe(error: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a pydantic error to what is safe and useful to return."""
    return {
        "field": ".".join(str(part) for part in error["loc"]) or "body",
        "constraint": error["type"],
        "message": error["msg"],
    }


def parse_and_validate(model: Type[PayloadT], body: bytes) -> PayloadT:
    """
    Decode `body` into `model`, enforcing every field constraint.

    Raises:
        MalformedBodyError:    Not JSON, or JSON that doesn't fit the shape.
        ValidationFailedError: Well-formed, but a constraint is violated.
    """
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)

    violations: List[Dict[str, Any]] = [
        _describe(error) for error in errors if error["type"] in CONSTRAINT_ERROR_TYPES
    ]

    if len(violations) < len(errors):
        malformed = [
            _describe(error) for error in errors if error["type"] not in CONSTRAINT_ERROR_TYPES
        ]
        logger.debug("Malformed %s body: %s", model.__name__, malformed)
        raise MalformedBodyError(
            message=f"Request body is not a valid {model.__name__} JSON object",
            errors=malformed,
        )

    logger.debug("%s failed validation: %s", model.__name__, violations)
    raise ValidationFailedError(violations=violations)


class ValidatedJson(Generic[PayloadT]):
    """
    FastAPI dependency that reads the request body through the gate.

    Example:
        @router.post("/todos")
        async def create_todo(
            payload: CreateTodo = Depends(ValidatedJson(CreateTodo)),
        ): ...
    """

    def __init__(self, model: Type[PayloadT]):
        self.model = model

    async def __call__(self, request: Request) -> PayloadT:
        body = await request.body()
        return parse_and_validate(self.model, body)
