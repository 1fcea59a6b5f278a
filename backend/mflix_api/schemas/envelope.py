"""
Mflix API — Response Envelope
==============================

What:  The `{status, message, data | error | errors}` body every endpoint returns.
How:   `envelope_response()` builds a JSONResponse whose HTTP status always
       equals the body's `status`; fields that do not apply are omitted.
       The pydantic models below document the same shape in OpenAPI.

Examples:
    {"status": 200, "data": [...]}
    {"status": 201, "message": "Movie created successfully", "data": {"acknowledged": true, "insertedId": "..."}}
    {"status": 404, "message": "Movie not found", "error": "No movie found with the given ID"}
    {"status": 400, "message": "Validation error", "errors": [{"code": "missing", "path": ["title"], "message": "Field required"}]}
"""

from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mflix_api.exceptions import ValidationError
from mflix_api.schemas.common import serialize_document

ModelT = TypeVar("ModelT", bound=BaseModel)


class ErrorItem(BaseModel):
    """One failed field from schema validation."""
    code: str = Field(description="Machine-readable error type (e.g. 'missing', 'int_parsing')")
    path: List[Union[str, int]] = Field(description="Location of the field inside the body")
    message: str = Field(description="Human-readable explanation")


class Envelope(BaseModel):
    """
    What:  Uniform response body for every route.
    Who:   Declared as `response_model` on routes for OpenAPI docs.
    """
    status: int = Field(description="Mirrors the HTTP status code")
    message: Optional[str] = Field(default=None, description="Outcome description")
    data: Optional[Any] = Field(default=None, description="Payload of successful reads and creates")
    error: Optional[str] = Field(default=None, description="Error detail")
    errors: Optional[List[ErrorItem]] = Field(default=None, description="Schema validation failures")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Convert pydantic error dicts into envelope error items.

    FastAPI prefixes body locations with "body"; that prefix is dropped so
    `path` points inside the submitted document.
    """
    items = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        items.append({
            "code": err.get("type", "value_error"),
            "path": loc,
            "message": err.get("msg", "Invalid value"),
        })
    return items


def validate_body(model: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a raw request body after other checks have run.

    Raises:
        ValidationError: one error item per bad field (→ 400 "Validation error")
    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(errors=format_validation_errors(e.errors()))


def envelope_response(
    status_code: int,
    *,
    message: Optional[str] = None,
    data: Any = None,
    error: Optional[str] = None,
    errors: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the envelope JSONResponse; `data` is passed through serialize_document."""
    content: Dict[str, Any] = {"status": status_code}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = serialize_document(data)
    if error is not None:
        content["error"] = error
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)
