"""
Response envelopes shared by all routers.

Successful responses are {"result": "success", "data": ...}; failures are
{"result": "error", "message": ...} with an optional "errors" list.
"""

from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

INTERNAL_SERVER_ERROR = "Internal server error"
VALIDATION_ERROR = "Validation error"


def error_response(
    status_code: int, message: str, errors: Optional[List[dict]] = None
) -> JSONResponse:
    content: dict[str, Any] = {"result": "error", "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def format_validation_errors(raw_errors) -> List[dict]:
    """
    Flatten pydantic errors into one entry per violated field/constraint.

    The leading "body" location segment is dropped so paths name payload
    fields directly (e.g. ["description"]).
    """
    errors = []
    for error in raw_errors:
        path = [part for part in error.get("loc", ()) if part != "body"]
        errors.append(
            {
                "path": path,
                "field": ".".join(str(part) for part in path) or None,
                "message": error.get("msg", "Invalid value"),
                "code": error.get("type", "value_error"),
            }
        )
    return jsonable_encoder(errors)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return request validation failures as 400 with per-field detail."""
    return error_response(
        400, VALIDATION_ERROR, errors=format_validation_errors(exc.errors())
    )
