from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body shared by the proxy endpoints, e.g.
    {"error": "not_found", "message": "Session 3f2a... not found",
     "code": 404, "details": {"session_id": "3f2a..."}}
    """

    error: str = Field(..., description="Machine-readable error type")
    message: str = Field(..., description="Human-readable error message")
    code: int = Field(..., description="HTTP status code for this error")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Optional structured error details"
    )


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Top-level error body, used by the domain exception handlers."""
    body = ErrorResponse(error=error, message=message, code=status_code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def not_found(message: str, *, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    """Error body nested under "detail", for lookups done inside a route."""
    body = ErrorResponse(
        error="not_found",
        message=message,
        code=status.HTTP_404_NOT_FOUND,
        details=details,
    )
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=body.model_dump())


def service_unavailable(message: str) -> HTTPException:
    body = ErrorResponse(
        error="service_unavailable",
        message=message,
        code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=body.model_dump()
    )


__all__ = ["ErrorResponse", "error_response", "not_found", "service_unavailable"]
