"""Portal error taxonomy, rendered as RFC 7807 ``application/problem+json``.

Every error body carries ``type``, ``title``, ``status``, ``detail`` and
``instance``. Field-level problems go under ``errors``. Error-specific
numbers (e.g. ``available`` / ``requested`` for a leave balance) are added
as top-level extension members.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://portal.example.com/errors"
PROBLEM_JSON = "application/problem+json"

# Leading segment FastAPI puts on every validation error location
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for every portal error; the handler turns it into a problem body."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
        extensions: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        self.extensions = extensions or {}
        super().__init__(detail)


class NotFoundException(AppException):
    """404 — employee, payslip or other record does not exist."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class ValidationException(AppException):
    """422 — request is well-formed but breaks a business rule."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="validation-error",
            title="Validation Error",
            detail="One or more fields failed validation.",
            errors=errors,
        )


class InvalidLeaveTypeException(AppException):
    def __init__(self, leave_type: Any) -> None:
        self.leave_type = leave_type
        super().__init__(
            status_code=422,
            error_type="invalid-leave-type",
            title="Invalid Leave Type",
            detail=f"Invalid leave type: {leave_type}",
            errors={"leave_type": [f"'{leave_type}' is not a recognised leave type."]},
        )


class InsufficientBalanceException(AppException):
    """422 — requested days exceed the remaining balance for the year."""

    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            status_code=422,
            error_type="insufficient-balance",
            title="Insufficient Leave Balance",
            detail=(
                f"Insufficient leave balance. Available: {available} days, "
                f"Requested: {requested} days"
            ),
            extensions={"available": available, "requested": requested},
        )


# ── Problem body ────────────────────────────────────────────────────

def problem_body(
    request: Request,
    *,
    status: int,
    error_type: str,
    title: str,
    detail: str,
    errors: Optional[dict[str, Any]] = None,
    extensions: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{error_type}",
        "title": title,
        "status": status,
        "detail": detail,
        "instance": str(request.url.path),
    }
    if extensions:
        body.update(extensions)
    if errors:
        body["errors"] = errors
    return body


def _field_name(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "unknown"


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=problem_body(
            request,
            status=exc.status_code,
            error_type=exc.error_type,
            title=exc.title,
            detail=exc.detail,
            errors=exc.errors,
            extensions=exc.extensions,
        ),
        media_type=PROBLEM_JSON,
    )


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field_errors.setdefault(_field_name(err.get("loc", ())), []).append(
            err.get("msg", "Invalid value")
        )

    return JSONResponse(
        status_code=422,
        content=problem_body(
            request,
            status=422,
            error_type="validation-error",
            title="Validation Error",
            detail="Request validation failed.",
            errors=field_errors,
        ),
        media_type=PROBLEM_JSON,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the problem-detail handlers (called from ``create_app``)."""
    app.add_exception_handler(AppException, _handle_app_exception)          # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
