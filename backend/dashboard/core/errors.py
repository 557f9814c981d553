from typing import Any

from fastapi import status


class AppError(Exception):
    """Base of every error that is mapped to a JSON error response."""

    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class Unauthenticated(AppError):
    code = "UNAUTHENTICATED"
    message = "Not authenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    code = "FORBIDDEN"
    message = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    message = "Validation error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AppError):
    code = "CONFLICT"
    message = "Resource conflict"
    status_code = status.HTTP_409_CONFLICT


class StoreError(AppError):
    code = "STORE_ERROR"
    message = "Internal error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


ERROR_CODE_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ValidationError.code,
    status.HTTP_401_UNAUTHORIZED: Unauthenticated.code,
    status.HTTP_403_FORBIDDEN: Forbidden.code,
    status.HTTP_404_NOT_FOUND: NotFound.code,
    status.HTTP_409_CONFLICT: Conflict.code,
}


def error_payload(code: str, message: str, details: Any | None = None) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}


def resolve_error_code(status_code: int) -> str:
    if status_code in ERROR_CODE_BY_STATUS:
        return ERROR_CODE_BY_STATUS[status_code]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return StoreError.code
    return "UNKNOWN_ERROR"


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs.

    The leading location segment (``body`` / ``query`` / ``header``) is dropped so
    ``("body", "name")`` is reported as ``name``.
    """
    out = []
    for err in errors:
        loc = list(err.get("loc") or ())
        if loc and loc[0] in {"body", "query", "header", "path", "cookie"}:
            loc = loc[1:]
        out.append({"field": ".".join(str(p) for p in loc), "message": str(err.get("msg", "Invalid value"))})
    return out
