from collections.abc import Sequence
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ip_intel.logger import logger

INVALID_IP_MESSAGE = "Invalid IP address format"
MISSING_IP_MESSAGE = "The ip field is required"
BULK_SIZE_MESSAGE = "ips must contain between 1 and 10 IP address strings"


def _get_entrypoint_from_request(request: Request) -> str | None:
    """Best-effort lookup of the entrypoint key being invoked.

    The key is stored on `request.state` by the entrypoint route; requests that
    fail before reaching it (or non-entrypoint routes) yield None.
    """
    return getattr(request.state, "entrypoint", None)


def _normalize_pydantic_errors(errors: Sequence[Any]) -> list[dict[str, Any]]:
    """Make sure Pydantic error dicts are JSON-serializable."""
    normalized: list[dict[str, Any]] = []
    for error in errors:
        e = dict(error)
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            # Convert any non-serializable ctx values (e.g. exceptions) to strings.
            e["ctx"] = {k: str(v) for k, v in ctx.items()}
        normalized.append(e)
    return normalized


def _build_validation_error_payload(errors: Sequence[Any]) -> dict[str, Any]:
    """Normalize validation errors into a `{code, message}` payload.

    Internal validation details are not exposed to clients.
    """
    code = "invalid_request"
    message = "Invalid request parameters"

    for error in _normalize_pydantic_errors(errors):
        loc = error.get("loc", ())
        if len(loc) >= 1 and loc[-1] == "ip":
            code = "invalid_ip"
            message = MISSING_IP_MESSAGE if error.get("type") == "missing" else INVALID_IP_MESSAGE
            break
        if len(loc) >= 1 and loc[0] == "ips":
            message = BULK_SIZE_MESSAGE

    return {
        "code": code,
        "message": message,
    }


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle invalid entrypoint input and malformed request envelopes."""
    entrypoint = _get_entrypoint_from_request(request)
    logger.info(
        "Request validation error during request handling "
        f"path={request.url.path} method={request.method} entrypoint={entrypoint} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc.errors())
    payload["entrypoint"] = entrypoint
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response.

    This includes pydantic validation failures on provider data.
    """
    entrypoint = _get_entrypoint_from_request(request)
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method} entrypoint={entrypoint}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
        "entrypoint": entrypoint,
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
