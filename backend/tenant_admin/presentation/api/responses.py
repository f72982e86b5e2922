"""Response envelope: ``{success, data?, message?, error?}`` plus ``pagination`` on lists."""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(
    data: Any = None,
    *,
    message: str | None = None,
    success: bool = True,
    status_code: int = status.HTTP_200_OK,
    **extra: Any,
) -> JSONResponse:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def error_envelope(
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
) -> JSONResponse:
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, "error": error}),
    )
