"""Enveloppe JSON commune {success, message, data?, meta?}."""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str = "OK", meta: Optional[dict] = None) -> dict:
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body


def error_response(message: str, meta: Optional[dict] = None) -> dict:
    body = {"success": False, "message": message}
    if meta is not None:
        body["meta"] = meta
    return body


def envelope(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
