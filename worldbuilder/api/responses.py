# worldbuilder/api/responses.py
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(status_code: int = status.HTTP_200_OK, **payload: Any) -> JSONResponse:
    """Success envelope: ``{"ok": true, <key>: <value>, ...}``."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder({"ok": True, **payload}))


def fail(status_code: int, error: str, **extra: Any) -> JSONResponse:
    """Failure envelope: ``{"ok": false, "error": <message or code>}``."""
    return JSONResponse(status_code=status_code, content={"ok": False, "error": error, **extra})
