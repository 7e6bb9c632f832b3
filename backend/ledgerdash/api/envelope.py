from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class EnvelopeError(Exception):
    """Raised by routes to answer with ``{message, result}`` and a non-2xx status."""

    def __init__(self, status_code: int, message: str, result: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.result = result


def format_response(status_code: int, message: str, result: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"message": message, "result": result}),
    )


def failure_result(exc: BaseException) -> dict[str, str]:
    return {"error": str(exc)}
