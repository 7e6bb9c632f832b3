from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledgerdash.api.envelope import EnvelopeError, format_response
from ledgerdash.errors import InvalidArgument


async def _envelope_error(request: Request, exc: EnvelopeError) -> JSONResponse:
    return format_response(exc.status_code, exc.message, exc.result)


async def _invalid_argument(request: Request, exc: InvalidArgument) -> JSONResponse:
    return format_response(400, str(exc), None)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EnvelopeError, _envelope_error)
    app.add_exception_handler(InvalidArgument, _invalid_argument)
