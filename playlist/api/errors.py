"""Map playlist domain errors onto HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from playlist.core.errors import (
    FingerprintConflict,
    InvalidInput,
    ItemNotFound,
    PlaylistError,
    PositionOutOfRange,
    StoreFailure,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: list[tuple[type[PlaylistError], int]] = [
    (FingerprintConflict, 409),
    (PositionOutOfRange, 400),
    (InvalidInput, 400),
    (ItemNotFound, 404),
    (StoreFailure, 503),
]


def error_body(code: str, message: str) -> dict:
    return {"errorCode": code, "message": message}


def status_for(error: PlaylistError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


async def handle_playlist_error(request: Request, exc: PlaylistError) -> JSONResponse:
    if isinstance(exc, FingerprintConflict):
        return JSONResponse(
            status_code=409,
            content={"errorCode": exc.code, "serverFingerprint": exc.server_fingerprint},
        )
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status, content=error_body(exc.code, str(exc)))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400, content=error_body(InvalidInput.code, details or "Invalid request")
    )


def install(app: FastAPI) -> None:
    app.add_exception_handler(PlaylistError, handle_playlist_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
