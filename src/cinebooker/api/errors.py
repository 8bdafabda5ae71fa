"""Mapping of domain exceptions to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cinebooker.exceptions import (
    GatewayError,
    NotFoundError,
    SeatUnavailableError,
    SelectionError,
    StateConflictError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 5
GATEWAY_FAILURE_MESSAGE = "Something went wrong. Please try again."


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def state_conflict_handler(request: Request, exc: StateConflictError) -> JSONResponse:
    content: dict = {"detail": str(exc)}
    if isinstance(exc, SeatUnavailableError):
        content["seats"] = exc.seats
    return JSONResponse(status_code=409, content=content)


async def selection_handler(request: Request, exc: SelectionError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def gateway_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error(f"Gateway failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": GATEWAY_FAILURE_MESSAGE},
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain exception handlers on an app (also used by test apps)."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StateConflictError, state_conflict_handler)
    app.add_exception_handler(SelectionError, selection_handler)
    app.add_exception_handler(GatewayError, gateway_handler)
