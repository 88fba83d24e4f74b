"""Exception handlers translating domain errors into HTTP responses.

    ReservationConflict → 409 (with the unavailable listing ids)
    IllegalTransition   → 409
    ValidationError     → 400
    ObjectNotFoundError → 404 (orders, listings, proofs)
    Forbidden           → 403
    StorageFault        → 503 (retryable)
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.exceptions import Forbidden, IllegalTransition, ReservationConflict, StorageFault

logger = structlog.get_logger(__name__)


def _problem(status_code: int, error_code: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, **extra},
    )


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(messages)


async def reservation_conflict_handler(request: Request, exc: ReservationConflict) -> JSONResponse:
    return _problem(
        409,
        "reservation_conflict",
        "Some listings are no longer available",
        unavailable=exc.listing_ids,
    )


async def illegal_transition_handler(request: Request, exc: IllegalTransition) -> JSONResponse:
    return _problem(409, "illegal_transition", _first_message(exc.messages), errors=exc.messages)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _problem(400, "validation_error", _first_message(exc.messages), errors=exc.messages)


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # Protean carries the lookup detail in args, a dict for store lookups and a string for repositories
    detail = exc.args[0] if exc.args else str(exc)
    return _problem(404, "not_found", _first_message(detail))


async def forbidden_handler(request: Request, exc: Forbidden) -> JSONResponse:
    return _problem(403, "forbidden", exc.message)


async def storage_fault_handler(request: Request, exc: StorageFault) -> JSONResponse:
    logger.error("Storage fault", path=request.url.path, method=request.method, error=exc.message)
    return _problem(503, "storage_fault", exc.message, retryable=True)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReservationConflict, reservation_conflict_handler)
    app.add_exception_handler(IllegalTransition, illegal_transition_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(Forbidden, forbidden_handler)
    app.add_exception_handler(StorageFault, storage_fault_handler)
