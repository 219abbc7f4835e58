"""Map domain exceptions to HTTP responses.

Every error body has the shape ``{"error": messages}`` where ``messages`` is
the exception's ``{field: [message]}`` dict.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, TransactionError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from academy.errors import ConflictError, ForbiddenError, is_unique_violation

logger = structlog.get_logger(__name__)

STATUS_CODES = {
    ObjectNotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
    ForbiddenError: 403,
}


def _messages(exc):
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return messages
    return {"_entity": [str(messages or exc)]}


def _handler(status_code):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        logger.info(
            "Request rejected",
            path=request.url.path,
            status_code=status_code,
            error=type(exc).__name__,
        )
        return JSONResponse(status_code=status_code, content={"error": _messages(exc)})

    return handle


async def _transaction_failed(request: Request, exc: TransactionError) -> JSONResponse:
    if is_unique_violation(exc):
        logger.info("Request rejected", path=request.url.path, status_code=409, error="UniqueViolation")
        return JSONResponse(status_code=409, content={"error": {"_entity": ["This record already exists."]}})

    logger.error("Commit failed", path=request.url.path, error=str(exc), extra_info=exc.extra_info)
    return JSONResponse(status_code=500, content={"error": {"_entity": ["The change could not be saved."]}})


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's default handlers, then the academy error mapping.

    Starlette resolves handlers along the exception's MRO, so the entries for
    ``ConflictError`` and ``ForbiddenError`` win over the generic
    ``InvalidOperationError`` handler. A commit rejected by a unique index
    is a 409.
    """
    register_exception_handlers(app)
    for exc_class, status_code in STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler(status_code))
    app.add_exception_handler(TransactionError, _transaction_failed)
