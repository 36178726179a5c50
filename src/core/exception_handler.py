"""
Global exception handler for the Drug Supply Chain API.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .exceptions import (
    DrugAlreadyExistsException,
    DrugNotFoundException,
    EncodingException,
    InvalidStateException,
    StoreException,
    UnauthorizedException,
    ValidationException,
    WriteConflictException
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    
    @app.exception_handler(DrugNotFoundException)
    async def handle_not_found(request: Request, exc: DrugNotFoundException):
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "message": exc.message}
        )
    
    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation Error", "message": exc.message}
        )
    
    @app.exception_handler(UnauthorizedException)
    async def handle_unauthorized(request: Request, exc: UnauthorizedException):
        return JSONResponse(
            status_code=403,
            content={"error": "Unauthorized", "message": exc.message}
        )
    
    @app.exception_handler(DrugAlreadyExistsException)
    async def handle_already_exists(request: Request, exc: DrugAlreadyExistsException):
        return JSONResponse(
            status_code=409,
            content={"error": "Already Exists", "message": exc.message}
        )
    
    @app.exception_handler(InvalidStateException)
    async def handle_invalid_state(request: Request, exc: InvalidStateException):
        return JSONResponse(
            status_code=409,
            content={"error": "Invalid State", "message": exc.message}
        )
    
    @app.exception_handler(WriteConflictException)
    async def handle_write_conflict(request: Request, exc: WriteConflictException):
        return JSONResponse(
            status_code=409,
            content={"error": "Write Conflict", "message": exc.message, "retryable": True}
        )
    
    @app.exception_handler(StoreException)
    async def handle_store_error(request: Request, exc: StoreException):
        return JSONResponse(
            status_code=503,
            content={"error": "Store Failure", "message": exc.message, "retryable": True}
        )
    
    @app.exception_handler(EncodingException)
    async def handle_encoding_error(request: Request, exc: EncodingException):
        logger.error("Encoding failure: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Encoding Failure", "message": exc.message}
        )
    
    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
        )
