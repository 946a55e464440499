"""JSON envelope shared by every response the service sends.

Successful calls answer ``{"status": "success", "data": {"message": ...}}`` and
failures use the same shape with ``"status": "error"``, so clients only ever
parse one body format.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

STATUS_SUCCESS = 'success'
STATUS_ERROR = 'error'

INVALID_PAYLOAD_MESSAGE = 'Invalid request payload'
MISSING_FIELDS_MESSAGE = 'Missing required fields'
INTERNAL_ERROR_MESSAGE = 'Internal server error'

_MISSING_FIELD_ERROR_TYPES = {'missing', 'string_too_short'}


class EnvelopeData(BaseModel):
    message: str


class EnvelopeResponse(BaseModel):
    status: str
    data: EnvelopeData


def success_envelope(message: str) -> dict:
    return {'status': STATUS_SUCCESS, 'data': {'message': message}}


def error_envelope(message: str) -> dict:
    return {'status': STATUS_ERROR, 'data': {'message': message}}


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(message), headers=headers)


def validation_error_message(errors: list[dict]) -> str:
    error_types = {error.get('type') for error in errors}
    if error_types and error_types <= _MISSING_FIELD_ERROR_TYPES:
        return MISSING_FIELDS_MESSAGE
    return INVALID_PAYLOAD_MESSAGE


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, validation_error_message(exc.errors()))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error while serving %s %s', request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
