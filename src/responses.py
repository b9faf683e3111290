"""Uniform JSON envelope for every API response.

Successful responses carry ``success: true`` and a payload, failures carry
``success: false`` and a short ``error`` message.
"""

import logging
from typing import Generic, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def format_validation_error(errors: list[dict]) -> str:
    """Reduce pydantic's error list to one readable message."""
    if not errors:
        return "Invalid request"

    error = errors[0]
    fields = [
        str(part)
        for part in error.get("loc", ())
        if not (isinstance(part, str) and part in REQUEST_LOCATIONS)
    ]
    field = ".".join(fields)

    if error.get("type") == "missing":
        return f"'{field}' is required" if field else "Request body is required"

    message = error.get("msg", "Invalid value").removeprefix("Value error, ")
    return f"'{field}': {message}" if field else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else jsonable_encoder(exc.detail)
    response = error_response(str(detail), exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = format_validation_error(list(exc.errors()))
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(message, status.HTTP_400_BAD_REQUEST)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
