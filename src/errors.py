"""API error taxonomy and its translation into HTTP responses.

Handlers raise these exceptions; the application turns them into JSON
bodies carrying a ``message`` key plus any extra detail.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message, **self.detail}


class InvalidInputError(ApiError):
    """The request body failed field-level validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Invalid input", errors=errors)
        self.errors = errors


class InvalidIdError(ApiError):
    """The path id is not a positive integer."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Invalid id")


class InvalidBodyError(ApiError):
    """The request body could not be decoded as JSON."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Invalid JSON body")


class ProductNotFoundError(ApiError):
    """No product with the requested id exists."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, product_id: int) -> None:
        super().__init__("Product not found")
        self.product_id = product_id


class StorageError(ApiError):
    """Reading or writing the backing file failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: OSError) -> None:
        super().__init__(message, error=str(error))


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the ``ApiError`` handler to the application."""

    app.add_exception_handler(ApiError, _handle_api_error)
