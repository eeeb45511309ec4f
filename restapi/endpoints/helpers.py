"""Shared dependencies and error translation for the endpoints."""

from datetime import date

from fastapi import HTTPException, status

from components.core import schemas
from components.core.errors import (
    BillingError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


def get_today() -> date:
    """Current local date; overridden in tests to pin the calendar."""
    return date.today()


def to_http_exception(exc: BillingError) -> HTTPException:
    """Map a domain error to the HTTP error returned to the caller."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=schemas.ErrorDetail(message=exc.message, field=exc.field).model_dump(),
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=schemas.ErrorDetail(message=str(exc)).model_dump(),
        )
    if isinstance(exc, ConflictError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=schemas.ErrorDetail(message=str(exc)).model_dump(),
        )
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=schemas.ErrorDetail(message="Storage error").model_dump(),
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=schemas.ErrorDetail(message=str(exc)).model_dump(),
    )
