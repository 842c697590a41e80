"""Translation of domain errors to HTTP errors."""

import logfire
from fastapi import HTTPException, status

from agora.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error returned to clients.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(error, NotFoundError):
        logfire.warn("Resource not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, (ValidationError, BusinessRuleViolationError)):
        logfire.warn("Request rejected", error=str(error), kind=type(error).__name__)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )

    logfire.error("Unhandled domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )


def authentication_required(action: str) -> HTTPException:
    """401 for a write route called without a valid token."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Authentication required to {action}",
    )
