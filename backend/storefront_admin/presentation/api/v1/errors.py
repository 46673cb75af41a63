"""Map backend failures of single-entity calls to HTTP errors."""

from fastapi import HTTPException, status

from storefront_admin.domain.exceptions import BackendRequestError, ConfigurationError


def backend_http_exception(exc: ConfigurationError | BackendRequestError) -> HTTPException:
    if isinstance(exc, ConfigurationError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    if exc.retryable:
        return HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
