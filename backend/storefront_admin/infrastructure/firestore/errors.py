"""Map google-api-core exceptions to table failures and domain errors."""

from contextlib import contextmanager

from google.api_core import exceptions as google_exceptions

from storefront_admin.domain.entities import ErrorKind, FetchFailure
from storefront_admin.domain.exceptions import BackendRequestError

BACKEND_NAME = "firestore"

_TRANSIENT = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
    google_exceptions.TooManyRequests,
    google_exceptions.Aborted,
    google_exceptions.RetryError,
)


def _message(exc: google_exceptions.GoogleAPIError) -> str:
    return getattr(exc, "message", None) or str(exc)


def failure_from_google_error(exc: google_exceptions.GoogleAPIError, collection: str) -> FetchFailure:
    if isinstance(exc, google_exceptions.FailedPrecondition):
        return FetchFailure(
            error=(
                f"Firestore needs a composite index for this query on '{collection}'. "
                f"Create it from the link in the server log, then retry. ({_message(exc)})"
            ),
            kind=ErrorKind.BACKEND,
        )
    if isinstance(exc, _TRANSIENT):
        return FetchFailure(
            error=f"Firestore is temporarily unavailable: {_message(exc)}",
            kind=ErrorKind.TRANSIENT,
        )
    return FetchFailure(error=f"Firestore rejected the query: {_message(exc)}", kind=ErrorKind.BACKEND)


def backend_error(exc: google_exceptions.GoogleAPIError) -> BackendRequestError:
    """Wrap a google error for single-entity operations."""
    code = getattr(exc, "code", None)
    return BackendRequestError(
        BACKEND_NAME,
        _message(exc),
        status_code=code if isinstance(code, int) else None,
        retryable=isinstance(exc, _TRANSIENT),
    )


@contextmanager
def translate_google_errors():
    """Re-raise google errors from single-entity calls as BackendRequestError."""
    try:
        yield
    except google_exceptions.GoogleAPIError as exc:
        raise backend_error(exc) from exc
