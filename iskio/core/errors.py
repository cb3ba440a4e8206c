DEFAULT_REQUEST_ERROR = "Error en la solicitud"


class IskioError(Exception):
    """Base class for every error surfaced to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(IskioError):
    """Non-2xx response or transport failure.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message or DEFAULT_REQUEST_ERROR)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class FormValidationError(IskioError):
    """Client-side check failed before any request was sent."""


def error_message(exc: BaseException, fallback: str) -> str:
    """Displayable message for any error raised by a form action."""
    if isinstance(exc, IskioError):
        return exc.message
    return fallback
