# exception taxonomy shared by the executor, the facades and the configuration
# every error raised by the SDK derives from SdkError so callers can catch one type
# ArgumentNullError must not subclass ValueError, pydantic validators would wrap it in a ValidationError

from typing import Any, Optional


class SdkError(Exception):
    pass


class ArgumentNullError(SdkError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ArgumentNullException: {name} is null or empty")


class InvalidArgumentError(SdkError, ValueError):
    pass


class TransportError(SdkError):
    # connection failures, timeouts, aborts and HTTP errors without a structured body
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ApiError(SdkError):
    """
    Raised when the server answered with a structured error body, e.g. {"error": "model not found"}.
    Only the value of the `error` field is kept; the rest of the envelope is discarded.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(error if isinstance(error, str) else repr(error))


def require(value: Any, name: str) -> Any:
    # None and empty strings count as missing; an empty dict is a valid (if pointless) payload
    if value is None or (isinstance(value, (str, bytes)) and not value):
        raise ArgumentNullError(name)
    return value
