from typing import Any, Optional


class UnifiControllerError(Exception):
    """Base exception for UnifiController errors."""

    pass


class UnifiAPIError(UnifiControllerError):
    """Raised when a request to the UniFi Controller fails."""

    pass


class UnifiContentTypeError(UnifiAPIError):
    """Raised when the controller responds with a non-JSON content type."""

    def __init__(self, content_type: str):
        super().__init__(
            f'expected content type "application/json", received "{content_type}"'
        )
        self.content_type = content_type


class UnifiStatusError(UnifiAPIError):
    """Raised when the controller responds with a non-success HTTP status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        message = f"unexpected HTTP status code: {status_code}"
        if url:
            message += f" ({url})"
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnifiEnvelopeError(UnifiAPIError):
    """Raised when the outer ``{"data": [...]}`` envelope cannot be decoded."""

    pass


class UnifiAuthenticationError(UnifiAPIError):
    """Raised when the UniFi Controller rejects the submitted credentials."""

    pass


class UnifiDataError(UnifiControllerError):
    """Raised when there is an error decoding data from the UniFi Controller."""

    pass


class UnifiSyntaxError(UnifiDataError):
    """
    Raised when a wire payload is not well-formed JSON.

    The parser's diagnostic is kept as-is in ``msg``, ``lineno``, ``colno``
    and ``pos``.
    """

    def __init__(self, msg: str, lineno: int = 0, colno: int = 0, pos: int = 0):
        super().__init__(f"{msg}: line {lineno} column {colno} (char {pos})")
        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


class UnifiFieldError(UnifiDataError):
    """Raised when a single wire field violates its type or format."""

    def __init__(self, field: str, value: Any, reason: str = "invalid value"):
        super().__init__(f"failed to parse {field}: {reason}: {value!r}")
        self.field = field
        self.value = value
        self.reason = reason
