import logging
from typing import Optional, Union


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the appropriate name.

    Args:
        name: Optional specific logger name. If not provided, returns the package logger.

    Returns:
        A logger instance for the specified name
    """
    if name is None:
        return logging.getLogger("unifi_client")
    elif name.startswith("unifi_client"):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"unifi_client.{name}")


def log_api_response(
    logger: logging.Logger,
    method: str,
    url: str,
    body: Union[bytes, str],
    status_code: int,
    truncate: bool = True,
    max_length: int = 500,
):
    """
    Log a raw API response body using the provided logger.

    Args:
        logger: Logger to use
        method: HTTP method of the request.
        url: The API URL that was called.
        body: The raw response body.
        status_code: HTTP status code.
        truncate: Whether to truncate large bodies. Default is True.
        max_length: Maximum length of the logged body if truncated. Default is 500.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    if truncate and len(body) > max_length:
        body = body[:max_length] + "... [truncated]"

    logger.debug(f"API {method} response from {url} (Status: {status_code}):\n{body}")
