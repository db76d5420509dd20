"""
HTTP transport for the UniFi Controller API.

A thin layer over :class:`requests.Session`: it sends one request, checks the
response content type and status code, and unwraps the ``{"data": [...]}``
envelope the controller puts around every collection. The session's cookie
jar carries the controller's login cookie from one request to the next.
"""

import json
from typing import Any, Dict, List, Optional, Union

import requests

from .exceptions import (
    UnifiAPIError,
    UnifiContentTypeError,
    UnifiEnvelopeError,
    UnifiStatusError,
)
from .logging import get_logger, log_api_response

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


def media_type(content_type: str) -> str:
    """Return the media type of a Content-Type header without its parameters."""
    return content_type.split(";", 1)[0].strip().lower()


def load_json(raw: Union[bytes, str], url: str = "") -> Any:
    """
    Decode a JSON response body.

    Raises:
        UnifiEnvelopeError: If the body is not well-formed JSON.
    """
    try:
        return json.loads(raw)
    except ValueError as e:
        error_msg = f"Failed to parse API response from {url}: {e}"
        logger.error(error_msg)
        raise UnifiEnvelopeError(error_msg) from e


def decode_envelope(raw: Union[bytes, str], url: str = "") -> List[Dict[str, Any]]:
    """
    Unwrap the ``data`` list from a controller response envelope.

    Args:
        raw: The raw response body.
        url: URL the body came from, for error messages.

    Returns:
        The wire objects in the order the controller sent them.

    Raises:
        UnifiEnvelopeError: If the body is malformed, is not an object, or
            lacks a ``data`` list.
    """
    envelope = load_json(raw, url)
    if not isinstance(envelope, dict) or "data" not in envelope:
        error_msg = f"Unexpected API response format for {url}"
        logger.error(error_msg)
        raise UnifiEnvelopeError(error_msg)

    data = envelope["data"]
    if not isinstance(data, list):
        error_msg = f"Unexpected API response format for {url}: 'data' is not a list"
        logger.error(error_msg)
        raise UnifiEnvelopeError(error_msg)
    return data


class Transport:
    """
    Sends requests to a UniFi Controller and validates the responses.

    Note:
        A Transport keeps session cookies between calls and is not safe for
        concurrent use from multiple threads. Use one instance per thread.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        verify_ssl: Union[bool, str] = True,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            base_url: Base URL of the controller, e.g. ``https://unifi:8443``.
            session: Optional session to reuse. A new one is created if omitted.
            verify_ssl: Whether to verify SSL certificates, or a path to a CA bundle.
            timeout: Optional timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.verify_ssl = verify_ssl
        self.timeout = timeout

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def send_request(
        self, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """
        Send a request and return the raw response body.

        The content type is checked before the status code, so an error page
        served as HTML is reported as a content type problem.

        Args:
            method: HTTP method (e.g., 'GET', 'POST').
            path: Path below the base URL, e.g. ``/api/self/sites``.
            body: Optional dictionary to send as JSON body.

        Returns:
            The raw response body.

        Raises:
            UnifiContentTypeError: If the response is not ``application/json``.
            UnifiStatusError: If the response status is not 2xx.
            UnifiAPIError: If the request itself fails (connection error, timeout).
            ValueError: If an unsupported HTTP method is provided.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self.url(path)
        request_kwargs: Dict[str, Any] = {
            "verify": self.verify_ssl,
            "timeout": self.timeout,
        }
        if body is not None:
            request_kwargs["json"] = body

        logger.debug(f"Sending API {method} request to {url}")
        try:
            response = self.session.request(method, url, **request_kwargs)
        except requests.exceptions.RequestException as e:
            error_msg = f"API {method} request to {url} failed: {e}"
            logger.error(error_msg)
            raise UnifiAPIError(error_msg) from e

        log_api_response(logger, method, url, response.content, response.status_code)

        content_type = response.headers.get("Content-Type", "")
        if media_type(content_type) != JSON_CONTENT_TYPE:
            logger.error(
                f"API {method} request to {url} returned content type {content_type!r}"
            )
            raise UnifiContentTypeError(content_type)

        if not 200 <= response.status_code < 300:
            logger.error(
                f"API {method} request to {url} failed with status {response.status_code}"
            )
            raise UnifiStatusError(response.status_code, url)

        return response.content

    def get_collection(self, path: str) -> List[Dict[str, Any]]:
        """GET ``path`` and return the wire objects from its envelope."""
        raw = self.send_request("GET", path)
        return decode_envelope(raw, self.url(path))
