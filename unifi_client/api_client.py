from typing import Any, Callable, Dict, List, Optional, TypeVar, Union
from urllib.parse import quote

import requests
import urllib3

from .exceptions import UnifiAuthenticationError
from .logging import get_logger
from .models.alarm import Alarm
from .models.device import Device, decode_device_variant
from .models.site import Site
from .models.station import Station
from .transport import Transport, load_json

logger = get_logger(__name__)

T = TypeVar("T")

UNIFI_OS_API_PREFIX = "/proxy/network"


class UnifiController:
    """
    Client for interacting with the Unifi Controller API.

    This class provides methods to authenticate and to fetch sites, devices,
    stations and alarms from a Unifi Controller as typed, immutable models.

    Every fetch is a single request: the result is either the complete list of
    decoded entities, in the order the controller sent them, or an exception.
    A single malformed entity fails the whole call.

    Note:
        This client interacts with the UniFi Controller's **undocumented** private API.
        The session cookie obtained by :meth:`login` is kept on this instance, which
        is therefore not safe for concurrent use from multiple threads. Use one
        UnifiController per thread.
    """

    def __init__(
        self,
        controller_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        is_udm_pro: bool = False,
        verify_ssl: Union[bool, str] = True,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Unifi Controller client, authenticating if credentials are given.

        Args:
            controller_url: Base URL of the Unifi Controller.
            username: Optional username. When both username and password are given,
                      :meth:`login` is called immediately.
            password: Optional password.
            is_udm_pro: Whether the controller is a UniFi OS device (UDM, UDM Pro, UDR,
                        Cloud Key Gen2, UCG). UniFi OS uses ``/api/auth/login`` and
                        serves the network API below ``/proxy/network``. Defaults to False.
            verify_ssl: Whether to verify SSL certificates. Can be:
                       - True: Verify SSL certificates (default, recommended)
                       - False: Disable verification (insecure, not recommended)
                       - str: Path to a CA bundle file or directory with certificates of trusted CAs
            timeout: Optional timeout in seconds for every request. Defaults to None (no timeout).
            session: Optional requests session to reuse.
        """
        logger.debug(
            f"Initializing UnifiController with URL: {controller_url}, is_udm_pro: {is_udm_pro}"
        )
        self.controller_url = controller_url
        self.is_udm_pro = is_udm_pro
        self.api_prefix = UNIFI_OS_API_PREFIX if is_udm_pro else ""
        self.transport = Transport(
            controller_url, session=session, verify_ssl=verify_ssl, timeout=timeout
        )

        if not verify_ssl:
            logger.warning(
                "SSL certificate verification is disabled. This is not recommended for production use."
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        if username is not None and password is not None:
            self.login(username, password)

    def __enter__(self) -> "UnifiController":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.transport.close()

    def login(self, username: str, password: str) -> None:
        """
        Authenticate with the Unifi Controller.

        Posts ``{"username": ..., "password": ...}`` to ``/api/login`` (or
        ``/api/auth/login`` on UniFi OS). The session cookie from the response
        is sent with every later request made by this client.

        Args:
            username: Username for authentication. Must be a local account, not a cloud account.
            password: Password for authentication.

        Raises:
            UnifiStatusError: If the controller rejects the login with an HTTP error status.
            UnifiAuthenticationError: If the controller answers with a non-ok result code.
            UnifiAPIError: If the request fails for any other reason.
        """
        login_path = "/api/auth/login" if self.is_udm_pro else "/api/login"
        logger.debug(f"Attempting authentication with username: {username} at {login_path}")

        raw = self.transport.send_request(
            "POST", login_path, {"username": username, "password": password}
        )

        result = load_json(raw, self.transport.url(login_path)) if raw.strip() else None
        rc = None
        if isinstance(result, dict) and isinstance(result.get("meta"), dict):
            rc = result["meta"].get("rc")
        if rc is not None and rc != "ok":
            error_msg = f"Failed to connect: Response code {rc!r} not ok."
            logger.warning(error_msg)
            raise UnifiAuthenticationError(error_msg)

        logger.info("Successfully connected to Unifi controller.")

    def _site_path(self, site_name: str, endpoint: str) -> str:
        return f"{self.api_prefix}/api/s/{quote(site_name, safe='')}/{endpoint}"

    def _fetch(
        self,
        path: str,
        decode: Callable[[Dict[str, Any]], Optional[T]],
        entity: str,
    ) -> List[T]:
        """
        Fetch a collection and decode every element, stopping at the first error.

        ``decode`` may return None to skip an element it does not understand.
        """
        rows = self.transport.get_collection(path)

        items = []
        for row in rows:
            item = decode(row)
            if item is not None:
                items.append(item)

        logger.debug(f"Returning {len(items)} {entity} objects.")
        return items

    def sites(self) -> List[Site]:
        """
        Get the sites visible to the logged-in user from ``/api/self/sites``.

        Returns:
            List of Site objects.

        Raises:
            UnifiAPIError: If the request fails or the response envelope is malformed.
            UnifiDataError: If a site cannot be decoded.
        """
        path = f"{self.api_prefix}/api/self/sites"
        logger.info(f"Fetching sites from {path}")
        return self._fetch(path, Site.from_wire, "Site")

    def devices(self, site_name: str) -> List[Device]:
        """
        Get the devices of a site from ``/api/s/{site_name}/stat/device``.

        Each device is decoded by the decoder registered for its ``type``.
        Devices whose ``type`` is not recognized are skipped with a warning.

        Args:
            site_name: The short name (ID) of the site, e.g. ``default``.

        Returns:
            List of Device objects.

        Raises:
            UnifiAPIError: If the request fails or the response envelope is malformed.
            UnifiDataError: If a device cannot be decoded.
        """
        path = self._site_path(site_name, "stat/device")
        logger.info(f"Fetching devices for site '{site_name}' from {path}")
        return self._fetch(path, decode_device_variant, "Device")

    def stations(self, site_name: str) -> List[Station]:
        """
        Get the active stations (clients) of a site from ``/api/s/{site_name}/stat/sta``.

        Args:
            site_name: The short name (ID) of the site, e.g. ``default``.

        Returns:
            List of Station objects.

        Raises:
            UnifiAPIError: If the request fails or the response envelope is malformed.
            UnifiDataError: If a station cannot be decoded.
        """
        path = self._site_path(site_name, "stat/sta")
        logger.info(f"Fetching active clients for site '{site_name}' from {path}")
        return self._fetch(path, Station.from_wire, "Station")

    def alarms(self, site_name: str) -> List[Alarm]:
        """
        Get the alarms of a site from ``/api/s/{site_name}/list/alarm``.

        Args:
            site_name: The short name (ID) of the site, e.g. ``default``.

        Returns:
            List of Alarm objects.

        Raises:
            UnifiAPIError: If the request fails or the response envelope is malformed.
            UnifiDataError: If an alarm cannot be decoded.
        """
        path = self._site_path(site_name, "list/alarm")
        logger.info(f"Fetching alarms for site '{site_name}' from {path}")
        return self._fetch(path, Alarm.from_wire, "Alarm")
