"""
Wire-level helpers shared by the UniFi model decoders.

The controller's JSON is loosely typed: fields go missing, arrive as ``null``,
or carry numbers inside strings. Everything in this module turns such values
into plain Python types or raises :class:`~unifi_client.exceptions.UnifiFieldError`
naming the offending field.
"""

import ipaddress
import json
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Union

from urllib3.exceptions import LocationParseError
from urllib3 import util as urllib3_util
from urllib3.util import Url

from .exceptions import UnifiFieldError, UnifiSyntaxError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# EUI-48, EUI-64 and 20-octet InfiniBand addresses
_MAC_LENGTHS = (6, 8, 20)
_MAC_RE = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2})*")

_INT_STRING_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_STRING_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# RFC 3339 without fractional seconds; offset is "Z" or "+HH:MM"
_TIMESTAMP_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:Z|[+-][0-9]{2}:[0-9]{2})"
)
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class HardwareAddr(bytes):
    """
    A hardware (MAC) address.

    Compares equal to the raw bytes it holds and renders as lowercase,
    colon-separated hex.
    """

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self)

    def __repr__(self) -> str:
        return f"HardwareAddr('{self}')"

    @classmethod
    def parse(cls, text: str) -> "HardwareAddr":
        """
        Parse a colon-separated hex MAC address.

        Raises:
            ValueError: If the text is not a 6, 8 or 20 octet address.
        """
        if not isinstance(text, str) or not _MAC_RE.fullmatch(text):
            raise ValueError(f"invalid MAC address: {text!r}")
        octets = bytes.fromhex(text.replace(":", ""))
        if len(octets) not in _MAC_LENGTHS:
            raise ValueError(f"invalid MAC address: {text!r}")
        return cls(octets)


def load_object(raw: Union[bytes, bytearray, str]) -> Dict[str, Any]:
    """
    Decode a single JSON object.

    Args:
        raw: JSON text of one wire object.

    Returns:
        The decoded dictionary.

    Raises:
        UnifiSyntaxError: If the input is not well-formed JSON.
        UnifiFieldError: If the input is well-formed but not a JSON object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise UnifiSyntaxError(e.msg, e.lineno, e.colno, e.pos) from e
    except UnicodeDecodeError as e:
        raise UnifiSyntaxError(str(e), pos=e.start) from e
    except ValueError as e:
        # integer literals past the interpreter's digit limit
        raise UnifiSyntaxError(str(e)) from e

    return ensure_object(data)


def ensure_object(data: Any) -> Dict[str, Any]:
    """Raise ``UnifiFieldError`` unless ``data`` is a decoded JSON object."""
    if not isinstance(data, dict):
        raise UnifiFieldError("<root>", data, "expected JSON object")
    return data


def parse_mac(value: Any, field: str) -> HardwareAddr:
    try:
        return HardwareAddr.parse(value)
    except ValueError as e:
        raise UnifiFieldError(field, value, "invalid MAC address") from e


def parse_ip(value: Any, field: str) -> IPAddress:
    # ip_address() also accepts integers, which the wire never means
    if not isinstance(value, str):
        raise UnifiFieldError(field, value, "invalid IP address")
    try:
        return ipaddress.ip_address(value)
    except ValueError as e:
        raise UnifiFieldError(field, value, "invalid IP address") from e


def parse_url(value: Any, field: str) -> Url:
    """
    Parse a URL with urllib3. An empty string yields an empty ``Url``.
    """
    if not isinstance(value, str):
        raise UnifiFieldError(field, value, "invalid URL")
    try:
        return urllib3_util.parse_url(value)
    except LocationParseError as e:
        raise UnifiFieldError(field, value, "invalid URL") from e


def from_epoch(seconds: int, field: str = "") -> datetime:
    """
    Return the UTC instant ``seconds`` after the Unix epoch.

    Raises:
        UnifiFieldError: If the instant falls outside the years 1 to 9999.
    """
    try:
        return EPOCH + timedelta(seconds=seconds)
    except OverflowError as e:
        raise UnifiFieldError(field, seconds, "timestamp out of range") from e


def to_duration(seconds: int, field: str = "") -> timedelta:
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise UnifiFieldError(field, seconds, "duration out of range") from e


def parse_timestamp(value: Any, field: str) -> datetime:
    """
    Parse an RFC 3339 timestamp such as ``2016-01-01T00:00:00Z``.

    Only whole seconds and ``Z`` or ``+HH:MM`` offsets are accepted. The
    result is converted to UTC.
    """
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise UnifiFieldError(field, value, "parsing time")
    try:
        parsed = datetime.strptime(value, _TIMESTAMP_FORMAT)
    except ValueError as e:
        raise UnifiFieldError(field, value, "parsing time") from e
    return parsed.astimezone(timezone.utc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class WireObject:
    """
    Typed, read-only access to one wire object.

    Missing and ``null`` fields read as the zero value of the requested type.
    A present value of the wrong JSON type raises ``UnifiFieldError`` with the
    full field path, e.g. ``radio_table[1].max_txpower``.
    """

    def __init__(self, data: Dict[str, Any], path: str = ""):
        self.data = data
        self.path = path

    def field(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def raw(self, key: str) -> Any:
        return self.data.get(key)

    def string(self, key: str) -> str:
        value = self.data.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise UnifiFieldError(self.field(key), value, "expected string")
        return value

    def integer(self, key: str) -> int:
        value = self.data.get(key)
        if value is None:
            return 0
        if not isinstance(value, int) or isinstance(value, bool):
            raise UnifiFieldError(self.field(key), value, "expected integer")
        return value

    def number(self, key: str) -> float:
        value = self.data.get(key)
        if value is None:
            return 0.0
        if not _is_number(value):
            raise UnifiFieldError(self.field(key), value, "expected number")
        try:
            return float(value)
        except OverflowError as e:
            raise UnifiFieldError(self.field(key), value, "number out of range") from e

    def boolean(self, key: str) -> bool:
        value = self.data.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise UnifiFieldError(self.field(key), value, "expected boolean")
        return value

    def float_string(self, key: str) -> float:
        """Read a float that the controller may send as a string, e.g. ``"55.7"``."""
        value = self.data.get(key)
        if value is None:
            return 0.0
        if isinstance(value, str):
            if not _FLOAT_STRING_RE.fullmatch(value):
                raise UnifiFieldError(self.field(key), value, "expected numeric string")
            result = float(value)
            if not math.isfinite(result):
                raise UnifiFieldError(self.field(key), value, "expected numeric string")
            return result
        if not _is_number(value):
            raise UnifiFieldError(self.field(key), value, "expected numeric string")
        try:
            return float(value)
        except OverflowError as e:
            raise UnifiFieldError(self.field(key), value, "number out of range") from e

    def int_string(self, key: str) -> int:
        """Read an integer that the controller may send as a string, e.g. ``"11622320"``."""
        value = self.data.get(key)
        if value is None:
            return 0
        if isinstance(value, str):
            if not _INT_STRING_RE.fullmatch(value):
                raise UnifiFieldError(self.field(key), value, "expected integer string")
            try:
                return int(value)
            except ValueError as e:
                # more digits than int() converts
                raise UnifiFieldError(self.field(key), value, "number out of range") from e
        if not isinstance(value, int) or isinstance(value, bool):
            raise UnifiFieldError(self.field(key), value, "expected integer string")
        return value

    def duration(self, key: str) -> timedelta:
        return to_duration(self.integer(key), self.field(key))

    def epoch_time(self, key: str) -> datetime:
        return from_epoch(self.integer(key), self.field(key))

    def child(self, key: str) -> "WireObject":
        value = self.data.get(key)
        if value is None:
            return WireObject({}, self.field(key))
        if not isinstance(value, dict):
            raise UnifiFieldError(self.field(key), value, "expected object")
        return WireObject(value, self.field(key))

    def table(self, key: str) -> List["WireObject"]:
        """Read a list of objects; a missing or ``null`` table is empty."""
        value = self.data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise UnifiFieldError(self.field(key), value, "expected array")

        rows = []
        for i, row in enumerate(value):
            row_path = f"{self.field(key)}[{i}]"
            if not isinstance(row, dict):
                raise UnifiFieldError(row_path, row, "expected object")
            rows.append(WireObject(row, row_path))
        return rows

    def mac(self, key: str) -> HardwareAddr:
        return parse_mac(self.data.get(key), self.field(key))

    def ip(self, key: str) -> IPAddress:
        return parse_ip(self.data.get(key), self.field(key))

    def url(self, key: str) -> Url:
        value = self.data.get(key)
        return parse_url("" if value is None else value, self.field(key))
