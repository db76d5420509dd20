"""
Base class shared by the UniFi domain models.
"""

import dataclasses
import ipaddress
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, Union

from urllib3.util import Url

from ..utils import HardwareAddr, WireObject, ensure_object, load_object


def to_plain(value: Any) -> Any:
    """
    Convert a model value into JSON-friendly Python types.

    Hardware and IP addresses become strings, datetimes ISO 8601 text,
    durations seconds, and nested models dictionaries.
    """
    if isinstance(value, UnifiModel):
        return value.to_dict()
    if isinstance(value, Url):
        return value.url
    if isinstance(value, (HardwareAddr, ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


class UnifiModel:
    """
    Mixin for the frozen dataclasses returned by the client.

    Subclasses implement :meth:`from_wire`; :meth:`decode` adds JSON parsing
    on top of it.
    """

    @classmethod
    def decode(cls, raw: Union[bytes, bytearray, str]):
        """
        Decode one wire object from raw JSON.

        Raises:
            UnifiSyntaxError: If ``raw`` is not well-formed JSON.
            UnifiFieldError: If any field fails to normalize.
        """
        return cls.from_wire(load_object(raw))

    @classmethod
    def from_wire(cls, data: Dict[str, Any]):
        return cls._from_wire_object(WireObject(ensure_object(data)))

    @classmethod
    def _from_wire_object(cls, wire: WireObject):
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the model to a dictionary of plain values.

        Returns:
            Dictionary representation of the model with all fields.
        """
        return {
            f.name: to_plain(getattr(self, f.name))
            for f in dataclasses.fields(self)
        }
