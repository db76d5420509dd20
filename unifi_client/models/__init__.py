"""
Data models for UniFi Controller API responses.

.. note::
    The controller's API is **undocumented** and its JSON is loosely typed:
    fields go missing, arrive as ``null``, or carry numbers inside strings,
    depending on controller version and device model.

    Each model normalizes one known wire shape into a frozen dataclass:

    *   Missing or ``null`` fields take the zero value of their type.
    *   Hardware addresses, IP addresses, URLs and timestamps are parsed into
        typed values; malformed input raises
        :class:`~unifi_client.exceptions.UnifiFieldError` naming the field.
    *   Malformed JSON raises :class:`~unifi_client.exceptions.UnifiSyntaxError`.

    Decoding is all-or-nothing: a model is either fully populated or not
    returned at all.
"""

from .alarm import Alarm
from .base import UnifiModel
from .device import (
    Device,
    DeviceKind,
    DeviceStats,
    NIC,
    Radio,
    RadioStationsStats,
    SystemStats,
    WiredStats,
    WirelessStats,
    decode_device_variant,
)
from .site import Site
from .station import Station, StationStats

__all__ = [
    "Alarm",
    "Device",
    "DeviceKind",
    "DeviceStats",
    "NIC",
    "Radio",
    "RadioStationsStats",
    "Site",
    "Station",
    "StationStats",
    "SystemStats",
    "UnifiModel",
    "WiredStats",
    "WirelessStats",
    "decode_device_variant",
]
