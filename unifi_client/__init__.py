"""
Typed client for the UniFi Controller API.

This package fetches sites, devices, stations and alarms from a UniFi
Controller and normalizes the controller's loosely typed JSON into immutable,
strongly typed models.
"""

from .api_client import UnifiController
from .models import (
    Alarm,
    Device,
    DeviceKind,
    DeviceStats,
    NIC,
    Radio,
    RadioStationsStats,
    Site,
    Station,
    StationStats,
    SystemStats,
    WiredStats,
    WirelessStats,
)
from .export import export_csv, export_json, to_dict_list
from .transport import Transport
from .utils import HardwareAddr
from .exceptions import (
    UnifiControllerError,
    UnifiAPIError,
    UnifiAuthenticationError,
    UnifiContentTypeError,
    UnifiDataError,
    UnifiEnvelopeError,
    UnifiFieldError,
    UnifiStatusError,
    UnifiSyntaxError,
)

__version__ = "0.1.0"

__all__ = [
    "UnifiController",
    "Transport",
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
    "WiredStats",
    "WirelessStats",
    "HardwareAddr",
    "export_csv",
    "export_json",
    "to_dict_list",
    "UnifiControllerError",
    "UnifiAPIError",
    "UnifiAuthenticationError",
    "UnifiContentTypeError",
    "UnifiDataError",
    "UnifiEnvelopeError",
    "UnifiFieldError",
    "UnifiStatusError",
    "UnifiSyntaxError",
]
