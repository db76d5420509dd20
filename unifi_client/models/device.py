"""
Models for UniFi devices and related objects.
"""

from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from urllib3.util import Url

from ..logging import get_logger
from ..utils import HardwareAddr, IPAddress, WireObject, ensure_object
from .base import UnifiModel

logger = get_logger(__name__)

RADIO_NA = "na"
RADIO_NG = "ng"

RADIO_5GHZ = "5GHz"
RADIO_24GHZ = "2.4GHz"

_RADIO_BANDS = {
    RADIO_NA: RADIO_5GHZ,
    RADIO_NG: RADIO_24GHZ,
}


class DeviceKind(str, Enum):
    """Device classes, keyed by the ``type`` field of the wire object."""

    ACCESS_POINT = "uap"
    SWITCH = "usw"
    GATEWAY = "ugw"
    DREAM_MACHINE = "udm"
    NEXT_GEN_GATEWAY = "uxg"


@dataclass(frozen=True)
class RadioStationsStats(UnifiModel):
    """Station counts for a single radio."""
    stations: int = 0
    user_stations: int = 0
    guest_stations: int = 0

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "RadioStationsStats":
        return cls(
            stations=wire.integer("num_sta"),
            user_stations=wire.integer("user-num_sta"),
            guest_stations=wire.integer("guest-num_sta"),
        )


@dataclass(frozen=True)
class Radio(UnifiModel):
    """
    A wireless radio attached to a Device.

    ``band`` is the human-readable frequency band derived from the controller's
    radio code, or an empty string when the code is not recognized. ``stats``
    is ``None`` when the controller reported no statistics row for this radio.
    """
    name: str = ""
    band: str = ""
    built_in_antenna: bool = False
    built_in_antenna_gain: int = 0
    max_tx_power: int = 0
    min_tx_power: int = 0
    stats: Optional[RadioStationsStats] = None

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "Radio":
        code = wire.string("radio")
        band = _RADIO_BANDS.get(code, "")
        if code and not band:
            logger.debug(f"Unrecognized radio code {code!r} at {wire.path}")

        return cls(
            name=wire.string("name"),
            band=band,
            built_in_antenna=wire.boolean("builtin_antenna"),
            built_in_antenna_gain=wire.integer("builtin_ant_gain"),
            max_tx_power=wire.integer("max_txpower"),
            min_tx_power=wire.integer("min_txpower"),
        )


@dataclass(frozen=True)
class NIC(UnifiModel):
    """A wired ethernet interface attached to a Device."""
    mac: HardwareAddr
    name: str = ""

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "NIC":
        return cls(mac=wire.mac("mac"), name=wire.string("name"))


@dataclass(frozen=True)
class WirelessStats(UnifiModel):
    receive_bytes: float = 0.0
    receive_packets: float = 0.0
    transmit_bytes: float = 0.0
    transmit_dropped: float = 0.0
    transmit_packets: float = 0.0

    @classmethod
    def from_stat_block(cls, wire: WireObject, prefix: str = "") -> "WirelessStats":
        """
        Read one traffic class from the device ``stat`` block.

        Args:
            wire: The ``stat`` block.
            prefix: Key prefix of the traffic class, e.g. ``"user-"`` or ``"guest-"``.
        """
        return cls(
            receive_bytes=wire.number(f"{prefix}rx_bytes"),
            receive_packets=wire.number(f"{prefix}rx_packets"),
            transmit_bytes=wire.number(f"{prefix}tx_bytes"),
            transmit_dropped=wire.number(f"{prefix}tx_dropped"),
            transmit_packets=wire.number(f"{prefix}tx_packets"),
        )


@dataclass(frozen=True)
class WiredStats(UnifiModel):
    receive_bytes: float = 0.0
    receive_packets: float = 0.0
    transmit_bytes: float = 0.0
    transmit_packets: float = 0.0

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "WiredStats":
        return cls(
            receive_bytes=wire.number("rx_bytes"),
            receive_packets=wire.number("rx_packets"),
            transmit_bytes=wire.number("tx_bytes"),
            transmit_packets=wire.number("tx_packets"),
        )


@dataclass(frozen=True)
class SystemStats(UnifiModel):
    """CPU, memory and load figures reported by the device itself."""
    cpu_percentage: float = 0.0
    mem_percentage: float = 0.0
    uptime: int = 0
    load_avg_1: float = 0.0
    load_avg_5: float = 0.0
    load_avg_15: float = 0.0
    mem_buffer: int = 0
    mem_total: int = 0
    mem_used: int = 0

    @classmethod
    def from_blocks(cls, system_stats: WireObject, sys_stats: WireObject) -> "SystemStats":
        # cpu, mem, uptime and the load averages arrive as strings
        return cls(
            cpu_percentage=system_stats.float_string("cpu"),
            mem_percentage=system_stats.float_string("mem"),
            uptime=system_stats.int_string("uptime"),
            load_avg_1=sys_stats.float_string("loadavg_1"),
            load_avg_5=sys_stats.float_string("loadavg_5"),
            load_avg_15=sys_stats.float_string("loadavg_15"),
            mem_buffer=sys_stats.integer("mem_buffer"),
            mem_total=sys_stats.integer("mem_total"),
            mem_used=sys_stats.integer("mem_used"),
        )


@dataclass(frozen=True)
class DeviceStats(UnifiModel):
    """Network activity and system statistics of a Device."""
    total_bytes: float = 0.0
    all: WirelessStats = field(default_factory=WirelessStats)
    user: WirelessStats = field(default_factory=WirelessStats)
    guest: WirelessStats = field(default_factory=WirelessStats)
    uplink: WiredStats = field(default_factory=WiredStats)
    system: SystemStats = field(default_factory=SystemStats)

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "DeviceStats":
        stat = wire.child("stat")
        return cls(
            total_bytes=stat.number("bytes"),
            all=WirelessStats.from_stat_block(stat),
            user=WirelessStats.from_stat_block(stat, "user-"),
            guest=WirelessStats.from_stat_block(stat, "guest-"),
            uplink=WiredStats._from_wire_object(wire.child("uplink")),
            system=SystemStats.from_blocks(
                wire.child("system-stats"), wire.child("sys_stats")
            ),
        )


@dataclass(frozen=True)
class Device(UnifiModel):
    """
    Represents a UniFi network device.

    This class models a device managed by a UniFi controller, such as an access
    point, switch or gateway. NICs and radios are embedded values owned by the
    device; both are empty tuples when the controller reports none.

    Attributes:
        id: Controller identifier of the device.
        adopted: Whether the controller has adopted the device.
        inform_ip: Address the device sends inform packets to.
        inform_url: URL the device sends inform packets to. Empty when the
            controller did not report one.
        type: Raw device class reported by the controller, e.g. ``"uap"``.
        uptime: Time since the device last booted.
        stats: Traffic and system statistics.
    """
    id: str = ""
    adopted: bool = False
    inform_ip: Optional[IPAddress] = None
    inform_url: Url = field(default_factory=Url)
    model: str = ""
    name: str = ""
    nics: Tuple[NIC, ...] = ()
    radios: Tuple[Radio, ...] = ()
    serial: str = ""
    site_id: str = ""
    stats: DeviceStats = field(default_factory=DeviceStats)
    type: str = ""
    uptime: timedelta = timedelta(0)
    version: str = ""

    @property
    def kind(self) -> Optional[DeviceKind]:
        """The device class, or ``None`` when it is missing or not recognized."""
        try:
            return DeviceKind(self.type)
        except ValueError:
            return None

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "Device":
        device_id = wire.string("_id")
        adopted = wire.boolean("adopted")
        device_type = wire.string("type")
        model = wire.string("model")
        name = wire.string("name")
        serial = wire.string("serial")
        site_id = wire.string("site_id")
        version = wire.string("version")
        uptime = wire.duration("uptime")

        inform_ip = wire.ip("inform_ip")
        inform_url = wire.url("inform_url")

        nics = tuple(NIC._from_wire_object(row) for row in wire.table("ethernet_table"))
        radios = [Radio._from_wire_object(row) for row in wire.table("radio_table")]

        radio_stats = {
            row.string("name"): RadioStationsStats._from_wire_object(row)
            for row in wire.table("radio_table_stats")
        }
        radios = tuple(
            replace(radio, stats=radio_stats[radio.name])
            if radio.name in radio_stats else radio
            for radio in radios
        )

        return cls(
            id=device_id,
            adopted=adopted,
            inform_ip=inform_ip,
            inform_url=inform_url,
            model=model,
            name=name,
            nics=nics,
            radios=radios,
            serial=serial,
            site_id=site_id,
            stats=DeviceStats._from_wire_object(wire),
            type=device_type,
            uptime=uptime,
            version=version,
        )



# Switches and gateways share the access point shape; their radio tables are
# simply absent.
DEVICE_DECODERS: Dict[str, Callable[[Dict[str, Any]], Device]] = {
    kind.value: Device.from_wire for kind in DeviceKind
}


def decode_device_variant(data: Dict[str, Any]) -> Optional[Device]:
    """
    Decode a device wire object through the decoder registered for its ``type``.

    Objects without a ``type`` are decoded as generic devices.

    Returns:
        The decoded Device, or None if the ``type`` names an unknown device class.

    Raises:
        UnifiFieldError: If ``type`` is present but not a string.
    """
    device_type = WireObject(ensure_object(data)).string("type")
    if device_type == "":
        return Device.from_wire(data)

    decoder = DEVICE_DECODERS.get(device_type)
    if decoder is None:
        logger.warning(
            f"Skipping device {data.get('_id')!r} with unknown type {device_type!r}"
        )
        return None
    return decoder(data)
