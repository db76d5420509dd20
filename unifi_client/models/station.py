from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..utils import EPOCH, HardwareAddr, IPAddress, WireObject
from .base import UnifiModel


@dataclass(frozen=True)
class StationStats(UnifiModel):
    """Network activity counters of a Station."""
    receive_bytes: int = 0
    receive_packets: int = 0
    receive_rate: int = 0
    transmit_bytes: int = 0
    transmit_packets: int = 0
    transmit_power: int = 0
    transmit_rate: int = 0

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "StationStats":
        return cls(
            receive_bytes=wire.integer("rx_bytes"),
            receive_packets=wire.integer("rx_packets"),
            receive_rate=wire.integer("rx_rate"),
            transmit_bytes=wire.integer("tx_bytes"),
            transmit_packets=wire.integer("tx_packets"),
            transmit_power=wire.integer("tx_power"),
            transmit_rate=wire.integer("tx_rate"),
        )


@dataclass(frozen=True)
class Station(UnifiModel):
    """Represents a client (station) connected to a UniFi access point.

    Attributes:
        id: Unique identifier for the station.
        mac: Hardware address of the station.
        ap_mac: Hardware address of the access point the station is
            associated with, or None for stations without one (wired clients).
        ip: IP address assigned to the station.
        association_time: When the station associated with its access point.
        first_seen: When the controller first saw the station.
        last_seen: When the controller last saw the station.
        hostname: Hostname reported by the station itself.
        name: Name set for the station on the controller.
        idle_time: Time since the station last sent traffic.
        uptime: Time the station has been connected.
        roam_count: Number of times the station roamed between access points.
        site_id: Identifier of the site the station belongs to.
        user_id: Identifier of the controller user record for the station.
    """
    mac: HardwareAddr
    ip: IPAddress
    id: str = ""
    ap_mac: Optional[HardwareAddr] = None
    association_time: datetime = EPOCH
    channel: int = 0
    first_seen: datetime = EPOCH
    hostname: str = ""
    idle_time: timedelta = timedelta(0)
    last_seen: datetime = EPOCH
    name: str = ""
    noise: int = 0
    roam_count: int = 0
    rssi: int = 0
    site_id: str = ""
    stats: StationStats = field(default_factory=StationStats)
    uptime: timedelta = timedelta(0)
    user_id: str = ""

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "Station":
        mac = wire.mac("mac")

        # wired stations report an empty ap_mac
        ap_mac = None
        if wire.raw("ap_mac") not in (None, ""):
            ap_mac = wire.mac("ap_mac")

        ip = wire.ip("ip")

        return cls(
            mac=mac,
            ip=ip,
            id=wire.string("_id"),
            ap_mac=ap_mac,
            association_time=wire.epoch_time("assoc_time"),
            channel=wire.integer("channel"),
            first_seen=wire.epoch_time("first_seen"),
            hostname=wire.string("hostname"),
            idle_time=wire.duration("idletime"),
            last_seen=wire.epoch_time("last_seen"),
            name=wire.string("name"),
            noise=wire.integer("noise"),
            roam_count=wire.integer("roam_count"),
            rssi=wire.integer("rssi"),
            site_id=wire.string("site_id"),
            stats=StationStats._from_wire_object(wire),
            uptime=wire.duration("uptime"),
            user_id=wire.string("user_id"),
        )
