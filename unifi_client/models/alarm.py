from dataclasses import dataclass
from datetime import datetime

from ..utils import HardwareAddr, WireObject, parse_timestamp
from .base import UnifiModel


@dataclass(frozen=True)
class Alarm(UnifiModel):
    """Represents a single alarm entry from the UniFi Controller API (/api/s/<site_name>/list/alarm).

    ``timestamp`` is parsed from the wire ``datetime`` field, in the controller's RFC 3339 layout (``2016-01-01T00:00:00Z``)
    and normalized to UTC.
    """
    ap_mac: HardwareAddr
    timestamp: datetime
    id: str = ""
    ap_name: str = ""
    key: str = ""
    message: str = ""
    site_id: str = ""
    subsystem: str = ""
    archived: bool = False

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "Alarm":
        ap_mac = wire.mac("ap")
        timestamp = parse_timestamp(wire.raw("datetime"), wire.field("datetime"))

        return cls(
            ap_mac=ap_mac,
            timestamp=timestamp,
            id=wire.string("_id"),
            ap_name=wire.string("ap_name"),
            key=wire.string("key"),
            message=wire.string("msg"),
            site_id=wire.string("site_id"),
            subsystem=wire.string("subsystem"),
            archived=wire.boolean("archived"),
        )
