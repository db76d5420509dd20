"""
Models for UniFi sites.
"""

from dataclasses import dataclass

from ..utils import WireObject
from .base import UnifiModel


@dataclass(frozen=True)
class Site(UnifiModel):
    """
    Represents a UniFi site.

    A site in UniFi represents a logical grouping of devices and network segments,
    typically representing a physical location or organization. ``name`` is the
    short name used in API paths (``default`` for the first site).
    """
    name: str
    description: str = ""
    id: str = ""

    @classmethod
    def _from_wire_object(cls, wire: WireObject) -> "Site":
        return cls(
            name=wire.string("name"),
            description=wire.string("desc"),
            id=wire.string("_id"),
        )
