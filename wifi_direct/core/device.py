"""Peer device record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True, frozen=True)
class P2PDevice:
    """Snapshot of one discovered peer.

    Attributes:
        mac_address: Device address, e.g. ``"02:11:22:33:44:55"``.
        device_name: Name reported by the peer, if any.
        primary_type: Primary device type, e.g. ``"1-0050F204-1"``.
    """

    mac_address: str
    device_name: Optional[str] = None
    primary_type: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.device_name or self.mac_address

    def as_dict(self) -> Dict[str, Any]:
        return {
            "macAddress": self.mac_address,
            "deviceName": self.device_name,
            "primaryType": self.primary_type,
        }
