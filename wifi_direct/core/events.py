"""Domain events broadcast to channel subscribers.

Events are immutable and shared by reference between every receiver. The
manager only produces the first four; ``PeerFound`` is published by external
signal producers through :meth:`WifiP2PChannel.report_peer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict

from .device import P2PDevice


class EventName(str, Enum):
    """Stable event names used in logs and health snapshots."""

    DISCOVERY_STARTED = "discoveryStarted"
    DISCOVERY_STOPPED = "discoveryStopped"
    GROUP_CREATED = "groupCreated"
    CONNECTED = "connected"
    PEER_FOUND = "peerFound"


@dataclass(slots=True, frozen=True)
class P2PEvent:
    """Base class for all broadcast events."""

    name: ClassVar[EventName]

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name.value}


@dataclass(slots=True, frozen=True)
class DiscoveryStarted(P2PEvent):
    """A discovery request succeeded and the scan is active."""

    name: ClassVar[EventName] = EventName.DISCOVERY_STARTED


@dataclass(slots=True, frozen=True)
class DiscoveryStopped(P2PEvent):
    """A request to stop discovery succeeded."""

    name: ClassVar[EventName] = EventName.DISCOVERY_STOPPED


@dataclass(slots=True, frozen=True)
class GroupCreated(P2PEvent):
    """A request to form a group succeeded."""

    name: ClassVar[EventName] = EventName.GROUP_CREATED


@dataclass(slots=True, frozen=True)
class Connected(P2PEvent):
    """A connect request succeeded for ``device_address``."""

    name: ClassVar[EventName] = EventName.CONNECTED

    device_address: str

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name.value, "deviceAddress": self.device_address}


@dataclass(slots=True, frozen=True)
class PeerFound(P2PEvent):
    """A peer was detected by an external signal producer."""

    name: ClassVar[EventName] = EventName.PEER_FOUND

    device: P2PDevice

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name.value, "device": self.device.as_dict()}


__all__ = [
    "Connected",
    "DiscoveryStarted",
    "DiscoveryStopped",
    "EventName",
    "GroupCreated",
    "P2PEvent",
    "PeerFound",
]
