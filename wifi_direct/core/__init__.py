"""Core primitives for wifi-direct."""

from .broadcast import EventReceiver, EventTopic
from .command_queue import CommandQueue
from .commands import (
    Connect,
    CreateGroup,
    Discover,
    ManagerCommand,
    ResultSlot,
    StopDiscovery,
)
from .device import P2PDevice
from .events import (
    Connected,
    DiscoveryStarted,
    DiscoveryStopped,
    EventName,
    GroupCreated,
    P2PEvent,
    PeerFound,
)
from .protocols import P2PBackend

__all__ = [
    "CommandQueue",
    "Connect",
    "Connected",
    "CreateGroup",
    "Discover",
    "DiscoveryStarted",
    "DiscoveryStopped",
    "EventName",
    "EventReceiver",
    "EventTopic",
    "GroupCreated",
    "ManagerCommand",
    "P2PBackend",
    "P2PDevice",
    "P2PEvent",
    "PeerFound",
    "ResultSlot",
    "StopDiscovery",
]
