"""Actor-style facade over a Wi-Fi Direct (P2P) control service."""

from .errors import (
    BackendError,
    ChannelClosedError,
    InvalidInputError,
    P2PError,
    RemoteCallError,
    SerializationError,
    to_p2p_error,
)
from .core import (
    Connected,
    DiscoveryStarted,
    DiscoveryStopped,
    EventName,
    EventReceiver,
    GroupCreated,
    P2PBackend,
    P2PDevice,
    P2PEvent,
    PeerFound,
)
from .channel import ActionReceiver, WifiP2PChannel
from .manager import ActorState, CommandActor, WifiP2PManager
from .app import WifiDirectApp

__version__ = "0.1.0"

__all__ = [
    "ActionReceiver",
    "ActorState",
    "BackendError",
    "ChannelClosedError",
    "CommandActor",
    "Connected",
    "DiscoveryStarted",
    "DiscoveryStopped",
    "EventName",
    "EventReceiver",
    "GroupCreated",
    "InvalidInputError",
    "P2PBackend",
    "P2PDevice",
    "P2PError",
    "P2PEvent",
    "PeerFound",
    "RemoteCallError",
    "SerializationError",
    "WifiDirectApp",
    "WifiP2PChannel",
    "WifiP2PManager",
    "to_p2p_error",
]
