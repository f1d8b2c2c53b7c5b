"""Commands queued from channel handles to the command actor.

Each command carries a private result slot (an :class:`asyncio.Future`) that
the actor resolves exactly once, and knows the single backend operation it
maps to and the event it produces when that operation succeeds.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..errors import P2PError
from .events import (
    Connected,
    DiscoveryStarted,
    DiscoveryStopped,
    GroupCreated,
    P2PEvent,
)
from .protocols import P2PBackend

ResultSlot = asyncio.Future


@dataclass(slots=True)
class ManagerCommand(ABC):
    respond_to: ResultSlot

    operation: ClassVar[str] = "command"

    @abstractmethod
    async def invoke(self, backend: P2PBackend) -> None:
        """Call the one backend operation this command stands for."""

    @abstractmethod
    def success_event(self) -> P2PEvent:
        """Event broadcast after the backend operation succeeded."""

    def resolve(self, error: Optional[P2PError] = None) -> bool:
        """Resolve the result slot; returns False if it was already settled."""

        slot = self.respond_to
        if slot.done():
            return False
        if error is None:
            slot.set_result(None)
        else:
            slot.set_exception(error)
        return True


@dataclass(slots=True)
class Discover(ManagerCommand):
    operation: ClassVar[str] = "discover_peers"

    async def invoke(self, backend: P2PBackend) -> None:
        await backend.discover_peers()

    def success_event(self) -> P2PEvent:
        return DiscoveryStarted()


@dataclass(slots=True)
class StopDiscovery(ManagerCommand):
    operation: ClassVar[str] = "stop_discovery"

    async def invoke(self, backend: P2PBackend) -> None:
        await backend.stop_discovery()

    def success_event(self) -> P2PEvent:
        return DiscoveryStopped()


@dataclass(slots=True)
class Connect(ManagerCommand):
    device_address: str

    operation: ClassVar[str] = "connect"

    async def invoke(self, backend: P2PBackend) -> None:
        await backend.connect(self.device_address)

    def success_event(self) -> P2PEvent:
        return Connected(self.device_address)


@dataclass(slots=True)
class CreateGroup(ManagerCommand):
    operation: ClassVar[str] = "create_group"

    async def invoke(self, backend: P2PBackend) -> None:
        await backend.create_group()

    def success_event(self) -> P2PEvent:
        return GroupCreated()


__all__ = [
    "Connect",
    "CreateGroup",
    "Discover",
    "ManagerCommand",
    "ResultSlot",
    "StopDiscovery",
]
