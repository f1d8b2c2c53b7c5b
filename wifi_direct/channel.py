"""Client-facing channel handle for the command actor.

Every intent method enqueues one command and immediately returns an
:class:`ActionReceiver` for its result, so a caller can submit now and await
the outcome later (or never)::

    action = await channel.discover_peers()
    ...
    await action  # raises a P2PError if the backend call failed
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Any, Generator, Optional

from .core import (
    CommandQueue,
    Connect,
    CreateGroup,
    Discover,
    EventReceiver,
    EventTopic,
    ManagerCommand,
    P2PDevice,
    PeerFound,
    ResultSlot,
    StopDiscovery,
)
from .errors import ChannelClosedError, InvalidInputError

LOGGER = logging.getLogger(__name__)


def _mark_retrieved(slot: ResultSlot) -> None:
    # Outcomes nobody awaits must not be reported as "never retrieved".
    if not slot.cancelled():
        slot.exception()


class ActionReceiver:
    """Awaitable outcome of one submitted command.

    Awaiting returns ``None`` on success or raises the command's
    :class:`~wifi_direct.errors.P2PError`. If the actor stops before the
    command runs, the error is :class:`ChannelClosedError`. Cancelling the
    awaiting task leaves the command running; its event is still broadcast.
    """

    __slots__ = ("_slot",)

    def __init__(self, slot: ResultSlot) -> None:
        self._slot = slot
        slot.add_done_callback(_mark_retrieved)

    def done(self) -> bool:
        return self._slot.done()

    def __await__(self) -> Generator[Any, None, None]:
        return asyncio.shield(self._slot).__await__()


class WifiP2PChannel:
    """Producer handle onto one command actor.

    Each handle counts as a producer of the actor's command queue. Closing (or
    dropping) the last open handle lets the actor finish the queued commands
    and stop.
    """

    def __init__(self, commands: CommandQueue, events: EventTopic) -> None:
        commands.register_producer()
        self._commands = commands
        self._events = events
        # Released on close() or when the handle is garbage collected.
        self._registration = weakref.finalize(self, commands.release_producer)
        self._registration.atexit = False

    @property
    def closed(self) -> bool:
        return not self._registration.alive

    def clone(self) -> WifiP2PChannel:
        """Return an independent handle onto the same actor."""

        if self.closed:
            raise ChannelClosedError("manager")
        return WifiP2PChannel(self._commands, self._events)

    def subscribe_events(self) -> EventReceiver:
        return self._events.subscribe()

    async def discover_peers(self) -> ActionReceiver:
        return await self._submit(Discover(respond_to=self._new_slot()))

    async def stop_discovery(self) -> ActionReceiver:
        return await self._submit(StopDiscovery(respond_to=self._new_slot()))

    async def connect(self, device_address: str) -> ActionReceiver:
        if not device_address or not device_address.strip():
            raise InvalidInputError("device address must not be empty")
        return await self._submit(
            Connect(respond_to=self._new_slot(), device_address=device_address)
        )

    async def create_group(self) -> ActionReceiver:
        return await self._submit(CreateGroup(respond_to=self._new_slot()))

    def report_peer(self, device: P2PDevice) -> int:
        """Publish ``PeerFound`` for a peer seen by an external signal source."""

        LOGGER.debug("Peer reported: %s (%s)", device.mac_address, device.display_name)
        return self._events.publish(PeerFound(device))

    def close(self) -> None:
        self._registration()

    async def __aenter__(self) -> WifiP2PChannel:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None

    async def _submit(self, command: ManagerCommand) -> ActionReceiver:
        if self.closed:
            raise ChannelClosedError("manager")
        await self._commands.put(command)
        LOGGER.debug("Queued %s (%d pending)", command.operation, self._commands.qsize())
        return ActionReceiver(command.respond_to)

    @staticmethod
    def _new_slot() -> ResultSlot:
        return asyncio.get_running_loop().create_future()
