"""Broadcast topic fanning events out to independent subscribers."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections import deque
from typing import AsyncIterator, Deque, Optional

from ..errors import ChannelClosedError, InvalidInputError
from .events import P2PEvent

LOGGER = logging.getLogger(__name__)


class EventTopic:
    """Single publisher, many subscribers, never blocks the publisher.

    Each receiver buffers at most ``capacity`` unread events. When a slow
    receiver overflows, its oldest unread event is skipped and counted in
    :attr:`EventReceiver.lagged`; other receivers are unaffected.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise InvalidInputError(
                f"event topic capacity must be positive, got {capacity}"
            )
        self._capacity = capacity
        self._receivers: "weakref.WeakSet[EventReceiver]" = weakref.WeakSet()
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def receiver_count(self) -> int:
        return len(self._receivers)

    def subscribe(self) -> EventReceiver:
        """Create a receiver that sees events published from now on."""

        receiver = EventReceiver(self)
        if self._closed:
            receiver._close()
        else:
            self._receivers.add(receiver)
        return receiver

    def publish(self, event: P2PEvent) -> int:
        """Deliver ``event`` to every live receiver; returns how many got it."""

        if self._closed:
            raise ChannelClosedError("events")

        receivers = list(self._receivers)
        for receiver in receivers:
            receiver._push(event)
        return len(receivers)

    def close(self) -> None:
        """Close the topic; receivers drain their backlog, then stop."""

        if self._closed:
            return
        self._closed = True
        for receiver in list(self._receivers):
            receiver._close()
        self._receivers.clear()

    def _unsubscribe(self, receiver: EventReceiver) -> None:
        self._receivers.discard(receiver)


class EventReceiver:
    """Subscriber end of an :class:`EventTopic`.

    Supports ``await receiver.recv()`` and ``async for event in receiver``;
    iteration ends once the topic is closed and the backlog is consumed.
    """

    def __init__(self, topic: EventTopic) -> None:
        self._topic = topic
        self._backlog: Deque[P2PEvent] = deque(maxlen=topic.capacity)
        self._ready = asyncio.Event()
        self._closed = False
        self._lagged = 0

    @property
    def pending(self) -> int:
        return len(self._backlog)

    @property
    def lagged(self) -> int:
        """Total number of events skipped because the backlog overflowed."""
        return self._lagged

    @property
    def closed(self) -> bool:
        return self._closed

    async def recv(self) -> P2PEvent:
        """Wait for the next event.

        Raises:
            ChannelClosedError: The topic (or this receiver) is closed and no
                buffered events remain.
        """

        while not self._backlog:
            if self._closed:
                raise ChannelClosedError("events")
            self._ready.clear()
            await self._ready.wait()
        return self._backlog.popleft()

    def try_recv(self) -> Optional[P2PEvent]:
        if self._backlog:
            return self._backlog.popleft()
        if self._closed:
            raise ChannelClosedError("events")
        return None

    def close(self) -> None:
        """Unsubscribe; buffered events can still be read."""

        self._topic._unsubscribe(self)
        self._close()

    def __aiter__(self) -> AsyncIterator[P2PEvent]:
        return self

    async def __anext__(self) -> P2PEvent:
        try:
            return await self.recv()
        except ChannelClosedError:
            raise StopAsyncIteration from None

    def _push(self, event: P2PEvent) -> None:
        if len(self._backlog) == self._backlog.maxlen:
            self._lagged += 1
            LOGGER.warning(
                "Event subscriber lagging; skipped oldest unread event (%d skipped total)",
                self._lagged,
            )
        self._backlog.append(event)
        self._ready.set()

    def _close(self) -> None:
        self._closed = True
        self._ready.set()
