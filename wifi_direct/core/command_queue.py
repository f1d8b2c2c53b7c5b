"""Bounded, closable FIFO between channel handles and the command actor."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import deque
from typing import Deque, Optional

from ..errors import ChannelClosedError, InvalidInputError
from .commands import ManagerCommand

LOGGER = logging.getLogger(__name__)


class CommandQueue:
    """Many producers, one consumer.

    ``put`` suspends while the queue is full and never drops or reorders
    commands: suspended producers are admitted in the order they arrived.
    Once the queue is closed, ``put`` raises :class:`ChannelClosedError` and
    ``get`` keeps returning the remaining commands until the queue is empty,
    after which it returns ``None``.

    Producers are counted explicitly: every channel handle registers itself
    and releases its registration when closed or collected. Releasing the last producer
    closes the queue.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise InvalidInputError(
                f"command queue capacity must be positive, got {capacity}"
            )
        self._capacity = capacity
        self._items: Deque[ManagerCommand] = deque()
        self._getters: Deque[asyncio.Future[None]] = deque()
        self._putters: Deque[asyncio.Future[None]] = deque()
        self._reserved = 0
        self._producers = 0
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def producers(self) -> int:
        return self._producers

    def qsize(self) -> int:
        return len(self._items)

    def full(self) -> bool:
        return len(self._items) >= self._capacity

    # ------------------------------------------------------------------
    # Producer accounting
    # ------------------------------------------------------------------
    def register_producer(self) -> None:
        if self._closed:
            raise ChannelClosedError("manager")
        self._producers += 1

    def release_producer(self) -> None:
        if self._producers == 0:
            return
        self._producers -= 1
        if self._producers == 0:
            LOGGER.debug("Last command producer released; closing queue")
            self.close()

    def close(self) -> None:
        """Refuse further commands; already queued commands stay deliverable."""

        if self._closed:
            return
        self._closed = True
        self._wake_all(self._getters)
        self._wake_all(self._putters)

    # ------------------------------------------------------------------
    # Queue operations
    # ------------------------------------------------------------------
    async def put(self, command: ManagerCommand) -> None:
        if self._closed:
            raise ChannelClosedError("manager")
        if self._putters or self._free_slots() < 1:
            await self._wait_for_slot()

        self._items.append(command)
        self._wake_next(self._getters)

    async def get(self) -> Optional[ManagerCommand]:
        """Return the next command, or ``None`` once closed and drained."""

        while not self._items:
            if self._closed:
                return None
            await self._wait_for_item()

        command = self._items.popleft()
        self._grant_slots()
        return command

    def drain(self) -> list[ManagerCommand]:
        """Remove and return every queued command without waiting."""

        items = list(self._items)
        self._items.clear()
        self._grant_slots()
        return items

    def _free_slots(self) -> int:
        return self._capacity - len(self._items) - self._reserved

    def _grant_slots(self) -> None:
        # Freed slots are handed to suspended putters oldest first; a later
        # put waits behind them.
        while self._putters and self._free_slots() > 0:
            waiter = self._putters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                self._reserved += 1

    async def _wait_for_slot(self) -> None:
        waiter = asyncio.get_running_loop().create_future()
        self._putters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled() and not self._closed:
                self._reserved -= 1
                self._grant_slots()
            else:
                with contextlib.suppress(ValueError):
                    self._putters.remove(waiter)
            raise

        if self._closed:
            raise ChannelClosedError("manager")
        self._reserved -= 1

    async def _wait_for_item(self) -> None:
        waiter = asyncio.get_running_loop().create_future()
        self._getters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            with contextlib.suppress(ValueError):
                self._getters.remove(waiter)
            # A wake-up consumed by a cancelled waiter is passed on.
            if waiter.done() and not waiter.cancelled():
                self._wake_next(self._getters)
            raise

    @staticmethod
    def _wake_next(waiters: Deque[asyncio.Future[None]]) -> None:
        while waiters:
            waiter = waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return

    @staticmethod
    def _wake_all(waiters: Deque[asyncio.Future[None]]) -> None:
        while waiters:
            waiter = waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
