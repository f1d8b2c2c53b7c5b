"""Command actor and the manager that spawns it.

The actor is the only caller of the backend. It drains its command queue one
command at a time, resolves each command's result slot, and broadcasts the
matching event only when the backend call succeeded. Backend failures go to
the submitting caller alone and never stop the loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging
from enum import Enum
from typing import Optional

from .channel import WifiP2PChannel
from .config import ManagerConfig
from .core import CommandQueue, EventTopic, ManagerCommand, P2PBackend
from .errors import ChannelClosedError, InvalidInputError, to_p2p_error
from .health import HealthReporter

LOGGER = logging.getLogger(__name__)


class ActorState(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class CommandActor:
    """Single consumer of a :class:`CommandQueue`.

    Running until the queue is closed and drained, then Stopped for good.
    There is no timeout around backend calls: a call that never returns
    stalls every command queued behind it.
    """

    def __init__(
        self,
        backend: P2PBackend,
        commands: CommandQueue,
        events: EventTopic,
        *,
        name: str,
        health: Optional[HealthReporter] = None,
    ) -> None:
        self._backend = backend
        self._commands = commands
        self._events = events
        self._health = health
        self.name = name

        self._state = ActorState.RUNNING
        self._stopped = asyncio.Event()
        self._current: Optional[ManagerCommand] = None
        self.processed = 0
        self.failed = 0
        self.last_error: Optional[str] = None

    @property
    def state(self) -> ActorState:
        return self._state

    @property
    def events(self) -> EventTopic:
        return self._events

    @property
    def commands(self) -> CommandQueue:
        return self._commands

    async def wait_stopped(self) -> None:
        await self._stopped.wait()

    async def run(self) -> None:
        LOGGER.info("Command actor %s running", self.name)
        await self._report()

        try:
            while True:
                command = await self._commands.get()
                if command is None:
                    break
                await self._execute(command)
        except asyncio.CancelledError:
            LOGGER.info("Command actor %s cancelled", self.name)
            raise
        finally:
            self.mark_stopped()
            if self._health is not None:
                await self._health.remove(self.name)

    def mark_stopped(self) -> None:
        """Enter the terminal Stopped state, failing any unfinished commands."""

        if self._state is ActorState.STOPPED:
            return
        self._abandon_pending()
        self._events.close()
        self._state = ActorState.STOPPED
        self._stopped.set()
        LOGGER.info(
            "Command actor %s stopped (processed=%d, failed=%d)",
            self.name,
            self.processed,
            self.failed,
        )

    async def _execute(self, command: ManagerCommand) -> None:
        self._current = command
        LOGGER.debug("Command actor %s executing %s", self.name, command.operation)

        try:
            await command.invoke(self._backend)
        except Exception as exc:
            error = to_p2p_error(exc, operation=command.operation)
            self.failed += 1
            self.last_error = str(error)
            LOGGER.warning("Backend %s failed: %s", command.operation, error)
            command.resolve(error)
        else:
            command.resolve()
            event = command.success_event()
            delivered = self._events.publish(event)
            LOGGER.debug(
                "Broadcast %s to %d subscriber(s)", event.name.value, delivered
            )
            self.last_error = None

        self._current = None
        self.processed += 1
        await self._report()

    def _abandon_pending(self) -> None:
        self._commands.close()
        pending = self._commands.drain()
        if self._current is not None:
            pending.insert(0, self._current)
            self._current = None
        if not pending:
            return

        LOGGER.warning(
            "Command actor %s dropping %d unfinished command(s)", self.name, len(pending)
        )
        for command in pending:
            command.resolve(ChannelClosedError("manager"))

    async def _report(self) -> None:
        if self._health is None:
            return
        await self._health.update(
            self.name,
            self._state.value,
            healthy=self.last_error is None,
            processed=self.processed,
            failed=self.failed,
            detail=self.last_error,
        )


class WifiP2PManager:
    """Owns a backend and spawns command actors over it.

    Each :meth:`initialize` call builds a fresh command queue, event topic and
    actor task, and returns the first channel handle for them. Construct a new
    actor (or manager) to resume service after one has stopped.
    """

    def __init__(
        self,
        backend: P2PBackend,
        *,
        config: Optional[ManagerConfig] = None,
        health: Optional[HealthReporter] = None,
    ) -> None:
        if not isinstance(backend, P2PBackend):
            raise InvalidInputError(
                f"{type(backend).__name__} does not implement the P2P backend protocol"
            )
        self._config = config or ManagerConfig()
        if not self._config.interface_name.strip():
            raise InvalidInputError("interface name must not be empty")

        self._backend = backend
        self._health = health
        self._actors: dict[str, CommandActor] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._sequence = itertools.count(1)

    @property
    def backend(self) -> P2PBackend:
        return self._backend

    @property
    def config(self) -> ManagerConfig:
        return self._config

    @property
    def actors(self) -> list[CommandActor]:
        """Actors whose task has not finished yet."""

        return list(self._actors.values())

    def initialize(self) -> WifiP2PChannel:
        """Spawn a command actor on the running loop and return its channel."""

        loop = asyncio.get_running_loop()
        commands = CommandQueue(self._config.command_queue_capacity)
        events = EventTopic(self._config.event_capacity)
        name = f"{self._config.interface_name}-{next(self._sequence)}"

        actor = CommandActor(
            self._backend, commands, events, name=name, health=self._health
        )
        # The channel must register as a producer before the actor first polls.
        channel = WifiP2PChannel(commands, events)
        task = loop.create_task(actor.run(), name=f"wifi-direct-actor-{name}")
        task.add_done_callback(lambda _: self._forget(name))

        self._actors[name] = actor
        self._tasks[name] = task
        return channel

    def _forget(self, name: str) -> None:
        self._tasks.pop(name, None)
        self._actors.pop(name, None)

    async def shutdown(self) -> None:
        """Cancel every running actor and wait for them to stop."""

        actors = list(self._actors.values())
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

        # Actors cancelled before their first step never ran their cleanup.
        for actor in actors:
            actor.mark_stopped()

    async def __aenter__(self) -> WifiP2PManager:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
