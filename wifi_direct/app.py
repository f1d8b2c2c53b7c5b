"""Application wrapper tying configuration, logging and health to a manager."""

from __future__ import annotations

import logging
from typing import Optional

from .channel import WifiP2PChannel
from .config import P2PConfig, load_config
from .core import P2PBackend
from .health import HealthReporter, HealthServer
from .logging import configure_logging
from .manager import WifiP2PManager

LOGGER = logging.getLogger(__name__)


class WifiDirectApp:
    """Coordinates startup and shutdown around a :class:`WifiP2PManager`.

    The backend is injected; this package ships no concrete control-service
    adapter.

    Usage::

        async with WifiDirectApp(backend, config=config) as app:
            action = await app.channel.discover_peers()
            await action
    """

    def __init__(
        self,
        backend: P2PBackend,
        *,
        config: Optional[P2PConfig] = None,
        configure_logs: bool = True,
    ) -> None:
        self._config = config or load_config()
        self._backend = backend
        self._configure_logs = configure_logs
        self._health = HealthReporter()
        self._health_server: Optional[HealthServer] = None
        self._manager: Optional[WifiP2PManager] = None
        self._channel: Optional[WifiP2PChannel] = None

    @property
    def config(self) -> P2PConfig:
        return self._config

    @property
    def health(self) -> HealthReporter:
        return self._health

    @property
    def manager(self) -> WifiP2PManager:
        if self._manager is None:
            raise RuntimeError("wifi-direct app is not started")
        return self._manager

    @property
    def channel(self) -> WifiP2PChannel:
        if self._channel is None:
            raise RuntimeError("wifi-direct app is not started")
        return self._channel

    async def start(self) -> None:
        if self._manager is not None:
            LOGGER.warning("wifi-direct app already started")
            return

        if self._configure_logs:
            configure_logging(
                self._config.logging.level,
                log_path=self._config.logging.path,
                log_backend=self._config.logging.log_backend,
            )

        LOGGER.info(
            "wifi-direct starting on %s with config: %s",
            self._config.manager.interface_name,
            self._config.path,
        )

        if self._config.health.enabled:
            self._health_server = HealthServer(
                self._health, self._config.health.host, self._config.health.port
            )
            await self._health_server.start()

        self._manager = WifiP2PManager(
            self._backend, config=self._config.manager, health=self._health
        )
        self._channel = self._manager.initialize()

    async def stop(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None

        if self._manager is not None:
            await self._manager.shutdown()
            self._manager = None

        if self._health_server is not None:
            await self._health_server.stop()
            self._health_server = None

        LOGGER.info("wifi-direct stopped")

    async def __aenter__(self) -> WifiDirectApp:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
