import asyncio
from typing import Optional

import pytest
import pytest_asyncio

from wifi_direct.config import ManagerConfig
from wifi_direct.manager import WifiP2PManager


class FakeP2PBackend:
    """Backend double that records calls and returns scripted outcomes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.failures: dict[str, BaseException] = {}
        self.gate: Optional[asyncio.Event] = None
        self.delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0

    async def _call(self, name: str, *args: str) -> None:
        self.calls.append((name, args))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            if self.delay:
                await asyncio.sleep(self.delay)
            failure = self.failures.get(name)
            if failure is not None:
                raise failure
        finally:
            self.in_flight -= 1

    async def discover_peers(self) -> None:
        await self._call("discover_peers")

    async def stop_discovery(self) -> None:
        await self._call("stop_discovery")

    async def connect(self, device_address: str) -> None:
        await self._call("connect", device_address)

    async def create_group(self) -> None:
        await self._call("create_group")


@pytest.fixture
def backend() -> FakeP2PBackend:
    return FakeP2PBackend()


@pytest_asyncio.fixture
async def manager(backend: FakeP2PBackend):
    instance = WifiP2PManager(backend, config=ManagerConfig(interface_name="p2p-test"))
    try:
        yield instance
    finally:
        await instance.shutdown()
