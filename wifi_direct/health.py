"""Health reporting utilities for wifi-direct."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from aiohttp import web

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ActorStatus:
    name: str
    state: str
    healthy: bool
    processed: int = 0
    failed: int = 0
    detail: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "state": self.state,
            "healthy": self.healthy,
            "processed": self.processed,
            "failed": self.failed,
            "detail": self.detail,
            "updatedAt": self.updated_at.isoformat(timespec="seconds"),
        }


class HealthReporter:
    """Tracks the status of every command actor owned by a manager."""

    def __init__(self) -> None:
        self._status: Dict[str, ActorStatus] = {}
        self._lock = asyncio.Lock()

    async def update(
        self,
        name: str,
        state: str,
        *,
        healthy: bool,
        processed: int = 0,
        failed: int = 0,
        detail: Optional[str] = None,
    ) -> None:
        async with self._lock:
            self._status[name] = ActorStatus(
                name=name,
                state=state,
                healthy=healthy,
                processed=processed,
                failed=failed,
                detail=detail,
            )

    async def remove(self, name: str) -> None:
        async with self._lock:
            self._status.pop(name, None)

    async def snapshot(self) -> Dict[str, object]:
        async with self._lock:
            entries = list(self._status.values())

        actors = [status.as_dict() for status in entries]
        overall = "ok" if all(item["healthy"] for item in actors) else "degraded"
        return {"status": overall, "actors": actors}

    async def get(self, name: str) -> Optional[ActorStatus]:
        async with self._lock:
            return self._status.get(name)


class HealthServer:
    """Minimal HTTP server exposing `/healthz` and `/healthz/{actor}`."""

    def __init__(self, reporter: HealthReporter, host: str, port: int) -> None:
        self._reporter = reporter
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    async def start(self) -> None:
        app = web.Application()
        app.router.add_get("/healthz", self._handle_health)
        app.router.add_get("/healthz/{actor}", self._handle_actor)

        self._runner = web.AppRunner(app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        LOGGER.info(
            "Health endpoint listening on http://%s:%s/healthz", self._host, self._port
        )

    async def stop(self) -> None:
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        if self._runner is not None:
            await self._runner.cleanup()
        self._site = None
        self._runner = None

    async def _handle_health(self, request: web.Request) -> web.Response:
        snapshot = await self._reporter.snapshot()
        status = 200 if snapshot["status"] == "ok" else 503
        return web.json_response(snapshot, status=status)

    async def _handle_actor(self, request: web.Request) -> web.Response:
        name = request.match_info["actor"]
        status = await self._reporter.get(name)
        if status is None:
            return web.json_response({"error": f"unknown actor {name!r}"}, status=404)
        return web.json_response(status.as_dict(), status=200 if status.healthy else 503)
