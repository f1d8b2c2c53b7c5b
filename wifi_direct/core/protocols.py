"""Protocol definition for the control-service backend.

The manager depends only on :class:`P2PBackend`. A concrete backend maps each
operation onto the control service (for wpa_supplicant: ``Find``,
``StopFind``, ``Connect`` and ``GroupAdd`` on the P2PDevice interface); tests
substitute a fake that records calls and returns scripted outcomes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class P2PBackend(Protocol):
    """Capability set the command actor invokes.

    Each coroutine returns ``None`` on success and raises on failure. Raised
    exceptions are translated with :func:`wifi_direct.errors.to_p2p_error`
    before they reach callers, so backends are free to raise their
    transport's own exception types.
    """

    async def discover_peers(self) -> None:
        """Start a peer discovery scan."""
        ...

    async def stop_discovery(self) -> None:
        """Stop the ongoing peer discovery scan."""
        ...

    async def connect(self, device_address: str) -> None:
        """Connect to the peer identified by ``device_address``."""
        ...

    async def create_group(self) -> None:
        """Create a group with default options."""
        ...


__all__ = ["P2PBackend"]
