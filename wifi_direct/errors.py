"""Error taxonomy for wifi-direct.

Every failure surfaced to callers is a :class:`P2PError`. Backends may raise
whatever their transport raises; :func:`to_p2p_error` is the single place where
those exceptions are translated into the kinds below.
"""

from __future__ import annotations

from typing import Optional


class P2PError(RuntimeError):
    """Base class for all wifi-direct failures."""


class RemoteCallError(P2PError):
    """Raised when a call into the control service fails."""

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        if operation:
            message = f"{operation} failed: {message}"
        super().__init__(message)
        self.operation = operation


class SerializationError(P2PError):
    """Raised when data crossing the remote boundary is malformed."""


class ChannelClosedError(P2PError):
    """Raised when the command queue, event topic or a result slot is gone."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"channel closed: {endpoint}")
        self.endpoint = endpoint


class InvalidInputError(P2PError):
    """Raised for empty or out-of-range caller input."""


class BackendError(P2PError):
    """Raised for backend-specific failures not covered by the other kinds."""


def to_p2p_error(exc: BaseException, *, operation: Optional[str] = None) -> P2PError:
    """Translate a collaborator exception into a :class:`P2PError`.

    ``P2PError`` instances pass through unchanged. The returned error chains
    the original exception as ``__cause__``.
    """

    if isinstance(exc, P2PError):
        return exc

    detail = str(exc) or type(exc).__name__
    error: P2PError
    if isinstance(exc, (ValueError, TypeError)):
        # UnicodeError is a ValueError subclass.
        error = SerializationError(
            f"{operation}: {detail}" if operation else detail
        )
    elif isinstance(exc, (OSError, TimeoutError)):
        error = RemoteCallError(detail, operation=operation)
    else:
        error = BackendError(f"{operation}: {detail}" if operation else detail)

    error.__cause__ = exc
    return error


__all__ = [
    "BackendError",
    "ChannelClosedError",
    "InvalidInputError",
    "P2PError",
    "RemoteCallError",
    "SerializationError",
    "to_p2p_error",
]
