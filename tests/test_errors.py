"""Tests for the error taxonomy and the backend exception boundary."""

import pytest

from wifi_direct.errors import (
    BackendError,
    ChannelClosedError,
    InvalidInputError,
    P2PError,
    RemoteCallError,
    SerializationError,
    to_p2p_error,
)


class TestToP2PError:
    def test_p2p_errors_pass_through(self):
        original = InvalidInputError("empty address")

        assert to_p2p_error(original, operation="connect") is original

    @pytest.mark.parametrize(
        "exc",
        [ConnectionError("refused"), TimeoutError("no reply"), OSError("bus gone")],
    )
    def test_transport_failures_become_remote_call_errors(self, exc):
        error = to_p2p_error(exc, operation="discover_peers")

        assert isinstance(error, RemoteCallError)
        assert error.operation == "discover_peers"
        assert str(error).startswith("discover_peers failed: ")
        assert error.__cause__ is exc

    @pytest.mark.parametrize(
        "exc",
        [ValueError("bad signature"), TypeError("not a dict"), UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid")],
    )
    def test_malformed_data_becomes_serialization_error(self, exc):
        error = to_p2p_error(exc, operation="connect")

        assert isinstance(error, SerializationError)
        assert error.__cause__ is exc

    def test_other_failures_become_backend_errors(self):
        exc = KeyError("peer")

        error = to_p2p_error(exc)

        assert isinstance(error, BackendError)
        assert error.__cause__ is exc

    def test_empty_message_uses_exception_type(self):
        error = to_p2p_error(RuntimeError(), operation="create_group")

        assert str(error) == "create_group: RuntimeError"


def test_channel_closed_names_endpoint():
    error = ChannelClosedError("manager")

    assert error.endpoint == "manager"
    assert str(error) == "channel closed: manager"
    assert isinstance(error, P2PError)


def test_remote_call_error_without_operation():
    error = RemoteCallError("timeout")

    assert error.operation is None
    assert str(error) == "timeout"
