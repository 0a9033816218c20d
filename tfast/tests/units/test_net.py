# ruff: noqa: S101
import socket

import pytest

from tfast.exceptions.server import BindError
from tfast.utils.net import create_listener, split_address


@pytest.mark.parametrize(
    "address, expected",
    [
        ("", ("127.0.0.1", 0)),
        ("localhost:", ("localhost", 0)),
        ("localhost:8080", ("localhost", 8080)),
        (":8080", ("127.0.0.1", 8080)),
        ("0.0.0.0:0", ("0.0.0.0", 0)),  # noqa: S104
        ("[::1]:8080", ("::1", 8080)),
        ("[::1]:", ("::1", 0)),
    ],
)
def test_split_address(address, expected):
    """Test splitting valid addresses into host and port."""
    assert split_address(address, "127.0.0.1") == expected


@pytest.mark.parametrize(
    "address",
    ["localhost", "localhost:http", "::1:8080", "localhost:70000", "localhost:-1"],
)
def test_split_address_invalid(address):
    """Test that invalid addresses raise BindError."""
    with pytest.raises(BindError) as exc_info:
        split_address(address, "127.0.0.1")
    assert exc_info.value.address == address


def test_create_listener_ephemeral_port():
    """Test that binding port 0 yields a port assigned by the OS."""
    sock = create_listener("127.0.0.1", 0)
    try:
        host, port = sock.getsockname()
        assert host == "127.0.0.1"
        assert port > 0
    finally:
        sock.close()


def test_create_listener_port_in_use():
    """Test that binding a port with an active listener raises BindError."""
    sock = create_listener("127.0.0.1", 0)
    try:
        port = sock.getsockname()[1]
        with pytest.raises(BindError) as exc_info:
            create_listener("127.0.0.1", port)
        assert exc_info.value.address == f"127.0.0.1:{port}"
        assert isinstance(exc_info.value.__cause__, OSError)
    finally:
        sock.close()


def test_create_listener_accepts_connections():
    """Test that the listener accepts connections before anyone calls accept."""
    sock = create_listener("127.0.0.1", 0)
    try:
        with socket.create_connection(sock.getsockname(), timeout=5):
            pass
    finally:
        sock.close()
