import logging
import socket
import sys

from tfast.exceptions.server import BindError

logger = logging.getLogger(__name__)


def split_address(address: str, default_host: str) -> tuple[str, int]:
    """Split an address into host and port.

    Supported forms are "host:port", "host:" and ":port", IPv6 hosts in
    brackets ("[::1]:8080") and the empty string. A missing host is replaced
    with default_host, a missing port with 0 (ephemeral port).

    Args:
        address (str): the address to split
        default_host (str): the host to use if the address has none

    Returns:
        tuple[str, int]: host and port

    Raises:
        BindError: if the address cannot be parsed
    """
    if not address:
        return default_host, 0
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise BindError(address=address, msg="missing port in address")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise BindError(address=address, msg="IPv6 hosts must be in brackets")
    if not port_str:
        port = 0
    elif port_str.isascii() and port_str.isdigit():
        port = int(port_str)
    else:
        raise BindError(address=address, msg=f"invalid port {port_str!r}")
    if port > 65535:
        raise BindError(address=address, msg=f"port {port} out of range")
    return host or default_host, port


def create_listener(host: str, port: int, backlog: int = 2048) -> socket.socket:
    """Create a TCP socket bound to host:port and start listening.

    Args:
        host (str): host name or IP address
        port (int): port number, 0 for an ephemeral port
        backlog (int): the maximum number of pending connections

    Returns:
        socket.socket: the listening socket

    Raises:
        BindError: if the address cannot be resolved or bound
    """
    address = f"[{host}]:{port}" if ":" in host else f"{host}:{port}"
    try:
        infos = socket.getaddrinfo(
            host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE
        )
    except socket.gaierror as e:
        raise BindError(address=address, msg=str(e)) from e

    family, sock_type, proto, _, sockaddr = infos[0]
    sock = socket.socket(family, sock_type, proto)
    try:
        if sys.platform != "win32":
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(sockaddr)
        sock.listen(backlog)
    except OSError as e:
        sock.close()
        raise BindError(address=address, msg=str(e)) from e

    logger.debug(f"Listening on {sock.getsockname()}")
    return sock
