# This file is used to define fixtures that are used in the tests.
import socket
from pathlib import Path

import pytest

from tfast.server import start, start_tls
from tfast.tls import set_default_tls_certificate

FILES_DIR = Path(__file__).parent / "files"


@pytest.fixture
def server():
    """Start an HTTP server and stop it after the test."""
    live_server = start()
    assert live_server is not None  # noqa: S101
    yield live_server
    live_server.stop()


@pytest.fixture
def tls_server():
    """Start an HTTPS server with the default certificate and stop it after the test."""
    live_server = start_tls()
    assert live_server is not None  # noqa: S101
    yield live_server
    live_server.stop()


@pytest.fixture
def free_port() -> int:
    """Return a port that was free a moment ago."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def override_cert_files() -> tuple[Path, Path]:
    """Paths to an alternative certificate and key (CN override.localhost)."""
    return FILES_DIR / "override_cert.pem", FILES_DIR / "override_key.pem"


@pytest.fixture(autouse=True)
def restore_default_certificate():
    """Restore the bundled default certificate after each test."""
    yield
    set_default_tls_certificate(None, None)
