from tfast.client import get_default_session, skip_insecure_tls_verification
from tfast.core.models.server import ServerConfig, ServerState
from tfast.server import (
    LiveServer,
    start,
    start_at,
    start_tls,
    start_tls_at,
    start_with_config,
)
from tfast.tls import get_default_tls_certificate, set_default_tls_certificate

__all__ = [
    "LiveServer",
    "ServerConfig",
    "ServerState",
    "start",
    "start_at",
    "start_tls",
    "start_tls_at",
    "start_with_config",
    "get_default_session",
    "get_default_tls_certificate",
    "set_default_tls_certificate",
    "skip_insecure_tls_verification",
]
