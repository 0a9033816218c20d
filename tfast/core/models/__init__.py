from tfast.core.models.server import ServerConfig, ServerState

__all__ = [
    "ServerConfig",
    "ServerState",
]
