from collections.abc import Callable
from enum import Enum

from fastapi import FastAPI
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self


class ServerState(str, Enum):
    """Lifecycle state of a live server.

    The state only moves forward: UNSTARTED -> LISTENING -> STOPPED.
    """

    UNSTARTED = "unstarted"
    LISTENING = "listening"
    STOPPED = "stopped"


class ServerConfig(BaseModel):
    """Configuration of a live server.

    Attributes:
        address (str): "host:port" to listen at. An empty host selects the
            default host, an empty port (or 0) an ephemeral port.
        tls (bool): serve HTTPS instead of HTTP
        tls_cert (bytes | None): PEM encoded certificate, the process-wide
            default is used if not set
        tls_key (bytes | None): PEM encoded private key, the process-wide
            default is used if not set
        app (FastAPI | None): the application to serve, a new one is created if not set
        on_error (Callable | None): called with an AcceptLoopError whenever the
            background server or a route handler fails
    """

    address: str = Field("", description="The address to listen at.")
    tls: bool = Field(False, description="Whether to serve HTTPS.")
    tls_cert: bytes | None = Field(None, description="PEM encoded certificate.")
    tls_key: bytes | None = Field(None, description="PEM encoded private key.")
    app: FastAPI | None = Field(None, description="The application to serve.")
    on_error: Callable[[Exception], None] | None = Field(
        None, description="Observer for background errors."
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_cert_and_key(self) -> Self:
        """Check that the certificate and the key are provided together.

        Raises:
            ValueError: if only one of 'tls_cert' and 'tls_key' is provided

        Returns:
            Self: the instance
        """
        if bool(self.tls_cert) != bool(self.tls_key):
            raise ValueError(  # noqa: TRY003
                "Both 'tls_cert' and 'tls_key' must be provided, or neither."
            )
        return self
