from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class UvicornSettings(BaseModel):
    """A pydantic model for the settings passed to uvicorn.

    Attributes:
        log_level (str): The log level of the uvicorn loggers.
        access_log (bool): Flag indicating if the access log is enabled.
        lifespan (str): The lifespan mode ("auto", "on" or "off").
        backlog (int): The maximum number of pending connections.
    """

    log_level: str = "warning"
    access_log: bool = False
    lifespan: str = "auto"
    backlog: int = 2048


class Settings(BaseSettings):
    """A pydantic model for tfast settings.

    Attributes:
        default_host (str): The host used when the address has no host part.
        graceful_shutdown_timeout (float): How long in-flight requests are
            allowed to drain on stop, in seconds.
        stop_timeout (float): The maximum time to wait for the server thread
            to finish on stop, in seconds.
        tls_dir (Path | None): The directory for the temporary certificate and
            key files. The OS temporary directory is used if not set.
        server (UvicornSettings): The uvicorn settings.
    """

    default_host: str = "127.0.0.1"
    graceful_shutdown_timeout: float = 0.05
    stop_timeout: float = 5.0
    tls_dir: Path | None = None

    server: UvicornSettings = UvicornSettings()

    model_config = SettingsConfigDict(
        env_prefix="TFAST_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
    )


settings = Settings()
