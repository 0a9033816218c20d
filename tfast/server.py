import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import FastAPI

from tfast.configs.settings import settings as tfast_settings
from tfast.core.models.server import ServerConfig, ServerState
from tfast.exceptions.core import BaseException
from tfast.exceptions.server import AcceptLoopError, CertificateLoadError
from tfast.tls import get_default_tls_certificate, remove_tls_files, write_tls_files
from tfast.utils.net import create_listener, split_address
from tfast.utils.url import absolute_url, format_base_url

logger = logging.getLogger(__name__)

__all__ = [
    "LiveServer",
    "start",
    "start_at",
    "start_tls",
    "start_tls_at",
    "start_with_config",
]


class _ErrorReportingApp:
    """ASGI wrapper that reports exceptions raised by the application.

    The exception is passed to the server's error observer and then re-raised,
    so uvicorn still logs it and answers with a 500.
    """

    def __init__(self, server: "LiveServer"):
        self.server = server

    async def __call__(self, scope, receive, send):
        try:
            await self.server.app(scope, receive, send)
        except Exception as e:
            location = f"{scope.get('method', scope['type'])} {scope.get('path', '')}"
            self.server._report(
                AcceptLoopError(url=self.server.url, msg=f"{location}: {e!r}")
            )
            raise


class LiveServer:
    """A FastAPI application served by uvicorn on a background thread.

    Instances are created by the start functions of this module and are
    listening by the time they are returned, so the port and the URL can be
    used right away. Routes can be registered at any time, before or after
    the first request:

    ```
    server = start()

    @server.get("/hello")
    def hello(name: str):
        return PlainTextResponse(f"hello {name}")

    requests.get(server.absolute_url("/hello?name=world"))
    server.stop()
    ```

    Attributes:
        app (FastAPI): the served application
        tls (bool): True if the server serves HTTPS
        on_error (Callable | None): called with an AcceptLoopError whenever the
            background server or a route handler fails
    """

    def __init__(
        self,
        app: FastAPI | None = None,
        tls: bool = False,
        on_error: Callable[[Exception], None] | None = None,
    ):
        """Create a server that is not listening yet.

        Args:
            app (FastAPI | None): the application to serve, a new one is created if None
            tls (bool): serve HTTPS instead of HTTP
            on_error (Callable | None): observer for background errors
        """
        self.app = app if app is not None else FastAPI()
        self.tls = tls
        self.on_error = on_error

        self._state = ServerState.UNSTARTED
        self._address: tuple = ()
        self._url = ""
        self._cert_file_path: Path | None = None
        self._key_file_path: Path | None = None

        self._lock = threading.Lock()
        self._socket = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> ServerState:
        """The lifecycle state of the server."""
        return self._state

    @property
    def address(self) -> tuple:
        """The socket address the server is bound to."""
        return self._address

    @property
    def host(self) -> str:
        """The IP address the server is bound to."""
        return self._address[0] if self._address else ""

    @property
    def port(self) -> int:
        """The port the server is listening at."""
        return self._address[1] if self._address else 0

    @property
    def url(self) -> str:
        """The base URL (scheme + host + port), e.g. http://127.0.0.1:61241."""
        return self._url

    base_url = url

    @property
    def cert_file_path(self) -> Path | None:
        """Path to the temporary certificate file, None if TLS is not used or the server is stopped."""
        return self._cert_file_path

    @property
    def key_file_path(self) -> Path | None:
        """Path to the temporary key file, None if TLS is not used or the server is stopped."""
        return self._key_file_path

    def _listen(
        self, address: str, cert: bytes | None = None, key: bytes | None = None
    ):
        """Bind the listener and start serving on a background thread.

        Args:
            address (str): the address to listen at
            cert (bytes | None): PEM encoded certificate, required if tls is True
            key (bytes | None): PEM encoded private key, required if tls is True

        Raises:
            BindError: if the address cannot be bound
            FileWriteError: if the credential files cannot be written
            CertificateLoadError: if the credentials cannot be loaded
        """
        if self.tls:
            self._cert_file_path, self._key_file_path = write_tls_files(
                cert, key, tfast_settings.tls_dir
            )

        sock = None
        try:
            host, port = split_address(address, tfast_settings.default_host)
            sock = create_listener(host, port, backlog=tfast_settings.server.backlog)

            config = uvicorn.Config(
                _ErrorReportingApp(self),
                log_config=None,
                log_level=tfast_settings.server.log_level,
                access_log=tfast_settings.server.access_log,
                lifespan=tfast_settings.server.lifespan,
                backlog=tfast_settings.server.backlog,
                timeout_graceful_shutdown=tfast_settings.graceful_shutdown_timeout,
                ssl_certfile=self._cert_file_path,
                ssl_keyfile=self._key_file_path,
            )
            # Load the config here so invalid credentials fail the caller
            try:
                config.load()
            except OSError as e:
                if not self.tls:
                    raise
                raise CertificateLoadError(
                    cert_file=self._cert_file_path,
                    key_file=self._key_file_path,
                    msg=str(e),
                ) from e
        except Exception:
            if sock is not None:
                sock.close()
            self._remove_tls_files()
            raise

        self._socket = sock
        self._address = sock.getsockname()
        scheme = "https" if self.tls else "http"
        self._url = format_base_url(scheme, self.host, self.port)
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._serve, name=f"tfast-{self.port}", daemon=True
        )
        self._state = ServerState.LISTENING
        self._thread.start()

    def _serve(self):
        """Run the server until it is stopped."""
        try:
            self._server.run(sockets=[self._socket])
        except (Exception, SystemExit) as e:
            logger.exception(f"tfast error at {self.url}")
            self._socket.close()
            self._report(AcceptLoopError(url=self.url, msg=repr(e)))
            return
        if not self._server.started and self._state == ServerState.LISTENING:
            logger.error(f"tfast server at {self.url} failed to start")
            # Nothing accepts on the socket any more, refuse connections
            self._socket.close()
            self._report(AcceptLoopError(url=self.url, msg="server failed to start"))

    def _report(self, error: AcceptLoopError):
        """Pass a background error to the error observer, if any."""
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception:
            logger.exception("tfast on_error callback failed")

    def _remove_tls_files(self):
        remove_tls_files(self._cert_file_path, self._key_file_path)
        self._cert_file_path = None
        self._key_file_path = None

    def stop(self):
        """Stop the server.

        New connections are refused and in-flight requests get
        `graceful_shutdown_timeout` seconds to complete. The temporary
        credential files are deleted afterwards. Calling stop more than once
        is safe.
        """
        with self._lock:
            if self._state != ServerState.LISTENING:
                return
            self._state = ServerState.STOPPED

            self._server.should_exit = True
            self._thread.join(timeout=tfast_settings.stop_timeout)
            if self._thread.is_alive():
                logger.warning(
                    f"tfast server at {self.url} did not stop within "
                    f"{tfast_settings.stop_timeout} seconds"
                )
                self._server.force_exit = True
            self._socket.close()
            self._remove_tls_files()

    def absolute_url(self, path: str) -> str:
        """Construct an absolute URL from the supplied (relative) path.

        For example, server.absolute_url("/my/path") could return
        "http://127.0.0.1:53262/my/path".

        Args:
            path (str): the path, may include a query string

        Returns:
            str: the absolute URL
        """
        return absolute_url(self.url, path)

    def __enter__(self) -> "LiveServer":
        return self

    def __exit__(self, *exc_info):
        self.stop()

    def __str__(self) -> str:
        return self.url

    def __repr__(self) -> str:
        return f"LiveServer(url={self.url!r}, state={self.state.value})"

    # Route registration is delegated to the FastAPI application.

    def get(self, path: str, **kwargs: Any) -> Callable:
        """Register a GET route, see FastAPI.get."""
        return self.app.get(path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Callable:
        """Register a POST route, see FastAPI.post."""
        return self.app.post(path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Callable:
        """Register a PUT route, see FastAPI.put."""
        return self.app.put(path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Callable:
        """Register a PATCH route, see FastAPI.patch."""
        return self.app.patch(path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Callable:
        """Register a DELETE route, see FastAPI.delete."""
        return self.app.delete(path, **kwargs)

    def head(self, path: str, **kwargs: Any) -> Callable:
        """Register a HEAD route, see FastAPI.head."""
        return self.app.head(path, **kwargs)

    def options(self, path: str, **kwargs: Any) -> Callable:
        """Register an OPTIONS route, see FastAPI.options."""
        return self.app.options(path, **kwargs)

    def api_route(self, path: str, **kwargs: Any) -> Callable:
        """Register a route for several methods, see FastAPI.api_route."""
        return self.app.api_route(path, **kwargs)

    def add_api_route(self, path: str, endpoint: Callable, **kwargs: Any):
        """Register an endpoint function, see FastAPI.add_api_route."""
        self.app.add_api_route(path, endpoint, **kwargs)

    def websocket(self, path: str, **kwargs: Any) -> Callable:
        """Register a websocket route, see FastAPI.websocket."""
        return self.app.websocket(path, **kwargs)

    def include_router(self, router, **kwargs: Any):
        """Include an APIRouter, see FastAPI.include_router."""
        self.app.include_router(router, **kwargs)

    def mount(self, path: str, app, name: str | None = None):
        """Mount an ASGI application, see FastAPI.mount."""
        self.app.mount(path, app, name=name)

    def middleware(self, middleware_type: str) -> Callable:
        """Register a middleware function, see FastAPI.middleware.

        Middleware has to be registered before the first request.
        """
        return self.app.middleware(middleware_type)

    def exception_handler(self, exc_class_or_status_code) -> Callable:
        """Register an exception handler, see FastAPI.exception_handler."""
        return self.app.exception_handler(exc_class_or_status_code)


def start_with_config(config: ServerConfig) -> LiveServer:
    """Start a server as described by the config.

    Without explicit credentials, TLS servers use the process-wide default
    certificate (see tfast.tls.set_default_tls_certificate).

    Args:
        config (ServerConfig): the server configuration

    Returns:
        LiveServer: the listening server

    Raises:
        BindError: if the address cannot be bound
        FileWriteError: if the credential files cannot be written
        CertificateLoadError: if the credentials cannot be loaded
    """
    server = LiveServer(app=config.app, tls=config.tls, on_error=config.on_error)
    cert, key = None, None
    if config.tls:
        if config.tls_cert:
            cert, key = config.tls_cert, config.tls_key
        else:
            cert, key = get_default_tls_certificate()
    server._listen(config.address, cert, key)
    logger.debug(f"tfast server started at {server.url}")
    return server


def start_at(address: str) -> LiveServer:
    """Start an HTTP server at address (e.g. "127.0.0.1:8080").

    Args:
        address (str): the address to listen at

    Returns:
        LiveServer: the listening server

    Raises:
        BindError: if the address cannot be bound
    """
    return start_with_config(ServerConfig(address=address))


def start_tls_at(address: str) -> LiveServer:
    """Start an HTTPS server at address using the default certificate.

    Args:
        address (str): the address to listen at

    Returns:
        LiveServer: the listening server

    Raises:
        BindError: if the address cannot be bound
        FileWriteError: if the credential files cannot be written
        CertificateLoadError: if the default credentials cannot be loaded
    """
    return start_with_config(ServerConfig(address=address, tls=True))


def start() -> LiveServer | None:
    """Start an HTTP server at an ephemeral port of the default host.

    In the unlikely event of an error, it is logged and None is returned.
    """
    try:
        return start_at("")
    except BaseException:
        logger.exception("Failed to start tfast server.")
        return None


def start_tls() -> LiveServer | None:
    """Start an HTTPS server at an ephemeral port of the default host.

    In the unlikely event of an error, it is logged and None is returned.
    """
    try:
        return start_tls_at("")
    except BaseException:
        logger.exception("Failed to start tfast TLS server.")
        return None
