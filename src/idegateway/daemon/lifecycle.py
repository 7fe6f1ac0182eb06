"""Control server lifecycle management.

One ``ServerLifecycleManager`` per process owns the control server. Starting
is idempotent and never blocks the caller: the bind happens on a background
worker, and failures end in the FAILED state plus a log record instead of an
exception.

State machine::

    NOT_STARTED / STOPPED / FAILED --start_server--> STARTING
    STARTING --bind ok--> RUNNING
    STARTING --bind error--> FAILED
    RUNNING --stop_server--> STOPPED
"""

from __future__ import annotations

import atexit
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

import structlog

from idegateway.config.models import ServerConfig
from idegateway.config.settings_store import SettingsStore
from idegateway.core.errors import GatewayError, ServerError
from idegateway.core.log_buffer import SERVER_COMPONENT
from idegateway.daemon.server import ControlServer

logger = structlog.get_logger(component=SERVER_COMPONENT)

ServerFactory = Callable[[str, int], ControlServer]


class ServerState(Enum):
    """Control server state."""

    NOT_STARTED = "not_started"
    STARTING = "starting"
    RUNNING = "running"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass
class ServerStatus:
    """Snapshot of the manager's state."""

    state: ServerState
    host: str
    port: int | None = None
    last_error: str | None = None
    error: GatewayError | None = None


@dataclass
class ServerLifecycleManager:
    """
    Guards start/stop of the single control server instance.

    Design:
    - The STARTING transition and the job submission happen under ``_lock``,
      so concurrent start_server() calls produce exactly one bind attempt
    - ``_lock`` is only ever held briefly; status() is safe from the
      server's own request handlers
    - ``_stop_lock`` serializes stop_server(). The state stays RUNNING until
      the socket is released, so no new start can bind in the meantime
    - Bind and serve run on a single-worker ThreadPoolExecutor
    - The port is read from the settings store once per start attempt
    """

    settings: SettingsStore
    server_config: ServerConfig = field(default_factory=ServerConfig)
    server_factory: ServerFactory | None = None

    _state: ServerState = field(default=ServerState.NOT_STARTED, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _stop_lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _executor: ThreadPoolExecutor | None = field(default=None, init=False)
    _server: ControlServer | None = field(default=None, init=False)
    _port: int | None = field(default=None, init=False)
    _error: GatewayError | None = field(default=None, init=False)

    def start_server(self) -> Future[None] | None:
        """Start the control server in the background.

        Returns the startup job's future, or None when the server is already
        starting or running, or when the job could not be scheduled (the
        manager is then FAILED).
        """
        future: Future[None] | None = None
        error: GatewayError | None = None
        with self._lock:
            previous = self._state
            if previous not in (ServerState.STARTING, ServerState.RUNNING):
                self._state = ServerState.STARTING
                self._error = None
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=1,
                        thread_name_prefix="idegateway-server",
                    )
                try:
                    future = self._executor.submit(self._start_in_background)
                except RuntimeError as e:
                    # Executor shut down underneath us; the next start creates a new one
                    self._executor = None
                    self._state = ServerState.FAILED
                    self._error = error = ServerError.start_failed(
                        f"cannot schedule startup: {e}"
                    )

        if previous in (ServerState.STARTING, ServerState.RUNNING):
            logger.info("server_already_running", state=previous.value)
        elif error is not None:
            logger.error("server_start_failed", **error.log_fields())
        else:
            logger.info("server_starting", previous_state=previous.value)
        return future

    def stop_server(self) -> None:
        """Stop the control server. No-op unless RUNNING."""
        with self._stop_lock:
            with self._lock:
                state = self._state
                server, port = self._server, self._port
                if state is ServerState.RUNNING:
                    self._server = None
            if state is not ServerState.RUNNING:
                logger.info("server_not_running", state=state.value)
                return
            logger.info("server_stopping", port=port)
            try:
                if server is not None:
                    server.stop()
            finally:
                with self._lock:
                    self._state = ServerState.STOPPED
        logger.info("server_stopped")

    def get_state(self) -> ServerState:
        return self._state

    def status(self) -> ServerStatus:
        with self._lock:
            return ServerStatus(
                state=self._state,
                host=self.server_config.host,
                port=self._port,
                last_error=str(self._error) if self._error else None,
                error=self._error,
            )

    def shutdown(self) -> None:
        """Wait for any pending start, then stop. Used on host shutdown."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self.stop_server()

    def _start_in_background(self) -> None:
        """Startup job. Runs on the worker thread and never raises."""
        host = self.server_config.host
        port: int | None = None
        try:
            port = self.settings.get_port()
            server = self._create_server(host, port)
            server.start()
        except Exception as e:
            error = e if isinstance(e, GatewayError) else ServerError.start_failed(str(e))
            with self._lock:
                self._state = ServerState.FAILED
                self._port = port
                self._error = error
            logger.error(
                "server_start_failed",
                **{"host": host, "port": port, **error.log_fields()},
            )
            return

        with self._lock:
            self._server = server
            self._port = server.port
            self._state = ServerState.RUNNING
        base_url = f"http://{host}:{server.port}"
        logger.info("server_started")
        logger.info("endpoint", name="health", url=f"{base_url}/health")
        logger.info("endpoint", name="status", url=f"{base_url}/status")

    def _create_server(self, host: str, port: int) -> ControlServer:
        if self.server_factory is not None:
            return self.server_factory(host, port)
        from idegateway.daemon.app import create_app

        return ControlServer(
            host,
            port,
            create_app(self),
            stop_timeout_sec=self.server_config.stop_timeout_sec,
        )


_manager: ServerLifecycleManager | None = None
_manager_lock = threading.Lock()


def get_server_manager() -> ServerLifecycleManager:
    """Process-wide manager. Created on first use, shut down at exit."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ServerLifecycleManager(settings=SettingsStore())
            atexit.register(_manager.shutdown)
        return _manager
