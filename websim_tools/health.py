# =============================================================================
# websim_tools/health.py  —  Liveness endpoint for container deployments
# =============================================================================
#
# When PORT is set, main.py starts a small Starlette app under uvicorn, on a
# daemon thread next to the stdio MCP transport, so an orchestrator can
# check the process:
#
#   GET /health  →  200 {"status": "healthy", "server": ..., "version": ...,
#                        "timestamp": ..., "uptime": <seconds>}
#   anything else →  404 {"error": "Not Found"}
#
# Uptime counts from the moment the app is built, i.e. from server start.
# It never calls the WebSim API; use the health_check tool for that.
# =============================================================================

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from websim.config import SERVER_NAME, VERSION

logger = logging.getLogger(__name__)

# How long start_health_server waits for uvicorn to bind
_STARTUP_TIMEOUT = 5.0


def create_health_app(clock: Callable[[], float] = time.monotonic) -> Starlette:
    """Build the /health app.  `clock` is read once now and once per request."""
    started_at = clock()

    async def health(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "healthy",
                "server": SERVER_NAME,
                "version": VERSION,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": round(clock() - started_at, 3),
            }
        )

    async def not_found(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse({"error": "Not Found"}, status_code=404)

    return Starlette(routes=[Route("/health", health)], exception_handlers={404: not_found})


@dataclass
class HealthServer:
    """A running uvicorn server and the thread it runs on."""

    server: uvicorn.Server
    thread: threading.Thread

    @property
    def port(self) -> int:
        return self.server.servers[0].sockets[0].getsockname()[1]

    def stop(self, timeout: float = 5.0) -> None:
        self.server.should_exit = True
        self.thread.join(timeout)


def start_health_server(port: int, host: str = "0.0.0.0") -> HealthServer:
    """Serve /health on a daemon thread and return once it is listening.

    Pass port=0 to bind an ephemeral port (read it back from .port).
    """
    config = uvicorn.Config(
        create_health_app(),
        host=host,
        port=port,
        log_level="warning",
        access_log=False,
        lifespan="off",
    )
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="health", daemon=True)
    thread.start()

    deadline = time.monotonic() + _STARTUP_TIMEOUT
    while not server.started:
        if not thread.is_alive() or time.monotonic() >= deadline:
            raise RuntimeError(f"Health endpoint failed to start on {host}:{port}")
        time.sleep(0.01)

    running = HealthServer(server, thread)
    logger.info("Health endpoint listening on port %d", running.port)
    return running
