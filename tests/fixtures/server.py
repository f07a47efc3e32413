"""Stub HTTP server for timeout and cancellation tests.

The server answers any POST after a delay taken from the X-Sleep-Duration
request header (decimal milliseconds):

- 418 if the delay elapsed,
- 503 if the test session released it first,
- 400 if the header is missing or not an integer.

It runs under uvicorn on a background thread and a free localhost port, so
the client under test goes through a real socket.
"""

import asyncio
import socket
import threading
import time
from contextlib import asynccontextmanager
from typing import Iterator

import pytest
import uvicorn
from fastapi import FastAPI, Request, Response


SLEEP_HEADER = "X-Sleep-Duration"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the release event on the server's own loop."""
    app.state.loop = asyncio.get_running_loop()
    app.state.released = asyncio.Event()
    yield
    app.state.released.set()


def create_app() -> FastAPI:
    """Build the delaying stub application."""
    app = FastAPI(lifespan=lifespan)

    @app.post("/{path:path}")
    async def delayed(path: str, request: Request) -> Response:
        try:
            delay_ms = int(request.headers.get(SLEEP_HEADER, ""))
        except ValueError:
            return Response(status_code=400)

        try:
            await asyncio.wait_for(request.app.state.released.wait(), timeout=delay_ms / 1000)
        except TimeoutError:
            return Response(status_code=418)
        return Response(status_code=503)

    return app


def _find_free_port() -> int:
    """Find a free TCP port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class _ThreadedServer(uvicorn.Server):
    def install_signal_handlers(self) -> None:
        pass  # Cannot install signal handlers outside main thread


class StubServer:
    """A running stub server.

    Attributes:
        url: Base URL of the server.
    """

    def __init__(self) -> None:
        self.app = create_app()
        port = _find_free_port()
        config = uvicorn.Config(
            app=self.app,
            host="127.0.0.1",
            port=port,
            lifespan="on",
            log_level="warning",
        )
        self._server = _ThreadedServer(config=config)
        self._thread = threading.Thread(target=self._server.run, daemon=True)
        self.url = f"http://127.0.0.1:{port}"

    def start(self) -> None:
        self._thread.start()
        while not self._server.started:
            time.sleep(1e-3)

    def release(self) -> None:
        """Wake every handler still sleeping; they answer 503."""
        state = self.app.state
        state.loop.call_soon_threadsafe(state.released.set)

    def stop(self) -> None:
        self.release()
        self._server.should_exit = True
        self._thread.join(timeout=5)


@pytest.fixture(scope="session")
def stub_server() -> Iterator[StubServer]:
    """Provide a running stub server for the whole test session.

    Handlers still sleeping at the end of the session are released before
    the server shuts down.
    """
    server = StubServer()
    server.start()
    yield server
    server.stop()
