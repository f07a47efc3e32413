"""Internal HTTP handling utilities for the Rosetta client.

This module provides the low-level HTTP communication layer used by all
sub-clients. It handles:
- Resolving the effective deadline of each call
- Racing the response against deadline expiry and caller cancellation
- Response parsing and error handling

The effective deadline of a call is the sooner of the caller context's
deadline and the configured round-trip timeout. Whichever fires first wins,
whatever its source. Calls are never retried.

This is an internal module and should not be imported directly by users.
"""

import asyncio
import contextlib
import logging
import threading
import time
from typing import Any, Coroutine, Literal, TypeVar

import httpx

from rosetta_client.configuration import Configuration
from rosetta_client.context import CallContext
from rosetta_client.exceptions import (
    APIError,
    CanceledError,
    ConnectionError,
    DeadlineExceededError,
    RosettaClientError,
    ServerError,
)


logger = logging.getLogger(__name__)

# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

T = TypeVar("T")


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Parse an error response to extract message, type, and details.

    Understands the Rosetta Error body ({"code", "message", "details"}) and
    falls back to the raw response text.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text, None, None
        return f"HTTP {response.status_code} error", None, None

    if isinstance(body, dict) and "message" in body:
        code = body.get("code")
        return (
            str(body["message"]),
            str(code) if code is not None else None,
            body.get("details"),
        )
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise an appropriate exception for non-success status codes.

    Args:
        response: The HTTP response to check.

    Raises:
        ServerError: For HTTP 5xx responses.
        APIError: For every other non-2xx response.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _wake(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)


class AsyncHTTPClient:
    """Asynchronous HTTP client enforcing the timeout-precedence policy.

    Wraps httpx.AsyncClient. httpx's own timeouts are disabled; every call is
    bounded by its effective deadline instead.

    Attributes:
        configuration: The shared client configuration.
    """

    def __init__(
        self,
        configuration: Configuration,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            configuration: Base URL, headers and round-trip timeout.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.configuration = configuration
        self._client = httpx.AsyncClient(
            base_url=configuration.base_url,
            timeout=httpx.Timeout(None),
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _call_context(self, ctx: CallContext) -> contextlib.AbstractContextManager[CallContext]:
        """Return the context that governs one call.

        With a round-trip timeout configured this is a client-owned child of
        ``ctx``, released when the call ends. Otherwise it is ``ctx`` itself,
        which the client must not cancel.
        """
        timeout = self.configuration.network_round_trip_timeout
        if timeout > 0:
            return ctx.with_timeout(timeout)
        return contextlib.nullcontext(ctx)

    async def request(
        self,
        ctx: CallContext,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            ctx: The caller's context. Read, never cancelled by the client.
            method: The HTTP method (GET, POST, etc.).
            path: The URL path (will be appended to base_url).
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            DeadlineExceededError: If the effective deadline elapses first.
            CanceledError: If the caller cancels ``ctx`` first.
            ConnectionError: If the connection fails.
            APIError: If the server returns a non-success response.
        """
        url = f"{self.configuration.base_url}{path}"
        started = time.monotonic()
        with self._call_context(ctx) as call_ctx:
            response = await self._send(call_ctx, method, path, json, url, started)

        _raise_for_status(response)
        if response.content:
            return response.json()
        return None

    async def _send(
        self,
        ctx: CallContext,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None,
        url: str,
        started: float,
    ) -> httpx.Response:
        """Send one request, returning whichever of response/deadline/cancel comes first."""
        err = ctx.err()
        if err is not None:
            raise self._abort_error(err, url, ctx, started)

        loop = asyncio.get_running_loop()
        interrupted = loop.create_future()

        def on_cancel() -> None:
            # Raises RuntimeError once the loop is closed.
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(_wake, interrupted)

        handle = ctx.add_done_callback(on_cancel)
        send = asyncio.ensure_future(
            self._client.request(
                method,
                path,
                json=json,
                headers=self.configuration.headers(),
            )
        )
        logger.debug("%s %s issued (deadline in %s s)", method, url, ctx.remaining())
        try:
            done, _ = await asyncio.wait(
                {send, interrupted},
                timeout=ctx.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
            if send in done:
                response = self._unwrap(send, url, ctx, started)
                logger.debug("%s %s completed with %d", method, url, response.status_code)
                return response
            err = ctx.err() or DeadlineExceededError()
            logger.info("%s %s aborted: %s", method, url, err)
            raise self._abort_error(err, url, ctx, started)
        finally:
            ctx.remove_done_callback(handle)
            interrupted.cancel()
            if not send.done():
                send.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await send

    def _unwrap(
        self,
        send: asyncio.Future,
        url: str,
        ctx: CallContext,
        started: float,
    ) -> httpx.Response:
        try:
            return send.result()
        except httpx.TimeoutException as e:
            raise self._abort_error(DeadlineExceededError(), url, ctx, started) from e
        except httpx.RequestError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e

    def _abort_error(
        self,
        err: Exception,
        url: str,
        ctx: CallContext,
        started: float,
    ) -> Exception:
        """Build the error for an aborted call.

        A deadline error carries the effective timeout: the time from the
        start of the call to the governing context's deadline, whichever of
        the caller deadline and the round-trip timeout set it.
        """
        if isinstance(err, CanceledError):
            return CanceledError(url=url)
        timeout = None
        if ctx.deadline is not None:
            timeout = max(0.0, ctx.deadline - started)
        return DeadlineExceededError(timeout=timeout, url=url)

    async def post(
        self,
        ctx: CallContext,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request.

        Args:
            ctx: The caller's context.
            path: The URL path.
            json: JSON body to send.

        Returns:
            The parsed JSON response.
        """
        return await self.request(ctx, "POST", path, json=json)


class HTTPClient:
    """Synchronous HTTP client enforcing the timeout-precedence policy.

    Runs an AsyncHTTPClient on a private event loop in a daemon thread and
    blocks the calling thread on the result. Cancelling the caller's context
    from any thread wakes the loop, so a blocked call returns promptly.

    Attributes:
        configuration: The shared client configuration.
    """

    def __init__(
        self,
        configuration: Configuration,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client and start its event loop thread.

        Args:
            configuration: Base URL, headers and round-trip timeout.
            transport: Custom async transport (e.g., MockTransport for testing).
        """
        self.configuration = configuration
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever,
            name="rosetta-client-loop",
            daemon=True,
        )
        self._thread.start()
        self._async = AsyncHTTPClient(configuration, transport=transport)
        self._closed = False

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self._loop.is_closed():
            coro.close()
            raise RosettaClientError("HTTP client is closed")
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def close(self) -> None:
        """Close the HTTP client, stop the loop thread and release resources."""
        if self._closed:
            return
        self._closed = True
        try:
            self._run(self._async.close())
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
            self._loop.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        ctx: CallContext,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        See AsyncHTTPClient.request() for the semantics and raised errors.
        """
        return self._run(self._async.request(ctx, method, path, json=json))

    def post(
        self,
        ctx: CallContext,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request.

        Args:
            ctx: The caller's context.
            path: The URL path.
            json: JSON body to send.

        Returns:
            The parsed JSON response.
        """
        return self.request(ctx, "POST", path, json=json)
