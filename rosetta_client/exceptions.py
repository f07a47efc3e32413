"""Exception hierarchy for the Rosetta API client.

Every call made through the client ends in exactly one of three ways: it
completes, its deadline expires, or the caller cancels it. The last two, and
any non-success HTTP status, are reported with the exceptions defined here.

Exception Hierarchy:
    RosettaClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── DeadlineExceededError - Effective deadline elapsed
    ├── CanceledError - Caller cancelled the call
    └── APIError - Server returned a non-success status
        └── ServerError (HTTP 5xx)

The messages of DeadlineExceededError and CanceledError always contain
DEADLINE_EXCEEDED_MESSAGE and CANCELED_MESSAGE respectively. Neither phrase
contains the other, so callers may match on them as substrings.

Example:
    Telling the outcomes apart::

        try:
            client.network.network_list(ctx, MetadataRequest())
        except DeadlineExceededError:
            # Either the caller deadline or the round-trip timeout hit first
            ...
        except CanceledError:
            ...
        except APIError as e:
            print(f"API error {e.status_code}: {e.message}")
"""

from typing import Any


DEADLINE_EXCEEDED_MESSAGE = "context deadline exceeded"
CANCELED_MESSAGE = "context canceled"


class RosettaClientError(Exception):
    """Base exception for all Rosetta client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(RosettaClientError):
    """Failed to reach the server.

    Raised when the transport fails before any response is received, e.g.
    the server is down or the base URL is wrong.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class DeadlineExceededError(RosettaClientError):
    """The effective deadline of a call elapsed before a response arrived.

    The effective deadline is the sooner of the caller context's deadline and
    the configured round-trip timeout, so this error does not say which of the
    two fired.

    Attributes:
        message: Always contains DEADLINE_EXCEEDED_MESSAGE.
        timeout: The effective timeout in seconds: time from the start of the
            call to whichever deadline governed it. None when unknown.
        url: The URL of the aborted call.
    """

    def __init__(
        self,
        message: str = DEADLINE_EXCEEDED_MESSAGE,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        if DEADLINE_EXCEEDED_MESSAGE not in message:
            message = f"{message}: {DEADLINE_EXCEEDED_MESSAGE}"
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        parts = []
        if self.timeout is not None:
            parts.append(f"timeout: {self.timeout:.3g}s")
        if self.url:
            parts.append(f"url: {self.url}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class CanceledError(RosettaClientError):
    """The caller cancelled the call before a response arrived.

    Attributes:
        message: Always contains CANCELED_MESSAGE.
        url: The URL of the aborted call.
    """

    def __init__(self, message: str = CANCELED_MESSAGE, url: str | None = None) -> None:
        if CANCELED_MESSAGE not in message:
            message = f"{message}: {CANCELED_MESSAGE}"
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class APIError(RosettaClientError):
    """Server returned a non-success response.

    The string form always carries the numeric status code.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: Error code from the Rosetta error body (if available).
        details: Additional error details from the response (if available).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    Never retried by the client; a 5xx is as terminal as any other status.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type=error_type or "server_error",
            details=details,
            response_body=response_body,
        )
