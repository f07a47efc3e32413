"""Caller-owned cancellation and deadline handles.

A CallContext is passed to every client call. The caller owns it: the client
only reads its deadline, listens for its cancellation, and derives child
contexts of its own when it needs a tighter deadline. Deadlines are plain
monotonic timestamps; nothing here starts a timer, so a context that is never
cancelled holds no resources beyond the registration it keeps on its parent.

Example:
    Bounding a call and cancelling it from another thread::

        ctx = background().with_timeout(5.0)
        threading.Timer(0.1, ctx.cancel).start()
        client.network.network_list(ctx, MetadataRequest())
"""

import itertools
import logging
import threading
import time
from typing import Callable

from rosetta_client.exceptions import CanceledError, DeadlineExceededError, RosettaClientError


logger = logging.getLogger(__name__)

DoneCallback = Callable[[], None]


def _min_deadline(a: float | None, b: float | None) -> float | None:
    """Return the sooner of two deadlines, treating None as +infinity."""
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


class CallContext:
    """Cancellation signal plus optional deadline for a single logical call.

    Contexts form a tree. Cancelling a parent cancels every child still
    attached to it; cancelling a child never affects the parent. A child's
    deadline is never later than its parent's.

    Attributes:
        deadline: Absolute deadline on the time.monotonic() clock, or None.
    """

    def __init__(
        self,
        parent: "CallContext | None" = None,
        deadline: float | None = None,
    ) -> None:
        self._parent = parent
        self.deadline = _min_deadline(parent.deadline if parent else None, deadline)
        self._lock = threading.Lock()
        self._canceled = False
        self._callbacks: dict[int, DoneCallback] = {}
        self._ids = itertools.count()
        self._parent_handle: int | None = None
        if parent is not None:
            self._parent_handle = parent.add_done_callback(self.cancel)

    def __enter__(self) -> "CallContext":
        return self

    def __exit__(self, *args: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "canceled" if self._canceled else "active"
        return f"CallContext(deadline={self.deadline!r}, state={state})"

    # Derivation

    def with_cancel(self) -> "CallContext":
        """Return a child that can be cancelled independently of this one."""
        return CallContext(parent=self)

    def with_deadline(self, deadline: float) -> "CallContext":
        """Return a child whose deadline is the sooner of ``deadline`` and ours."""
        return CallContext(parent=self, deadline=deadline)

    def with_timeout(self, seconds: float) -> "CallContext":
        """Return a child that expires ``seconds`` from now, or sooner if we do."""
        return self.with_deadline(time.monotonic() + seconds)

    # State

    def remaining(self) -> float | None:
        """Seconds until the deadline, clamped at zero. None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def canceled(self) -> bool:
        """True once cancel() has run on this context or an ancestor."""
        return self._canceled

    @property
    def done(self) -> bool:
        return self.err() is not None

    def err(self) -> RosettaClientError | None:
        """Return why this context is done, or None while it is still live.

        Cancellation wins over an elapsed deadline once it has happened.
        """
        if self._canceled:
            return CanceledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceededError()
        return None

    # Cancellation

    def cancel(self) -> None:
        """Cancel this context and all of its children.

        Idempotent and safe to call from any thread. Done-callbacks run once,
        on the cancelling thread, outside the lock.
        """
        with self._lock:
            if self._canceled:
                return
            self._canceled = True
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
        if self._parent is not None and self._parent_handle is not None:
            self._parent.remove_done_callback(self._parent_handle)
            self._parent_handle = None

        # Every callback runs even if an earlier one fails; the first failure
        # is re-raised once all of them have had their turn.
        first_error: Exception | None = None
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.exception("Done-callback %r failed during cancel", callback)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def add_done_callback(self, callback: DoneCallback) -> int | None:
        """Register ``callback`` to run when this context is cancelled.

        If the context is already cancelled the callback runs immediately and
        None is returned.

        Returns:
            A handle for remove_done_callback().
        """
        with self._lock:
            if not self._canceled:
                handle = next(self._ids)
                self._callbacks[handle] = callback
                return handle
        callback()
        return None

    def remove_done_callback(self, handle: int | None) -> None:
        """Unregister a callback; unknown or None handles are ignored."""
        if handle is None:
            return
        with self._lock:
            self._callbacks.pop(handle, None)

    def pending_callbacks(self) -> int:
        """Number of callbacks still registered; used to check for leaks."""
        with self._lock:
            return len(self._callbacks)


def background() -> CallContext:
    """Return a fresh root context with no deadline."""
    return CallContext()
