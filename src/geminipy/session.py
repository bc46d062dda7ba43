import asyncio
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class SessionState(Enum):
    CONNECTING = "connecting"
    READY = "ready"
    RECEIVING = "receiving"
    CLOSED = "closed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.CLOSED, SessionState.FAILED, SessionState.CANCELLED)


class ConnectionSession:
    """
    State of one connect-send-receive call.

    A session moves forward through CONNECTING, READY and RECEIVING and is
    finished exactly once, as CLOSED (peer ended the stream), FAILED or
    CANCELLED (the caller gave up). Sessions are never shared between calls.
    """

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self.state: SessionState = SessionState.CONNECTING
        self.buffer: bytearray = bytearray()
        self.cancel_requested: bool = False

    @property
    def is_finished(self) -> bool:
        return self.state.is_terminal

    def advance(self, state: SessionState) -> None:
        if state.is_terminal:
            raise ValueError(f"Use finish() to move a session to {state.name}.")
        if self.is_finished:
            raise RuntimeError(f"Session for {self.host}:{self.port} already finished as {self.state.name}.")
        self.state = state

    def request_cancel(self) -> None:
        if not self.is_finished:
            self.cancel_requested = True

    def finish(self, state: SessionState) -> None:
        if not state.is_terminal:
            raise ValueError(f"{state.name} is not a terminal state.")
        if self.is_finished:
            raise RuntimeError(f"Session for {self.host}:{self.port} already finished as {self.state.name}.")
        # Peer EOF racing a cancellation request counts as cancelled.
        if state is SessionState.CLOSED and self.cancel_requested:
            state = SessionState.CANCELLED
        self.state = state
        logger.debug("Session %s:%d finished as %s after %d bytes",
                     self.host, self.port, state.name, len(self.buffer))


def cancellation_requested() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


def raise_if_cancelling() -> None:
    """Raise CancelledError if cancellation of the running task has been requested."""
    if cancellation_requested():
        raise asyncio.CancelledError()
