"""
Single-shot request/response channel with a timeout.

The requesting side fires one request and blocks for exactly one response.
If no response arrives within the timeout it receives ``None``; responses
arriving after that, or a second response, are ignored.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, InvalidStateError
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Generic, Optional, TypeVar

from insights_plus.config import DEFAULT_LAYOUT

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleShotChannel(Generic[T]):
    """Future-backed handoff between a requester and a responder.

    Args:
        send_request: Called once per ``request`` with this channel; the
            responder eventually calls ``respond`` (from any thread).
    """

    def __init__(self, send_request: Callable[["SingleShotChannel[T]"], None]):
        self._send_request = send_request
        self._future: Optional[Future] = None
        self._lock = threading.Lock()

    def request(self, timeout: float = DEFAULT_LAYOUT.BRIDGE_TIMEOUT) -> Optional[T]:
        """Fire the request and wait for its response.

        Returns:
            The response, or None on timeout
        """
        future: Future = Future()
        with self._lock:
            self._future = future

        self._send_request(self)

        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            logger.warning(f"No response within {timeout}s")
            return None
        finally:
            with self._lock:
                if self._future is future:
                    self._future = None
            future.cancel()

    def respond(self, result: Optional[T]) -> bool:
        """Deliver the response.

        Returns:
            True if a waiting request received it, False if it was ignored
        """
        with self._lock:
            future = self._future
        if future is None:
            logger.debug("Response ignored: no pending request")
            return False
        try:
            future.set_result(result)
        except InvalidStateError:
            logger.debug("Response ignored: request already answered")
            return False
        return True
