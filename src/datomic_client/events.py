"""
Event stream subscriptions.

The peer keeps `GET /events/{storage}/{db}` open and writes text/event-stream
data as transactions happen. EventStream hands that data on chunk by chunk,
in the order it was received, and owns the connection until it is closed.
"""

import logging
import threading
from typing import Any, Callable, Iterator

import requests

from .response import Response

logger = logging.getLogger(__name__)


class EventStream:
    def __init__(self, http_response: requests.Response, request: Any = None):
        self._http_response = http_response
        self._request = request if request is not None else http_response.request
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def response(self) -> Response:
        return Response("", self._http_response, self._request)

    def __iter__(self) -> Iterator[bytes]:
        if self._closed:
            return
        try:
            for chunk in self._http_response.iter_content(chunk_size=None):
                if self._closed:
                    break
                # keep-alive
                if not chunk:
                    continue
                yield chunk
        except Exception:
            # reading from a socket closed under us by close()
            if self._closed:
                return
            raise
        finally:
            self.close()

    def dispatch(self, handler: Callable[[bytes], Any]) -> None:
        """
        Call `handler(chunk)` for each chunk until the stream ends or is closed.

        The handler may close the stream itself to stop after the current
        chunk. If it raises, the connection is released and the error is
        re-raised.
        """
        try:
            for chunk in self:
                handler(chunk)
                if self._closed:
                    break
        finally:
            self.close()

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.debug("Closing event stream %s", self._http_response.url)
        self._http_response.close()

    def __enter__(self) -> "EventStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<EventStream {self._http_response.url} ({state})>"
