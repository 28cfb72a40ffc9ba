from typing import Any

import requests

from . import wire

_UNPARSED = object()


class Response:
    """
    What every client call returns: the body text, the requests.Response it
    came from and the request that produced it.

    The body is only parsed as EDN when `data` is read. Event streams hand
    back a Response whose body is empty.
    """

    def __init__(self, body: str, http_response: requests.Response, request: Any = None):
        self.body = body
        self.raw = http_response
        self.request = request if request is not None else http_response.request
        self._data = _UNPARSED

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self):
        return self.raw.headers

    @property
    def url(self) -> str:
        return self.raw.url

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def data(self) -> Any:
        """
        Body parsed as EDN, computed on first access.

        Raises:
          DecodingError when the body is not EDN.
        """
        if self._data is _UNPARSED:
            self._data = wire.decode(self.body)
        return self._data

    def __repr__(self) -> str:
        method = getattr(self.request, "method", None) or "?"
        return f"<Response {method} {self.url} [{self.status_code}]>"
