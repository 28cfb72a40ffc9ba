from typing import Any, Mapping, Optional


class Error(Exception):
    """Base class of every exception raised by datomic_client."""


class ConfigurationError(Error):
    """
    Exception raised when the client configuration is missing or invalid,
    e.g. no base URL in the environment.
    """

    pass


class OptionError(Error):
    """
    Exception raised when call options are invalid, e.g. a version `t`
    that is neither an integer nor a string.
    """

    pass


class EncodingError(Error):
    """
    Exception raised when a native value cannot be written as EDN.
    Raised before any request is sent.
    """

    def __init__(self, value: Any, reason: str):
        super().__init__(f"Cannot encode {type(value).__name__} as EDN: {reason}")
        self.value = value


class DecodingError(Error):
    """
    Exception raised when a response body is asked for as data
    but is not valid EDN.
    """

    def __init__(self, text: str, reason: str):
        super().__init__(f"Invalid EDN in response: {reason}")
        self.text = text


class ProtocolError(Error):
    """
    Exception raised when the peer answers with a non-2xx status.
    Keeps status, headers and the raw body so callers can read the
    diagnostic text sent by the server.
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
        request: Any = None,
    ):
        method = getattr(request, "method", None)
        url = getattr(request, "url", None)
        target = f" for {method} {url}" if method and url else ""
        super().__init__(f"HTTP {status_code}{target}: {body}")
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers or {})
        self.request = request


class ClientError(ProtocolError):
    """4xx answer: the request was rejected (bad query, unknown database...)."""

    pass


class ServerError(ProtocolError):
    """5xx answer: the peer failed while handling the request."""

    pass


def protocol_error_for(status_code: int, body: str, headers=None, request=None) -> ProtocolError:
    if 400 <= status_code < 500:
        cls = ClientError
    elif status_code >= 500:
        cls = ServerError
    else:
        cls = ProtocolError
    return cls(status_code, body, headers=headers, request=request)
