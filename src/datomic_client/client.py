"""
Client for the Datomic REST peer.

Every call builds a path, encodes EDN payloads where there are any, sends a
single HTTP request and wraps the answer in a Response. Non-2xx answers raise
ProtocolError; transport failures from requests propagate untouched.
"""

import logging
from typing import Any, Callable, Mapping, Optional

import requests

from .errors import protocol_error_for
from .events import EventStream
from .options import ClientConfig, DbOptions, load_config
from .response import Response
from .urls import db_url, root_url
from .wire import db_alias, transcode

logger = logging.getLogger(__name__)

EDN = "application/edn"
EVENT_STREAM = "text/event-stream"
FORM = "application/x-www-form-urlencoded"


def _raise_for_status(http_response: requests.Response, body: str) -> None:
    if 200 <= http_response.status_code < 300:
        return
    logger.warning(
        "%s %s answered %s",
        http_response.request.method if http_response.request else "?",
        http_response.url,
        http_response.status_code,
    )
    raise protocol_error_for(
        http_response.status_code,
        body,
        headers=http_response.headers,
        request=http_response.request,
    )


def handle_response(http_response: requests.Response) -> Response:
    body = http_response.text
    _raise_for_status(http_response, body)
    return Response(body, http_response, http_response.request)


def handle_stream(http_response: requests.Response) -> EventStream:
    if not 200 <= http_response.status_code < 300:
        # error bodies are short; read before releasing the connection
        body = http_response.text
        http_response.close()
        _raise_for_status(http_response, body)
    logger.debug("Opened event stream %s", http_response.url)
    return EventStream(http_response, http_response.request)


class Client:
    """
    Talks to one REST peer, optionally under a storage alias.

    `session` may be a requests.Session (for pooling, auth, adapters...);
    by default each call goes through requests.request on its own.
    """

    def __init__(
        self,
        url: str,
        storage: Optional[str] = None,
        *,
        session: Any = None,
        timeout: Optional[float] = None,
    ):
        self._url = url
        self._storage = storage
        self._http = session if session is not None else requests
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig, session: Any = None) -> "Client":
        return cls(config.url, config.storage, session=session, timeout=config.timeout)

    @classmethod
    def from_env(cls, env_file=None, session: Any = None) -> "Client":
        return cls.from_config(load_config(env_file), session=session)

    @property
    def url(self) -> str:
        return self._url

    @property
    def storage(self) -> Optional[str]:
        return self._storage

    def create_database(self, dbname: str) -> Response:
        return self._post(
            root_url(self._url, "data", self._storage) + "/",
            {"db-name": dbname},
            headers={"Content-Type": FORM},
        )

    def database_info(self, dbname: str, options: Optional[Mapping[str, Any]] = None) -> Response:
        """
        Options:
          t - basis t of the database value. Defaults to the latest one.
        """
        version = DbOptions.from_params(options).t
        return self._get(db_url(self._url, self._storage, dbname, version) + "/")

    def transact(self, dbname: str, data: Any) -> Response:
        """`data` is either EDN text or a Python value to encode as EDN."""
        tx_data = transcode(data)
        return self._post(
            db_url(self._url, self._storage, dbname) + "/",
            {"tx-data": tx_data},
            headers={"Accept": EDN},
        )

    def datoms(self, dbname: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        """
        Serves both the datoms and the index-range APIs; the peer picks one
        from the parameters given (index, a, start, end, ...).

        Options:
          t - basis t of the database value. Defaults to the latest one.
        """
        params = dict(params or {})
        version = DbOptions.from_params(params).t
        return self._get(db_url(self._url, self._storage, dbname, version, "datoms"), params)

    def entity(self, dbname: str, eid: Any, params: Optional[Mapping[str, Any]] = None) -> Response:
        """
        Options:
          t - basis t of the database value. Defaults to the latest one.
        """
        params = dict(params or {})
        version = DbOptions.from_params(params).t
        params["e"] = eid
        return self._get(db_url(self._url, self._storage, dbname, version, "entity"), params)

    def query(self, query: Any, args_or_dbname: Any, params: Optional[Mapping[str, Any]] = None) -> Response:
        """
        `query` is EDN text or a Python value. A plain string for
        `args_or_dbname` names a database and becomes a single db/alias
        argument; anything else is sent as the argument list itself.
        """
        q = transcode(query)
        if isinstance(args_or_dbname, str):
            args = [self.db_alias(args_or_dbname)]
        else:
            args = args_or_dbname
        args = transcode(args)

        params = dict(params or {})
        params.update(q=q, args=args)
        return self._get(root_url(self._url, "api/query"), params)

    def events(self, dbname: str, handler: Optional[Callable[[bytes], Any]] = None):
        """
        Subscribe to the transaction events of `dbname`.

        With a handler, blocks and calls `handler(chunk)` for every chunk
        received until the stream ends, then returns the Response. The
        connection is closed on the way out, including when handler raises.
        The handler only sees chunks; to stop early it raises, or the caller
        uses the EventStream form below and calls `close()`.

        Without a handler, returns the open EventStream; iterate it and close
        it (or use it as a context manager).
        """
        stream = self._request(
            "GET",
            root_url(self._url, "events", self._storage, dbname),
            handle_stream,
            headers={"Accept": EVENT_STREAM},
            stream=True,
        )
        if handler is None:
            return stream
        with stream:
            stream.dispatch(handler)
        return stream.response

    def db_alias(self, dbname: str) -> dict:
        return db_alias(self._storage, dbname)

    def _get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Response:
        return self._request("GET", url, handle_response, params=params, headers={"Accept": EDN})

    def _post(self, url: str, data: Mapping[str, Any], headers: Mapping[str, str]) -> Response:
        return self._request("POST", url, handle_response, data=data, headers=headers)

    def _request(self, method: str, url: str, on_response: Callable, **kwargs):
        logger.debug("%s %s", method, url)
        http_response = self._http.request(method, url, timeout=self._timeout, **kwargs)
        return on_response(http_response)

    def __repr__(self) -> str:
        return f"Client(url={self._url!r}, storage={self._storage!r})"
