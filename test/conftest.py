"""
Fake peer for the client tests.

A requests adapter mounted on a real Session answers every request with a
canned status, headers and body chunks, and keeps the prepared requests so
tests can look at the URL, headers and body that were sent.
"""

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from datomic_client import Client

BASE_URL = "http://localhost:9000"


class ChunkedBody:
    """Stands in for the urllib3 response under requests.Response.raw."""

    def __init__(self, chunks):
        self._chunks = list(chunks)
        self.closed = False
        self.delivered = 0

    def stream(self, chunk_size=None, decode_content=True):
        for chunk in self._chunks:
            if self.closed:
                return
            self.delivered += 1
            yield chunk

    def read(self, amt=None, decode_content=True):
        return b"".join(self.stream())

    def close(self):
        self.closed = True


class FakePeer(BaseAdapter):
    def __init__(self, status=200, body=b"", chunks=None, headers=None):
        super().__init__()
        self.status = status
        self.chunks = chunks if chunks is not None else [body]
        self.headers = headers or {"Content-Type": "application/edn"}
        self.sent = []
        self.timeouts = []
        self.bodies = []

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        self.timeouts.append(timeout)
        raw = ChunkedBody(self.chunks)
        self.bodies.append(raw)

        response = requests.Response()
        response.status_code = self.status
        response.headers = CaseInsensitiveDict(self.headers)
        response.raw = raw
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def make_client(peer, storage="mem", **kwargs):
    session = requests.Session()
    session.mount("http://", peer)
    return Client(BASE_URL, storage, session=session, **kwargs)


@pytest.fixture
def peer():
    return FakePeer(body=b'{:db/alias "mem/cosas"}')


@pytest.fixture
def client(peer):
    return make_client(peer)
