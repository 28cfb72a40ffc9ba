import pytest
import requests
from requests.structures import CaseInsensitiveDict

from datomic_client import DecodingError, Response, keyword


def http_response(status=200, body=b"", url="http://localhost:9000/data/mem/cosas/-/"):
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict({"Content-Type": "application/edn"})
    response.url = url
    response.request = requests.Request("GET", url).prepare()
    return response


def test_exposes_status_headers_and_body():
    raw = http_response(body=b"{:db/alias \"mem/cosas\"}")

    response = Response(raw.text, raw)

    assert response.status_code == 200
    assert response.ok
    assert response.headers["content-type"] == "application/edn"
    assert response.body == '{:db/alias "mem/cosas"}'
    assert response.raw is raw
    assert response.request is raw.request


def test_data_is_parsed_on_demand():
    raw = http_response(body=b"{:db/alias \"mem/cosas\"}")
    response = Response(raw.text, raw)

    data = response.data

    assert data[keyword("db/alias")] == "mem/cosas"
    assert response.data is data


def test_invalid_body_only_fails_when_parsed():
    raw = http_response(status=500, body=b"Internal Server Error")

    response = Response(raw.text, raw)
    assert response.body == "Internal Server Error"

    with pytest.raises(DecodingError):
        response.data


def test_repr():
    raw = http_response(status=201)
    assert repr(Response("", raw)) == "<Response GET http://localhost:9000/data/mem/cosas/-/ [201]>"


def test_blank_body_parses_to_none():
    raw = http_response(body=b"")
    assert Response("", raw).data is None
