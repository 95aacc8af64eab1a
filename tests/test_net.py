import threading

import pytest
import requests

from bingtiles.exceptions import MetadataFetchError
from bingtiles.net import MetadataFetcher

from conftest import DummyResponse, DummySession


def test_get_json_passes_timeout():
    session = DummySession(DummyResponse({"statusCode": 200}))
    fetcher = MetadataFetcher(timeout=3.5, session=session)
    try:
        assert fetcher.get_json("https://example.test/meta") == {"statusCode": 200}
        assert session.calls == [{"url": "https://example.test/meta", "timeout": 3.5}]
        assert session.response.closed
    finally:
        fetcher.close()


def test_unauthorized_body_is_returned():
    # 认证失败时正文仍是 JSON，由校验环节判定
    session = DummySession(DummyResponse({"statusCode": 401}, status_code=401))
    fetcher = MetadataFetcher(session=session)
    try:
        assert fetcher.get_json("https://example.test/meta") == {"statusCode": 401}
    finally:
        fetcher.close()


@pytest.mark.parametrize("error", [
    requests.exceptions.Timeout("read timed out"),
    requests.exceptions.ConnectionError("refused"),
])
def test_transport_errors(error):
    fetcher = MetadataFetcher(session=DummySession(error=error))
    try:
        with pytest.raises(MetadataFetchError):
            fetcher.get_json("https://example.test/meta")
    finally:
        fetcher.close()


def test_non_json_response():
    fetcher = MetadataFetcher(session=DummySession(DummyResponse(None, status_code=502)))
    try:
        with pytest.raises(MetadataFetchError):
            fetcher.get_json("https://example.test/meta")
    finally:
        fetcher.close()


def test_fetch_delivers_callback():
    fetcher = MetadataFetcher(session=DummySession(DummyResponse({"ok": True})))
    results = []
    done = threading.Event()

    def callback(payload):
        results.append(payload)
        done.set()

    try:
        fetcher.fetch("https://example.test/meta", callback).result(timeout=5)
        assert done.wait(5)
        assert results == [{"ok": True}]
    finally:
        fetcher.close()


def test_fetch_delivers_errback():
    fetcher = MetadataFetcher(session=DummySession(error=requests.exceptions.Timeout("slow")))
    errors = []
    done = threading.Event()

    def errback(error):
        errors.append(error)
        done.set()

    try:
        fetcher.fetch("https://example.test/meta", lambda payload: None, errback)
        assert done.wait(5)
        assert isinstance(errors[0], MetadataFetchError)
    finally:
        fetcher.close()
