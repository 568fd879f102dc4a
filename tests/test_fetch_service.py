"""Tests for cached artifact downloads."""

from unittest.mock import MagicMock

import pytest
import requests

from artdeploy.exceptions import FetchFailedError
from artdeploy.services.fetch_service import FetchService

URL = "https://example.test/download/postgresql-9.4.1212.jar"


def _session_returning(response):
    session = MagicMock(spec=requests.Session)
    session.get.return_value.__enter__.return_value = response
    return session


def _response(chunks):
    response = MagicMock()
    response.iter_content.return_value = chunks
    return response


def test_downloads_when_missing(tmp_path):
    destination = tmp_path / "lib" / "driver.jar"
    session = _session_returning(_response([b"abc", b"", b"def"]))

    fetched = FetchService(timeout=5, session=session).fetch(URL, destination)

    assert fetched is True
    assert destination.read_bytes() == b"abcdef"
    assert not (tmp_path / "lib" / "driver.jar.part").exists()
    session.get.assert_called_once_with(URL, stream=True, timeout=5)


def test_existing_copy_is_reused(tmp_path):
    destination = tmp_path / "driver.jar"
    destination.write_bytes(b"cached")
    session = MagicMock(spec=requests.Session)

    fetched = FetchService(session=session).fetch(URL, destination)

    assert fetched is False
    assert destination.read_bytes() == b"cached"
    session.get.assert_not_called()


def test_http_error_raises_and_leaves_nothing(tmp_path):
    destination = tmp_path / "driver.jar"
    response = _response([])
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session = _session_returning(response)

    with pytest.raises(FetchFailedError) as exc_info:
        FetchService(session=session).fetch(URL, destination)

    assert exc_info.value.url == URL
    assert "404" in str(exc_info.value)
    assert not destination.exists()
    assert not (tmp_path / "driver.jar.part").exists()


def test_connection_error_raises(tmp_path):
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(FetchFailedError):
        FetchService(session=session).fetch(URL, tmp_path / "driver.jar")


def test_interrupted_transfer_is_not_cached(tmp_path):
    destination = tmp_path / "driver.jar"
    response = MagicMock()

    def broken_stream(chunk_size):
        yield b"partial"
        raise requests.exceptions.ChunkedEncodingError("connection reset")

    response.iter_content.side_effect = broken_stream
    session = _session_returning(response)

    with pytest.raises(FetchFailedError):
        FetchService(session=session).fetch(URL, destination)

    assert not destination.exists()
    assert not (tmp_path / "driver.jar.part").exists()
