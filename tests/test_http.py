"""Unit tests for the base HTTP client."""

from unittest.mock import Mock

import pytest
import requests

from osm_trails.clients.http import HttpClient

from conftest import make_response, sent


@pytest.fixture
def client(config, logger, session):
    http = HttpClient(config, logger)
    http._session = session
    return http


class TestFetchFile:
    def test_name_from_url(self, client, session):
        session.request.return_value = make_response(content=b"data")

        remote = client.fetch_file("https://files.example.com/tracks/My%20Walk.kml")

        assert remote.content == b"data"
        assert remote.file_name == "My Walk.kml"

    def test_name_from_content_disposition(self, client, session):
        session.request.return_value = make_response(
            content=b"data",
            headers={"Content-Disposition": 'attachment; filename="route.gpx"'},
        )

        remote = client.fetch_file("https://files.example.com/download?id=5")

        assert remote.file_name == "route.gpx"

    def test_base_client_never_signs(self, client, session):
        session.request.return_value = make_response(content=b"data")

        client.fetch_file("https://files.example.com/a.gpx")

        _, _, kwargs = sent(session)
        assert kwargs["headers"] == {}

    def test_http_errors_raise(self, client, session):
        resp = make_response(status_code=404)
        resp.raise_for_status = Mock(side_effect=requests.HTTPError("404"))
        session.request.return_value = resp

        with pytest.raises(requests.HTTPError):
            client.fetch_file("https://files.example.com/missing.gpx")
