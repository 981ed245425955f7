"""
Shared test fixtures for the OSM Trails test suite.

The gateway's requests.Session is replaced by a Mock, so no test touches the
network. Tests queue canned responses on ``session.request``.
"""

import logging
from unittest.mock import Mock

import pytest

from osm_trails.clients.osm import OsmGateway
from osm_trails.config import Config
from osm_trails.models import Credentials


BASE_ADDRESS = "https://api.example.org"
API = f"{BASE_ADDRESS}/api/0.6"


def make_response(status_code=200, content=b"", chunks=None, headers=None):
    """Build a Mock standing in for requests.Response."""
    resp = Mock()
    resp.status_code = status_code
    resp.content = content
    resp.text = content.decode("utf-8")
    resp.headers = headers or {}
    resp.iter_content.return_value = chunks if chunks is not None else [content]
    return resp


@pytest.fixture
def config(tmp_path):
    """Config pointing at a fake API host."""
    return Config(
        output_dir=tmp_path / "out",
        log_dir=tmp_path / "logs",
        osm_base_address=BASE_ADDRESS,
        consumer_key="consumer",
        consumer_secret="consumer-secret",
        created_by="OsmTrailsTests",
    )


@pytest.fixture
def credentials():
    """A complete OAuth1 credential set."""
    return Credentials(
        token="token",
        token_secret="token-secret",
        consumer_key="consumer",
        consumer_secret="consumer-secret",
    )


@pytest.fixture
def logger():
    return logging.getLogger("osmtrails.tests")


@pytest.fixture
def session():
    """Mock session; set ``session.request.return_value`` per test."""
    mock_session = Mock()
    mock_session.request.return_value = make_response()
    return mock_session


@pytest.fixture
def gateway(config, credentials, logger, session):
    """OsmGateway wired to the mock session."""
    gw = OsmGateway(config, credentials, logger)
    gw._session = session
    return gw


def sent(session, index=-1):
    """Return (method, url, kwargs) of a recorded session.request call."""
    call = session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs
