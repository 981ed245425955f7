"""Unit tests for OAuth1 request signing."""

import base64
import hashlib
import hmac
from urllib.parse import quote

from osm_trails.models import Credentials
from osm_trails.signing import build_authorization_header

URL = "https://api.example.org/api/0.6/user/details"


def _escape(value):
    return quote(value, safe="~")


def _expected_signature(method, url, credentials, nonce, timestamp):
    params = {
        "oauth_consumer_key": credentials.consumer_key,
        "oauth_nonce": nonce,
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_timestamp": timestamp,
        "oauth_token": credentials.token,
        "oauth_version": "1.0",
    }
    normalized = "&".join(f"{_escape(k)}={_escape(v)}" for k, v in sorted(params.items()))
    base_string = "&".join([method, _escape(url), _escape(normalized)])
    key = f"{_escape(credentials.consumer_secret)}&{_escape(credentials.token_secret)}"
    digest = hmac.new(key.encode(), base_string.encode(), hashlib.sha1).digest()
    return base64.b64encode(digest).decode()


class TestBuildAuthorizationHeader:
    def test_header_is_oauth1_hmac_sha1(self, credentials):
        header = build_authorization_header("GET", URL, credentials)

        assert header.startswith("OAuth ")
        assert 'oauth_signature_method="HMAC-SHA1"' in header
        assert 'oauth_version="1.0"' in header
        assert 'oauth_consumer_key="consumer"' in header
        assert 'oauth_token="token"' in header
        assert "oauth_signature=" in header

    def test_signature_matches_hmac_sha1_of_base_string(self, credentials):
        header = build_authorization_header(
            "PUT", URL, credentials, nonce="abc123", timestamp="1600000000"
        )

        expected = _expected_signature("PUT", URL, credentials, "abc123", "1600000000")

        assert f'oauth_signature="{_escape(expected)}"' in header

    def test_fixed_nonce_and_timestamp_are_deterministic(self, credentials):
        first = build_authorization_header("PUT", URL, credentials, nonce="n", timestamp="1")
        second = build_authorization_header("PUT", URL, credentials, nonce="n", timestamp="1")

        assert first == second

    def test_method_is_part_of_signature(self, credentials):
        get = build_authorization_header("GET", URL, credentials, nonce="n", timestamp="1")
        put = build_authorization_header("PUT", URL, credentials, nonce="n", timestamp="1")

        assert get != put

    def test_fresh_nonce_per_call(self, credentials):
        first = build_authorization_header("GET", URL, credentials)
        second = build_authorization_header("GET", URL, credentials)

        assert first != second

    def test_empty_credentials_still_produce_header(self):
        header = build_authorization_header("GET", URL, Credentials())

        assert header.startswith("OAuth ")
        assert 'oauth_consumer_key=""' in header
        assert "oauth_signature=" in header
        # An empty token is left out rather than sent as oauth_token=""
        assert "oauth_token" not in header
