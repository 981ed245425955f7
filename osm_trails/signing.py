"""OAuth1 request signing for the OSM API."""

from __future__ import annotations

from oauthlib.oauth1 import SIGNATURE_HMAC, SIGNATURE_TYPE_AUTH_HEADER, Client

from osm_trails.models import Credentials


def build_authorization_header(
    method: str,
    url: str,
    credentials: Credentials,
    nonce: str | None = None,
    timestamp: str | None = None,
) -> str:
    """
    Sign a protected-resource request with HMAC-SHA1 (OAuth 1.0).

    Only method and URL are signed, the XML and multipart bodies the OSM API
    takes carry no OAuth parameters. Nonce and timestamp are generated fresh
    unless given.
    """

    client = Client(
        credentials.consumer_key,
        client_secret=credentials.consumer_secret,
        resource_owner_key=credentials.token,
        resource_owner_secret=credentials.token_secret,
        signature_method=SIGNATURE_HMAC,
        signature_type=SIGNATURE_TYPE_AUTH_HEADER,
        nonce=nonce,
        timestamp=timestamp,
    )

    _, headers, _ = client.sign(url, http_method=method.upper())

    return headers["Authorization"]
