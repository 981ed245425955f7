"""API clients for external services."""

from osm_trails.clients.http import HttpClient
from osm_trails.clients.osm import OsmGateway

__all__ = [
    "HttpClient",
    "OsmGateway",
]
