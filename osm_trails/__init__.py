"""
OSM Trails v1.0.0

OpenStreetMap API client for a hiking-trail application: changesets,
nodes and ways, complete-way downloads and GPS traces.
"""

__version__ = "1.0.0"

from osm_trails.clients.osm import OsmGateway
from osm_trails.config import Config
from osm_trails.errors import OsmApiError, TraceParseError
from osm_trails.models import CompleteWay, Credentials, Node, Trace, Way

__all__ = [
    "OsmGateway",
    "Config",
    "OsmApiError",
    "TraceParseError",
    "CompleteWay",
    "Credentials",
    "Node",
    "Trace",
    "Way",
    "__version__",
]
