"""Workflows composed from OSM gateway calls."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import requests

from osm_trails.clients.osm import OsmGateway
from osm_trails.errors import OsmApiError
from osm_trails.models import Node, Trace, Way
from osm_trails.utils import atomic_write


def _created_id(response_body: str, kind: str) -> int:
    """Turn a create call's response body into the new element id."""

    if not response_body.strip():
        raise OsmApiError(f"Unable to create {kind}")

    return int(response_body.strip())


def add_way(
    gateway: OsmGateway,
    comment: str,
    points: list[tuple[float, float]],
    tags: dict[str, str],
    logger: logging.Logger,
) -> int:
    """
    Add a new way through the given (lat, lon) points.

    Opens a changeset, creates one node per point and then the way
    referencing them. The changeset is closed even when a write fails.

    Returns the new way id.
    """

    if len(points) < 2:
        raise ValueError("A way needs at least two points")

    changeset_id = gateway.create_changeset(comment)

    try:
        node_ids: list[int] = []

        for idx, (lat, lon) in enumerate(points, 1):
            body = gateway.create_node(changeset_id, Node(id=-idx, lat=lat, lon=lon))
            node_ids.append(_created_id(body, "node"))

        logger.info(f"    Created {len(node_ids)} nodes")

        body = gateway.create_way(changeset_id, Way(id=-1, node_ids=node_ids, tags=tags))
        way_id = _created_id(body, "way")

        logger.info(f"    Created way {way_id}")
    except Exception:
        # Keep the write error; a failed close only gets logged
        try:
            gateway.close_changeset(changeset_id)
        except (OsmApiError, requests.RequestException) as e:
            logger.warning(f"    Could not close changeset {changeset_id}: {e}")
        raise

    gateway.close_changeset(changeset_id)

    return way_id


def find_trace(gateway: OsmGateway, trace_id: str) -> Trace | None:
    """Find one of the user's traces by id."""

    return next((trace for trace in gateway.get_traces() if trace.id == trace_id), None)


def update_trace_metadata(
    gateway: OsmGateway,
    trace_id: str,
    name: str | None = None,
    description: str | None = None,
    visibility: str | None = None,
) -> Trace:
    """
    Change some of a trace's metadata.

    The API overwrites all metadata at once, so the current values are
    read first and sent back with the changes applied.
    """

    trace = find_trace(gateway, trace_id)

    if trace is None:
        raise OsmApiError(f"No OSM trace with ID: {trace_id}")

    if name is not None:
        trace.name = name
    if description is not None:
        trace.description = description
    if visibility is not None:
        trace.visibility = visibility

    gateway.update_trace(trace)

    return trace


def upload_trace_file(gateway: OsmGateway, path: Path) -> None:
    """Upload a local GPS file as a private trace."""

    gateway.create_trace(path.name, path.read_bytes())


def traces_to_frame(traces: list[Trace]) -> pd.DataFrame:
    """Tabulate traces for display."""

    columns = ["id", "name", "visibility", "date", "lat", "lon", "user", "description", "tags"]

    return pd.DataFrame(
        [
            {
                "id": trace.id,
                "name": trace.name,
                "visibility": trace.visibility,
                "date": trace.date,
                "lat": trace.lat_lng.lat,
                "lon": trace.lat_lng.lng,
                "user": trace.user_name,
                "description": trace.description,
                "tags": ", ".join(trace.tags),
            }
            for trace in traces
        ],
        columns=columns,
    )


def save_complete_way(
    gateway: OsmGateway,
    way_id: str,
    out_path: Path,
    logger: logging.Logger,
) -> bool:
    """Download a way with its nodes and save it as GeoJSON."""

    way = gateway.get_complete_way(way_id)

    if way is None:
        logger.warning(f"    Way {way_id} not found")
        return False

    if not way.is_resolved:
        missing = sum(1 for node in way.nodes if node is None)
        logger.warning(f"    Way {way_id}: {missing} node(s) missing from response")

    geojson = {"type": "FeatureCollection", "features": [way.to_geojson()]}

    return atomic_write(geojson, out_path, logger)
