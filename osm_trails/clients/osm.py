"""OpenStreetMap API 0.6 gateway with OAuth1 signing."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from osm_trails.clients.http import HttpClient
from osm_trails.endpoints import OsmEndpoints
from osm_trails.errors import OsmApiError
from osm_trails.models import Changeset, CompleteWay, Credentials, Node, Trace, Way
from osm_trails.osm_xml import (
    changeset_to_xml,
    node_to_xml,
    parse_traces,
    parse_user_id,
    trace_to_xml,
    way_to_xml,
)
from osm_trails.signing import build_authorization_header
from osm_trails.streams import iter_complete, iter_elements

if TYPE_CHECKING:
    from osm_trails.config import Config


STREAM_CHUNK_SIZE = 64 * 1024


def _ascii_file_name(file_name: str) -> str:
    """OSM only accepts ASCII upload names; other characters become '?'."""
    return file_name.encode("ascii", "replace").decode("ascii")


class OsmGateway(HttpClient):
    """
    Client for the OSM editing API.

    Failure policy:
    - get_user_id, create_node and create_way return "" on a non-200 status
    - get_complete_way returns None on a non-200 status
    - every other call raises OsmApiError
    Nothing is retried.
    """

    def __init__(self, config: Config, credentials: Credentials, logger: logging.Logger) -> None:
        super().__init__(config, logger)
        self.credentials = credentials
        self.endpoints = OsmEndpoints.from_base_address(config.osm_base_address)

    def auth_headers(self, method: str, url: str) -> dict[str, str]:
        """Sign requests to the OSM API host only."""

        if not self.endpoints.is_api_url(url):
            return {}

        return {"Authorization": build_authorization_header(method, url, self.credentials)}

    # User

    def get_user_id(self) -> str:
        """Return the authenticated user's id, or "" when not logged in."""

        resp = self.get(self.endpoints.user_details)

        if resp.status_code != 200:
            self.logger.warning(f"User details request failed: {resp.status_code}")
            return ""

        return parse_user_id(resp.content)

    # Changesets

    def create_changeset(self, comment: str) -> str:
        """Open a changeset and return its id."""

        changeset = Changeset(tags={"created_by": self.config.created_by, "comment": comment})
        resp = self.put(
            self.endpoints.create_changeset,
            data=changeset_to_xml(changeset, self.config.created_by),
        )

        if resp.status_code != 200:
            raise OsmApiError("Unable to create changeset:", resp.status_code, resp.text)

        changeset_id = resp.text.strip()
        self.logger.info(f"Opened changeset {changeset_id}")

        return changeset_id

    def close_changeset(self, changeset_id: str) -> None:
        """Close a changeset."""

        address = self.endpoints.resolve(self.endpoints.close_changeset, changeset_id)
        resp = self.put(address, data=b"")

        if resp.status_code != 200:
            raise OsmApiError(
                f"Unable to close changeset with id: {changeset_id}", resp.status_code, resp.text
            )

        self.logger.info(f"Closed changeset {changeset_id}")

    # Nodes and ways

    def create_node(self, changeset_id: str, node: Node) -> str:
        """Create a node, returning the response body (its new id) or ""."""

        node = dataclasses.replace(node, changeset_id=int(changeset_id))
        resp = self.put(
            self.endpoints.create_node,
            data=node_to_xml(node, self.config.created_by),
        )

        if resp.status_code != 200:
            self.logger.warning(f"Node creation failed: {resp.status_code} {resp.text}")
            return ""

        return resp.text

    def create_way(self, changeset_id: str, way: Way) -> str:
        """Create a way, returning the response body (its new id) or ""."""

        way = dataclasses.replace(way, changeset_id=int(changeset_id))
        resp = self.put(
            self.endpoints.create_way,
            data=way_to_xml(way, self.config.created_by),
        )

        if resp.status_code != 200:
            self.logger.warning(f"Way creation failed: {resp.status_code} {resp.text}")
            return ""

        return resp.text

    def update_way(self, changeset_id: str, way: Way) -> None:
        """Overwrite an existing way."""

        address = self.endpoints.resolve(self.endpoints.way, way.id)
        way = dataclasses.replace(way, changeset_id=int(changeset_id))
        resp = self.put(address, data=way_to_xml(way, self.config.created_by))

        if resp.status_code != 200:
            raise OsmApiError(
                f"Unable to update way with id: {way.id}", resp.status_code, resp.text
            )

    def get_complete_way(self, way_id: str) -> CompleteWay | None:
        """Fetch a way with its nodes; None when missing or on error."""

        address = self.endpoints.resolve(self.endpoints.complete_way, way_id)
        # Reads of public data go out unsigned
        resp = self.get(address, stream=True, signed=False)

        try:
            if resp.status_code != 200:
                self.logger.warning(f"Complete way {way_id} request failed: {resp.status_code}")
                return None

            elements = iter_elements(resp.iter_content(chunk_size=STREAM_CHUNK_SIZE))

            return next(
                (element for element in iter_complete(elements) if isinstance(element, CompleteWay)),
                None,
            )
        finally:
            resp.close()

    # Traces

    def get_traces(self) -> list[Trace]:
        """List the authenticated user's traces."""

        resp = self.get(self.endpoints.get_traces)

        if resp.status_code != 200:
            raise OsmApiError("Unable to get OSM traces:", resp.status_code, resp.text)

        return parse_traces(resp.content)

    def create_trace(self, file_name: str, file_bytes: bytes) -> None:
        """Upload a private trace described by its file name."""

        resp = self.post(
            self.endpoints.create_trace,
            data={"description": file_name, "visibility": "private", "tags": ""},
            files={"file": (_ascii_file_name(file_name), file_bytes)},
        )

        if resp.status_code != 200:
            raise OsmApiError(f"Unable to upload the file: {file_name}", resp.status_code)

        self.logger.info(f"Uploaded trace {file_name}")

    def update_trace(self, trace: Trace) -> None:
        """Overwrite a trace's metadata (tags are not sent)."""

        address = self.endpoints.resolve(self.endpoints.trace, trace.id)
        resp = self.put(address, data=trace_to_xml(trace).encode("utf-8"))

        if resp.status_code != 200:
            raise OsmApiError("Unable to update OSM trace", resp.status_code, resp.text)

    def delete_trace(self, trace_id: str) -> None:
        """Delete a trace."""

        address = self.endpoints.resolve(self.endpoints.trace, trace_id)
        resp = self.delete(address)

        if resp.status_code != 200:
            raise OsmApiError(f"Unable to delete OSM trace with ID: {trace_id}", resp.status_code)

        self.logger.info(f"Deleted trace {trace_id}")
