"""Data models for OSM Trails."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union


@dataclass(frozen=True)
class Credentials:
    """OAuth1 token and consumer pair for one user session."""

    token: str = ""
    token_secret: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""


@dataclass
class LatLng:
    """Geographic position."""

    lat: float = 0.0
    lng: float = 0.0


@dataclass
class Changeset:
    """OSM changeset (only its tags are sent on creation)."""

    id: str | None = None
    tags: dict[str, str] = field(default_factory=dict)


@dataclass
class Node:
    """OSM node."""

    id: int | None
    lat: float
    lon: float
    tags: dict[str, str] = field(default_factory=dict)
    changeset_id: int | None = None
    version: int | None = None
    timestamp: str | None = None
    user: str | None = None
    uid: int | None = None
    visible: bool | None = None


@dataclass
class Way:
    """OSM way referencing its nodes by id."""

    id: int | None
    node_ids: list[int] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    changeset_id: int | None = None
    version: int | None = None
    timestamp: str | None = None
    user: str | None = None
    uid: int | None = None
    visible: bool | None = None


MemberType = Literal["node", "way", "relation"]


@dataclass
class RelationMember:
    """Reference from a relation to another element."""

    type: MemberType
    ref: int
    role: str = ""


@dataclass
class Relation:
    """OSM relation referencing its members by type and id."""

    id: int | None
    members: list[RelationMember] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    changeset_id: int | None = None
    version: int | None = None
    timestamp: str | None = None
    user: str | None = None
    uid: int | None = None
    visible: bool | None = None


OsmElement = Union[Node, Way, Relation]


@dataclass
class CompleteWay:
    """Way with node references resolved to full nodes."""

    id: int | None
    nodes: list[Node | None] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    changeset_id: int | None = None
    version: int | None = None
    timestamp: str | None = None
    user: str | None = None

    @property
    def is_resolved(self) -> bool:
        """True when every node slot holds a node."""
        return all(node is not None for node in self.nodes)

    @property
    def coordinates(self) -> list[list[float]]:
        """GeoJSON [lon, lat] pairs of the resolved nodes."""
        return [[node.lon, node.lat] for node in self.nodes if node is not None]

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON LineString feature."""

        return {
            "type": "Feature",
            "properties": {"id": self.id, "version": self.version, **self.tags},
            "geometry": {"type": "LineString", "coordinates": self.coordinates},
        }


CompleteMember = Union[Node, CompleteWay, "CompleteRelation", None]


@dataclass
class CompleteRelationMember:
    """Relation member with its element resolved (None when missing)."""

    role: str
    type: MemberType
    ref: int
    element: CompleteMember = None


@dataclass
class CompleteRelation:
    """Relation with members resolved to full elements."""

    id: int | None
    members: list[CompleteRelationMember] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    changeset_id: int | None = None
    version: int | None = None


@dataclass
class Trace:
    """GPS trace metadata as listed by the OSM API."""

    id: str
    name: str = ""
    description: str = ""
    visibility: str = "private"
    lat_lng: LatLng = field(default_factory=LatLng)
    date: datetime | None = None
    user_name: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class RemoteFile:
    """Content fetched from an arbitrary URL."""

    content: bytes
    file_name: str
