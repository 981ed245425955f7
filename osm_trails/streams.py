"""
Streaming OSM XML reader and completion stage.

iter_elements() turns a byte stream into flat Node/Way/Relation records in
document order. iter_complete() buffers that stream and resolves way and
relation references, since a referenced element may appear before or after
the element referencing it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Union

import lxml.etree as etree

from osm_trails.models import (
    CompleteRelation,
    CompleteRelationMember,
    CompleteWay,
    Node,
    OsmElement,
    Relation,
    RelationMember,
    Way,
)

PRIMITIVE_TAGS = ("node", "way", "relation")

CompleteElement = Union[Node, CompleteWay, CompleteRelation]


def _int(value: str | None) -> int | None:
    return int(value) if value is not None else None


def _visible(value: str | None) -> bool | None:
    return None if value is None else value == "true"


def _tags(element: etree._Element) -> dict[str, str]:
    return {tag.get("k"): tag.get("v", "") for tag in element.iterchildren("tag")}


def _common(element: etree._Element) -> dict:
    return {
        "id": _int(element.get("id")),
        "tags": _tags(element),
        "changeset_id": _int(element.get("changeset")),
        "version": _int(element.get("version")),
        "timestamp": element.get("timestamp"),
        "user": element.get("user"),
        "uid": _int(element.get("uid")),
        "visible": _visible(element.get("visible")),
    }


def element_from_xml(element: etree._Element) -> OsmElement:
    """Convert a node/way/relation XML element into its record."""

    if element.tag == "node":
        return Node(
            lat=float(element.get("lat", 0)),
            lon=float(element.get("lon", 0)),
            **_common(element),
        )

    if element.tag == "way":
        return Way(
            node_ids=[int(nd.get("ref")) for nd in element.iterchildren("nd")],
            **_common(element),
        )

    if element.tag == "relation":
        return Relation(
            members=[
                RelationMember(
                    type=member.get("type"),
                    ref=int(member.get("ref")),
                    role=member.get("role", ""),
                )
                for member in element.iterchildren("member")
            ],
            **_common(element),
        )

    raise ValueError(f"Not an OSM primitive: {element.tag}")


def iter_elements(chunks: Iterable[bytes]) -> Iterator[OsmElement]:
    """Incrementally parse OSM XML chunks, yielding primitives in order."""

    parser = etree.XMLPullParser(events=("end",), tag=PRIMITIVE_TAGS)

    for chunk in chunks:
        parser.feed(chunk)
        yield from _drain(parser)

    parser.close()
    yield from _drain(parser)


def _drain(parser: etree.XMLPullParser) -> Iterator[OsmElement]:
    for _, element in parser.read_events():
        # Skip primitives nested inside other primitives (e.g. in osmChange)
        parent = element.getparent()
        if parent is not None and parent.tag in PRIMITIVE_TAGS:
            continue

        yield element_from_xml(element)

        element.clear()
        while element.getprevious() is not None:
            del parent[0]


def _complete_way(way: Way, nodes: dict[int, Node]) -> CompleteWay:
    return CompleteWay(
        id=way.id,
        nodes=[nodes.get(node_id) for node_id in way.node_ids],
        tags=way.tags,
        changeset_id=way.changeset_id,
        version=way.version,
        timestamp=way.timestamp,
        user=way.user,
    )


def _complete_relation(
    relation: Relation,
    nodes: dict[int, Node],
    ways: dict[int, CompleteWay],
    relations: dict[int, Relation],
    seen: frozenset[int] = frozenset(),
) -> CompleteRelation:
    seen = seen | {relation.id}
    members: list[CompleteRelationMember] = []

    for member in relation.members:
        element: Node | CompleteWay | CompleteRelation | None = None

        if member.type == "node":
            element = nodes.get(member.ref)
        elif member.type == "way":
            element = ways.get(member.ref)
        elif member.type == "relation" and member.ref in relations and member.ref not in seen:
            element = _complete_relation(relations[member.ref], nodes, ways, relations, seen)

        members.append(
            CompleteRelationMember(role=member.role, type=member.type, ref=member.ref, element=element)
        )

    return CompleteRelation(
        id=relation.id,
        members=members,
        tags=relation.tags,
        changeset_id=relation.changeset_id,
        version=relation.version,
    )


def iter_complete(elements: Iterable[OsmElement]) -> Iterator[CompleteElement]:
    """
    Resolve references between primitives.

    The whole stream is buffered first; unresolvable references stay None.
    Yields nodes, then complete ways, then complete relations, each group in
    the order it appeared in the stream.
    """

    nodes: dict[int, Node] = {}
    ways: list[Way] = []
    relations: dict[int, Relation] = {}

    for element in elements:
        if isinstance(element, Node):
            nodes[element.id] = element
        elif isinstance(element, Way):
            ways.append(element)
        elif isinstance(element, Relation):
            relations[element.id] = element

    yield from nodes.values()

    complete_ways = {way.id: _complete_way(way, nodes) for way in ways}
    yield from complete_ways.values()

    for relation in relations.values():
        yield _complete_relation(relation, nodes, complete_ways, relations)
