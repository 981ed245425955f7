"""OSM XML serialization and response parsing."""

from __future__ import annotations

import html
import re
from datetime import datetime

import lxml.etree as etree

from osm_trails.errors import TraceParseError
from osm_trails.models import Changeset, LatLng, Node, Trace, Way

OSM_VERSION = "0.6"

# <tag> children are left out on purpose: the server rejects them on this
# endpoint (openstreetmap-website issue #1600).
GPX_FILE_TEMPLATE = """<osm version='0.6' generator='OpenStreetMap server' copyright='OpenStreetMap and contributors' attribution='http://www.openstreetmap.org/copyright' license='http://opendatacommons.org/licenses/odbl/1-0/'>
    <gpx_file id=':id' name=':name' lat=':lat' lon=':lon' visibility=':visibility'>
        <description>:description</description>
    </gpx_file>
</osm>"""

_PLACEHOLDER = re.compile(r":(id|name|lat|lon|visibility|description)\b")


def _osm_root(generator: str) -> etree._Element:
    return etree.Element("osm", version=OSM_VERSION, generator=generator)


def _add_tags(parent: etree._Element, tags: dict[str, str]) -> None:
    for key, value in tags.items():
        etree.SubElement(parent, "tag", k=key, v=value)


def _set_optional(element: etree._Element, name: str, value: object) -> None:
    if value is not None:
        element.set(name, str(value))


def _to_bytes(root: etree._Element) -> bytes:
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")


def changeset_to_xml(changeset: Changeset, generator: str) -> bytes:
    """Serialize a changeset creation request."""

    root = _osm_root(generator)
    element = etree.SubElement(root, "changeset")
    _set_optional(element, "id", changeset.id)
    _add_tags(element, changeset.tags)

    return _to_bytes(root)


def node_to_xml(node: Node, generator: str) -> bytes:
    """Serialize a single node wrapped in an <osm> document."""

    root = _osm_root(generator)
    element = etree.SubElement(root, "node")
    _set_optional(element, "id", node.id)
    _set_optional(element, "changeset", node.changeset_id)
    _set_optional(element, "version", node.version)
    element.set("lat", repr(float(node.lat)))
    element.set("lon", repr(float(node.lon)))
    _add_tags(element, node.tags)

    return _to_bytes(root)


def way_to_xml(way: Way, generator: str) -> bytes:
    """Serialize a single way wrapped in an <osm> document."""

    root = _osm_root(generator)
    element = etree.SubElement(root, "way")
    _set_optional(element, "id", way.id)
    _set_optional(element, "changeset", way.changeset_id)
    _set_optional(element, "version", way.version)

    for node_id in way.node_ids:
        etree.SubElement(element, "nd", ref=str(node_id))

    _add_tags(element, way.tags)

    return _to_bytes(root)


def trace_to_xml(trace: Trace) -> str:
    """Fill the gpx_file template with escaped trace metadata."""

    values = {
        "id": trace.id,
        "name": trace.name,
        "lat": repr(float(trace.lat_lng.lat)),
        "lon": repr(float(trace.lat_lng.lng)),
        "visibility": trace.visibility,
        "description": trace.description,
    }

    return _PLACEHOLDER.sub(
        lambda match: html.escape(str(values[match.group(1)]), quote=True),
        GPX_FILE_TEMPLATE,
    )


def parse_user_id(content: bytes) -> str:
    """Extract the user id from a user/details response, "" if absent."""

    root = etree.fromstring(content)
    user = root.find("user")

    if user is None:
        return ""

    return user.get("id", "")


def _local_name(name: str) -> str:
    return etree.QName(name).localname.lower()


def _attribute(element: etree._Element, name: str) -> str | None:
    for key, value in element.attrib.items():
        if _local_name(key) == name:
            return value

    return None


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in element.iterchildren(etree.Element) if _local_name(child.tag) == name]


def _required(element: etree._Element, name: str) -> str:
    value = _attribute(element, name)

    if value is None:
        raise TraceParseError(f"gpx_file element is missing the '{name}' attribute")

    return value


def _coordinate(element: etree._Element, name: str) -> float:
    value = _attribute(element, name)

    try:
        return float(value) if value is not None else 0.0
    except ValueError as e:
        raise TraceParseError(f"Invalid {name} value: {value!r}") from e


def parse_trace(element: etree._Element) -> Trace:
    """Build a Trace from one gpx_file element."""

    descriptions = _children(element, "description")

    if not descriptions:
        raise TraceParseError("gpx_file element is missing its description")

    timestamp = _required(element, "timestamp")

    try:
        date = datetime.fromisoformat(timestamp)
    except ValueError as e:
        raise TraceParseError(f"Invalid timestamp: {timestamp!r}") from e

    return Trace(
        id=_required(element, "id"),
        name=_required(element, "name"),
        description=descriptions[0].text or "",
        visibility=_required(element, "visibility"),
        lat_lng=LatLng(lat=_coordinate(element, "lat"), lng=_coordinate(element, "lon")),
        date=date,
        user_name=_required(element, "user"),
        tags=[tag.text or "" for tag in _children(element, "tag")],
    )


def parse_traces(content: bytes) -> list[Trace]:
    """Parse a user/gpx_files listing in document order."""

    root = etree.fromstring(content)

    return [
        parse_trace(element)
        for element in root.iter(etree.Element)
        if _local_name(element.tag) == "gpx_file"
    ]
