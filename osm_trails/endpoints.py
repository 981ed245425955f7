"""OSM API 0.6 endpoint templates."""

from __future__ import annotations

from dataclasses import dataclass

ID_PLACEHOLDER = ":id"


def strip_protocol(url: str) -> str:
    """Drop the http(s) scheme so hosts compare the same for both."""
    return url.replace("http://", "").replace("https://", "")


@dataclass(frozen=True)
class OsmEndpoints:
    """Endpoint URLs built once from the configured base address."""

    host: str
    user_details: str
    create_changeset: str
    close_changeset: str
    create_node: str
    create_way: str
    way: str
    complete_way: str
    trace: str
    get_traces: str
    create_trace: str

    @classmethod
    def from_base_address(cls, base_address: str) -> OsmEndpoints:
        base = base_address.rstrip("/")
        api = f"{base}/api/0.6/"
        way = api + "way/:id"

        return cls(
            host=strip_protocol(base),
            user_details=api + "user/details",
            create_changeset=api + "changeset/create",
            close_changeset=api + "changeset/:id/close",
            create_node=api + "node/create",
            create_way=api + "way/create",
            way=way,
            complete_way=way + "/full",
            trace=api + "gpx/:id",
            get_traces=api + "user/gpx_files",
            create_trace=api + "gpx/create",
        )

    @staticmethod
    def resolve(template: str, element_id: object) -> str:
        """Substitute the id placeholder in an endpoint template."""
        return template.replace(ID_PLACEHOLDER, str(element_id))

    def is_api_url(self, url: str) -> bool:
        """Check whether url points at the configured API host."""

        target = strip_protocol(url)

        return target == self.host or target.startswith(self.host + "/")
