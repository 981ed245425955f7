"""Exceptions raised by the OSM gateway."""

from __future__ import annotations


class OsmApiError(Exception):
    """OSM API call answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, detail: str = "") -> None:
        super().__init__(f"{message} {detail}".strip())
        self.status_code = status_code
        self.detail = detail


class TraceParseError(ValueError):
    """Trace listing is missing a field or holds a malformed value."""
