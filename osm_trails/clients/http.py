"""Base HTTP client with common functionality."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote, urlparse

import requests

from osm_trails.models import RemoteFile

if TYPE_CHECKING:
    from osm_trails.config import Config


_FILENAME_RE = re.compile(r"filename\*?=(?:UTF-8'')?\"?([^\";]+)\"?", re.IGNORECASE)


class HttpClient:
    """
    Base HTTP client with configured headers and timeout.

    The session only carries static headers. Per-request headers, such as an
    Authorization header, come from auth_headers() and are passed to that
    single call.
    """

    def __init__(self, config: Config, logger: logging.Logger) -> None:
        self.config = config
        self.logger = logger
        self._session = requests.Session()
        self._session.headers.update(config.headers)

    def auth_headers(self, method: str, url: str) -> dict[str, str]:
        """Headers authenticating a request; none by default."""
        return {}

    def request(
        self,
        method: str,
        url: str,
        data: Any = None,
        files: dict[str, Any] | None = None,
        stream: bool = False,
        timeout: int | None = None,
        signed: bool = True,
    ) -> requests.Response:
        """Make a request, adding auth headers for this method and URL unless unsigned."""

        self.logger.debug(f"{method} {url}")

        return self._session.request(
            method,
            url,
            data=data,
            files=files,
            headers=self.auth_headers(method, url) if signed else {},
            stream=stream,
            timeout=timeout or self.config.timeout,
        )

    def get(
        self,
        url: str,
        stream: bool = False,
        timeout: int | None = None,
        signed: bool = True,
    ) -> requests.Response:
        """Make GET request."""
        return self.request("GET", url, stream=stream, timeout=timeout, signed=signed)

    def put(self, url: str, data: Any = None, timeout: int | None = None) -> requests.Response:
        """Make PUT request."""
        return self.request("PUT", url, data=data, timeout=timeout)

    def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        timeout: int | None = None,
    ) -> requests.Response:
        """Make POST request."""
        return self.request("POST", url, data=data, files=files, timeout=timeout)

    def delete(self, url: str, timeout: int | None = None) -> requests.Response:
        """Make DELETE request."""
        return self.request("DELETE", url, timeout=timeout)

    def fetch_file(self, url: str, timeout: int | None = None) -> RemoteFile:
        """
        Download a file from any URL.

        The file name comes from the Content-Disposition header when present,
        otherwise from the last path segment of the URL.
        """

        resp = self.get(url, timeout=timeout)
        resp.raise_for_status()

        disposition = resp.headers.get("Content-Disposition", "")
        match = _FILENAME_RE.search(disposition)

        if match:
            file_name = unquote(match.group(1))
        else:
            file_name = unquote(urlparse(url).path.rsplit("/", 1)[-1])

        return RemoteFile(content=resp.content, file_name=file_name)
