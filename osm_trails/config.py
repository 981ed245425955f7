"""Configuration for OSM Trails."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """Application configuration with sensible defaults."""

    # Directories
    output_dir: Path = field(default_factory=lambda: Path("ways_geojson"))
    log_dir: Path = field(default_factory=lambda: Path("logs"))

    # HTTP settings
    user_agent: str = "OsmTrails/1.0"
    timeout: int = 30

    # OSM API
    osm_base_address: str = "https://www.openstreetmap.org"
    consumer_key: str = ""
    consumer_secret: str = ""
    created_by: str = "OsmTrails/1.0"

    @property
    def headers(self) -> dict[str, str]:
        """HTTP headers for requests."""
        return {"User-Agent": self.user_agent}

    def ensure_dirs(self) -> None:
        """Create output and log directories if they don't exist."""
        self.output_dir.mkdir(exist_ok=True)
        self.log_dir.mkdir(exist_ok=True)

    @classmethod
    def from_env(cls) -> Config:
        """Build config, overriding OSM settings from environment variables."""

        config = cls()
        config.osm_base_address = os.environ.get("OSM_BASE_ADDRESS", config.osm_base_address)
        config.consumer_key = os.environ.get("OSM_CONSUMER_KEY", config.consumer_key)
        config.consumer_secret = os.environ.get("OSM_CONSUMER_SECRET", config.consumer_secret)

        return config
