"""
OSM Trails v1.0.0

Edits OpenStreetMap ways and manages GPS traces through the OSM API.

Usage: uv run main.py <command> [options]
"""

from osm_trails.cli import main

if __name__ == "__main__":
    main()
