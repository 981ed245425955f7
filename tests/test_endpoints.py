"""Unit tests for OSM endpoint resolution."""

import pytest

from osm_trails.endpoints import OsmEndpoints, strip_protocol


@pytest.fixture
def endpoints():
    return OsmEndpoints.from_base_address("https://www.openstreetmap.org/")


class TestOsmEndpoints:
    def test_templates_are_under_api_0_6(self, endpoints):
        api = "https://www.openstreetmap.org/api/0.6/"

        assert endpoints.user_details == api + "user/details"
        assert endpoints.create_changeset == api + "changeset/create"
        assert endpoints.close_changeset == api + "changeset/:id/close"
        assert endpoints.create_node == api + "node/create"
        assert endpoints.create_way == api + "way/create"
        assert endpoints.way == api + "way/:id"
        assert endpoints.complete_way == api + "way/:id/full"
        assert endpoints.trace == api + "gpx/:id"
        assert endpoints.get_traces == api + "user/gpx_files"
        assert endpoints.create_trace == api + "gpx/create"

    def test_resolve_substitutes_id(self, endpoints):
        url = endpoints.resolve(endpoints.complete_way, 42)

        assert url == "https://www.openstreetmap.org/api/0.6/way/42/full"

    def test_host_has_no_protocol(self, endpoints):
        assert endpoints.host == "www.openstreetmap.org"

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.openstreetmap.org/api/0.6/user/details",
            "http://www.openstreetmap.org/api/0.6/user/details",
            "www.openstreetmap.org/api/0.6/gpx/create",
        ],
    )
    def test_api_urls_match_regardless_of_protocol(self, endpoints, url):
        assert endpoints.is_api_url(url)

    def test_http_base_matches_https_url(self):
        endpoints = OsmEndpoints.from_base_address("http://api06.dev.openstreetmap.org")

        assert endpoints.is_api_url("https://api06.dev.openstreetmap.org/api/0.6/node/create")

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/trace.gpx",
            "https://www.openstreetmap.org.evil.com/api/0.6/user/details",
            "https://example.com/?next=www.openstreetmap.org",
        ],
    )
    def test_other_hosts_do_not_match(self, endpoints, url):
        assert not endpoints.is_api_url(url)


def test_strip_protocol():
    assert strip_protocol("https://a.org/x") == "a.org/x"
    assert strip_protocol("http://a.org") == "a.org"
