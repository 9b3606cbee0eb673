"""Tests for catalog accessors."""

from unittest.mock import MagicMock

import pytest
import requests

from itin.catalog import ApiCatalog, YamlCatalog, load_catalog, sample_catalog
from itin.errors import CatalogAuthError, CatalogError
from itin.models import LegKind, LocationType

_LEG_JSON = {
    "id": 1,
    "originLocationId": 1,
    "destinationLocationId": 2,
    "transportationType": "FLIGHT",
    "originLocationName": "A",
    "destinationLocationName": "B",
}
_LOCATION_JSON = {"id": 1, "name": "A", "type": "AIRPORT", "city": "X", "country": "Y"}


def _response(status=200, payload=None, bad_json=False):
    resp = MagicMock()
    resp.status_code = status
    if bad_json:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


def _session(*responses):
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


class TestYamlCatalog:
    def test_example(self, example_catalog):
        catalog = load_catalog(example_catalog)
        assert [loc.id for loc in catalog.locations] == [1, 2, 3]
        assert catalog.location(1).type == LocationType.CITY_POINT
        assert [leg.id for leg in catalog.legs] == [101, 102]
        assert catalog.legs[1].transportation_type == LegKind.FLIGHT

    def test_sample_catalog_loads(self):
        catalog = load_catalog(sample_catalog())
        assert len(catalog.locations) == 6
        assert len(catalog.legs) == 9

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            YamlCatalog(tmp_path / "nope.yaml").list_locations()

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("locations: [\n")
        with pytest.raises(CatalogError, match="YAML parse error"):
            YamlCatalog(path).list_locations()

    def test_not_a_mapping(self, fixture_path):
        with pytest.raises(CatalogError, match="mapping"):
            YamlCatalog(fixture_path("not_a_mapping.yaml")).list_transportation_legs()

    def test_empty_file_is_empty_catalog(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        catalog = load_catalog(YamlCatalog(path))
        assert catalog.locations == []
        assert catalog.legs == []

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "bad_leg.yaml"
        path.write_text(
            "transportations:\n"
            "  - {id: 1, originLocationId: 1, destinationLocationId: 2, transportationType: BOAT}\n"
        )
        with pytest.raises(CatalogError, match="Invalid transportations"):
            YamlCatalog(path).list_transportation_legs()


class TestApiCatalog:
    def test_lists(self):
        session = _session(_response(payload=[_LOCATION_JSON]), _response(payload=[_LEG_JSON]))
        api = ApiCatalog("http://api.test/", session=session)
        catalog = load_catalog(api)
        assert catalog.locations[0].name == "A"
        assert catalog.legs[0].transportation_type == LegKind.FLIGHT
        urls = [c.args[0] for c in session.get.call_args_list]
        assert urls == ["http://api.test/locations", "http://api.test/transportations"]

    def test_bearer_token(self):
        session = _session(_response(payload=[]))
        ApiCatalog("http://api.test", token="abc", session=session).list_locations()
        headers = session.get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer abc"

    def test_no_token_no_auth_header(self):
        session = _session(_response(payload=[]))
        ApiCatalog("http://api.test", session=session).list_locations()
        assert "Authorization" not in session.get.call_args.kwargs["headers"]

    def test_timeout(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout()
        with pytest.raises(CatalogError, match="Timed out"):
            ApiCatalog("http://api.test", session=session).list_locations()

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(CatalogError, match="Network error"):
            ApiCatalog("http://api.test", session=session).list_transportation_legs()

    def test_auth_error(self):
        session = _session(_response(status=401))
        with pytest.raises(CatalogAuthError):
            ApiCatalog("http://api.test", session=session).list_locations()

    def test_server_error(self):
        session = _session(_response(status=500))
        with pytest.raises(CatalogError, match="HTTP 500"):
            ApiCatalog("http://api.test", session=session).list_locations()

    def test_non_json(self):
        session = _session(_response(bad_json=True))
        with pytest.raises(CatalogError, match="non-JSON"):
            ApiCatalog("http://api.test", session=session).list_locations()

    def test_non_list_payload(self):
        session = _session(_response(payload={"error": "nope"}))
        with pytest.raises(CatalogError, match="Expected a list"):
            ApiCatalog("http://api.test", session=session).list_locations()
