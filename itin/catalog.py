"""Catalog accessors: where locations and transportation legs come from.

The engine never fetches anything itself; a CatalogSource is read once and
the materialized Catalog is handed to the composer. Two sources exist:

- YamlCatalog: a local YAML file with ``locations`` and ``transportations``
- ApiCatalog: the catalog REST API (``GET /locations``, ``GET /transportations``)

Every read failure surfaces as CatalogError, never as a validation code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

import requests
import yaml
from pydantic import ValidationError as SchemaError

from itin.errors import CatalogAuthError, CatalogError
from itin.models import Catalog, Location, TransportationLeg

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 10
_SAMPLE_CATALOG = Path(__file__).parent / "data" / "sample_catalog.yaml"


class CatalogSource(Protocol):
    """Read-only access to the full current catalog."""

    def list_locations(self) -> list[Location]: ...

    def list_transportation_legs(self) -> list[TransportationLeg]: ...


def _parse_records(model, records: Any, what: str) -> list:
    if records is None:
        return []
    if not isinstance(records, list):
        raise CatalogError(f"Expected a list of {what}, got {type(records).__name__}")
    try:
        return [model.model_validate(r) for r in records]
    except SchemaError as exc:
        lines = [f"Invalid {what} record(s):"]
        for err in exc.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise CatalogError("\n".join(lines)) from exc


class YamlCatalog:
    """Catalog backed by a YAML file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._raw: Optional[dict] = None

    def _load(self) -> dict:
        if self._raw is not None:
            return self._raw

        if not self.path.exists():
            raise CatalogError(f"Catalog file not found: {self.path}")

        try:
            with open(self.path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            msg = f"YAML parse error in {self.path}"
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                msg += f" at line {mark.line + 1}, column {mark.column + 1}"
            raise CatalogError(msg) from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise CatalogError(
                f"Expected a YAML mapping in {self.path}, got {type(raw).__name__}"
            )
        self._raw = raw
        return raw

    def list_locations(self) -> list[Location]:
        return _parse_records(Location, self._load().get("locations"), "locations")

    def list_transportation_legs(self) -> list[TransportationLeg]:
        return _parse_records(
            TransportationLeg, self._load().get("transportations"), "transportations"
        )


class ApiCatalog:
    """Catalog backed by the REST API. No retries; failures raise CatalogError."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = _DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.Timeout as exc:
            raise CatalogError(f"Timed out after {self.timeout}s fetching {url}") from exc
        except requests.RequestException as exc:
            raise CatalogError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code in (401, 403):
            raise CatalogAuthError(f"Catalog API rejected credentials (HTTP {resp.status_code})")
        if resp.status_code >= 400:
            raise CatalogError(f"Catalog API returned HTTP {resp.status_code} for {url}")

        try:
            return resp.json()
        except ValueError as exc:
            raise CatalogError(f"Catalog API returned non-JSON for {url}") from exc

    def list_locations(self) -> list[Location]:
        return _parse_records(Location, self._get("/locations"), "locations")

    def list_transportation_legs(self) -> list[TransportationLeg]:
        return _parse_records(TransportationLeg, self._get("/transportations"), "transportations")


def sample_catalog() -> YamlCatalog:
    """The demo catalog shipped with the package."""
    return YamlCatalog(_SAMPLE_CATALOG)


def load_catalog(source: CatalogSource) -> Catalog:
    """Materialize both lists from a source."""
    locations = source.list_locations()
    legs = source.list_transportation_legs()
    logger.debug("Loaded catalog: %d locations, %d legs", len(locations), len(legs))
    return Catalog(locations=locations, legs=legs)
