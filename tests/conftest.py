"""Shared test fixtures for itin."""

import yaml
import pytest
from pathlib import Path

from itin.catalog import YamlCatalog, sample_catalog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def load_yaml():
    """Return a function that loads a YAML fixture file."""

    def _load(name: str) -> dict:
        path = FIXTURES_DIR / name
        with open(path) as f:
            return yaml.safe_load(f)

    return _load


@pytest.fixture
def fixture_path():
    """Return a function giving the absolute path of a fixture file."""

    def _path(name: str) -> str:
        return str(FIXTURES_DIR / name)

    return _path


@pytest.fixture
def example_catalog():
    """The two-leg 1 -> 3 -> 2 example catalog."""
    return YamlCatalog(FIXTURES_DIR / "spec_example.yaml")


@pytest.fixture
def demo_legs():
    """Legs from the bundled sample catalog."""
    return sample_catalog().list_transportation_legs()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at a temp file and clear ITIN_* overrides."""
    monkeypatch.setenv("ITIN_CONFIG", str(tmp_path / "config.yaml"))
    for var in ("ITIN_API_URL", "ITIN_API_TOKEN", "ITIN_TIMEOUT", "ITIN_CATALOG"):
        monkeypatch.delenv(var, raising=False)
