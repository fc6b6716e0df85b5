import copy
import pytest
import yaml

from support_chain.services.catalog_manager import CatalogManager, DEFAULT_CATALOG_PATH


@pytest.fixture(scope="session")
def catalog_path():
    return DEFAULT_CATALOG_PATH


@pytest.fixture(scope="session")
def catalog(catalog_path):
    return CatalogManager(str(catalog_path))


@pytest.fixture(scope="session")
def _raw_catalog(catalog_path):
    with open(catalog_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def catalog_data(_raw_catalog):
    """A private, editable copy of the bundled catalog contents."""
    return copy.deepcopy(_raw_catalog)


@pytest.fixture
def write_catalog(tmp_path):
    def _write(data, name="catalog.yaml"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        return path
    return _write
