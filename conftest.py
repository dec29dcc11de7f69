import pytest

from libranet.catalog import Catalog
from libranet.sample_data import populate
from libranet.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # Output mode is process-wide (environment); keep each test on plain text
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def seeded_catalog():
    return populate(Catalog())
