"""Pytest fixtures for catalog client and synchronization store tests."""

import pytest

from src.catalog.store import CatalogStore
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogTransport
from src.integrations.services.catalog_service import CatalogClient
from tests.factories import product_payload


@pytest.fixture
def catalog_records():
    """57 products, matching the paging scenario used throughout the tests."""
    return [product_payload(i) for i in range(1, 58)]


@pytest.fixture
def transport(catalog_records):
    """In-memory catalog transport seeded with 57 products."""
    return LocalCatalogTransport(products=catalog_records)


@pytest.fixture
def client(transport):
    return CatalogClient(transport)


@pytest.fixture
def store(client):
    return CatalogStore(client)
