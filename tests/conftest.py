"""Pytest configuration and fixtures for the products service."""

import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.services.storage.product_store import ProductStore, get_product_store


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def products_file(tmp_path):
    """Location of the backing file for a single test; not created up front."""
    return tmp_path / "products.json"


@pytest.fixture()
def store(products_file):
    """Provide a store on a temporary file and inject it into the app."""
    from src.main import app

    product_store = ProductStore(products_file)
    app.dependency_overrides[get_product_store] = lambda: product_store
    yield product_store
    app.dependency_overrides.pop(get_product_store, None)


@pytest.fixture()
def write_records(products_file):
    """Write raw records straight to the backing file, bypassing the store."""

    def _write(records):
        products_file.write_text(json.dumps(records, indent=2), encoding="utf-8")

    return _write


@pytest_asyncio.fixture()
async def client(store):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
