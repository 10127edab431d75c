import httpx
import pytest

from inventory_app.database import PRODUCTS
from inventory_app.main import app
from inventory_sdk.client import AsyncInventoryClient
from inventory_sdk.store import ProductStore


@pytest.fixture(autouse=True)
def clean_collection():
    PRODUCTS.clear()
    yield
    PRODUCTS.clear()


@pytest.fixture
def store():
    """Store wired to the real app in-process, no sockets involved."""
    client = AsyncInventoryClient(base_url="http://test", transport=httpx.ASGITransport(app=app))
    return ProductStore(client)


@pytest.fixture
def offline_store():
    """Store whose every request fails at the transport level."""

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = AsyncInventoryClient(base_url="http://test", transport=httpx.MockTransport(refuse))
    return ProductStore(client)


def make_draft(**overrides):
    draft = {
        "name": "Desk Lamp",
        "sku": "LAMP-01",
        "supplier": "Brightside",
        "category": "Home Decor",
        "quantityInStock": 12,
        "price": 19.99,
        "icon": "home",
    }
    draft.update(overrides)
    return draft
