# inventory_sdk/client.py
from typing import Any, Dict, Iterable, Optional

import httpx
import requests


def _search_params(search: Optional[str], categories: Optional[Iterable[str]]) -> Dict[str, str]:
    params = {}
    if search:
        params["search"] = search
    cats = [c for c in (categories or ()) if c]
    if cats:
        params["categories"] = ",".join(cats)
    return params


class InventoryClient:
    """Blocking client for scripts and the demo seeder.

    Raises ``requests.HTTPError`` on non-success responses.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8085", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def reset(self):
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list_products(self, search: Optional[str] = None, categories: Optional[Iterable[str]] = None):
        r = self.session.get(f"{self.base_url}/products", params=_search_params(search, categories), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, product: Dict[str, Any]):
        r = self.session.post(f"{self.base_url}/products", json=product, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, changes: Dict[str, Any]):
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=changes, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()


class AsyncInventoryClient:
    """Non-blocking client used by the product store.

    Methods return the raw ``httpx.Response`` so callers can inspect the
    status; transport failures surface as ``httpx.HTTPError``. A fresh
    ``httpx.AsyncClient`` is opened per call, so one instance can be shared
    across event loops.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8085",
        timeout: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def list_products(self, search: Optional[str] = None, categories: Optional[Iterable[str]] = None) -> httpx.Response:
        async with self._client() as client:
            return await client.get("/products", params=_search_params(search, categories))

    async def create_product(self, product: Dict[str, Any]) -> httpx.Response:
        async with self._client() as client:
            return await client.post("/products", json=product)

    async def update_product(self, product_id: str, product: Dict[str, Any]) -> httpx.Response:
        async with self._client() as client:
            return await client.put(f"/products/{product_id}", json=product)

    async def delete_product(self, product_id: str) -> httpx.Response:
        async with self._client() as client:
            return await client.delete(f"/products/{product_id}")
