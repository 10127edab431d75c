"""Client-side state container for the product catalog.

``ProductStore`` keeps the cached product list plus the transient flags the
table and dialogs read (loading, which dialog is open, the selected row). All
writes go through the REST API; the cache is only reconciled from server
responses and is never treated as the source of truth.

Actions never raise. Each returns an :class:`ActionResult` and logs failures,
leaving user-facing messaging to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .client import AsyncInventoryClient

logger = logging.getLogger(__name__)

Product = Dict[str, Any]


@dataclass(frozen=True)
class ActionResult:
    success: bool
    error: Optional[str] = None
    status_code: Optional[int] = None


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return f"HTTP {resp.status_code}"


class ProductStore:
    def __init__(self, client: AsyncInventoryClient):
        self.client = client
        self.products: List[Product] = []
        self.is_loading = False
        self.open_product_dialog = False
        self.open_delete_dialog = False
        self.selected_product: Optional[Product] = None
        self._locks: Dict[str, asyncio.Lock] = {}

    def _get_lock(self, product_id: str) -> asyncio.Lock:
        if product_id not in self._locks:
            self._locks[product_id] = asyncio.Lock()
        return self._locks[product_id]

    # ---------------------------
    # Setters
    # ---------------------------
    def set_products(self, products: List[Product]) -> None:
        self.products = list(products)

    def set_selected_product(self, product: Optional[Product]) -> None:
        self.selected_product = product

    def set_open_product_dialog(self, open_dialog: bool) -> None:
        self.open_product_dialog = open_dialog

    def set_open_delete_dialog(self, open_dialog: bool) -> None:
        self.open_delete_dialog = open_dialog

    # Row actions
    def begin_add(self) -> None:
        self.set_selected_product(None)
        self.set_open_product_dialog(True)

    def begin_edit(self, product: Product) -> None:
        self.set_selected_product(product)
        self.set_open_product_dialog(True)

    def begin_delete(self, product: Product) -> None:
        self.set_selected_product(product)
        self.set_open_delete_dialog(True)

    # ---------------------------
    # Async actions
    # ---------------------------
    async def load_products(self) -> ActionResult:
        self.is_loading = True
        try:
            resp = await self.client.list_products()
            if not resp.is_success:
                detail = _error_detail(resp)
                logger.error("Failed to load products: %s", detail)
                return ActionResult(False, detail, resp.status_code)
            self.products = resp.json()
            return ActionResult(True, status_code=resp.status_code)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to load products: %s", exc)
            return ActionResult(False, str(exc))
        finally:
            self.is_loading = False

    async def add_product(self, product: Product) -> ActionResult:
        logger.debug("new product: %s", product)
        self.is_loading = True
        try:
            resp = await self.client.create_product(product)
            if not resp.is_success:
                detail = _error_detail(resp)
                logger.error("Error adding product: %s", detail)
                return ActionResult(False, detail, resp.status_code)
            self.products = self.products + [resp.json()]
            return ActionResult(True, status_code=resp.status_code)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error adding product: %s", exc)
            return ActionResult(False, str(exc))
        finally:
            self.is_loading = False

    async def update_product(self, product: Product) -> ActionResult:
        product_id = str(product.get("id") or "")
        self.is_loading = True
        try:
            async with self._get_lock(product_id):
                resp = await self.client.update_product(product_id, product)
                if not resp.is_success:
                    detail = _error_detail(resp)
                    logger.error("Update failed for %s: %s", product_id, detail)
                    return ActionResult(False, detail, resp.status_code)
                updated = resp.json()
                # replace in place only; a row deleted meanwhile stays deleted
                self.products = [updated if p.get("id") == product_id else p for p in self.products]
                return ActionResult(True, status_code=resp.status_code)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error updating product %s: %s", product_id, exc)
            return ActionResult(False, str(exc))
        finally:
            self.is_loading = False
            self.open_product_dialog = False
            self.selected_product = None

    async def delete_product(self, product_id: str) -> ActionResult:
        self.is_loading = True
        deleted = False
        try:
            async with self._get_lock(product_id):
                resp = await self.client.delete_product(product_id)
                if not resp.is_success:
                    detail = _error_detail(resp)
                    logger.error("Failed to delete %s: %s", product_id, detail)
                    return ActionResult(False, detail, resp.status_code)
                self.products = [p for p in self.products if p.get("id") != product_id]
                deleted = True
                return ActionResult(True, status_code=resp.status_code)
        except httpx.HTTPError as exc:
            logger.error("Delete error for %s: %s", product_id, exc)
            return ActionResult(False, str(exc))
        finally:
            self.is_loading = False
            self.open_delete_dialog = False
            self.selected_product = None
            if deleted:
                # the id is gone for good; later calls for it just 404
                self._locks.pop(product_id, None)
