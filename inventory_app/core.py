import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from .database import PRODUCTS, DocumentValidationError, DuplicateKeyError

# This file contains the core logic for the product endpoints.

logger = logging.getLogger(__name__)

DUPLICATE_DETAILS = {
    "name": "Product name must be unique",
    "sku": "Product SKU must be unique",
}


def _duplicate(exc: DuplicateKeyError) -> HTTPException:
    detail = DUPLICATE_DETAILS.get(exc.field, f"Product {exc.field} must be unique")
    return HTTPException(status_code=400, detail=detail)


def _invalid(exc: DocumentValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail=f"Invalid product: {exc}")


def parse_categories(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


# Collection endpoints
async def create_product_logic(payload: Dict[str, Any]):
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise HTTPException(status_code=400, detail="Name is required")

    try:
        product = await PRODUCTS.create(payload)
    except DuplicateKeyError as exc:
        logger.warning("Rejected duplicate %s on create: %r", exc.field, exc.value)
        raise _duplicate(exc)
    except DocumentValidationError as exc:
        raise _invalid(exc)
    except Exception:
        logger.exception("Failed to create product")
        raise HTTPException(status_code=500, detail="Something went wrong")

    logger.info("Created product %s (%s)", product["id"], product["name"])
    return product


async def list_products_logic(search: Optional[str] = None, categories: Optional[str] = None):
    return await PRODUCTS.find(name_contains=search, categories=parse_categories(categories))


# Item endpoints
async def get_product_logic(product_id: str):
    product = await PRODUCTS.find_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def update_product_logic(product_id: str, payload: Dict[str, Any]):
    if not product_id or not product_id.strip():
        raise HTTPException(status_code=400, detail="Product ID is required")

    try:
        product = await PRODUCTS.find_by_id_and_update(product_id, payload)
    except DuplicateKeyError as exc:
        logger.warning("Rejected duplicate %s on update of %s", exc.field, product_id)
        raise _duplicate(exc)
    except DocumentValidationError as exc:
        raise _invalid(exc)
    except Exception:
        logger.exception("Failed to update product %s", product_id)
        raise HTTPException(status_code=500, detail="Failed to update product")

    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    logger.info("Updated product %s", product_id)
    return product


async def delete_product_logic(product_id: str):
    try:
        removed = await PRODUCTS.find_by_id_and_delete(product_id)
    except Exception:
        logger.exception("Failed to delete product %s", product_id)
        raise HTTPException(status_code=500, detail="Failed to delete")

    if removed is not None:
        logger.info("Deleted product %s", product_id)
    # deleting an absent id still confirms; the flag says whether anything went
    return {"message": "Deleted successfully", "deleted": removed is not None}


# Utility: reset (for tests/demo)
async def reset_all_logic():
    PRODUCTS.clear()
    logger.info("Product collection reset")
    return {"status": "reset"}
