# inventory_app/database.py
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .models import MUTABLE_FIELDS, UNIQUE_FIELDS, ProductDocument

# This file holds the in-memory product collection and its write locks.

logger = logging.getLogger(__name__)


class DuplicateKeyError(Exception):
    """Raised when a write would break a unique index (name or sku)."""

    def __init__(self, field: str, value: Any):
        super().__init__(f"duplicate key: {field}={value!r}")
        self.field = field
        self.value = value


class DocumentValidationError(ValueError):
    """Raised when a document does not satisfy the product schema."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        parts = []
        for err in errors:
            loc = ".".join(str(piece) for piece in err.get("loc", ())) or "document"
            parts.append(f"{loc}: {err.get('msg', 'invalid')}")
        super().__init__("; ".join(parts))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _validate(document: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return ProductDocument.model_validate(document).to_document()
    except ValidationError as exc:
        raise DocumentValidationError(exc.errors(include_url=False)) from exc


class ProductCollection:
    """Document collection for products.

    Mirrors the small contract a document database driver exposes: find with
    a filter, create with unique-index enforcement, find-and-update by id and
    find-and-delete by id. Every write re-validates the whole document.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _get_lock(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    def _check_unique(self, document: Dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for field in UNIQUE_FIELDS:
            value = document.get(field)
            for other in self._documents.values():
                if other["id"] == exclude_id:
                    continue
                if other.get(field) == value:
                    raise DuplicateKeyError(field, value)

    # ---------------------------
    # Reads
    # ---------------------------
    async def find(
        self,
        name_contains: Optional[str] = None,
        categories: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Return matching documents, newest ``createdAt`` first."""
        term = (name_contains or "").casefold()
        wanted = set(categories or ())
        out = []
        # newest insertions first so equal timestamps keep that order
        for doc in reversed(list(self._documents.values())):
            if term and term not in doc["name"].casefold():
                continue
            if wanted and doc["category"] not in wanted:
                continue
            out.append(dict(doc))
        out.sort(key=lambda d: d["createdAt"], reverse=True)
        return out

    async def find_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        doc = self._documents.get(product_id)
        return dict(doc) if doc else None

    # ---------------------------
    # Writes
    # ---------------------------
    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        async with self._get_lock("products"):
            now = _now()
            candidate = {k: fields[k] for k in MUTABLE_FIELDS if k in fields}
            candidate.update({"id": uuid.uuid4().hex, "createdAt": now, "updatedAt": now})
            document = _validate(candidate)
            self._check_unique(document)
            self._documents[document["id"]] = document
            logger.debug("Inserted product %s", document["id"])
            return dict(document)

    async def find_by_id_and_update(self, product_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        async with self._get_lock("products"):
            current = self._documents.get(product_id)
            if current is None:
                return None
            merged = dict(current)
            merged.update({k: updates[k] for k in MUTABLE_FIELDS if k in updates})
            merged["updatedAt"] = _now()
            document = _validate(merged)
            self._check_unique(document, exclude_id=product_id)
            self._documents[product_id] = document
            return dict(document)

    async def find_by_id_and_delete(self, product_id: str) -> Optional[Dict[str, Any]]:
        async with self._get_lock("products"):
            return self._documents.pop(product_id, None)

    def clear(self) -> None:
        self._documents.clear()
        self._locks.clear()

    def __len__(self) -> int:
        return len(self._documents)


PRODUCTS = ProductCollection()
