"""Product form validation and the icon picker.

The add/edit dialog collects every field as text. ``validate_draft`` turns
that text into a typed :class:`ProductForm` or a ``{field: message}`` map of
the problems to show next to each input.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError, field_validator

from inventory_app.models import CATEGORIES

from .icons import DEFAULT_ICON, available_icon_names, resolve_icon_name

FORM_FIELDS = ("name", "sku", "supplier", "category", "quantity", "price", "icon")

SKU_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class ProductForm(BaseModel):
    name: str
    sku: str
    supplier: str
    category: str
    quantity: int
    price: float
    icon: str

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise ValueError("Product name is required")
        return text

    @field_validator("sku", mode="before")
    @classmethod
    def _sku(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise ValueError("SKU is required")
        if not SKU_RE.match(text):
            raise ValueError("SKU must contain only letters, numbers, hyphens, or underscores")
        return text

    @field_validator("supplier", mode="before")
    @classmethod
    def _supplier(cls, value: Any) -> str:
        text = _text(value)
        if not text:
            raise ValueError("Supplier is required")
        return text

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> str:
        text = _text(value)
        if text not in CATEGORIES:
            raise ValueError("Please select a category")
        return text

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, value: Any) -> int:
        text = _text(value)
        if not text:
            raise ValueError("Quantity is required")
        try:
            quantity = int(text)
        except ValueError:
            raise ValueError("Quantity must be a whole number")
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")
        return quantity

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value: Any) -> float:
        text = _text(value)
        if not text:
            raise ValueError("Price is required")
        try:
            price = Decimal(text)
        except InvalidOperation:
            raise ValueError("Price must be a number")
        if not price.is_finite():
            raise ValueError("Price must be a number")
        # huge exponents overflow to inf once converted, tiny ones to 0
        value = float(price)
        if not math.isfinite(value):
            raise ValueError("Price must be a number")
        if value <= 0:
            raise ValueError("Price must be greater than 0")
        return value

    @field_validator("icon", mode="before")
    @classmethod
    def _icon(cls, value: Any) -> str:
        # unknown names fall back to the default glyph instead of failing
        return resolve_icon_name(_text(value))

    def to_payload(self) -> Dict[str, Any]:
        """Wire-format fields for the REST API."""
        return {
            "name": self.name,
            "sku": self.sku,
            "supplier": self.supplier,
            "category": self.category,
            "quantityInStock": self.quantity,
            "price": self.price,
            "icon": self.icon,
        }


def _message(err: Mapping[str, Any]) -> str:
    ctx = err.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    return str(err.get("msg", "Invalid value"))


def validate_draft(draft: Mapping[str, Any]) -> Tuple[Optional[ProductForm], Dict[str, str]]:
    """Validate a text draft; returns ``(form, {})`` or ``(None, errors)``."""
    data = {field: draft.get(field, "") for field in FORM_FIELDS}
    try:
        return ProductForm.model_validate(data), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors(include_url=False):
            field = str(err["loc"][0]) if err.get("loc") else "form"
            errors.setdefault(field, _message(err))
        return None, errors


def empty_draft() -> Dict[str, str]:
    return {
        "name": "",
        "sku": "",
        "supplier": "",
        "category": CATEGORIES[0],
        "quantity": "",
        "price": "",
        "icon": available_icon_names()[0],
    }


def draft_from_product(product: Mapping[str, Any]) -> Dict[str, str]:
    return {
        "name": _text(product.get("name")),
        "sku": _text(product.get("sku")),
        "supplier": _text(product.get("supplier")),
        "category": _text(product.get("category")) or CATEGORIES[0],
        "quantity": _text(product.get("quantityInStock")),
        "price": _text(product.get("price")),
        "icon": resolve_icon_name(product.get("icon")),
    }


class IconSelector:
    """Exactly one icon is selected at a time; the first one to start with."""

    def __init__(self, names: Optional[List[str]] = None):
        self.names = list(names or available_icon_names())
        if not self.names:
            raise ValueError("IconSelector needs at least one icon")
        self.selected = self.names[0]

    def select(self, name: Optional[str]) -> str:
        key = resolve_icon_name(name)
        if key not in self.names:
            key = DEFAULT_ICON if DEFAULT_ICON in self.names else self.names[0]
        self.selected = key
        return key

    def reset(self) -> None:
        self.selected = self.names[0]

    def is_selected(self, name: str) -> bool:
        return name == self.selected
