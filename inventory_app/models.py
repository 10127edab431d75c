# inventory_app/models.py
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    FURNITURE = "Furniture"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    TOYS = "Toys"
    BEAUTY = "Beauty"
    SPORTS = "Sports"
    HOME_DECOR = "Home Decor"
    HOME_APPLIANCES = "Home Appliances"
    OTHERS = "Others"


CATEGORIES: Tuple[str, ...] = tuple(c.value for c in Category)

SKU_PATTERN = r"^[A-Za-z0-9_-]+$"

# Fields a client may write; id and timestamps are owned by the collection.
MUTABLE_FIELDS: Tuple[str, ...] = (
    "name",
    "supplier",
    "sku",
    "category",
    "quantityInStock",
    "price",
    "icon",
)

UNIQUE_FIELDS: Tuple[str, ...] = ("name", "sku")


class ProductDocument(BaseModel):
    """Schema every stored product document must satisfy.

    Field names are snake_case in Python and camelCase on the wire
    (``quantityInStock``, ``createdAt``, ``updatedAt``).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str
    name: str = Field(..., min_length=1)
    supplier: str = Field(..., min_length=1)
    sku: str = Field(..., pattern=SKU_PATTERN)
    category: Category
    quantity_in_stock: int = Field(0, ge=0, alias="quantityInStock")
    price: float = Field(0, ge=0, allow_inf_nan=False)
    icon: Optional[str] = None
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
