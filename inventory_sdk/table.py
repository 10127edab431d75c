# inventory_sdk/table.py
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Set, Tuple

from .config import PAGE_SIZE_OPTIONS
from .store import Product, ProductStore

SORTABLE_COLUMNS: Tuple[str, ...] = (
    "name",
    "sku",
    "createdAt",
    "price",
    "category",
    "quantityInStock",
    "supplier",
)


@dataclass(frozen=True)
class SortState:
    column: str
    descending: bool


DEFAULT_SORT = SortState("createdAt", True)


@dataclass(frozen=True)
class Projection:
    rows: List[Product]
    page_index: int
    page_count: int
    total_rows: int
    can_previous_page: bool
    can_next_page: bool


def _sort_key(value: Any) -> Tuple[int, Any]:
    # missing values sort last in ascending order
    if value is None:
        return (1, "")
    if isinstance(value, str):
        return (0, value.casefold())
    return (0, value)


class ProductTable:
    """Filtered, sorted and paginated view over a store's product cache.

    The table never changes ``store.products``; it only derives the page that
    is currently shown and forwards row actions back to the store.
    """

    def __init__(self, store: ProductStore, page_size: int = 10):
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}")
        self.store = store
        self.name_filter = ""
        self.category_filter: Set[str] = set()
        self.sort = DEFAULT_SORT
        self.page_index = 0
        self.page_size = page_size

    # ---------------------------
    # Filters
    # ---------------------------
    def set_name_filter(self, text: str) -> None:
        self.name_filter = (text or "").strip()
        self.page_index = 0

    def set_category_filter(self, categories: Iterable[str]) -> None:
        self.category_filter = set(categories)
        # changing the category selection puts the default sort back
        self.sort = DEFAULT_SORT
        self.page_index = 0

    def toggle_category(self, category: str) -> None:
        selected = set(self.category_filter)
        if category in selected:
            selected.remove(category)
        else:
            selected.add(category)
        self.set_category_filter(selected)

    def reset_filters(self) -> None:
        self.name_filter = ""
        self.set_category_filter(())

    def filter_rows(self, products: Iterable[Product]) -> List[Product]:
        term = self.name_filter.casefold()
        out = []
        for p in products:
            if term and term not in str(p.get("name", "")).casefold():
                continue
            if self.category_filter and p.get("category") not in self.category_filter:
                continue
            out.append(p)
        return out

    # ---------------------------
    # Sorting
    # ---------------------------
    def sort_by(self, column: str, descending: bool = False) -> None:
        if column not in SORTABLE_COLUMNS:
            raise ValueError(f"cannot sort by {column!r}")
        self.sort = SortState(column, descending)

    def sort_rows(self, rows: List[Product]) -> List[Product]:
        column = self.sort.column
        present = [r for r in rows if r.get(column) is not None]
        missing = [r for r in rows if r.get(column) is None]
        present.sort(key=lambda r: _sort_key(r.get(column)), reverse=self.sort.descending)
        return present + missing

    # ---------------------------
    # Pagination
    # ---------------------------
    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}")
        self.page_size = page_size
        self.page_index = 0

    def visible_rows(self) -> List[Product]:
        return self.sort_rows(self.filter_rows(self.store.products))

    def page_count(self, total_rows: Optional[int] = None) -> int:
        if total_rows is None:
            total_rows = len(self.filter_rows(self.store.products))
        return max(1, math.ceil(total_rows / self.page_size))

    def can_previous_page(self) -> bool:
        return self.page_index > 0

    def can_next_page(self) -> bool:
        return self.page_index < self.page_count() - 1

    def first_page(self) -> None:
        self.page_index = 0

    def previous_page(self) -> None:
        if self.can_previous_page():
            self.page_index -= 1

    def next_page(self) -> None:
        if self.can_next_page():
            self.page_index += 1

    def last_page(self) -> None:
        self.page_index = self.page_count() - 1

    def set_page_index(self, page_index: int) -> None:
        self.page_index = min(max(0, page_index), self.page_count() - 1)

    def projection(self) -> Projection:
        rows = self.visible_rows()
        page_count = self.page_count(len(rows))
        # the cache may have shrunk since the index was set
        self.page_index = min(self.page_index, page_count - 1)
        start = self.page_index * self.page_size
        return Projection(
            rows=rows[start:start + self.page_size],
            page_index=self.page_index,
            page_count=page_count,
            total_rows=len(rows),
            can_previous_page=self.page_index > 0,
            can_next_page=self.page_index < page_count - 1,
        )

    # ---------------------------
    # Row actions
    # ---------------------------
    def edit_row(self, row: Product) -> None:
        self.store.begin_edit(row)

    def delete_row(self, row: Product) -> None:
        self.store.begin_delete(row)
