# tests/test_table.py
import pytest

from inventory_sdk.client import AsyncInventoryClient
from inventory_sdk.store import ProductStore
from inventory_sdk.table import DEFAULT_SORT, ProductTable

CATEGORY_CYCLE = ["Books", "Toys", "Electronics", "Sports", "Beauty"]


def make_products(n):
    return [
        {
            "id": f"p{i}",
            "name": f"Product {i:02d}",
            "sku": f"SKU-{i:02d}",
            "supplier": "Acme",
            "category": CATEGORY_CYCLE[i % len(CATEGORY_CYCLE)],
            "quantityInStock": i,
            "price": float(100 - i),
            "icon": "package",
            "createdAt": f"2024-01-{i + 1:02d}T00:00:00.000000Z",
        }
        for i in range(n)
    ]


def make_table(n=25, page_size=10):
    store = ProductStore(AsyncInventoryClient())
    store.set_products(make_products(n))
    return ProductTable(store, page_size=page_size)


def test_empty_category_selection_passes_everything():
    table = make_table()
    assert len(table.filter_rows(table.store.products)) == 25


def test_category_selection_passes_only_members():
    table = make_table()
    table.set_category_filter({"Books", "Toys"})
    rows = table.filter_rows(table.store.products)
    assert rows
    assert {r["category"] for r in rows} == {"Books", "Toys"}
    expected = [p for p in table.store.products if p["category"] in ("Books", "Toys")]
    assert len(rows) == len(expected)


def test_toggle_category_adds_and_removes():
    table = make_table()
    table.toggle_category("Books")
    assert table.category_filter == {"Books"}
    table.toggle_category("Books")
    assert table.category_filter == set()


def test_name_filter_is_case_insensitive_substring():
    table = make_table()
    table.set_name_filter("product 1")
    names = [r["name"] for r in table.visible_rows()]
    assert len(names) == 10
    assert all("Product 1" in n for n in names)


def test_default_sort_is_newest_first():
    table = make_table(5)
    assert table.sort == DEFAULT_SORT
    assert [r["id"] for r in table.visible_rows()] == ["p4", "p3", "p2", "p1", "p0"]


def test_sort_by_column_and_direction():
    table = make_table(5)
    table.sort_by("price")
    assert [r["price"] for r in table.visible_rows()] == [96.0, 97.0, 98.0, 99.0, 100.0]
    table.sort_by("price", descending=True)
    assert [r["price"] for r in table.visible_rows()][0] == 100.0
    with pytest.raises(ValueError):
        table.sort_by("actions")


def test_changing_categories_restores_default_sort():
    table = make_table()
    table.sort_by("name")
    table.set_category_filter({"Books"})
    assert table.sort == DEFAULT_SORT


def test_last_page_holds_the_remainder():
    table = make_table(25, page_size=10)
    first = table.projection()
    assert first.page_count == 3
    assert len(first.rows) == 10
    assert first.can_previous_page is False
    assert first.can_next_page is True

    table.set_page_index(2)
    last = table.projection()
    assert last.page_index == 2
    assert len(last.rows) == 5
    assert last.can_next_page is False
    assert last.can_previous_page is True


def test_navigation_stops_at_bounds():
    table = make_table(25, page_size=10)
    table.previous_page()
    assert table.page_index == 0
    table.next_page()
    table.next_page()
    table.next_page()
    assert table.page_index == 2
    table.first_page()
    assert table.page_index == 0
    table.last_page()
    assert table.page_index == 2


def test_page_index_is_clamped_when_cache_shrinks():
    table = make_table(25, page_size=10)
    table.last_page()
    table.store.set_products(make_products(4))
    projection = table.projection()
    assert projection.page_index == 0
    assert len(projection.rows) == 4


def test_filter_change_returns_to_first_page():
    table = make_table(25, page_size=10)
    table.last_page()
    table.set_name_filter("product")
    assert table.page_index == 0


def test_page_size_must_be_an_offered_option():
    table = make_table()
    table.last_page()
    assert table.page_index == 2
    table.set_page_size(20)
    assert table.page_index == 0
    assert table.projection().page_count == 2
    with pytest.raises(ValueError):
        table.set_page_size(7)


def test_empty_table_has_one_page():
    table = make_table(0)
    projection = table.projection()
    assert projection.rows == []
    assert projection.page_count == 1
    assert not projection.can_next_page and not projection.can_previous_page


def test_row_actions_open_dialogs_on_the_store():
    table = make_table(3)
    row = table.visible_rows()[0]
    table.edit_row(row)
    assert table.store.open_product_dialog
    assert table.store.selected_product is row
    table.store.set_open_product_dialog(False)
    table.delete_row(row)
    assert table.store.open_delete_dialog
