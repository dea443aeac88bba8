# FILE: tests/test_catalog.py
from order_core.catalog import (
    ITEMS_BY_CODE,
    ItemCategory,
    ItemConfig,
    calculate_total,
    coach_discount,
    sub_products_by_parent,
    to_csv_codes,
    to_internal_codes,
    top_level_items,
)
from order_core.routing import decode_order_cells, route_quantities

def test_catalog_prices():
    assert ITEMS_BY_CODE["A"].price == 15
    assert ITEMS_BY_CODE["DDPa"].price == 30
    assert ITEMS_BY_CODE["DDPr"].price == 20
    assert ITEMS_BY_CODE["KcSF"].price == 23
    assert ITEMS_BY_CODE["810T"].category == ItemCategory.TEAM

def test_dd_codes_merge_to_csv_token():
    assert to_csv_codes({"DDPa": 1, "DDPr": 2, "A": 1}) == {"DD": 3, "A": 1}

def test_dd_token_resolved_by_column():
    assert to_internal_codes({"DD": 1, "57": 1}, {"DD": 2}) == {"DDPr": 1, "57": 1, "DDPa": 2}

def test_total_and_coach_discount():
    q = {"A": 1, "810T": 2, "ZZ": 4}
    assert calculate_total(q, False) == 15 + 34
    assert calculate_total(q, True) == 15
    assert coach_discount(q, True) == 34
    assert coach_discount(q, False) == 0

def test_sub_product_grouping():
    items = [
        ItemConfig(code="X", display_name="X", price=1, category=ItemCategory.PRODUCT),
        ItemConfig(code="X1", display_name="X1", price=1, category=ItemCategory.PRODUCT,
                   parent_code="X", is_sub_product=True),
        ItemConfig(code="X2", display_name="X2", price=1, category=ItemCategory.PRODUCT,
                   parent_code="X", is_sub_product=True),
    ]
    assert [i.code for i in top_level_items(items)] == ["X"]
    assert [i.code for i in sub_products_by_parent(items)["X"]] == ["X1", "X2"]

def test_route_quantities_canonical_columns():
    q = {"A": 2, "57": 1, "57F": 1, "810T": 1, "DDPa": 1, "DDPr": 1, "ZZ": 1}
    products, packages = route_quantities(q)
    assert products == "57,810T,DD,ZZ"
    assert packages == "A,A,57F,DD"

def test_route_drops_zero_quantities():
    assert route_quantities({"A": 0, "57": 0}) == ("", "")

def test_decode_order_cells():
    assert decode_order_cells("57,DD", "A,DD,DD") == {"57": 1, "DDPr": 1, "A": 1, "DDPa": 2}
