from __future__ import annotations
from enum import Enum
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel

from .constants import COACH_FREE_ITEM


class ItemCategory(str, Enum):
    PACKAGE = "package"
    PRODUCT = "product"
    FAMILY = "f-variant"
    TEAM = "t-variant"


class ItemConfig(BaseModel):
    code: str
    display_name: str
    price: int
    category: ItemCategory
    parent_code: Optional[str] = None
    is_sub_product: bool = False


def _items(category: ItemCategory, rows) -> List[ItemConfig]:
    return [ItemConfig(code=c, display_name=n, price=p, category=category) for c, n, p in rows]


# --- Packages (3x3 grid) ---
PACKAGE_ITEMS = _items(ItemCategory.PACKAGE, [
    ("A", "Package A", 15),
    ("B", "Package B", 20),
    ("C", "Package C", 25),
    ("D", "Package D", 35),
    ("E", "Package E", 44),
    ("F", "Package F", 53),
    ("G", "Package G", 60),
    ("H", "Package H", 45),
    ("DDPa", "Digital Download", 30),
])

PRODUCT_ITEMS = _items(ItemCategory.PRODUCT, [
    ("57", "5x7 Individual", 9),
    ("810", "8x10 Individual", 15),
    ("23", "4 Wallets", 8),
    ("23x8", "8 Wallets", 14),
    ("Bu", "Button", 9),
    ("ABa", "Acrylic Button", 9),
    ("Ma", "Magnet", 9),
    ("AMa", "Acrylic Magnet", 9),
    ("Kc", "Keychain", 12),
    ("KcS", "Keychain Statuette", 18),
    ("DDPr", "Digital File", 20),
])

FAMILY_ITEMS = _items(ItemCategory.FAMILY, [
    ("57F", "5x7 - Family", 11),
    ("810F", "8x10 - Family", 17),
    ("23F", "4 Wallets - Family", 10),
    ("23x8F", "8 Wallets - Family", 17),
    ("BuF", "Button - Family", 11),
    ("ABuF", "Acrylic Button - Family", 17),
    ("MaF", "Magnet - Family", 11),
    ("AMaF", "Acrylic Magnet - Family", 17),
    ("KcF", "Keychain - Family", 15),
    ("KcSF", "Keychain Statuette - Family", 23),
    ("DDF", "Digital File - Family", 25),
])

TEAM_ITEMS = _items(ItemCategory.TEAM, [
    ("57T", "5x7 - Team", 11),
    ("810T", "8x10 - Team", 17),
])

ALL_ITEMS: List[ItemConfig] = PACKAGE_ITEMS + PRODUCT_ITEMS + FAMILY_ITEMS + TEAM_ITEMS
ITEMS_BY_CODE: Dict[str, ItemConfig] = {item.code: item for item in ALL_ITEMS}

PACKAGE_CODES = {i.code for i in PACKAGE_ITEMS}
PRODUCT_CODES = {i.code for i in PRODUCT_ITEMS}
FAMILY_CODES = {i.code for i in FAMILY_ITEMS}
TEAM_CODES = {i.code for i in TEAM_ITEMS}

# --- Digital download aliasing ---
DD_CSV_CODE = "DD"
DD_PACKAGE_CODE = "DDPa"
DD_PRODUCT_CODE = "DDPr"
INTERNAL_TO_CSV = {DD_PACKAGE_CODE: DD_CSV_CODE, DD_PRODUCT_CODE: DD_CSV_CODE}
CSV_TO_INTERNAL = {
    "packages": {DD_CSV_CODE: DD_PACKAGE_CODE},
    "products": {DD_CSV_CODE: DD_PRODUCT_CODE},
}


def to_csv_codes(quantities: Mapping[str, int]) -> Dict[str, int]:
    """Internal codes -> external tokens (DDPa/DDPr -> DD), merging counts."""
    out: Dict[str, int] = {}
    for code, qty in quantities.items():
        csv_code = INTERNAL_TO_CSV.get(code, code)
        out[csv_code] = out.get(csv_code, 0) + qty
    return out


def to_internal_codes(product_q: Mapping[str, int], package_q: Mapping[str, int]) -> Dict[str, int]:
    """External tokens -> internal codes; the column a DD came from picks its variant."""
    out: Dict[str, int] = {}
    for column, q in (("products", product_q), ("packages", package_q)):
        mapping = CSV_TO_INTERNAL[column]
        for code, qty in q.items():
            internal = mapping.get(code, code)
            out[internal] = out.get(internal, 0) + qty
    return out


def top_level_items(items: List[ItemConfig]) -> List[ItemConfig]:
    return [i for i in items if not i.is_sub_product]


def sub_products_by_parent(items: List[ItemConfig]) -> Dict[str, List[ItemConfig]]:
    groups: Dict[str, List[ItemConfig]] = {}
    for i in items:
        if i.is_sub_product and i.parent_code:
            groups.setdefault(i.parent_code, []).append(i)
    return groups


def calculate_total(quantities: Mapping[str, int], is_coach: bool) -> int:
    total = 0
    for code, qty in quantities.items():
        item = ITEMS_BY_CODE.get(code)
        if item is None or qty <= 0:
            continue
        if is_coach and code == COACH_FREE_ITEM:
            continue  # free for coaches
        total += item.price * qty
    return total


def coach_discount(quantities: Mapping[str, int], is_coach: bool) -> int:
    qty = quantities.get(COACH_FREE_ITEM, 0)
    if not is_coach or qty <= 0:
        return 0
    return ITEMS_BY_CODE[COACH_FREE_ITEM].price * qty


