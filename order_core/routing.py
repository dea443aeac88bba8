from __future__ import annotations
from typing import Dict, Mapping, Tuple

from .catalog import FAMILY_CODES, PACKAGE_CODES, to_csv_codes, to_internal_codes
from .quantities import format_quantities, normalize_quantities, parse_quantities

# Packages cell carries packages + family variants; everything else (products,
# team variants, unknown codes) goes to the Products cell.
PACKAGES_CELL_CODES = PACKAGE_CODES | FAMILY_CODES


def split_by_column(internal_q: Mapping[str, int]) -> Tuple[Dict[str, int], Dict[str, int]]:
    products: Dict[str, int] = {}
    packages: Dict[str, int] = {}
    for code, qty in normalize_quantities(internal_q).items():
        target = packages if code in PACKAGES_CELL_CODES else products
        target[code] = qty
    return products, packages


def route_quantities(internal_q: Mapping[str, int]) -> Tuple[str, str]:
    """Internal quantities -> (products_cell, packages_cell) in CSV form."""
    products, packages = split_by_column(internal_q)
    return format_quantities(to_csv_codes(products)), format_quantities(to_csv_codes(packages))


def decode_order_cells(products_cell: str, packages_cell: str) -> Dict[str, int]:
    return to_internal_codes(parse_quantities(products_cell), parse_quantities(packages_cell))
