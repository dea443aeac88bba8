from __future__ import annotations
from typing import Dict, Mapping


def parse_quantities(cell: str) -> Dict[str, int]:
    """'810,820,810' -> {'810': 2, '820': 1}. Blank tokens are ignored."""
    quantities: Dict[str, int] = {}
    if not cell:
        return quantities
    for token in cell.split(","):
        code = token.strip()
        if code:
            quantities[code] = quantities.get(code, 0) + 1
    return quantities


def format_quantities(quantities: Mapping[str, int]) -> str:
    items = []
    for code, qty in quantities.items():
        items.extend([code] * max(0, int(qty)))
    return ",".join(items)


def normalize_quantities(quantities: Mapping[str, int]) -> Dict[str, int]:
    return {code: int(qty) for code, qty in quantities.items() if int(qty) > 0}


def has_order(quantities: Mapping[str, int]) -> bool:
    return any(int(qty) > 0 for qty in quantities.values())
