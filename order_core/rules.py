"""
Coach and no-order naming rules, plus the name helpers the form uses for display.
"""
from __future__ import annotations
from typing import Dict, Mapping, Tuple

from .constants import (
    COACH_FIELD_VALUE,
    COACH_FREE_ITEM,
    COACH_ICON,
    COACH_SUFFIX,
    NO_ORDER_ICON,
    NO_ORDER_SUFFIX,
    PLACEHOLDER_NAME,
)
from .models import Player
from .quantities import has_order


def _strip_suffix(text: str, suffix: str) -> str:
    return text[: -len(suffix)] if text.endswith(suffix) else text


def clean_coach_suffix(name: str) -> str:
    return _strip_suffix(name, COACH_SUFFIX)


def clean_no_order_suffix(name: str) -> str:
    return _strip_suffix(name, NO_ORDER_SUFFIX)


def clean_suffixes(name: str) -> str:
    return clean_no_order_suffix(clean_coach_suffix(name))


def is_placeholder_name(name: str) -> bool:
    return bool(PLACEHOLDER_NAME.match(name.strip()))


def is_coach(coach_value: str) -> bool:
    return coach_value == COACH_FIELD_VALUE


def is_no_order(last_name: str) -> bool:
    return last_name.endswith(NO_ORDER_SUFFIX)


def split_full_name(name: str) -> Tuple[str, str]:
    """Split at the first space: 'Mary Ann Lee' -> ('Mary', 'Ann Lee')."""
    parts = name.strip().split(" ")
    first = parts[0] if parts else ""
    return first, " ".join(parts[1:])


def display_name(first_name: str, last_name: str, barcode: str) -> str:
    full = f"{first_name} {last_name}".strip()
    if is_placeholder_name(full):
        return barcode
    return clean_suffixes(full) or barcode


def format_name_with_icons(name: str, coach: bool, no_order: bool) -> str:
    if coach:
        return f"{COACH_ICON} {name}"
    if no_order:
        return f"{NO_ORDER_ICON} {name}"
    return name


def apply_order_rules(player: Player, quantities: Mapping[str, int]) -> Tuple[Player, Dict[str, int]]:
    """
    Return copies of ``player`` and ``quantities`` with the naming rules applied.

    - coach: free item present (qty >= 1) and last name carries the coach suffix once
    - non-coach with no order: no-order suffix added (placeholder names are left alone)
    - non-coach with an order: no-order suffix removed
    """
    last = player.last_name
    q = dict(quantities)

    if player.coach == COACH_FIELD_VALUE:
        if q.get(COACH_FREE_ITEM, 0) < 1:
            q[COACH_FREE_ITEM] = 1
        last = clean_no_order_suffix(last)
        if not last.endswith(COACH_SUFFIX):
            last += COACH_SUFFIX
    elif not has_order(q):
        if not is_placeholder_name(f"{player.first_name} {last}") and not last.endswith(NO_ORDER_SUFFIX):
            last += NO_ORDER_SUFFIX
    else:
        last = clean_no_order_suffix(last)

    return player.model_copy(update={"last_name": last}), q
