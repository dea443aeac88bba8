# FILE: tests/test_rules.py
from order_core.models import Player
from order_core.rules import (
    apply_order_rules,
    clean_coach_suffix,
    clean_no_order_suffix,
    display_name,
    format_name_with_icons,
    is_coach,
    is_no_order,
    is_placeholder_name,
    split_full_name,
)

def _p(last="Smith", coach="N", first="John"):
    return Player(barcode="1", team="T", first_name=first, last_name=last, coach=coach)

def test_coach_gets_free_item_and_suffix():
    player, q = apply_order_rules(_p(coach="Y"), {})
    assert player.last_name == "Smith-C"
    assert q == {"810T": 1}

def test_coach_suffix_added_once():
    player, q = apply_order_rules(_p(last="Smith-C", coach="Y"), {"810T": 3})
    assert player.last_name == "Smith-C"
    assert q["810T"] == 3

def test_coach_drops_stale_no_order_suffix():
    player, _ = apply_order_rules(_p(last="Smith-N", coach="Y"), {})
    assert player.last_name == "Smith-C"

def test_no_order_suffix_added_once():
    player, _ = apply_order_rules(_p(), {})
    assert player.last_name == "Smith-N"
    again, _ = apply_order_rules(player, {})
    assert again.last_name == "Smith-N"

def test_zero_quantities_count_as_no_order():
    player, _ = apply_order_rules(_p(), {"A": 0})
    assert player.last_name == "Smith-N"

def test_placeholder_never_marked_no_order():
    player, _ = apply_order_rules(_p(first="Player", last="4"), {})
    assert player.last_name == "4"

def test_order_removes_no_order_suffix():
    player, q = apply_order_rules(_p(last="Smith-N"), {"A": 1})
    assert player.last_name == "Smith"
    assert q == {"A": 1}

def test_rules_do_not_mutate_inputs():
    original = _p(coach="Y")
    q = {}
    apply_order_rules(original, q)
    assert original.last_name == "Smith"
    assert q == {}

def test_name_helpers():
    assert clean_coach_suffix("Smith-C") == "Smith"
    assert clean_no_order_suffix("Smith-N") == "Smith"
    assert clean_no_order_suffix("Smith") == "Smith"
    assert is_placeholder_name("Player 12")
    assert not is_placeholder_name("Player One")
    assert is_coach("Y") and not is_coach("N")
    assert is_no_order("Smith-N")
    assert not is_no_order("Smith-C")
    assert split_full_name("Mary Ann Lee") == ("Mary", "Ann Lee")
    assert split_full_name("Cher") == ("Cher", "")

def test_display_name():
    assert display_name("John", "Smith-C", "123") == "John Smith"
    assert display_name("Jane", "Doe-N", "123") == "Jane Doe"
    assert display_name("Player", "3", "123") == "123"
    assert display_name("", "", "123") == "123"

def test_icons():
    assert format_name_with_icons("A", True, False) == "👑 A"
    assert format_name_with_icons("A", False, True) == "🚫 A"
    assert format_name_with_icons("A", False, False) == "A"
