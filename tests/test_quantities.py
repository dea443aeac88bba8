# FILE: tests/test_quantities.py
from order_core.quantities import format_quantities, has_order, normalize_quantities, parse_quantities

def test_parse_counts_repeats_and_trims():
    assert parse_quantities("810, 57,810") == {"810": 2, "57": 1}

def test_parse_ignores_empty_tokens():
    assert parse_quantities("") == {}
    assert parse_quantities(",, ,A,") == {"A": 1}

def test_format_repeats_codes():
    assert format_quantities({"A": 2, "57": 1}) == "A,A,57"

def test_format_skips_zero_and_negative():
    assert format_quantities({"A": 0, "B": -1, "C": 1}) == "C"
    assert format_quantities({}) == ""

def test_round_trip_matches_normalized():
    q = {"A": 3, "810T": 1, "DD": 0}
    assert parse_quantities(format_quantities(q)) == normalize_quantities(q) == {"A": 3, "810T": 1}

def test_has_order():
    assert not has_order({})
    assert not has_order({"A": 0})
    assert has_order({"A": 0, "57": 1})
