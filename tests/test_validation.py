# FILE: tests/test_validation.py
import pytest

from order_core.errors import ValidationError
from order_core.validation import (
    format_phone_number,
    is_valid_email,
    is_valid_phone,
    phone_digits,
    run_self_test,
    validate_csv_path,
    validation_state,
)

def test_format_phone_progressively():
    assert format_phone_number("") == ""
    assert format_phone_number("123") == "(123"
    assert format_phone_number("1234") == "(123) 4"
    assert format_phone_number("1234567") == "(123) 456-7"
    assert format_phone_number("1234567890") == "(123) 456-7890"

def test_format_phone_strips_and_truncates():
    assert format_phone_number("(555) 123-45678999") == "(555) 123-4567"
    assert phone_digits("555.123.4567 ext") == "5551234567"

def test_phone_validity():
    assert is_valid_phone("")
    assert is_valid_phone("(555) 123-4567")
    assert not is_valid_phone("555-1234")

def test_email_validity():
    assert is_valid_email("")
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b")
    assert not is_valid_email("a b@c.de")

def test_validation_state():
    assert validation_state("", "")["form"]
    state = validation_state("123", "a@b.co")
    assert state == {"phone": False, "email": True, "form": False}

def test_validate_csv_path():
    validate_csv_path("roster.CSV", 100)
    with pytest.raises(ValidationError):
        validate_csv_path("roster.txt", 100)
    with pytest.raises(ValidationError):
        validate_csv_path("roster.csv", 0)
    with pytest.raises(ValidationError):
        validate_csv_path("roster.csv", 10 * 1024 * 1024 + 1)

def test_self_test_passes():
    results = run_self_test()
    assert results["tests"]
    assert all(ok for _, ok in results["tests"])
