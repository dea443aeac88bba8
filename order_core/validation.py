# FILE: order_core/validation.py
from __future__ import annotations
import os
import re
from typing import Dict

from .constants import MAX_CSV_BYTES
from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_DIGITS = 10


def phone_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")[:PHONE_DIGITS]


def format_phone_number(value: str) -> str:
    """Digits only, rendered progressively as (123) 456-7890."""
    d = phone_digits(value)
    if not d:
        return ""
    if len(d) <= 3:
        return f"({d}"
    if len(d) <= 6:
        return f"({d[:3]}) {d[3:]}"
    return f"({d[:3]}) {d[3:6]}-{d[6:]}"


def is_valid_phone(value: str) -> bool:
    if not value:
        return True
    digits = re.sub(r"\D", "", value)
    return len(digits) == PHONE_DIGITS


def is_valid_email(value: str) -> bool:
    if not value:
        return True
    return bool(EMAIL_PATTERN.match(value.strip()))


def validation_state(phone: str, email: str) -> Dict[str, bool]:
    phone_ok = is_valid_phone(phone)
    email_ok = is_valid_email(email)
    return {"phone": phone_ok, "email": email_ok, "form": phone_ok and email_ok}


def validate_csv_path(path: str, size: int) -> None:
    name = os.path.basename(path)
    if not name.lower().endswith(".csv"):
        raise ValidationError(
            f"Not a CSV file: {name}",
            details={"path": path},
            user_message="Please select a CSV file (.csv).",
        )
    if size == 0:
        raise ValidationError(
            f"File is empty: {name}",
            details={"path": path},
            user_message="The selected file is empty.",
        )
    if size > MAX_CSV_BYTES:
        raise ValidationError(
            f"File too large: {size} bytes",
            details={"path": path, "size": size},
            user_message="File size must be less than 10MB.",
        )


def run_self_test():
    """Sanity checks the Admin page runs against the order codec and the contact validators."""
    results = {"tests": []}
    from order_core.quantities import format_quantities, parse_quantities
    q = parse_quantities("810, 57,810,,")
    results["tests"].append(("Quantity parsing", q == {"810": 2, "57": 1}))
    results["tests"].append(("Quantity round trip", parse_quantities(format_quantities(q)) == q))
    from order_core.routing import decode_order_cells, route_quantities
    cells = route_quantities({"A": 1, "DDPa": 1, "DDPr": 2, "57F": 1, "810T": 1})
    results["tests"].append(("Column routing", cells == ("DD,DD,810T", "A,DD,57F")))
    results["tests"].append(("DD decoding", decode_order_cells("DD", "DD") == {"DDPr": 1, "DDPa": 1}))
    from order_core.rewriter import rewrite_rows
    from order_core.models import Player
    text = 'Barcode Number,First Name,Note\r\n1,Ann,"a,b"\r\n2,Bob,x\r\n'
    out = rewrite_rows(text, [Player(barcode="1", first_name="Anna")])
    results["tests"].append(("In-place rewrite", out == 'Barcode Number,First Name,Note\r\n1,Anna,"a,b"\r\n2,Bob,x\r\n'))
    results["tests"].append(("Phone formatting", format_phone_number("1234567890") == "(123) 456-7890"))
    results["tests"].append(("Email validation", is_valid_email("a@b.co") and not is_valid_email("a@b")))
    return results
