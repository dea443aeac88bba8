# FILE: tests/test_rewriter.py
import pytest

from order_core.constants import COL_BARCODE, COL_EMAIL, CSV_COLUMN_ORDER
from order_core.errors import CsvParseError, PlayerNotFoundError
from order_core.models import Player
from order_core.rewriter import (
    column_positions,
    quote_field,
    repair_duplicated_columns,
    rewrite_rows,
    save_players_to_file,
    split_fields,
    split_records,
)

def test_split_records_keeps_terminators_and_quoted_newlines():
    text = 'a,"x\r\ny"\r\nb\nc'
    assert split_records(text) == [('a,"x\r\ny"', "\r\n"), ("b", "\n"), ("c", "")]

def test_column_positions_strips_quotes_and_space():
    assert column_positions('"Barcode Number", Team ,Email') == {"Barcode Number": 0, "Team": 1, "Email": 2}

def test_quote_field():
    assert quote_field("plain") == "plain"
    assert quote_field("a,b") == '"a,b"'
    assert quote_field('say "hi"') == '"say ""hi"""'
    assert quote_field("x\ny") == '"x\ny"'

def test_only_changed_cells_are_rewritten():
    text = (
        "Team,Barcode Number,First Name,Last Name,Notes,Products,Packages\r\n"
        '"Eagles",1,Ann,"Lee","said ""hi"", ok",,\r\n'
        'Eagles,2,Bob,Ray,"multi\nline",57,A\r\n'
    )
    players = [
        Player(barcode="1", first_name="Ann", last_name="Lee"),
        Player(barcode="2", first_name="Bob", last_name="Ray", products="57,810", packages="A"),
    ]
    expected = (
        "Team,Barcode Number,First Name,Last Name,Notes,Products,Packages\r\n"
        '"Eagles",1,Ann,"Lee","said ""hi"", ok",,\r\n'
        'Eagles,2,Bob,Ray,"multi\nline","57,810",A\r\n'
    )
    assert rewrite_rows(text, players) == expected

def test_bom_and_missing_trailing_newline_preserved():
    text = "\ufeffBarcode Number,First Name\n1,Ann"
    assert rewrite_rows(text, [Player(barcode="1", first_name="Bo")]) == "\ufeffBarcode Number,First Name\n1,Bo"

def test_short_row_is_padded():
    text = "Barcode Number,First Name,Email\n1,Ann\n"
    out = rewrite_rows(text, [Player(barcode="1", first_name="Ann", email="a@b.co")])
    assert out == "Barcode Number,First Name,Email\n1,Ann,a@b.co\n"

def test_unknown_barcode_raises():
    text = "Barcode Number,First Name\n1,Ann\n"
    with pytest.raises(PlayerNotFoundError) as info:
        rewrite_rows(text, [Player(barcode="9", first_name="Zed")])
    assert info.value.details == {"barcodes": ["9"]}

def test_missing_barcode_column():
    with pytest.raises(CsvParseError):
        rewrite_rows("Team,First Name\nEagles,Ann\n", [Player(barcode="1")])

def test_save_players_to_file_backs_up_first(tmp_path):
    path = tmp_path / "roster.csv"
    original = "Barcode Number,First Name,Email\r\n1,Ann,\r\n2,Bob,\r\n"
    path.write_bytes(original.encode("utf-8"))
    backup = save_players_to_file(str(path), [Player(barcode="2", first_name="Bob", email="b@c.de")])
    assert path.read_bytes().decode("utf-8") == "Barcode Number,First Name,Email\r\n1,Ann,\r\n2,Bob,b@c.de\r\n"
    with open(backup, "rb") as f:
        assert f.read().decode("utf-8") == original
    assert "_backup_" in backup

def test_repair_rebuilds_internal_header():
    text = "barcode,team,firstName,lastName,Products\n1,Eagles,Ann,Lee,57\n\n"
    fixed = repair_duplicated_columns(text)
    lines = fixed.splitlines()
    assert lines[0] == ",".join(CSV_COLUMN_ORDER)
    row = lines[1].split(",")
    assert len(row) == len(CSV_COLUMN_ORDER)
    assert row[:4] == ["1", "Eagles", "Ann", "Lee"]
    assert row[CSV_COLUMN_ORDER.index("Products")] == "57"
    assert len(lines) == 2

def test_repair_ignores_clean_file():
    assert repair_duplicated_columns("Barcode Number,Team,First Name\n1,Eagles,Ann\n") is None

def test_stray_quote_in_unquoted_field_is_plain_text():
    assert split_fields('a,5",b') == ["a", '5"', "b"]
    assert split_fields('"x,y",5"",z') == ['"x,y"', '5""', "z"]
    assert split_records('a,5"\nb,3"\n') == [('a,5"', "\n"), ('b,3"', "\n")]

def test_stray_quote_does_not_bleed_into_next_row():
    text = (
        "Barcode Number,Team,First Name,Last Name,Inches,Products,Packages\n"
        '1,Eagles,Ann,Lee,5",57,A\n'
        '2,Eagles,Bob,Ray,3",810,B\n'
    )
    out = rewrite_rows(text, [Player(barcode="1", first_name="Ann", last_name="Lee", products="57,57", packages="A")])
    lines = out.split("\n")
    assert lines[1] == '1,Eagles,Ann,Lee,5","57,57",A'
    assert lines[2] == '2,Eagles,Bob,Ray,3",810,B'
    assert len(lines) == 4

def test_barcode_cell_with_whitespace_matches():
    text = 'Barcode Number,Email\n 7 ,\n" 8",\n'
    out = rewrite_rows(text, [Player(barcode="7", email="x@y.zz"), Player(barcode="8", email="q@r.st")])
    assert out == 'Barcode Number,Email\n 7 ,x@y.zz\n" 8",q@r.st\n'

def test_missing_barcode_raises_even_when_others_match():
    text = "Barcode Number,Email\n1,\n"
    with pytest.raises(PlayerNotFoundError) as info:
        rewrite_rows(text, [Player(barcode="1", email="a@b.co"), Player(barcode="2", email="c@d.ef")])
    assert info.value.details == {"barcodes": ["2"]}

def _full_row(barcode):
    values = {col: f"{col.split()[0]}{barcode}" for col in CSV_COLUMN_ORDER}
    values.update({
        COL_BARCODE: barcode,
        "First Name": "Bob",
        "Last Name": "Ray",
        "Coach": "N",
        "Cell Phone": "5551234567",
        COL_EMAIL: f"p{barcode}@x.co",
        "Products": "57",
        "Packages": '"A,B"',
        "Address1": '"12 Main St, Apt 4"',
        "Inches": '5"',
        "Player Stat": '"said ""hi"""',
        "Retouching": "",
    })
    return ",".join(values[c] for c in CSV_COLUMN_ORDER)

def test_wide_file_changes_only_the_edited_cell(tmp_path):
    text = "\ufeff" + ",".join(CSV_COLUMN_ORDER) + "\r\n" + "".join(_full_row(str(b)) + "\r\n" for b in range(1, 6))
    path = tmp_path / "wide.csv"
    path.write_bytes(text.encode("utf-8"))
    player = Player(
        barcode="3", first_name="Bob", last_name="Ray", coach="N", cell_phone="5551234567",
        email="new@x.co", products="57", packages="A,B",
    )
    save_players_to_file(str(path), [player])
    after = path.read_bytes().decode("utf-8")
    assert after == text.replace("p3@x.co", "new@x.co")
    before_lines = text.split("\r\n")
    after_lines = after.split("\r\n")
    changed = [i for i, (a, b) in enumerate(zip(before_lines, after_lines)) if a != b]
    assert changed == [3]
