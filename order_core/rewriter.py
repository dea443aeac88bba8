"""
In-place CSV rewriting.

Only the cells the order form owns are replaced on the rows that changed; every
other byte of the file (column order, quoting, line endings, unknown columns,
untouched rows) is written back exactly as it was read.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple

from .backups import create_backup, prune_backups
from .constants import COL_BARCODE, CORRUPTED_HEADER_MARKERS, CSV_COLUMN_ORDER, EDITABLE_COLUMNS
from .csv_io import BOM, read_text_file
from .errors import CsvParseError, PlayerNotFoundError, SaveError
from .logs import get_logger
from .models import Player

log = get_logger("rewriter")

NEEDS_QUOTES = (",", '"', "\r", "\n")


def split_records(text: str) -> List[Tuple[str, str]]:
    """
    Split raw text into (record, terminator) pairs; newlines inside quotes stay in the record.

    A quote only opens a quoted section at the start of a field, so an unquoted
    cell like ``5"`` is plain text. Inside quotes ``""`` is an escaped quote.
    """
    records: List[Tuple[str, str]] = []
    in_quotes = False
    field_start = True
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and text[i + 1] == '"':
                    i += 1
                else:
                    in_quotes = False
        elif ch == '"' and field_start:
            in_quotes = True
            field_start = False
        elif ch == ",":
            field_start = True
        elif ch in "\r\n":
            end = i
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            records.append((text[start:end], text[end:i + 1]))
            start = i + 1
            field_start = True
        else:
            field_start = False
        i += 1
    if start < n:
        records.append((text[start:], ""))
    return records


def split_fields(record: str) -> List[str]:
    """Raw field spans of one record, quotes included."""
    fields: List[str] = []
    in_quotes = False
    field_start = True
    start = 0
    i = 0
    n = len(record)
    while i < n:
        ch = record[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and record[i + 1] == '"':
                    i += 1
                else:
                    in_quotes = False
        elif ch == '"' and field_start:
            in_quotes = True
            field_start = False
        elif ch == ",":
            fields.append(record[start:i])
            start = i + 1
            field_start = True
        else:
            field_start = False
        i += 1
    fields.append(record[start:])
    return fields


def unquote(raw: str) -> str:
    s = raw.strip()
    if len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        return s[1:-1].replace('""', '"')
    return s


def quote_field(value: str) -> str:
    if any(c in value for c in NEEDS_QUOTES):
        return '"' + value.replace('"', '""') + '"'
    return value


def column_positions(header_record: str) -> Dict[str, int]:
    positions: Dict[str, int] = {}
    for idx, raw in enumerate(split_fields(header_record)):
        name = raw.strip().strip('"').strip()
        positions.setdefault(name, idx)
    return positions


def _strip_bom(text: str) -> Tuple[str, str]:
    if text.startswith(BOM):
        return BOM, text[len(BOM):]
    return "", text


def rewrite_rows(text: str, players: Iterable[Player]) -> str:
    updates = {p.barcode: p for p in players}
    bom, body = _strip_bom(text)
    records = split_records(body)
    if not records or not updates:
        return text

    positions = column_positions(records[0][0])
    barcode_pos = positions.get(COL_BARCODE)
    if barcode_pos is None:
        raise CsvParseError(f"Missing required column: {COL_BARCODE}", details={"columns": list(positions)})

    out = [records[0][0] + records[0][1]]
    matched = set()
    for record, terminator in records[1:]:
        fields = split_fields(record)
        barcode = unquote(fields[barcode_pos]).strip() if barcode_pos < len(fields) else ""
        player = updates.get(barcode)
        if player is None or not record.strip():
            out.append(record + terminator)
            continue
        matched.add(barcode)
        for column, attr in EDITABLE_COLUMNS.items():
            pos = positions.get(column)
            if pos is None:
                continue
            while len(fields) <= pos:
                fields.append("")
            value = str(getattr(player, attr) or "")
            if unquote(fields[pos]) != value:
                fields[pos] = quote_field(value)
        out.append(",".join(fields) + terminator)

    missing = set(updates) - matched
    if missing:
        raise PlayerNotFoundError(
            f"Barcodes not found in file: {', '.join(sorted(missing))}",
            details={"barcodes": sorted(missing)},
            user_message="This player's row was not found in the file, so nothing was saved. "
                         "Reload the file and try again.",
        )
    log.debug("Rewrote %d row(s)", len(matched))
    return bom + "".join(out)


def save_players_to_file(
    path: str,
    players: Iterable[Player],
    backup_dir: Optional[str] = None,
    keep_backups: int = 0,
) -> str:
    """Rewrite the rows for ``players``, back up ``path`` and write in place. Returns the backup path."""
    players = list(players)
    text = read_text_file(path)
    new_text = rewrite_rows(text, players)
    backup_path = create_backup(path, backup_dir=backup_dir)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(new_text)
    except OSError as exc:
        raise SaveError(f"Failed to write {path}: {exc}", details={"path": path, "backup": backup_path}) from exc
    if keep_backups > 0:
        prune_backups(path, keep_backups, backup_dir=backup_dir)
    log.info("Saved %d player(s) to %s (backup %s)", len(players), path, backup_path)
    return backup_path


def _is_corrupted_header(headers: List[str]) -> bool:
    return any(h not in CSV_COLUMN_ORDER and h.lower() in CORRUPTED_HEADER_MARKERS for h in headers)


def _find_source_column(expected: str, headers: List[str]) -> int:
    if expected in headers:
        return headers.index(expected)
    variants = {
        "Barcode Number": lambda h: "barcode" in h,
        "Team": lambda h: h == "team",
        "First Name": lambda h: "first" in h,
        "Last Name": lambda h: "last" in h,
    }
    match = variants.get(expected)
    if match is None:
        return -1
    for idx, h in enumerate(headers):
        if match(h.lower()):
            return idx
    return -1


def repair_duplicated_columns(text: str) -> Optional[str]:
    """
    Rebuild a file whose header carries internal field names (``barcode``,
    ``firstName``...) into the canonical column order. Returns None for a clean file.
    """
    bom, body = _strip_bom(text)
    records = [r for r, _ in split_records(body)]
    if not records:
        return None
    headers = [unquote(h) for h in split_fields(records[0])]
    if not _is_corrupted_header(headers):
        return None

    mapping = [_find_source_column(col, headers) for col in CSV_COLUMN_ORDER]
    lines = [",".join(CSV_COLUMN_ORDER)]
    for record in records[1:]:
        if not record.strip():
            continue
        fields = split_fields(record)
        row = [fields[i].strip() if 0 <= i < len(fields) else "" for i in mapping]
        lines.append(",".join(row))
    log.info("Repaired corrupted header: %d data row(s), %d columns", len(lines) - 1, len(CSV_COLUMN_ORDER))
    return bom + "\n".join(lines) + "\n"
