# order_core/csv_io.py
from __future__ import annotations
import io
import os
from typing import Dict, List, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, Field

from .constants import (
    COACH_FIELD_VALUE,
    COL_BARCODE,
    COL_TEAM,
    CORE_COLUMNS,
    CSV_COLUMN_ORDER,
    NON_COACH_FIELD_VALUE,
)
from .errors import CsvParseError, FileAccessError
from .logs import get_logger
from .models import FormData, Player
from .routing import route_quantities
from .rules import apply_order_rules, clean_suffixes, split_full_name
from .validation import phone_digits, validate_csv_path

log = get_logger("csv_io")

BOM = "\ufeff"


class RosterData(BaseModel):
    players: List[Player] = Field(default_factory=list)
    teams: List[str] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    source_path: Optional[str] = None

    @property
    def players_by_barcode(self) -> Dict[str, Player]:
        return {p.barcode: p for p in self.players}

    @property
    def players_by_team(self) -> Dict[str, List[Player]]:
        groups: Dict[str, List[Player]] = {t: [] for t in self.teams}
        for p in self.players:
            groups.setdefault(p.team, []).append(p)
        return groups

    def replace_player(self, player: Player) -> "RosterData":
        players = [player if p.barcode == player.barcode else p for p in self.players]
        return self.model_copy(update={"players": players})


def _player_from_row(row: Mapping[str, str]) -> Player:
    fields = {attr: row.get(col, "") for col, attr in CORE_COLUMNS.items()}
    fields["barcode"] = fields["barcode"].strip()  # matched against stripped cells on save
    if not fields["coach"]:
        fields["coach"] = NON_COACH_FIELD_VALUE
    extra = {col: val for col, val in row.items() if col not in CORE_COLUMNS}
    return Player(extra=extra, **fields)


def parse_roster_text(text: str, source_path: Optional[str] = None) -> RosterData:
    if text.startswith(BOM):
        text = text[len(BOM):]
    if not text.strip():
        raise CsvParseError("CSV file has no content", details={"path": source_path})
    try:
        df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise CsvParseError(f"Failed to parse CSV: {exc}", details={"path": source_path}) from exc

    df = df.fillna("")  # short rows
    df.columns = [str(c).strip() for c in df.columns]
    if COL_BARCODE not in df.columns:
        raise CsvParseError(
            f"Missing required column: {COL_BARCODE}",
            details={"path": source_path, "columns": list(df.columns)},
        )

    players: List[Player] = []
    teams: List[str] = []
    for idx, row in enumerate(df.to_dict(orient="records")):
        row = {k: ("" if v is None else str(v)) for k, v in row.items()}
        if not row.get(COL_BARCODE, "").strip() or not row.get(COL_TEAM, "").strip():
            log.warning("Skipping row %d: missing barcode or team", idx + 2)
            continue
        player = _player_from_row(row)
        players.append(player)
        if player.team not in teams:
            teams.append(player.team)

    log.info("Parsed %d players across %d teams", len(players), len(teams))
    return RosterData(players=players, teams=teams, columns=list(df.columns), source_path=source_path)


def read_text_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as exc:
        raise FileAccessError(f"File not found: {path}", details={"path": path}) from exc
    except PermissionError as exc:
        raise FileAccessError(f"Permission denied: {path}", details={"path": path}) from exc
    except UnicodeDecodeError as exc:
        raise CsvParseError(f"File is not valid UTF-8: {path}", details={"path": path}) from exc
    except OSError as exc:
        raise FileAccessError(f"Cannot read {path}: {exc}", details={"path": path}) from exc


def load_roster_file(path: str) -> RosterData:
    try:
        size = os.path.getsize(path)
    except OSError as exc:
        raise FileAccessError(f"Cannot access {path}: {exc}", details={"path": path}) from exc
    validate_csv_path(path, size)
    roster = parse_roster_text(read_text_file(path), source_path=path)
    log.info("Loaded roster %s", path)
    return roster


def export_roster_csv(roster: RosterData) -> str:
    """Serialize the whole roster; known columns first, then any extras seen on load."""
    columns = list(CSV_COLUMN_ORDER)
    for c in roster.columns:
        if c not in columns:
            columns.append(c)
    rows = []
    for p in roster.players:
        row = {col: getattr(p, attr) for col, attr in CORE_COLUMNS.items()}
        row.update(p.extra)
        rows.append(row)
    df = pd.DataFrame(rows, columns=columns).fillna("")
    buf = io.StringIO()
    df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()


def apply_form(player: Player, form: FormData, quantities: Mapping[str, int]) -> Player:
    if form.name.strip():
        first, last = split_full_name(form.name)
    else:
        first, last = player.first_name, player.last_name
    updated = player.model_copy(update={
        "first_name": first,
        "last_name": clean_suffixes(last),
        "cell_phone": phone_digits(form.phone),
        "email": form.email.strip(),
        "coach": COACH_FIELD_VALUE if form.is_coach else NON_COACH_FIELD_VALUE,
    })
    updated, q = apply_order_rules(updated, quantities)
    products, packages = route_quantities(q)
    return updated.model_copy(update={"products": products, "packages": packages})


def update_player(roster: RosterData, barcode: str, form: FormData, quantities: Mapping[str, int]) -> RosterData:
    player = roster.players_by_barcode.get(barcode)
    if player is None:
        log.warning("update_player: unknown barcode %s", barcode)
        return roster
    return roster.replace_player(apply_form(player, form, quantities))
