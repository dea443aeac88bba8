# order_core/session.py
from __future__ import annotations
from typing import Dict, List, Optional

from .catalog import calculate_total
from .catalog import coach_discount as _coach_discount
from .constants import COACH_FREE_ITEM
from .csv_io import RosterData, load_roster_file, update_player
from .errors import AppError, PlayerNotFoundError, SaveError, ValidationError, report_error, user_message_for
from .logs import get_logger
from .models import AppConfig, FormData, Player
from .quantities import normalize_quantities
from .rewriter import save_players_to_file
from .routing import decode_order_cells
from .rules import (
    clean_suffixes,
    display_name,
    format_name_with_icons,
    is_no_order,
    is_placeholder_name,
    split_full_name,
)
from .validation import format_phone_number, phone_digits, validation_state

log = get_logger("session")


class FormSession:
    """
    Order-form state for one operator: the loaded roster, the team being worked
    through and the form for the selected player. Every navigation saves the
    current form first when it differs from what is stored.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.roster: Optional[RosterData] = None
        self.file_path: Optional[str] = None
        self.selected_team: str = ""
        self.team_players: List[Player] = []
        self.current_index: int = -1
        self.selected_player: Optional[Player] = None
        self.form = FormData()
        self.last_error: Optional[str] = None
        self.last_backup: Optional[str] = None

    # ----- loading / navigation -----
    def open_file(self, path: str) -> RosterData:
        self.autosave()
        roster = load_roster_file(path)
        self.roster = roster
        self.file_path = path
        self.selected_team = ""
        self.team_players = []
        self._clear_player()
        if roster.teams:
            self._enter_team(roster.teams[0])
        return roster

    def select_team(self, team: str) -> None:
        self.autosave()
        self._enter_team(team)

    def select_player(self, barcode: str) -> None:
        self.autosave()
        player = self.roster.players_by_barcode.get(barcode) if self.roster else None
        if player is None:
            raise PlayerNotFoundError(f"Unknown barcode: {barcode}", details={"barcode": barcode})
        if player.team != self.selected_team:
            self._enter_team(player.team)
        self.current_index = self._index_of(barcode)
        self.load_player(player)

    def navigate(self, direction: str) -> None:
        if not self.team_players:
            return
        self.autosave()
        step = 1 if direction == "next" else -1
        idx = min(max(self.current_index + step, 0), len(self.team_players) - 1)
        self.current_index = idx
        self.load_player(self.team_players[idx])

    def can_navigate(self, direction: str) -> bool:
        if direction == "next":
            return 0 <= self.current_index < len(self.team_players) - 1
        return self.current_index > 0

    def _enter_team(self, team: str) -> None:
        self.selected_team = team
        self._refresh_team_players()
        if self.team_players:
            self.current_index = 0
            self.load_player(self.team_players[0])
        else:
            self._clear_player()

    def _refresh_team_players(self) -> None:
        if self.roster is None:
            self.team_players = []
            return
        self.team_players = list(self.roster.players_by_team.get(self.selected_team, []))

    def _index_of(self, barcode: str) -> int:
        for i, p in enumerate(self.team_players):
            if p.barcode == barcode:
                return i
        return -1

    def _clear_player(self) -> None:
        self.current_index = -1
        self.selected_player = None
        self.form = FormData()

    def load_player(self, player: Player) -> None:
        full = player.full_name
        self.selected_player = player
        self.form = FormData(
            name="" if is_placeholder_name(full) else clean_suffixes(full),
            phone=format_phone_number(player.cell_phone),
            email=player.email,
            is_coach=player.is_coach,
            quantities=normalize_quantities(decode_order_cells(player.products, player.packages)),
        )

    # ----- form edits -----
    def set_coach(self, flag: bool) -> None:
        self.form.is_coach = bool(flag)
        if flag:
            if self.form.quantities.get(COACH_FREE_ITEM, 0) < 1:
                self.form.quantities[COACH_FREE_ITEM] = 1
        else:
            self.form.quantities.pop(COACH_FREE_ITEM, None)

    def set_quantity(self, code: str, qty: int) -> None:
        qty = max(0, int(qty))
        if qty:
            self.form.quantities[code] = qty
        else:
            self.form.quantities.pop(code, None)

    def increment(self, code: str) -> None:
        self.set_quantity(code, self.form.quantities.get(code, 0) + 1)

    def decrement(self, code: str) -> None:
        self.set_quantity(code, self.form.quantities.get(code, 0) - 1)

    def is_valid(self) -> bool:
        return validation_state(self.form.phone, self.form.email)["form"]

    def has_changes(self) -> bool:
        p = self.selected_player
        if p is None:
            return False
        f = self.form
        if f.name.strip():
            first, last = split_full_name(f.name)
            if first != p.first_name or last != clean_suffixes(p.last_name):
                return True
        if phone_digits(f.phone) != phone_digits(p.cell_phone):
            return True
        if f.email.strip() != p.email.strip():
            return True
        if f.is_coach != p.is_coach:
            return True
        stored = normalize_quantities(decode_order_cells(p.products, p.packages))
        return normalize_quantities(f.quantities) != stored

    # ----- saving -----
    def save_current(self) -> bool:
        """Write the form back to the file. Returns True when something was saved."""
        p = self.selected_player
        if p is None or self.roster is None or not self.file_path:
            return False
        if not self.has_changes():
            return False
        if not self.is_valid():
            state = validation_state(self.form.phone, self.form.email)
            bad = [name for name in ("phone", "email") if not state[name]]
            raise ValidationError(
                f"Not saving {p.barcode}: invalid {', '.join(bad)}",
                details={"barcode": p.barcode, "fields": bad},
                user_message=f"Fix the {' and '.join(bad)} before moving on. Your changes have not been saved.",
            )

        roster = update_player(self.roster, p.barcode, self.form, self.form.quantities)
        updated = roster.players_by_barcode[p.barcode]
        try:
            self.last_backup = save_players_to_file(
                self.file_path,
                [updated],
                backup_dir=self.config.backup_dir,
                keep_backups=self.config.backups_to_keep,
            )
        except SaveError:
            raise
        except AppError as exc:
            raise SaveError(str(exc), details=exc.details, user_message=user_message_for(exc)) from exc
        except OSError as exc:
            raise SaveError(f"Failed to save {self.file_path}: {exc}", details={"path": self.file_path}) from exc

        self.roster = roster
        self._refresh_team_players()
        self.load_player(updated)
        self.last_error = None
        log.info("Saved player %s", p.barcode)
        return True

    def autosave(self) -> bool:
        if not self.config.autosave_on_navigation:
            return False
        try:
            return self.save_current()
        except SaveError as exc:
            self.last_error = report_error(exc, log, "autosave")
            return False

    def reset_player(self) -> bool:
        if self.selected_player is None:
            return False
        self.form = FormData(name=f"Player {self.current_index + 1}")
        return self.save_current()

    # ----- derived values -----
    def total(self) -> int:
        return calculate_total(self.form.quantities, self.form.is_coach)

    def coach_discount(self) -> int:
        return _coach_discount(self.form.quantities, self.form.is_coach)

    def email_suggestions(self, query: str, limit: Optional[int] = None) -> List[str]:
        if limit is None:
            limit = self.config.email_suggestion_limit
        q = query.strip().lower()
        if not q or self.roster is None:
            return []
        emails = {p.email.strip() for p in self.roster.players if p.email.strip()}
        return sorted(e for e in emails if q in e.lower())[:limit]

    def player_options(self) -> Dict[str, str]:
        return {
            p.barcode: format_name_with_icons(
                display_name(p.first_name, p.last_name, p.barcode), p.is_coach, is_no_order(p.last_name)
            )
            for p in self.team_players
        }

    def counter_label(self) -> str:
        if self.current_index < 0 or not self.team_players:
            return ""
        return f"Player {self.current_index + 1} of {len(self.team_players)}"
