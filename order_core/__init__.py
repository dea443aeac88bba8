"""
order_core: roster loading, order rules and in-place CSV saving for the photo order form.
"""

from .catalog import ALL_ITEMS, ITEMS_BY_CODE, calculate_total, coach_discount
from .csv_io import RosterData, load_roster_file, parse_roster_text, update_player
from .errors import AppError, FileAccessError, CsvParseError, SaveError, ValidationError, PlayerNotFoundError
from .models import AppConfig, FormData, Player
from .rewriter import rewrite_rows, save_players_to_file
from .session import FormSession

__all__ = [
    "ALL_ITEMS", "ITEMS_BY_CODE", "calculate_total", "coach_discount",
    "RosterData", "load_roster_file", "parse_roster_text", "update_player",
    "AppError", "FileAccessError", "CsvParseError", "SaveError", "ValidationError", "PlayerNotFoundError",
    "AppConfig", "FormData", "Player",
    "rewrite_rows", "save_players_to_file",
    "FormSession",
]
