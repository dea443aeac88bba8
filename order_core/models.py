from __future__ import annotations
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator

from .constants import COACH_FIELD_VALUE, NON_COACH_FIELD_VALUE


class AppConfig(BaseModel):
    default_csv_path: str = ""
    backup_dir: Optional[str] = None          # None -> next to the roster file
    backups_to_keep: int = 50                 # 0 disables pruning
    log_file: str = "logs/order_form.log"
    log_level: str = "INFO"
    autosave_on_navigation: bool = True
    email_suggestion_limit: int = 8

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v):
        v = str(v).upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator("backups_to_keep", "email_suggestion_limit")
    @classmethod
    def _non_negative(cls, v):
        if v < 0:
            raise ValueError("must be >= 0")
        return v


class Player(BaseModel):
    """One roster row. Columns the form does not know about ride in ``extra``."""
    barcode: str
    team: str = ""
    first_name: str = ""
    last_name: str = ""
    jersey_number: str = ""
    coach: str = NON_COACH_FIELD_VALUE
    cell_phone: str = ""
    email: str = ""
    products: str = ""   # comma-separated product codes
    packages: str = ""   # comma-separated package codes
    extra: Dict[str, str] = Field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_coach(self) -> bool:
        return self.coach == COACH_FIELD_VALUE


class FormData(BaseModel):
    name: str = ""
    phone: str = ""      # formatted for display, digits are stored
    email: str = ""
    is_coach: bool = False
    quantities: Dict[str, int] = Field(default_factory=dict)
