# order_core/config.py
from __future__ import annotations
import os
import textwrap
from typing import Optional

import yaml
from pydantic import ValidationError as ModelValidationError

from .errors import ValidationError
from .models import AppConfig

SETTINGS_PATH = "assets/settings.yaml"
SAMPLE_ROSTER_PATH = "assets/sample_roster.csv"

# ===== App defaults (overridden by assets/settings.yaml) =====
DEFAULT_CONFIG = {
    "default_csv_path": "",
    "backup_dir": None,              # None -> next to the roster file
    "backups_to_keep": 50,           # 0 keeps every backup
    "log_file": "logs/order_form.log",
    "log_level": "INFO",
    "autosave_on_navigation": True,
    "email_suggestion_limit": 8,
}


def ensure_assets_exist():
    os.makedirs("assets", exist_ok=True)
    if not os.path.exists(SETTINGS_PATH):
        with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SETTINGS_YAML)
    if not os.path.exists(SAMPLE_ROSTER_PATH):
        with open(SAMPLE_ROSTER_PATH, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SAMPLE_ROSTER_CSV)


def load_settings(path: Optional[str] = SETTINGS_PATH) -> AppConfig:
    values = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                obj = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValidationError(f"Invalid YAML in {path}: {exc}", details={"path": path}) from exc
        if not isinstance(obj, dict):
            raise ValidationError(f"{path} must contain a mapping of settings", details={"path": path})
        values.update(obj)
    try:
        return AppConfig(**values)
    except ModelValidationError as exc:
        raise ValidationError(f"Invalid settings in {path}: {exc}", details={"path": path}) from exc


def save_settings(path: str, text: str) -> AppConfig:
    """Validate YAML text as settings before writing it."""
    try:
        obj = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid YAML: {exc}", details={"path": path}) from exc
    if not isinstance(obj, dict):
        raise ValidationError("Settings must be a mapping", details={"path": path})
    try:
        cfg = AppConfig(**{**DEFAULT_CONFIG, **obj})
    except ModelValidationError as exc:
        raise ValidationError(f"Invalid settings: {exc}", details={"path": path}) from exc
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return cfg


DEFAULT_SETTINGS_YAML = textwrap.dedent("""\
# Order form settings
default_csv_path: ""
backup_dir: null          # folder for backups; null keeps them next to the roster
backups_to_keep: 50       # 0 keeps every backup
log_file: logs/order_form.log
log_level: INFO
autosave_on_navigation: true
email_suggestion_limit: 8
""")

# ===== Sample roster (columns in a non-canonical order on purpose) =====
DEFAULT_SAMPLE_ROSTER_CSV = textwrap.dedent("""\
Barcode Number,Team,First Name,Last Name,Jersey Number,Coach,Parent Name,Cell Phone,Email,Products,Packages
10001,Eagles,Alex,Carter,7,N,Dana Carter,5551234567,dana.carter@example.com,"810,57",A
10002,Eagles,Blake,Diaz,12,N,"Diaz, Maria",,maria.diaz@example.com,,"B,DD"
10003,Eagles,Casey,Ellis-N,3,N,,,,,
10004,Eagles,Player,4,,N,,,,,
10005,Eagles,Morgan,Ortiz-C,,Y,,5559876543,coach.ortiz@example.com,810T,
20001,Hawks,Drew,Fox,21,N,Pat Fox,5552223333,pat.fox@example.com,"DD,23x8",57F
20002,Hawks,Emery,Gray,9,N,,,emery.gray@example.com,,C
20003,Hawks,Fin,Hayes,44,N,,,,,
""")

# ===== Visual Theme (wrapped in <style>) =====
def ui_css() -> str:
    return """
<style>
:root{
  --surface: rgba(18, 22, 31, 0.78);
  --line:#2a3142;
  --sub:#B7C2D3;
  --good:#25d790; --warn:#ffb547; --danger:#ff6b6b;
  --radius:16px;
}
.block-container { padding-top: 1rem; max-width: 1200px; }
.card{
  background: var(--surface) !important;
  border:1px solid rgba(255,255,255,.05);
  border-radius:var(--radius);
  padding:14px;
}
.small{color:var(--sub);font-size:12px}
.total{font-size:1.4rem;font-weight:700}
.discount{color:var(--good);font-size:0.95rem}
.invalid{color:var(--danger);font-size:12px}
.stButton > button { border-radius:12px; }
</style>
"""
