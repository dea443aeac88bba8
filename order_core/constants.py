from __future__ import annotations
import re

# --- CSV columns (roster file) ---
COL_BARCODE = "Barcode Number"
COL_TEAM = "Team"
COL_FIRST_NAME = "First Name"
COL_LAST_NAME = "Last Name"
COL_JERSEY = "Jersey Number"
COL_COACH = "Coach"
COL_CELL_PHONE = "Cell Phone"
COL_EMAIL = "Email"
COL_PRODUCTS = "Products"
COL_PACKAGES = "Packages"

CSV_COLUMN_ORDER = [
    COL_BARCODE, COL_TEAM, COL_FIRST_NAME, COL_LAST_NAME, COL_JERSEY, COL_COACH,
    "Team Image Number", "Individual Image Number",
    "Alt 1", "Alt 2", "Alt 3", "Alt 4", "Alt 5",
    "Buddy Image Number", "Parent Name",
    "Address1", "Address2", "City", "State", "Zip Code", "Country",
    COL_CELL_PHONE, COL_EMAIL,
    "Age", "Grade", "Coach Name", "Feet", "Inches", "Weight", "Position",
    "Favorite Pro", "Player Stat",
    COL_PRODUCTS, COL_PACKAGES,
    "Additional Order", "Retouching", "Glasses Glare",
]

# Cells the form is allowed to overwrite (column -> Player attribute)
EDITABLE_COLUMNS = {
    COL_FIRST_NAME: "first_name",
    COL_LAST_NAME: "last_name",
    COL_CELL_PHONE: "cell_phone",
    COL_EMAIL: "email",
    COL_COACH: "coach",
    COL_PRODUCTS: "products",
    COL_PACKAGES: "packages",
}

# Known core columns (column -> Player attribute); everything else rides in Player.extra
CORE_COLUMNS = {
    COL_BARCODE: "barcode",
    COL_TEAM: "team",
    COL_JERSEY: "jersey_number",
    **EDITABLE_COLUMNS,
}

# Headers that show up when a file was re-serialized from internal field names
CORRUPTED_HEADER_MARKERS = {"barcode", "team", "firstname", "lastname"}

# --- Coach / no-order rules ---
COACH_FIELD_VALUE = "Y"
NON_COACH_FIELD_VALUE = "N"
COACH_SUFFIX = "-C"
COACH_FREE_ITEM = "810T"
NO_ORDER_SUFFIX = "-N"

PLACEHOLDER_NAME = re.compile(r"^Player \d+$")

COACH_ICON = "👑"
NO_ORDER_ICON = "🚫"

# --- File limits ---
MAX_CSV_BYTES = 10 * 1024 * 1024
BACKUP_TAG = "_backup_"
BACKUP_TIME_FORMAT = "%Y%m%d_%H%M%S"
