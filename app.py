# app.py
import os
from typing import Dict, List

import streamlit as st

from order_core.catalog import (
    FAMILY_ITEMS,
    PACKAGE_ITEMS,
    PRODUCT_ITEMS,
    TEAM_ITEMS,
    ItemConfig,
    sub_products_by_parent,
    top_level_items,
)
from order_core.config import SAMPLE_ROSTER_PATH, ensure_assets_exist, load_settings, ui_css
from order_core.constants import COACH_FREE_ITEM
from order_core.dialogs import pick_csv_file
from order_core.errors import AppError, report_error
from order_core.logs import configure_logging, get_logger, start_section
from order_core.models import AppConfig
from order_core.session import FormSession
from order_core.validation import format_phone_number, is_valid_email, is_valid_phone

# ---------- Page & Theme ----------
st.set_page_config(page_title="Photo Order Form", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)

ensure_assets_exist()
log = get_logger("app")


# ---------- Session State ----------
def _init_state():
    ss = st.session_state
    if "app_config" not in ss:
        try:
            ss.app_config = load_settings()
        except AppError as e:
            ss.app_config = AppConfig()
            ss.setdefault("flash", []).append(("error", report_error(e, log, "settings")))
        configure_logging(ss.app_config.log_file, ss.app_config.log_level)
        start_section(log, "Order form started")
    ss.setdefault("form_session", FormSession(ss.app_config))
    ss.setdefault("form_ver", 0)     # bumped whenever widgets must reload from the session
    ss.setdefault("flash", [])

_init_state()
session: FormSession = st.session_state.form_session


def _k(name: str) -> str:
    return f"{name}_{st.session_state.form_ver}"


def _seed(key: str, value):
    if key not in st.session_state:
        st.session_state[key] = value


def _flash(kind: str, msg: str):
    st.session_state.flash.append((kind, msg))


def _pull_form():
    """Copy widget values into the session form (widgets keep their own state)."""
    ss = st.session_state
    if session.selected_player is None:
        return
    f = session.form
    f.name = ss.get(_k("name"), f.name)
    f.phone = ss.get(_k("phone"), f.phone)
    f.email = ss.get(_k("email"), f.email)
    for item in PACKAGE_ITEMS + PRODUCT_ITEMS + FAMILY_ITEMS + TEAM_ITEMS:
        key = _k(f"q_{item.code}")
        if key in ss:
            session.set_quantity(item.code, ss[key])


def _run(action, context: str):
    """Pull the form, run a navigation action and report what autosave did."""
    _pull_form()
    before = session.last_backup
    session.last_error = None
    try:
        action()
    except AppError as e:
        _flash("error", report_error(e, log, context))
    if session.last_error:
        _flash("error", session.last_error)
    elif session.last_backup != before:
        _flash("success", "Saved")
    st.session_state.form_ver += 1


# ---------- Callbacks ----------
def _open(path: str):
    if not path:
        return
    _run(lambda: session.open_file(path), "open file")
    if session.roster is not None and session.file_path == path:
        _flash("success", f"Loaded {len(session.roster.players)} players from {os.path.basename(path)}")


def _on_browse():
    path = pick_csv_file(os.path.dirname(session.file_path) if session.file_path else None)
    if path:
        st.session_state.csv_path_in = path
        _open(path)
    else:
        _flash("info", "No file selected. Type a path instead if the picker is unavailable.")


def _on_team():
    _run(lambda: session.select_team(st.session_state[_k("team")]), "select team")


def _on_player():
    _run(lambda: session.select_player(st.session_state[_k("player")]), "select player")


def _on_nav(direction: str):
    _run(lambda: session.navigate(direction), f"navigate {direction}")


def _on_save():
    _pull_form()
    if not session.is_valid():
        _flash("error", "Fix the phone or email before saving.")
        return
    try:
        saved = session.save_current()
    except AppError as e:
        _flash("error", report_error(e, log, "save"))
        return
    _flash("success" if saved else "info", "Saved" if saved else "No changes to save")
    st.session_state.form_ver += 1


def _on_reset():
    _pull_form()
    try:
        session.reset_player()
        _flash("success", "Player reset")
    except AppError as e:
        _flash("error", report_error(e, log, "reset"))
    st.session_state.form_ver += 1


def _on_coach():
    _pull_form()
    session.set_coach(st.session_state[_k("coach")])
    st.session_state.form_ver += 1


def _on_phone():
    key = _k("phone")
    st.session_state[key] = format_phone_number(st.session_state[key])


def _on_email_pick():
    pick = st.session_state.get(_k("email_pick"))
    if pick:
        st.session_state[_k("email")] = pick


# ---------- Flash messages ----------
icons = {"success": "✅", "error": "❌", "info": "ℹ️"}
for kind, msg in st.session_state.flash:
    st.toast(msg, icon=icons.get(kind))
    if kind == "error":
        st.error(msg)
st.session_state.flash = []


# ---------- Sidebar: file ----------
with st.sidebar:
    st.header("📁 Roster file")
    _seed("csv_path_in", session.file_path or st.session_state.app_config.default_csv_path)
    st.text_input("CSV path", key="csv_path_in")
    c1, c2 = st.columns(2)
    with c1:
        st.button("Open", on_click=lambda: _open(st.session_state.csv_path_in.strip()), use_container_width=True)
    with c2:
        st.button("Browse…", on_click=_on_browse, use_container_width=True)
    st.button("Load sample roster", on_click=_open, args=(SAMPLE_ROSTER_PATH,), use_container_width=True)
    if session.file_path:
        st.caption(f"Editing: {session.file_path}")
        st.caption("Changes are written to this file; a backup is taken before each save.")


st.markdown('<div class="card"><h2>Photo Order Form</h2>'
            '<div class="small">Pick a team, then work through players. Moving to another '
            'player saves the current one.</div></div>', unsafe_allow_html=True)

if session.roster is None:
    st.info("Open a roster CSV from the sidebar to begin.")
    st.stop()

if not session.roster.teams:
    st.warning("The file has no rows with both a barcode and a team.")
    st.stop()

# ---------- Team / player selection ----------
sel1, sel2 = st.columns([1, 2])
with sel1:
    teams = session.roster.teams
    _seed(_k("team"), session.selected_team if session.selected_team in teams else teams[0])
    st.selectbox("Team", teams, key=_k("team"), on_change=_on_team)

options: Dict[str, str] = session.player_options()
if not options or session.selected_player is None:
    st.info("No players on this team.")
    st.stop()

with sel2:
    _seed(_k("player"), session.selected_player.barcode)
    st.selectbox(
        "Player",
        list(options.keys()),
        key=_k("player"),
        format_func=lambda b: options.get(b, b),
        on_change=_on_player,
    )

nav1, nav2, nav3 = st.columns([1, 2, 1])
with nav1:
    st.button("◀ Previous", on_click=_on_nav, args=("prev",), disabled=not session.can_navigate("prev"),
              use_container_width=True)
with nav2:
    st.markdown(f"<div style='text-align:center'>{session.counter_label()} · "
                f"Barcode {session.selected_player.barcode}</div>", unsafe_allow_html=True)
with nav3:
    st.button("Next ▶", on_click=_on_nav, args=("next",), disabled=not session.can_navigate("next"),
              use_container_width=True)

# ---------- Contact ----------
f = session.form
_seed(_k("name"), f.name)
_seed(_k("phone"), f.phone)
_seed(_k("email"), f.email)
_seed(_k("coach"), f.is_coach)

cA, cB, cC = st.columns([2, 1, 2])
with cA:
    st.text_input("Name", key=_k("name"), placeholder=f"Player {session.current_index + 1}")
with cB:
    st.text_input("Phone", key=_k("phone"), on_change=_on_phone, placeholder="(555) 123-4567")
    if not is_valid_phone(st.session_state[_k("phone")]):
        st.markdown('<div class="invalid">Phone must have 10 digits</div>', unsafe_allow_html=True)
with cC:
    st.text_input("Email", key=_k("email"))
    email_now = st.session_state[_k("email")]
    if not is_valid_email(email_now):
        st.markdown('<div class="invalid">Enter a valid email</div>', unsafe_allow_html=True)
    suggestions = [s for s in session.email_suggestions(email_now) if s != email_now]
    if suggestions:
        st.selectbox("Suggestions", [""] + suggestions, key=_k("email_pick"), on_change=_on_email_pick)

st.checkbox("Coach", key=_k("coach"), on_change=_on_coach,
            help=f"Coaches get {COACH_FREE_ITEM} free; '-C' is added to the last name.")


# ---------- Items ----------
def _qty_input(item: ItemConfig):
    key = _k(f"q_{item.code}")
    seed = int(f.quantities.get(item.code, 0))
    _seed(key, seed)
    st.number_input(f"{item.display_name} (${item.price})", min_value=0, max_value=max(99, seed), step=1, key=key)


def _item_section(items: List[ItemConfig], cols: int = 3):
    subs = sub_products_by_parent(items)
    top = top_level_items(items)
    grid = st.columns(cols)
    for i, item in enumerate(top):
        with grid[i % cols]:
            _qty_input(item)
            if item.code in subs:
                with st.expander(f"{item.display_name} options"):
                    for sub in subs[item.code]:
                        _qty_input(sub)


st.subheader("Packages")
_item_section(PACKAGE_ITEMS, cols=3)

st.subheader("Products")
_item_section(PRODUCT_ITEMS, cols=4)

with st.expander("Family variants", expanded=any(f.quantities.get(i.code) for i in FAMILY_ITEMS)):
    _item_section(FAMILY_ITEMS, cols=4)

with st.expander("Team variants", expanded=True):
    _item_section(TEAM_ITEMS, cols=4)

_pull_form()

# ---------- Totals & actions ----------
st.divider()
t1, t2, t3, t4 = st.columns([2, 1, 1, 1])
with t1:
    st.markdown(f'<div class="total">Total: ${session.total()}</div>', unsafe_allow_html=True)
    discount = session.coach_discount()
    if discount:
        st.markdown(f'<div class="discount">Coach discount: -${discount} ({COACH_FREE_ITEM} free)</div>',
                    unsafe_allow_html=True)
with t2:
    st.caption("Unsaved changes" if session.has_changes() else "All changes saved")
with t3:
    st.button("💾 Save", type="primary", on_click=_on_save, use_container_width=True)
with t4:
    st.button("↺ Reset player", on_click=_on_reset, use_container_width=True)
