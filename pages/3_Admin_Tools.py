# FILE: pages/3_Admin_Tools.py
import os

import streamlit as st

from order_core.backups import create_backup, list_backups
from order_core.config import SETTINGS_PATH, save_settings
from order_core.csv_io import read_text_file
from order_core.errors import AppError, report_error
from order_core.logs import get_logger, recent_log_lines
from order_core.rewriter import repair_duplicated_columns
from order_core.validation import run_self_test

log = get_logger("admin")

st.title("3. Admin & Self-Test")

if st.button("Run Self-Test"):
    results = run_self_test()
    for label, ok in results["tests"]:
        (st.success if ok else st.error)(f"{'PASS' if ok else 'FAIL'} · {label}")

session = st.session_state.get("form_session")
cfg = st.session_state.get("app_config")

st.subheader("Backups")
if session is None or not session.file_path:
    st.write("Open a roster to see its backups.")
else:
    backups = list_backups(session.file_path, cfg.backup_dir if cfg else None)
    st.caption(f"{len(backups)} backup(s) of {os.path.basename(session.file_path)}, newest first")
    if backups:
        st.dataframe({"Backup": backups}, use_container_width=True, hide_index=True)

    st.subheader("Repair file")
    st.caption("Rebuilds a file whose header was replaced by internal field names (barcode, firstName, …).")
    if st.button("Check & repair"):
        try:
            text = read_text_file(session.file_path)
            fixed = repair_duplicated_columns(text)
            if fixed is None:
                st.success("File looks clean; nothing to repair.")
            else:
                backup = create_backup(session.file_path, cfg.backup_dir if cfg else None)
                with open(session.file_path, "w", encoding="utf-8", newline="") as f:
                    f.write(fixed)
                session.open_file(session.file_path)
                st.session_state.form_ver = st.session_state.get("form_ver", 0) + 1
                st.success(f"Repaired. Backup saved to {backup}")
        except AppError as e:
            st.error(report_error(e, log, "repair"))

st.subheader("Settings")
if os.path.exists(SETTINGS_PATH):
    with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
        current = f.read()
    text = st.text_area("assets/settings.yaml", value=current, height=220)
    if st.button("Save settings"):
        try:
            st.session_state.app_config = save_settings(SETTINGS_PATH, text)
            if session is not None:
                session.config = st.session_state.app_config
            st.success("Settings saved. Log settings apply after restart.")
        except AppError as e:
            st.error(f"Settings not saved: {e}")

st.subheader("Recent log")
if cfg is not None:
    lines = recent_log_lines(cfg.log_file, 50)
    st.code("\n".join(lines) if lines else "(log is empty)")
