# FILE: pages/2_Reports_Exports.py
import os

import streamlit as st

from order_core.csv_io import export_roster_csv
from order_core.dialogs import pick_save_path
from order_core.errors import SaveError, report_error
from order_core.logs import get_logger
from order_core.reports import order_summary_df, render_summary_pdf, team_totals_df

log = get_logger("reports_page")

st.title("2. Reports & Exports")
session = st.session_state.get("form_session")
if session is None or session.roster is None:
    st.warning("No roster loaded yet. Please open a CSV on the main page first.")
    st.stop()

roster = session.roster
stem = os.path.splitext(os.path.basename(session.file_path or "roster.csv"))[0]

st.subheader("Team totals")
totals = team_totals_df(roster)
st.dataframe(totals, use_container_width=True, hide_index=True)

st.subheader("Order summary")
team = st.selectbox("Team", ["All teams"] + roster.teams)
summary = order_summary_df(roster, None if team == "All teams" else team)
st.dataframe(summary, use_container_width=True, hide_index=True)

title = f"Order Summary: {team}"
d1, d2, d3 = st.columns(3)
with d1:
    st.download_button(
        "Download summary CSV",
        data=summary.to_csv(index=False).encode("utf-8"),
        file_name=f"{stem}_summary.csv",
        mime="text/csv",
    )
with d2:
    st.download_button(
        "Download summary PDF",
        data=render_summary_pdf(title, summary),
        file_name=f"{stem}_summary.pdf",
        mime="application/pdf",
    )
with d3:
    st.download_button(
        "Download team totals PDF",
        data=render_summary_pdf("Team Totals", totals),
        file_name=f"{stem}_team_totals.pdf",
        mime="application/pdf",
    )

st.subheader("Save a copy")
st.caption("Writes the whole roster to a new file. The open file is not changed.")
if st.button("Save copy as…"):
    target = pick_save_path(f"{stem}_copy.csv", os.path.dirname(session.file_path or ""))
    if not target:
        st.info("No file chosen.")
    else:
        try:
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(export_roster_csv(roster))
            log.info("Saved roster copy to %s", target)
            st.success(f"Saved {target}")
        except OSError as e:
            st.error(report_error(SaveError(f"Failed to write {target}: {e}", details={"path": target}), log))
st.download_button(
    "Download full roster CSV",
    data=export_roster_csv(roster).encode("utf-8"),
    file_name=f"{stem}_copy.csv",
    mime="text/csv",
)
