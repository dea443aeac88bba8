# FILE: pages/1_Roster.py
import streamlit as st

from order_core.reports import order_summary_df

st.title("1. Roster Overview")

session = st.session_state.get("form_session")
if session is None or session.roster is None:
    st.write("No roster loaded. Open a CSV on the main page.")
    st.stop()

roster = session.roster
st.caption(f"{session.file_path} · {len(roster.players)} players · {len(roster.teams)} teams")

team = st.selectbox("Team", ["All teams"] + roster.teams)
df = order_summary_df(roster, None if team == "All teams" else team)

only_open = st.checkbox("Only players without an order")
if only_open:
    df = df[(df["Products"] == "") & (df["Packages"] == "")]

st.dataframe(df, use_container_width=True, hide_index=True)

extra_cols = [c for c in roster.columns if c not in df.columns]
if extra_cols:
    with st.expander("Other columns in this file"):
        st.write(", ".join(extra_cols))
