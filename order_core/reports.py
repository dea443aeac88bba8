# order_core/reports.py
from __future__ import annotations
import io
from typing import Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from .catalog import calculate_total
from .csv_io import RosterData
from .routing import decode_order_cells
from .rules import display_name, is_no_order

SUMMARY_COLUMNS = ["Barcode", "Team", "Name", "Coach", "No Order", "Products", "Packages", "Total ($)"]
TEAM_COLUMNS = ["Team", "Players", "Ordered", "No Order", "Coaches", "Revenue ($)"]
ROWS_PER_PAGE = 28


def order_summary_df(roster: RosterData, team: Optional[str] = None) -> pd.DataFrame:
    rows = []
    for p in roster.players:
        if team and p.team != team:
            continue
        q = decode_order_cells(p.products, p.packages)
        rows.append({
            "Barcode": p.barcode,
            "Team": p.team,
            "Name": display_name(p.first_name, p.last_name, p.barcode),
            "Coach": "Y" if p.is_coach else "",
            "No Order": "Y" if is_no_order(p.last_name) else "",
            "Products": p.products,
            "Packages": p.packages,
            "Total ($)": calculate_total(q, p.is_coach),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def team_totals_df(roster: RosterData) -> pd.DataFrame:
    summary = order_summary_df(roster)
    if summary.empty:
        return pd.DataFrame(columns=TEAM_COLUMNS)
    flags = pd.DataFrame({
        "Team": summary["Team"],
        "Players": 1,
        "Ordered": ((summary["Products"] != "") | (summary["Packages"] != "")).astype(int),
        "No Order": (summary["No Order"] == "Y").astype(int),
        "Coaches": (summary["Coach"] == "Y").astype(int),
        "Revenue ($)": summary["Total ($)"].astype(int),
    })
    return flags.groupby("Team", sort=False).sum().reset_index()[TEAM_COLUMNS]


def _table(data) -> Table:
    t = Table(data, repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return t


def render_summary_pdf(title: str, df: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    page_size = landscape(letter)
    c = canvas.Canvas(buf, pagesize=page_size)

    header = [str(col) for col in df.columns]
    rows = [[str(v) for v in row] for row in df.itertuples(index=False)]
    chunks = [rows[i:i + ROWS_PER_PAGE] for i in range(0, len(rows), ROWS_PER_PAGE)] or [[]]

    for page, chunk in enumerate(chunks, start=1):
        c.setFont("Helvetica-Bold", 16)
        heading = title if len(chunks) == 1 else f"{title} ({page}/{len(chunks)})"
        c.drawString(40, page_size[1] - 40, heading)
        t = _table([header] + chunk)
        _, table_h = t.wrapOn(c, page_size[0] - 80, page_size[1] - 100)
        t.drawOn(c, 40, page_size[1] - 80 - table_h)
        c.showPage()

    c.save()
    return buf.getvalue()
