"""Native open/save pickers for the local app (Tk dialogs)."""
from __future__ import annotations
from typing import Optional

from .logs import get_logger

log = get_logger("dialogs")

CSV_FILETYPES = [("CSV files", "*.csv"), ("All files", "*.*")]


def _hidden_root():
    import tkinter as tk

    root = tk.Tk()
    root.withdraw()
    root.attributes("-topmost", True)
    return root


def pick_csv_file(initial_dir: Optional[str] = None) -> Optional[str]:
    """Ask for a roster CSV. Returns None when cancelled or no display is available."""
    import tkinter as tk
    from tkinter import filedialog

    try:
        root = _hidden_root()
    except tk.TclError as exc:
        log.warning("Native file picker unavailable: %s", exc)
        return None
    try:
        path = filedialog.askopenfilename(
            parent=root,
            title="Select roster CSV",
            filetypes=CSV_FILETYPES,
            initialdir=initial_dir or None,
        )
    finally:
        root.destroy()
    return path or None


def pick_save_path(initial_name: str = "roster_copy.csv", initial_dir: Optional[str] = None) -> Optional[str]:
    import tkinter as tk
    from tkinter import filedialog

    try:
        root = _hidden_root()
    except tk.TclError as exc:
        log.warning("Native save dialog unavailable: %s", exc)
        return None
    try:
        path = filedialog.asksaveasfilename(
            parent=root,
            title="Save roster copy as",
            defaultextension=".csv",
            initialfile=initial_name,
            initialdir=initial_dir or None,
            filetypes=CSV_FILETYPES,
        )
    finally:
        root.destroy()
    return path or None
