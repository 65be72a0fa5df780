from __future__ import annotations

import logging
from typing import List

import pandas as pd
import streamlit as st

from sixgrid.engine import Grid
from sixgrid.storage import MoveLog, load, read_moves, resolve_moves_path, resolve_save_path, save


# -----------------------------
# App setup
# -----------------------------

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="sixgrid", layout="wide")

st.markdown(
    """
<style>
table.sixgrid { border-collapse: collapse; }
table.sixgrid td {
    width: 3.6rem;
    height: 3.6rem;
    text-align: center;
    vertical-align: middle;
    border: 1px solid rgba(49, 51, 63, 0.25);
}
table.sixgrid td.hl { background: rgba(255, 214, 102, 0.35); }
table.sixgrid td.active { background: rgba(255, 170, 51, 0.6); }
table.sixgrid td.top { border-top: 3px solid rgba(49, 51, 63, 0.65); }
table.sixgrid td.left { border-left: 3px solid rgba(49, 51, 63, 0.65); }
table.sixgrid td.bottom { border-bottom: 3px solid rgba(49, 51, 63, 0.65); }
table.sixgrid td.right { border-right: 3px solid rgba(49, 51, 63, 0.65); }
table.sixgrid .val { font-size: 26px; font-weight: 600; }
table.sixgrid .cand { font-size: 11px; color: rgba(49, 51, 63, 0.6); letter-spacing: 2px; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("sixgrid")
st.caption("Pick a cell, then a value. Values a cell can no longer hold are refused.")

SAVE_PATH = resolve_save_path()
MOVES_PATH = resolve_moves_path()


def get_grid() -> Grid:
    # Each new session starts the move log afresh, replacing the previous session's file.
    if "grid" not in st.session_state:
        st.session_state.grid = Grid(move_log=MoveLog(MOVES_PATH))
    return st.session_state.grid


def render_grid_html(grid: Grid) -> None:
    """
    Draw values, small candidates and highlights.
    Thick borders mark the block edges.
    """
    html: List[str] = ["<table class='sixgrid'>"]
    for r in range(grid.size):
        html.append("<tr>")
        for c in range(grid.size):
            cell = grid.cell(r, c)
            cls = []
            if r % grid.rows == 0:
                cls.append("top")
            if c % grid.cols == 0:
                cls.append("left")
            if (r + 1) % grid.rows == 0:
                cls.append("bottom")
            if (c + 1) % grid.cols == 0:
                cls.append("right")
            if grid.active == (r, c):
                cls.append("active")
            elif cell.highlighted:
                cls.append("hl")
            if cell.has_value():
                body = f"<span class='val'>{cell.value}</span>"
            else:
                body = f"<span class='cand'>{''.join(str(v) for v in cell.iter_candidates())}</span>"
            html.append(f"<td class='{' '.join(cls)}'>{body}</td>")
        html.append("</tr>")
    html.append("</table>")
    st.markdown("".join(html), unsafe_allow_html=True)


grid = get_grid()

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Game")
    if st.button("Undo", key="undo", use_container_width=True):
        grid.undo()
        st.rerun()

    st.divider()
    if st.button("Save", key="save", use_container_width=True):
        if save(grid, SAVE_PATH):
            st.success("Saved.")
        else:
            st.error("Failed to save.")
    if st.button("Load", key="load", use_container_width=True):
        if load(grid, SAVE_PATH):
            st.success("Loaded.")
        else:
            st.error("Could not load the saved grid; reverted to an empty grid.")

    st.caption(f"Save: `{SAVE_PATH}`")
    st.caption(f"Moves: `{MOVES_PATH}`")

# ---- Board ----
left, right = st.columns([3, 2])

with left:
    st.subheader("Board")
    render_grid_html(grid)

with right:
    st.subheader("Select")
    # Spacer columns between blocks, as on the board.
    spacer_w = 0.18
    widths: List[float] = []
    for g in range(grid.rows):
        widths.extend([1.0] * grid.cols)
        if g != grid.rows - 1:
            widths.append(spacer_w)

    for r in range(grid.size):
        cols = st.columns(widths, gap="small")
        col_idx = 0
        for c in range(grid.size):
            if c > 0 and c % grid.cols == 0:
                col_idx += 1  # skip spacer column
            cell = grid.cell(r, c)
            with cols[col_idx]:
                label = str(cell.value) if cell.has_value() else "·"
                if st.button(label, key=f"sel_{r}_{c}", use_container_width=True):
                    grid.set_active(r, c)
                    st.rerun()
            col_idx += 1

    st.subheader("Value")
    active = grid.active_cell
    if active is None:
        st.info("No cell selected.")
    else:
        st.write(f"Active: **{active.label()}**")
        vcols = st.columns(grid.size)
        for v in range(1, grid.size + 1):
            with vcols[v - 1]:
                if st.button(str(v), key=f"val_{v}", disabled=not active.could_be(v), use_container_width=True):
                    grid.assign_active(v)
                    st.rerun()

# ---- Logs ----
st.divider()
c1, c2 = st.columns(2)
with c1:
    st.subheader("Undo history")
    hist = [{"step": i + 1, "cell": cell.label(), "value": cell.value} for i, cell in enumerate(grid.history)]
    if hist:
        st.dataframe(pd.DataFrame(hist), use_container_width=True, hide_index=True)
    else:
        st.info("Nothing to undo.")
with c2:
    st.subheader("Move log")
    moves = read_moves(MOVES_PATH)
    if moves:
        st.dataframe(pd.DataFrame({"#": range(1, len(moves) + 1), "move": moves}), use_container_width=True, hide_index=True)
    else:
        st.info("No moves recorded.")
