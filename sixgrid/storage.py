from __future__ import annotations

import logging
import os
from typing import IO, List, Optional, TextIO

from .engine import Grid


log = logging.getLogger(__name__)


# -----------------------------
# Paths
# -----------------------------

def default_save_path() -> str:
    # Repo-local by default, next to the app.
    return os.path.join(".", "data", "save.txt")


def default_moves_path() -> str:
    return os.path.join(".", "data", "moves.txt")


def resolve_save_path() -> str:
    return os.environ.get("SIXGRID_SAVE", default_save_path())


def resolve_moves_path() -> str:
    return os.environ.get("SIXGRID_MOVES", default_moves_path())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)


# -----------------------------
# Move log
# -----------------------------

class MoveLog:
    """
    Best-effort, one-line-per-event audit trail of moves.
    Nothing here ever raises: a log that cannot be written is simply dropped.
    """

    def __init__(self, path: Optional[str] = None, open_now: bool = True) -> None:
        self.path = path or resolve_moves_path()
        self._stream: Optional[TextIO] = None
        if open_now:
            self.open()

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self) -> None:
        """Start a fresh log, replacing whatever the file held."""
        self.close()
        try:
            ensure_parent_dir(self.path)
            self._stream = open(self.path, "w", encoding="utf-8")
        except OSError:
            log.warning("Cannot record moves to %s", self.path, exc_info=True)
            self._stream = None

    def write(self, text: str) -> None:
        if not text or self._stream is None:
            return
        try:
            self._stream.write(text + "\n")
            self._stream.flush()
        except (OSError, ValueError):
            log.debug("Dropped move %r", text, exc_info=True)

    def close(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.close()
        except OSError:
            log.debug("Failed to close move log %s", self.path, exc_info=True)
        finally:
            self._stream = None


def read_moves(path: Optional[str] = None) -> List[str]:
    p = path or resolve_moves_path()
    if not os.path.exists(p):
        return []
    try:
        with open(p, "r", encoding="utf-8") as f:
            return [line.rstrip("\n") for line in f if line.strip()]
    except (OSError, ValueError):
        log.warning("Cannot read moves from %s", p, exc_info=True)
        return []


# -----------------------------
# Save file
# -----------------------------

def write_values(values: List[List[int]], stream: IO[str]) -> None:
    for row in values:
        stream.write(" ".join(str(v) for v in row) + "\n")


def read_values(stream: IO[str], size: int) -> List[List[int]]:
    """
    Read size*size integers in row-major order, ignoring line layout.
    Raises ValueError if the data runs out or a token is not an integer.
    """
    tokens = stream.read().split()
    if len(tokens) < size * size:
        raise ValueError(f"Expected {size * size} values, found {len(tokens)}.")
    nums = [int(t) for t in tokens[: size * size]]
    return [nums[r * size:(r + 1) * size] for r in range(size)]


def save(grid: Grid, path: Optional[str] = None) -> bool:
    p = path or resolve_save_path()
    ok = True
    try:
        ensure_parent_dir(p)
        with open(p, "w", encoding="utf-8") as f:
            write_values(grid.values(), f)
    except OSError:
        log.error("Failed to save to %s", p, exc_info=True)
        ok = False

    # Saving ends the session's move log.
    if grid.move_log is not None:
        grid.move_log.close()
    return ok


def load(grid: Grid, path: Optional[str] = None) -> bool:
    """
    Replay a save file into ``grid`` through ``Grid.assign``.
    Anything short of a complete, well-formed file leaves an empty grid.
    History is cleared and the move log restarted either way.
    """
    p = path or resolve_save_path()
    grid.reset()
    ok = True
    try:
        with open(p, "r", encoding="utf-8") as f:
            values = read_values(f, grid.size)
        for r, row in enumerate(values):
            for c, v in enumerate(row):
                if v != 0 and not grid.assign(grid.cell(r, c), v):
                    log.warning("Skipping %s:%d from %s (not allowed here)", grid.cell(r, c).label(), v, p)
    except ValueError as e:
        log.warning("Saved grid in %s is malformed (%s); reverting to an empty grid", p, e)
        grid.reset()
        ok = False
    except OSError:
        log.error("Could not load %s; reverting to an empty grid", p, exc_info=True)
        grid.reset()
        ok = False
    finally:
        grid.history.clear()
        if grid.move_log is not None:
            grid.move_log.open()
    return ok
