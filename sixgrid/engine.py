from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .history import History
from .models import COLS, ROWS, Cell

if TYPE_CHECKING:
    from .storage import MoveLog


class Grid:
    """
    Live state of a (rows*cols) x (rows*cols) board.

    Cells are stored once, by row; the block index holds references to the
    same objects. Assignments narrow the candidates of the assigned cell's
    peers directly, and undo adds candidates back only where no other peer
    still holds the value.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, move_log: Optional["MoveLog"] = None) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Invalid block shape: {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.size = rows * cols
        self.move_log = move_log
        self.history = History()
        self.active: Optional[Tuple[int, int]] = None

        self._rows: List[List[Cell]] = [
            [Cell(r, c, size=self.size) for c in range(self.size)] for r in range(self.size)
        ]
        # Row-major appends put (r, c) at (r % rows) * cols + c % cols within its block.
        self._blocks: List[List[Cell]] = [[] for _ in range(self.size)]
        for r in range(self.size):
            for c in range(self.size):
                self._blocks[self.get_group(r, c)].append(self._rows[r][c])

    # -----------------------------
    # Indexing
    # -----------------------------

    def get_group(self, row: int, col: int) -> int:
        # A block is `rows` tall and `cols` wide, so there are `rows` blocks per band.
        return (row // self.rows) * self.rows + col // self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        return self._rows[row][col]

    def block(self, index: int) -> List[Cell]:
        return list(self._blocks[index])

    def cells(self) -> Iterator[Cell]:
        for row in self._rows:
            yield from row

    def peers(self, cell: Cell) -> Iterator[Cell]:
        """Every other cell in the same row, column or block, each once."""
        seen = {id(cell)}
        units = (
            self._rows[cell.row],
            (self._rows[r][cell.col] for r in range(self.size)),
            self._blocks[self.get_group(cell.row, cell.col)],
        )
        for unit in units:
            for other in unit:
                if id(other) not in seen:
                    seen.add(id(other))
                    yield other

    @property
    def active_cell(self) -> Optional[Cell]:
        if self.active is None:
            return None
        return self.cell(*self.active)

    def values(self) -> List[List[int]]:
        return [[c.value or 0 for c in row] for row in self._rows]

    # -----------------------------
    # Moves
    # -----------------------------

    def assign(self, cell: Optional[Cell], v: int) -> bool:
        if cell is None or not cell.could_be(v):
            return False
        cell.set_value(v)
        self.history.record(cell)
        self._log(f"{cell.label()}:{v}")
        self.narrow(cell, v)
        return True

    def assign_active(self, v: int) -> bool:
        return self.assign(self.active_cell, v)

    def narrow(self, center: Cell, v: int) -> None:
        for other in self.peers(center):
            other.remove_candidate(v)

    def sees(self, cell: Cell, v: int) -> bool:
        return any(other.value == v for other in self.peers(cell))

    def restore_candidate(self, center: Cell, v: int) -> None:
        # Another peer of the peer may still hold v, so each add-back is re-checked.
        for other in self.peers(center):
            if not other.has_value() and not self.sees(other, v):
                other.add_candidate(v)

    def undo(self) -> None:
        last = self.history.pop_last()
        if last is None:
            return
        old = last.value
        last.reset()
        if old is not None:
            self.restore_candidate(last, old)
        for k in range(1, self.size + 1):
            if self.sees(last, k):
                last.remove_candidate(k)
        self._log("undo")

    def reset(self) -> None:
        for cell in self.cells():
            cell.reset()
        self.history.clear()

    # -----------------------------
    # Display
    # -----------------------------

    def set_active(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            return
        self.active = (row, col)
        for cell in self.cells():
            cell.highlighted = False
        center = self.cell(row, col)
        center.highlighted = True
        for other in self.peers(center):
            other.highlighted = True

    def _log(self, text: str) -> None:
        if self.move_log is not None:
            self.move_log.write(text)
