from __future__ import annotations

from typing import Iterator, List, Optional

from .models import Cell


class History:
    """
    Undo log of assigned cells, oldest first.
    Holds references only; the grid owns the cells, and the undone value is
    read back from the cell itself.
    """

    def __init__(self) -> None:
        self._cells: List[Cell] = []

    def record(self, cell: Cell) -> None:
        self._cells.append(cell)

    def pop_last(self) -> Optional[Cell]:
        if not self._cells:
            return None
        return self._cells.pop()

    def clear(self) -> None:
        self._cells.clear()

    def __len__(self) -> int:
        return len(self._cells)

    def __bool__(self) -> bool:
        return bool(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._cells))
