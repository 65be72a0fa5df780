from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Set


ROWS = 2   # rows per block (and blocks per band)
COLS = 3   # columns per block
SIZE = ROWS * COLS


def full_range(size: int) -> Set[int]:
    return set(range(1, size + 1))


@dataclass(eq=False)  # shared by the row and block indexes, compared by identity
class Cell:
    row: int
    col: int
    size: int = SIZE
    value: Optional[int] = None        # None = unset
    candidates: Optional[Set[int]] = None   # None = derive from value
    highlighted: bool = False          # display only

    def __post_init__(self) -> None:
        if self.candidates is None:
            self.candidates = full_range(self.size) if self.value is None else set()

    def has_value(self) -> bool:
        return self.value is not None

    def could_be(self, v: int) -> bool:
        return self.value is None and v in self.candidates

    def set_value(self, v: int) -> None:
        """Confirm ``v``. Callers check ``could_be`` first; peers are the grid's job."""
        self.value = v
        self.candidates.clear()

    def remove_candidate(self, v: int) -> None:
        if self.value is None:
            self.candidates.discard(v)

    def add_candidate(self, v: int) -> None:
        self.candidates.add(v)

    def reset(self) -> None:
        """
        Back to unset with every value possible.
        The grid has to narrow the candidates again from the live board.
        """
        self.value = None
        self.candidates = full_range(self.size)

    def iter_candidates(self) -> Iterator[int]:
        if self.value is not None:
            return iter(())
        return iter(sorted(self.candidates))

    def label(self) -> str:
        return f"R{self.row + 1}C{self.col + 1}"
