from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from tilefall.components.tile_state import JUST_MATCHED, TileState, is_falling

Position = Tuple[int, int]  # (col, row); row 0 is the top of the board


@dataclass(slots=True)
class Board:
    """Fixed-size grid of tile states, stored column-major.

    The board entity is the only owner of tile data; other systems refer to
    cells by (col, row).
    """
    cols: int
    rows: int
    cells: List[List[TileState]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[JUST_MATCHED for _ in range(self.rows)] for _ in range(self.cols)]
        if len(self.cells) != self.cols or any(len(column) != self.rows for column in self.cells):
            raise ValueError(f"cells must be {self.cols} columns of {self.rows} rows")

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def _check(self, col: int, row: int) -> None:
        # Negative indices would silently wrap on plain lists.
        if not self.in_bounds(col, row):
            raise IndexError(f"cell ({col}, {row}) outside {self.cols}x{self.rows} board")

    def get(self, col: int, row: int) -> TileState:
        self._check(col, row)
        return self.cells[col][row]

    def set(self, col: int, row: int, state: TileState) -> None:
        self._check(col, row)
        self.cells[col][row] = state

    def column(self, col: int) -> List[TileState]:
        if not 0 <= col < self.cols:
            raise IndexError(f"column {col} outside board of width {self.cols}")
        return list(self.cells[col])

    def set_column(self, col: int, states: Sequence[TileState]) -> None:
        if not 0 <= col < self.cols:
            raise IndexError(f"column {col} outside board of width {self.cols}")
        if len(states) != self.rows:
            raise ValueError(f"column needs {self.rows} states, got {len(states)}")
        self.cells[col] = list(states)

    def positions(self) -> Iterator[Position]:
        for col in range(self.cols):
            for row in range(self.rows):
                yield col, row

    def falling_count(self) -> int:
        return sum(1 for column in self.cells for state in column if is_falling(state))
