"""
Board module for the one-mine Minesweeper game.

Implements the square grid, single mine placement and the
per-cell reveal used by the engine.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .config import validate_grid_size, validate_mine_location


# ============================================================================
# Coordinates
# ============================================================================

class Coordinate(NamedTuple):
    """A (row, col) position on the grid."""

    row: int
    col: int


def generate_mine_location(
    grid_size: int, rng: Optional[np.random.Generator] = None
) -> Coordinate:
    """
    Draw a mine position uniformly at random.

    Row and column are drawn independently from [0, grid_size).

    Args:
        grid_size: Side length of the grid.
        rng: Random source; a fresh default generator if omitted.

    Returns:
        The chosen coordinate.
    """
    validate_grid_size(grid_size)
    rng = rng if rng is not None else np.random.default_rng()
    row = int(rng.integers(grid_size))
    col = int(rng.integers(grid_size))
    return Coordinate(row, col)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Square grid holding exactly one mine.

    Use create_board() to build one; the mine is placed at
    construction and never moves.
    """

    grid_size: int
    mine_location: Coordinate
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate inputs and lay out the grid."""
        validate_grid_size(self.grid_size)
        self.mine_location = Coordinate(
            *validate_mine_location(self.mine_location, self.grid_size)
        )
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create the grid with the mine in place."""
        self._grid = [
            [
                Cell(is_mine=(row, col) == self.mine_location)
                for col in range(self.grid_size)
            ]
            for row in range(self.grid_size)
        ]

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.grid_size and 0 <= col < self.grid_size

    # ========================================================================
    # Board Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal the cell at the given position.

        Only the target cell changes; there is no cascade.

        Returns:
            True if the cell was hidden and is now revealed.
        """
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].reveal()

    def all_safe_revealed(self) -> bool:
        """Check whether every non-mine cell has been revealed."""
        for cell in self.cells():
            if not cell.is_mine and not cell.is_revealed:
                return False
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    @property
    def rows(self) -> List[List[Cell]]:
        """Grid rows, indexed [row][col]."""
        return self._grid

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self._grid:
            yield from row

    def count_mines(self) -> int:
        """Number of mine cells on the board."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    def count_revealed(self) -> int:
        """Number of revealed cells."""
        return sum(1 for cell in self.cells() if cell.is_revealed)

    @property
    def safe_cells(self) -> int:
        """Number of cells that are not the mine."""
        return self.grid_size * self.grid_size - 1

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden.
        """
        actions = []
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                if self._grid[row][col].state == CellState.HIDDEN:
                    actions.append((row, col))
        return actions

    def get_observation(self, expose_mines: bool = False) -> np.ndarray:
        """
        Get board state as a numpy array.

        Args:
            expose_mines: Mark the hidden mine with -3.

        Returns:
            2D int8 array where:
                -1 = hidden
                -3 = hidden mine (exposed)
                0 = revealed safe cell
                9 = revealed mine
        """
        obs = np.zeros((self.grid_size, self.grid_size), dtype=np.int8)
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                obs[row, col] = self._grid[row][col].to_observation(expose_mines)
        return obs

    def to_ansi(self, expose_mines: bool = False) -> str:
        """
        Render the board as text.

        '.' hidden, ' ' revealed safe, '*' revealed mine,
        'x' hidden mine when exposed.
        """
        lines = ["   " + " ".join(str(col) for col in range(self.grid_size))]
        for row in range(self.grid_size):
            symbols = []
            for cell in self._grid[row]:
                if cell.is_revealed:
                    symbols.append("*" if cell.is_mine else " ")
                elif expose_mines and cell.is_mine:
                    symbols.append("x")
                else:
                    symbols.append(".")
            lines.append(f"{row:>2} " + " ".join(symbols))
        return "\n".join(lines)


# ============================================================================
# Board Factory
# ============================================================================

def create_board(
    grid_size: int,
    mine_location: Optional[Tuple[int, int]] = None,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """
    Build a fresh board with a single mine.

    Args:
        grid_size: Side length of the grid, must be positive.
        mine_location: Fixed (row, col) for the mine; random if omitted.
        rng: Random source used when mine_location is omitted.

    Returns:
        A board with every cell hidden.

    Raises:
        ValueError: If grid_size or mine_location is invalid.
    """
    validate_grid_size(grid_size)
    if mine_location is None:
        mine_location = generate_mine_location(grid_size, rng)
    return Board(grid_size, Coordinate(*mine_location))
