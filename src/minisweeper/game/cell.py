"""
Cell module for the one-mine Minesweeper game.

Represents individual cells on the game board with their state
(hidden/revealed) and content (mine or safe).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()


# Observation values shared by the board and the environment
HIDDEN_VALUE = -1
EXPOSED_MINE_VALUE = -3
SAFE_VALUE = 0
MINE_VALUE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        is_mine: Whether this cell is the round's mine.
        state: Current visual state (hidden or revealed).
    """

    is_mine: bool = False
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if it already was.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    def to_observation(self, expose_mine: bool = False) -> int:
        """
        Convert cell to an observation value.

        Args:
            expose_mine: Mark a hidden mine instead of hiding it.

        Returns:
            -1: Hidden cell
            -3: Hidden mine (only when expose_mine is set)
            0: Revealed safe cell
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            if expose_mine and self.is_mine:
                return EXPOSED_MINE_VALUE
            return HIDDEN_VALUE
        if self.is_mine:
            return MINE_VALUE
        return SAFE_VALUE
