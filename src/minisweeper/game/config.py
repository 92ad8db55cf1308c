"""
Session configuration for the one-mine Minesweeper game.

Holds grid size presets, countdown timing and the validated
SessionConfig handed to the engine at session start.
"""
import numbers
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

DEFAULT_GRID_SIZE = 5
COUNTDOWN_START = 5
TICK_INTERVAL = 1.0

# Preset difficulty levels (grid side length)
EASY = 3
MEDIUM = 5
HARD = 7

DIFFICULTIES: Dict[str, int] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_grid_size(grid_size: int) -> int:
    """Return grid_size if it is a positive int, else raise ValueError."""
    if not _is_integer(grid_size):
        raise ValueError(f"Grid size must be an integer, got {grid_size!r}")
    if grid_size < 1:
        raise ValueError("Grid size must be positive")
    return grid_size


def validate_mine_location(
    mine_location: Tuple[int, int], grid_size: int
) -> Tuple[int, int]:
    """Return mine_location if it lies inside the grid, else raise ValueError."""
    row, col = mine_location
    if not (_is_integer(row) and _is_integer(col)):
        raise ValueError(
            f"Mine location {(row, col)!r} must hold integer coordinates"
        )
    if not (0 <= row < grid_size and 0 <= col < grid_size):
        raise ValueError(
            f"Mine location {(row, col)} is outside a "
            f"{grid_size}x{grid_size} grid"
        )
    return mine_location


# ============================================================================
# Session Configuration
# ============================================================================

@dataclass
class SessionConfig:
    """
    Configuration for a game session.

    Attributes:
        grid_size: Side length of the square grid.
        expose_mines: Surface mine identity for debugging and tests.
        mine_location: Fixed mine for the first round (and the first
            environment episode), random if None.
        countdown_start: Ticks between a terminal reveal and the auto-reset.
        tick_interval: Seconds between countdown ticks.
    """

    grid_size: int = DEFAULT_GRID_SIZE
    expose_mines: bool = False
    mine_location: Optional[Tuple[int, int]] = None
    countdown_start: int = COUNTDOWN_START
    tick_interval: float = TICK_INTERVAL

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        validate_grid_size(self.grid_size)
        if self.mine_location is not None:
            validate_mine_location(self.mine_location, self.grid_size)
        if self.countdown_start < 1:
            raise ValueError("Countdown must start at a positive value")
        if self.tick_interval < 0:
            raise ValueError("Tick interval cannot be negative")
