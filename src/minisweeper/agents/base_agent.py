"""
Base agent interface for automated play.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..game.cell import EXPOSED_MINE_VALUE, HIDDEN_VALUE


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for agents.

    All agents must implement the select_action method to choose
    which cell to reveal based on the current observation.
    """

    def __init__(self, grid_size: int) -> None:
        """
        Initialize the agent.

        Args:
            grid_size: Side length of the square grid.
        """
        self.grid_size = grid_size
        self.total_cells = grid_size * grid_size

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (row * grid_size + col).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return action // self.grid_size, action % self.grid_size

    def position_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat action index."""
        return row * self.grid_size + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Hidden cells, including exposed mines, are valid actions.
        """
        flat_obs = observation.flatten()
        return (flat_obs == HIDDEN_VALUE) | (flat_obs == EXPOSED_MINE_VALUE)

    def reset(self) -> None:
        """Reset agent state for a new round."""
