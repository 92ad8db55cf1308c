"""
Random agent for automated play.

Serves as a baseline by selecting random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that selects hidden cells uniformly at random.

    With one mine on an n x n grid every order of safe reveals is
    equally likely to finish first, so the expected win rate is 1/n^2.
    """

    def __init__(self, grid_size: int = 5, seed: Optional[int] = None) -> None:
        """
        Initialize the random agent.

        Args:
            grid_size: Side length of the grid.
            seed: Random seed for reproducibility.
        """
        super().__init__(grid_size)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]

        if len(valid_indices) == 0:
            # No valid actions, return any action (will be invalid)
            return 0

        return int(self.rng.choice(valid_indices))
