"""
Gymnasium environment wrapper for the one-mine Minesweeper game.

Lets agents play rounds through a standard RL interface. Every
episode is one round of the underlying GameEngine, so the engine's
score tally accumulates across episodes.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import EXPOSED_MINE_VALUE, MINE_VALUE
from .config import SessionConfig
from .engine import GameEngine
from .scoreboard import ScoreStore


# ============================================================================
# Mini Minesweeper Environment
# ============================================================================

class MiniSweeperEnv(gym.Env):
    """
    Gymnasium environment for one-mine Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -3 = hidden mine (only with expose_mines)
        - 0 = revealed safe cell
        - 9 = revealed mine

    Actions:
        Discrete action space of size grid_size * grid_size.
        Action i corresponds to cell at (i // grid_size, i % grid_size).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the round
        - -10 for hitting the mine
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        store: Optional[ScoreStore] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Session configuration (default: 5x5 grid).
            store: Score persistence for the underlying engine.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or SessionConfig()
        self.engine = GameEngine(
            config=self.config, store=store, rng=self.np_random
        )
        self.render_mode = render_mode
        size = self.config.grid_size

        self.observation_space = spaces.Box(
            low=EXPOSED_MINE_VALUE,
            high=MINE_VALUE,
            shape=(size, size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(size * size)

        self._steps = 0
        self._has_reset = False

    @property
    def grid_size(self) -> int:
        return self.config.grid_size

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new round.

        The first reset uses SessionConfig.mine_location when set;
        later resets place the mine at random.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.rng = self.np_random
        mine_location = None
        if not self._has_reset:
            mine_location = self.config.mine_location
            self._has_reset = True
        self.engine.reset_round(mine_location=mine_location)
        self._steps = 0

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell selected by action.

        Args:
            action: Cell index (row * grid_size + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        terminated = self.engine.is_over

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.grid_size, int(action) % self.grid_size

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal the cell and score the outcome."""
        if not self.engine.reveal_cell(row, col):
            return -0.1
        if self.engine.is_won:
            return 10.0
        if self.engine.is_over:
            return -10.0
        return 1.0

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.get_observation(self.engine.expose_mines)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "round_id": self.engine.round.round_id,
            "revealed": board.count_revealed(),
            "total_safe": board.safe_cells,
            "game_state": self.engine.round.game_state.name,
            "valid_actions": len(board.get_valid_actions()),
            "wins": self.engine.wins,
            "losses": self.engine.losses,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        return self.engine.board.to_ansi(self.engine.expose_mines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.engine.is_over:
            return mask
        for row, col in self.engine.board.get_valid_actions():
            mask[row * self.grid_size + col] = True
        return mask


gym.register(
    id="MiniSweeper-v0",
    entry_point="minisweeper.game.environment:MiniSweeperEnv",
)
