"""
Evaluation of agents over many rounds.

Plays rounds through MiniSweeperEnv and reports the engine's tally.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .agents.base_agent import BaseAgent
from .game.config import SessionConfig
from .game.environment import MiniSweeperEnv
from .game.scoreboard import ScoreStore


@dataclass
class EvaluationResult:
    """Outcome of an evaluation run."""

    games: int
    wins: int
    losses: int
    avg_reward: float
    avg_steps: float

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "win_rate": self.win_rate,
            "avg_reward": self.avg_reward,
            "avg_steps": self.avg_steps,
        }


class Evaluator:
    """
    Play a fixed number of rounds with an agent.

    Wins and losses are read from the engine's tally, so they count
    exactly the rounds that reached a terminal state in this run.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        num_episodes: int = 100,
        store: Optional[ScoreStore] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Session configuration for evaluation.
            num_episodes: Number of rounds to play.
            store: Score persistence for the environment's engine.
            seed: Seed for the first reset; later rounds continue the stream.
        """
        if num_episodes < 1:
            raise ValueError("Number of episodes must be positive")
        self.config = config or SessionConfig()
        self.num_episodes = num_episodes
        self.store = store
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> EvaluationResult:
        """
        Play num_episodes rounds with agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Aggregated results for this run.
        """
        env = MiniSweeperEnv(config=self.config, store=self.store)
        start_wins, start_losses = env.engine.wins, env.engine.losses
        max_steps = self.config.grid_size * self.config.grid_size

        total_reward = 0.0
        total_steps = 0

        for episode in range(self.num_episodes):
            seed = self.seed if episode == 0 else None
            observation, _ = env.reset(seed=seed)
            agent.reset()

            for _ in range(max_steps):
                action = agent.select_action(observation, env.get_action_mask())
                observation, reward, terminated, truncated, _ = env.step(action)
                total_reward += float(reward)
                total_steps += 1
                if terminated or truncated:
                    break

        env.close()
        return EvaluationResult(
            games=self.num_episodes,
            wins=env.engine.wins - start_wins,
            losses=env.engine.losses - start_losses,
            avg_reward=total_reward / self.num_episodes,
            avg_steps=total_steps / self.num_episodes,
        )
