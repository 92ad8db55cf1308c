"""
Unit tests for MiniSweeperEnv.

Tests spaces, rewards, termination, seeding and the action mask.
"""
import gymnasium as gym
import numpy as np
import pytest
from minisweeper.agents import RandomAgent
from minisweeper.game import MiniSweeperEnv, SessionConfig


@pytest.fixture
def env() -> MiniSweeperEnv:
    """3x3 environment."""
    return MiniSweeperEnv(config=SessionConfig(grid_size=3))


def mine_action(env: MiniSweeperEnv) -> int:
    row, col = env.engine.round.mine_location
    return row * env.grid_size + col


def safe_actions(env: MiniSweeperEnv):
    mine = mine_action(env)
    return [a for a in range(env.action_space.n) if a != mine]


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_size(self, env: MiniSweeperEnv) -> None:
        assert env.action_space.n == 9

    def test_observation_in_space(self, env: MiniSweeperEnv) -> None:
        obs, _ = env.reset(seed=0)
        assert obs.shape == (3, 3)
        assert env.observation_space.contains(obs)

    def test_reset_observation_all_hidden(self, env: MiniSweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert np.all(obs == -1)
        assert info["revealed"] == 0
        assert info["total_safe"] == 8
        assert info["game_state"] == "PLAYING"


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_safe_reveal_reward(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=1)
        obs, reward, terminated, truncated, _ = env.step(safe_actions(env)[0])
        assert reward == 1.0
        assert terminated is False
        assert truncated is False

    def test_mine_reveal_terminates(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=1)
        obs, reward, terminated, _, info = env.step(mine_action(env))
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert info["losses"] == 1
        assert 9 in obs

    def test_clearing_board_wins(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=2)
        rewards = [env.step(a)[1] for a in safe_actions(env)]
        assert rewards[-1] == 10.0
        assert all(r == 1.0 for r in rewards[:-1])
        assert env.engine.is_won is True

    def test_repeat_action_penalised(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=3)
        action = safe_actions(env)[0]
        env.step(action)
        _, reward, _, _, _ = env.step(action)
        assert reward == -0.1

    def test_tally_accumulates_across_episodes(
        self, env: MiniSweeperEnv
    ) -> None:
        for episode in range(4):
            env.reset(seed=episode)
            env.step(mine_action(env))
        _, info = env.reset()
        assert info["losses"] == 4
        assert info["wins"] == 0

    def test_first_reset_uses_configured_mine(self) -> None:
        env = MiniSweeperEnv(
            config=SessionConfig(grid_size=3, mine_location=(2, 1))
        )
        env.reset(seed=0)
        assert env.engine.round.mine_location == (2, 1)
        _, reward, terminated, _, _ = env.step(7)
        assert terminated is True
        assert reward == -10.0

    def test_later_resets_place_mine_at_random(self) -> None:
        env = MiniSweeperEnv(
            config=SessionConfig(grid_size=3, mine_location=(2, 1))
        )
        env.reset(seed=0)
        mines = set()
        for episode in range(30):
            env.reset(seed=episode)
            mines.add(tuple(env.engine.round.mine_location))
        assert len(mines) > 1


# ============================================================================
# Seeding and Mask Tests
# ============================================================================

class TestSeedingAndMask:
    """Test reproducibility and the valid action mask."""

    def test_same_seed_same_mine(self) -> None:
        first = MiniSweeperEnv(config=SessionConfig(grid_size=7))
        second = MiniSweeperEnv(config=SessionConfig(grid_size=7))
        first.reset(seed=11)
        second.reset(seed=11)
        assert (
            first.engine.round.mine_location
            == second.engine.round.mine_location
        )

    def test_mask_excludes_revealed(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=4)
        action = safe_actions(env)[0]
        env.step(action)
        mask = env.get_action_mask()
        assert mask[action] == False  # noqa: E712
        assert mask.sum() == 8

    def test_mask_empty_after_round_ends(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=4)
        env.step(mine_action(env))
        assert not env.get_action_mask().any()

    def test_exposed_observation(self) -> None:
        env = MiniSweeperEnv(
            config=SessionConfig(grid_size=3, expose_mines=True)
        )
        obs, _ = env.reset(seed=5)
        row, col = env.engine.round.mine_location
        assert obs[row, col] == -3
        assert env.observation_space.contains(obs)


# ============================================================================
# Rendering and Registration Tests
# ============================================================================

class TestRenderAndRegistration:
    """Test rendering and gymnasium registration."""

    def test_ansi_render(self) -> None:
        env = MiniSweeperEnv(
            config=SessionConfig(grid_size=3), render_mode="ansi"
        )
        env.reset(seed=0)
        text = env.render()
        assert len(text.splitlines()) == 4

    def test_no_render_mode_returns_none(self, env: MiniSweeperEnv) -> None:
        env.reset(seed=0)
        assert env.render() is None

    def test_registered_with_gymnasium(self) -> None:
        env = gym.make(
            "MiniSweeper-v0",
            config=SessionConfig(grid_size=5),
            disable_env_checker=True,
        )
        assert isinstance(env.unwrapped, MiniSweeperEnv)
        obs, _ = env.reset(seed=0)
        assert obs.shape == (5, 5)
        env.close()


# ============================================================================
# Long Run Tests
# ============================================================================

class TestLongRun:
    """Test many episodes on one environment."""

    def test_scheduler_does_not_accumulate_calls(
        self, env: MiniSweeperEnv
    ) -> None:
        agent = RandomAgent(env.grid_size, seed=0)
        obs, _ = env.reset(seed=0)
        for _ in range(200):
            terminated = False
            while not terminated:
                action = agent.select_action(obs, env.get_action_mask())
                obs, _, terminated, _, _ = env.step(action)
            obs, _ = env.reset()
            assert len(env.engine.scheduler.pending) <= 1
        assert env.engine.wins + env.engine.losses == 200
