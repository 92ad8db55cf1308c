"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minisweeper.game import (
    Board,
    Cell,
    GameEngine,
    InMemoryScoreStore,
    ManualScheduler,
    SessionConfig,
    SessionController,
    create_board,
)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with the mine in the top-left corner."""
    return create_board(3, (0, 0))


@pytest.fixture
def default_board() -> Board:
    """Create a 5x5 board with the mine in the centre."""
    return create_board(5, (2, 2))


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source for reproducible mine placement."""
    return np.random.default_rng(1234)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing the mine."""
    return Cell(is_mine=True)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def scheduler() -> ManualScheduler:
    """Countdown scheduler driven by the test."""
    return ManualScheduler()


@pytest.fixture
def store() -> InMemoryScoreStore:
    """Empty in-memory score store."""
    return InMemoryScoreStore()


@pytest.fixture
def small_config() -> SessionConfig:
    """3x3 session with the first mine at (0, 0)."""
    return SessionConfig(grid_size=3, mine_location=(0, 0))


@pytest.fixture
def engine(
    small_config: SessionConfig,
    store: InMemoryScoreStore,
    scheduler: ManualScheduler,
    rng: np.random.Generator,
) -> GameEngine:
    """Engine on a 3x3 grid with the mine at (0, 0)."""
    return GameEngine(
        config=small_config, store=store, scheduler=scheduler, rng=rng
    )


@pytest.fixture
def session(engine: GameEngine) -> SessionController:
    """Session controller over the 3x3 engine."""
    return SessionController(engine)

