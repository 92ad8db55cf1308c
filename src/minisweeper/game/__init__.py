"""
One-mine Minesweeper game module.

Provides the core game logic: board generation, the round engine
with its countdown, the score tally and the session controller.
"""
from .cell import Cell, CellState
from .board import Board, Coordinate, create_board, generate_mine_location
from .config import (
    SessionConfig,
    DEFAULT_GRID_SIZE,
    COUNTDOWN_START,
    TICK_INTERVAL,
    EASY,
    MEDIUM,
    HARD,
    DIFFICULTIES,
)
from .countdown import (
    CountdownScheduler,
    ScheduledCall,
    ManualScheduler,
    AsyncioScheduler,
)
from .scoreboard import (
    ScoreTally,
    ScoreStore,
    ScoreStoreError,
    InMemoryScoreStore,
    JsonScoreStore,
)
from .engine import GameEngine, GameState, RoundState
from .session import SessionController
from .environment import MiniSweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "Coordinate",
    "create_board",
    "generate_mine_location",
    "SessionConfig",
    "DEFAULT_GRID_SIZE",
    "COUNTDOWN_START",
    "TICK_INTERVAL",
    "EASY",
    "MEDIUM",
    "HARD",
    "DIFFICULTIES",
    "CountdownScheduler",
    "ScheduledCall",
    "ManualScheduler",
    "AsyncioScheduler",
    "ScoreTally",
    "ScoreStore",
    "ScoreStoreError",
    "InMemoryScoreStore",
    "JsonScoreStore",
    "GameEngine",
    "GameState",
    "RoundState",
    "SessionController",
    "MiniSweeperEnv",
]
