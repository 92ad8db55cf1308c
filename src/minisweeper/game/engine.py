"""
Game engine for the one-mine Minesweeper game.

Owns the current round and the session's score tally, processes
reveals, detects wins and losses, and drives the countdown that
starts a new round after a finished one.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Tuple

import numpy as np

from .board import Board, Coordinate, create_board
from .config import SessionConfig, validate_grid_size
from .countdown import CountdownScheduler, ManualScheduler, ScheduledCall
from .scoreboard import (
    InMemoryScoreStore,
    ScoreStore,
    ScoreStoreError,
    ScoreTally,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Round State
# ============================================================================

class GameState(Enum):
    """Possible states of a round."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class RoundState:
    """
    State of a single round.

    Attributes:
        board: Grid for this round.
        round_id: Increases by one with every new round.
        game_state: Playing, won or lost.
        reset_countdown: Ticks left before the auto-reset, None if idle.
    """

    board: Board
    round_id: int = 0
    game_state: GameState = GameState.PLAYING
    reset_countdown: Optional[int] = None

    @property
    def grid_size(self) -> int:
        return self.board.grid_size

    @property
    def mine_location(self) -> Coordinate:
        return self.board.mine_location

    @property
    def is_over(self) -> bool:
        """True once the round is won or lost."""
        return self.game_state != GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.game_state == GameState.LOST

    @property
    def is_resetting(self) -> bool:
        """True while the auto-reset countdown is running."""
        return self.reset_countdown is not None


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Single owner of round state and score tally.

    All mutation goes through reveal_cell, tick_countdown,
    reset_round and change_difficulty. Invalid or stale requests
    are ignored and reported by a False return value.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        store: Optional[ScoreStore] = None,
        scheduler: Optional[CountdownScheduler] = None,
        rng: Optional[np.random.Generator] = None,
        on_change: Optional[Callable[["GameEngine"], None]] = None,
    ) -> None:
        """
        Initialize the engine and start the first round.

        Args:
            config: Session configuration (default: 5x5, hidden mines).
            store: Score persistence; the tally is loaded from it here.
            scheduler: Countdown scheduler (default: manual).
            rng: Random source for mine placement.
            on_change: Called after every state change.
        """
        self.config = config or SessionConfig()
        self.store = store or InMemoryScoreStore()
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.on_change = on_change

        self.tally = self.store.load()
        self._pending_tick: Optional[ScheduledCall] = None

        board = create_board(
            self.config.grid_size, self.config.mine_location, self.rng
        )
        self.round = RoundState(board=board)
        logger.info(
            "Session started on %dx%d grid (wins=%d, losses=%d)",
            board.grid_size, board.grid_size,
            self.tally.wins, self.tally.losses,
        )

    # ========================================================================
    # Reveal (Core)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a cell in the current round.

        Ignored if the round is over, the position is off the grid
        or the cell is already revealed.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the round changed.
        """
        if self.round.is_over:
            return False
        if not self.round.board.reveal(row, col):
            return False

        cell = self.round.board.get_cell(row, col)
        if cell.is_mine:
            self._finish_round(GameState.LOST)
        elif self.round.board.all_safe_revealed():
            self._finish_round(GameState.WON)

        self._notify()
        return True

    def _finish_round(self, outcome: GameState) -> None:
        """Record a terminal outcome and start the countdown."""
        self.round.game_state = outcome
        if outcome == GameState.WON:
            self.tally.wins += 1
        else:
            self.tally.losses += 1
        self.round.reset_countdown = self.config.countdown_start
        self._schedule_tick()

        logger.info(
            "Round %d %s (wins=%d, losses=%d)",
            self.round.round_id, outcome.name.lower(),
            self.tally.wins, self.tally.losses,
        )
        self._persist_tally()

    def _persist_tally(self) -> None:
        """Save the tally; a store failure never stops the round."""
        try:
            self.store.save(self.tally)
        except ScoreStoreError:
            logger.exception("Could not persist scores")

    # ========================================================================
    # Countdown
    # ========================================================================

    def _schedule_tick(self) -> None:
        """Arm the next countdown tick for the current round."""
        round_id = self.round.round_id
        self._pending_tick = self.scheduler.schedule(
            self.config.tick_interval,
            lambda: self.tick_countdown(round_id),
        )

    def _cancel_pending_tick(self) -> None:
        if self._pending_tick is not None:
            self._pending_tick.cancel()
            self._pending_tick = None

    def tick_countdown(self, round_id: Optional[int] = None) -> bool:
        """
        Advance the auto-reset countdown by one tick.

        Starts a new round when the countdown reaches zero.

        Args:
            round_id: Round the tick was scheduled for; ticks for an
                earlier round are ignored. None means the current round.

        Returns:
            True if the countdown moved.
        """
        if round_id is not None and round_id != self.round.round_id:
            logger.debug("Ignoring tick for stale round %d", round_id)
            return False
        if self.round.reset_countdown is None:
            return False

        self._cancel_pending_tick()
        self.round.reset_countdown -= 1
        logger.debug(
            "Round %d resets in %d", self.round.round_id,
            self.round.reset_countdown,
        )
        if self.round.reset_countdown <= 0:
            self.reset_round()
            return True

        self._schedule_tick()
        self._notify()
        return True

    # ========================================================================
    # Reset
    # ========================================================================

    def reset_round(
        self,
        grid_size: Optional[int] = None,
        mine_location: Optional[Tuple[int, int]] = None,
    ) -> RoundState:
        """
        Start a new round with a freshly placed mine.

        Cancels a running countdown. The tally is not touched.

        Args:
            grid_size: New grid size, or None to keep the current one.
            mine_location: Fixed mine for the new round, random if None.

        Returns:
            The new round state.
        """
        if grid_size is None:
            grid_size = self.round.grid_size
        validate_grid_size(grid_size)

        board = create_board(grid_size, mine_location, self.rng)
        self._cancel_pending_tick()
        self.round = RoundState(board=board, round_id=self.round.round_id + 1)
        logger.info(
            "Round %d started on %dx%d grid",
            self.round.round_id, grid_size, grid_size,
        )
        self._notify()
        return self.round

    def change_difficulty(self, grid_size: int) -> RoundState:
        """Start a new round on a grid of a different size."""
        validate_grid_size(grid_size)
        return self.reset_round(grid_size)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self.round.board

    @property
    def grid_size(self) -> int:
        return self.round.grid_size

    @property
    def is_over(self) -> bool:
        return self.round.is_over

    @property
    def is_won(self) -> bool:
        return self.round.is_won

    @property
    def reset_countdown(self) -> Optional[int]:
        return self.round.reset_countdown

    @property
    def wins(self) -> int:
        return self.tally.wins

    @property
    def losses(self) -> int:
        return self.tally.losses

    @property
    def expose_mines(self) -> bool:
        return self.config.expose_mines

    def clear_scores(self) -> ScoreTally:
        """Zero the tally and persist it."""
        self.tally = ScoreTally()
        self._persist_tally()
        self._notify()
        return self.tally

    def close(self) -> None:
        """Cancel any pending countdown tick."""
        self._cancel_pending_tick()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self)
