"""
Session controller for the one-mine Minesweeper game.

Translates presentation-layer events (cell clicks, the reset button
and its confirmation dialog, difficulty selection) into engine
operations and builds the render model the front end draws from.
"""
from typing import Any, Dict, List, Optional

from .engine import GameEngine


WIN_MESSAGE = "You Win!"
LOSS_MESSAGE = "Game Over!"


class SessionController:
    """
    Presentation contract over a GameEngine.

    Holds only the reset-confirmation flag; every game rule lives
    in the engine.
    """

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()
        self._reset_requested_for: Optional[int] = None

    # ========================================================================
    # User Events
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> bool:
        """Forward a cell click to the engine."""
        return self.engine.reveal_cell(row, col)

    def request_reset(self) -> None:
        """Ask for confirmation before resetting the round."""
        self._reset_requested_for = self.engine.round.round_id

    def confirm_reset(self) -> bool:
        """
        Reset the round if a reset was requested.

        A running countdown is cancelled by the reset.

        Returns:
            True if a new round was started.
        """
        if not self.reset_pending:
            return False
        self._reset_requested_for = None
        self.engine.reset_round()
        return True

    def cancel_reset(self) -> None:
        """Dismiss the confirmation without touching the round."""
        self._reset_requested_for = None

    def set_difficulty(self, grid_size: int) -> None:
        """Start a new round on a grid of the given size."""
        self._reset_requested_for = None
        self.engine.change_difficulty(grid_size)

    @property
    def reset_pending(self) -> bool:
        """
        True while the confirmation dialog is open.

        A request only applies to the round it was made in, so any new
        round, including the automatic one, closes the dialog.
        """
        return (
            self._reset_requested_for is not None
            and self._reset_requested_for == self.engine.round.round_id
        )

    # ========================================================================
    # Render Model
    # ========================================================================

    @property
    def status_message(self) -> Optional[str]:
        if not self.engine.is_over:
            return None
        return WIN_MESSAGE if self.engine.is_won else LOSS_MESSAGE

    def snapshot(self) -> Dict[str, Any]:
        """
        Build a plain-data view of the session for rendering.

        Mine identity is included for revealed mines, and for hidden
        ones only when the session exposes mines.
        """
        expose = self.engine.expose_mines
        cells: List[List[Dict[str, Any]]] = []
        for row_index, row in enumerate(self.engine.board.rows):
            row_cells = []
            for col_index, cell in enumerate(row):
                show_mine = cell.is_mine and (cell.is_revealed or expose)
                row_cells.append({
                    "row": row_index,
                    "col": col_index,
                    "is_revealed": cell.is_revealed,
                    "is_mine": show_mine,
                })
            cells.append(row_cells)

        return {
            "round_id": self.engine.round.round_id,
            "grid_size": self.engine.grid_size,
            "cells": cells,
            "is_over": self.engine.is_over,
            "is_won": self.engine.is_won,
            "reset_countdown": self.engine.reset_countdown,
            "is_resetting": self.engine.round.is_resetting,
            "reset_pending": self.reset_pending,
            "message": self.status_message,
            "wins": self.engine.wins,
            "losses": self.engine.losses,
        }
