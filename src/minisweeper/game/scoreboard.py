"""
Scoreboard tracking for a game session.

The tally lives in memory for the session. A ScoreStore can be
injected to load it at session start and save every change.
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ScoreStoreError(Exception):
    """Raised when a stored tally cannot be read or written."""


# ============================================================================
# Score Tally
# ============================================================================

@dataclass
class ScoreTally:
    """Cumulative win and loss counters."""

    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        """Number of finished rounds."""
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Share of finished rounds that were won."""
        if self.total == 0:
            return 0.0
        return self.wins / self.total

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"wins": self.wins, "losses": self.losses}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreTally":
        """Build a tally from a dictionary, ignoring unknown keys."""
        wins = int(data.get("wins", 0))
        losses = int(data.get("losses", 0))
        if wins < 0 or losses < 0:
            raise ValueError("Score counts cannot be negative")
        return cls(wins=wins, losses=losses)


# ============================================================================
# Persistence Port
# ============================================================================

class ScoreStore(ABC):
    """Durable key-value storage for the tally."""

    @abstractmethod
    def load(self) -> ScoreTally:
        """Read the stored tally, or an empty one if none exists."""

    @abstractmethod
    def save(self, tally: ScoreTally) -> None:
        """Persist the tally."""

    def clear(self) -> None:
        """Reset the stored tally to zero."""
        self.save(ScoreTally())


class InMemoryScoreStore(ScoreStore):
    """Store that lives only as long as the process."""

    def __init__(self, tally: Optional[ScoreTally] = None) -> None:
        self._data = (tally or ScoreTally()).to_dict()

    def load(self) -> ScoreTally:
        return ScoreTally.from_dict(self._data)

    def save(self, tally: ScoreTally) -> None:
        self._data = tally.to_dict()


class JsonScoreStore(ScoreStore):
    """
    Store the tally as a small JSON document.

    A missing file reads as an empty tally. The file and its
    parent directories are created on first save.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> ScoreTally:
        if not self.path.exists():
            return ScoreTally()
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return ScoreTally.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise ScoreStoreError(
                f"Could not read scores from {self.path}: {exc}"
            ) from exc

    def save(self, tally: ScoreTally) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(tally.to_dict(), f, indent=2)
        except OSError as exc:
            raise ScoreStoreError(
                f"Could not save scores to {self.path}: {exc}"
            ) from exc
        logger.debug("Saved scores to %s: %s", self.path, tally)
