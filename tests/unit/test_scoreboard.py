"""
Unit tests for the score tally and score stores.
"""
import json
from pathlib import Path

import pytest
from minisweeper.game import (
    GameEngine,
    InMemoryScoreStore,
    JsonScoreStore,
    ScoreStoreError,
    ScoreTally,
    SessionConfig,
)


# ============================================================================
# Score Tally Tests
# ============================================================================

class TestScoreTally:
    """Test tally arithmetic and serialization."""

    def test_new_tally_is_zero(self) -> None:
        tally = ScoreTally()
        assert tally.total == 0
        assert tally.win_rate == 0.0

    def test_win_rate(self) -> None:
        assert ScoreTally(wins=1, losses=3).win_rate == 0.25

    def test_from_dict_ignores_unknown_keys(self) -> None:
        tally = ScoreTally.from_dict({"wins": 2, "losses": 1, "extra": True})
        assert tally == ScoreTally(wins=2, losses=1)

    def test_from_dict_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            ScoreTally.from_dict({"wins": -1})


# ============================================================================
# Store Tests
# ============================================================================

class TestInMemoryScoreStore:
    """Test the in-memory store."""

    def test_load_returns_copy(self) -> None:
        store = InMemoryScoreStore()
        tally = store.load()
        tally.wins += 1
        assert store.load().wins == 0

    def test_save_and_clear(self) -> None:
        store = InMemoryScoreStore()
        store.save(ScoreTally(wins=3, losses=4))
        assert store.load() == ScoreTally(wins=3, losses=4)
        store.clear()
        assert store.load() == ScoreTally()


class TestJsonScoreStore:
    """Test the JSON file store."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = JsonScoreStore(tmp_path / "scores.json")
        assert store.load() == ScoreTally()

    def test_save_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "scores.json"
        JsonScoreStore(path).save(ScoreTally(wins=2, losses=5))
        assert json.loads(path.read_text()) == {"wins": 2, "losses": 5}

    def test_round_trip_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.json"
        JsonScoreStore(path).save(ScoreTally(wins=1, losses=1))
        assert JsonScoreStore(path).load() == ScoreTally(wins=1, losses=1)

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"wins": -2}'])
    def test_corrupt_file_raises(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "scores.json"
        path.write_text(content)
        with pytest.raises(ScoreStoreError):
            JsonScoreStore(path).load()

    def test_engine_persists_between_sessions(self, tmp_path: Path) -> None:
        """A second session starts from the first session's tally."""
        path = tmp_path / "scores.json"
        config = SessionConfig(grid_size=3, mine_location=(1, 1))

        first = GameEngine(config=config, store=JsonScoreStore(path))
        first.reveal_cell(1, 1)

        second = GameEngine(config=config, store=JsonScoreStore(path))
        assert second.losses == 1
        assert second.wins == 0
