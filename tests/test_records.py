"""Tests for score entries and the ranking store."""

import json
import threading
from datetime import datetime, timezone

import pytest

from qgategame.game import GameDifficulty, ScoreEntry, ScoreRepository

EASY, HARD = GameDifficulty.EASY, GameDifficulty.HARD


def test_entry_defaults():
    entry = ScoreEntry(score=400, problems_solved=2)
    assert entry.difficulty is EASY
    assert entry.date.tzinfo is not None
    assert entry.id != ScoreEntry(score=400, problems_solved=2).id


def test_entry_dict_round_trip():
    entry = ScoreEntry(
        score=1234,
        problems_solved=5,
        difficulty=HARD,
        date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    data = entry.to_dict()
    assert data["difficulty"] == "hard"
    assert ScoreEntry.from_dict(data) == entry


def test_entry_from_dict_missing_field():
    with pytest.raises(ValueError, match="score"):
        ScoreEntry.from_dict({"id": "x", "problems_solved": 1, "date": "2024-01-01", "difficulty": "easy"})


class TestRepository:
    def test_ranks_and_trims_to_five(self):
        repo = ScoreRepository()
        ranks = [repo.save_score(ScoreEntry(score=s, problems_solved=1)) for s in (100, 300, 200)]
        assert ranks == [1, 1, 2]
        for s in (50, 60, 70):
            repo.save_score(ScoreEntry(score=s, problems_solved=1))
        assert [e.score for e in repo.top_scores(EASY)] == [300, 200, 100, 70, 60]
        assert repo.save_score(ScoreEntry(score=10, problems_solved=0)) is None
        assert repo.high_score(EASY) == 300

    def test_tie_ranks_below_existing(self):
        repo = ScoreRepository()
        first = ScoreEntry(score=500, problems_solved=1)
        repo.save_score(first)
        assert repo.save_score(ScoreEntry(score=500, problems_solved=1)) == 2
        assert repo.top_scores(EASY)[0].id == first.id

    def test_difficulties_are_separate(self):
        repo = ScoreRepository()
        repo.save_score(ScoreEntry(score=900, problems_solved=3, difficulty=HARD))
        assert repo.top_scores(EASY) == []
        assert repo.high_score(HARD) == 900
        assert repo.high_score(GameDifficulty.EXPERT) == 0

    def test_clear(self):
        repo = ScoreRepository()
        repo.save_score(ScoreEntry(score=1, problems_solved=1))
        repo.save_score(ScoreEntry(score=2, problems_solved=1, difficulty=HARD))
        repo.clear_scores(EASY)
        assert repo.top_scores(EASY) == []
        assert repo.high_score(HARD) == 2
        repo.clear_all_scores()
        assert repo.top_scores(HARD) == []

    def test_json_round_trip(self):
        repo = ScoreRepository()
        repo.save_score(ScoreEntry(score=700, problems_solved=2, difficulty=HARD))
        repo.save_score(ScoreEntry(score=300, problems_solved=1))

        restored = ScoreRepository()
        restored.load_json(repo.dump_json())
        assert restored.top_scores(HARD) == repo.top_scores(HARD)
        assert restored.top_scores(EASY) == repo.top_scores(EASY)

    def test_load_rejects_non_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            ScoreRepository().load_json(json.dumps([1, 2, 3]))

    def test_concurrent_saves_keep_top_five(self):
        repo = ScoreRepository()

        def worker(offset):
            for i in range(50):
                repo.save_score(ScoreEntry(score=offset * 100 + i, problems_solved=i))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert [e.score for e in repo.top_scores(EASY)] == [349, 348, 347, 346, 345]

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            ScoreRepository(max_scores=0)
