"""Finished-session records and a top-5 ranking store.

The engine only produces :class:`ScoreEntry` values. Where entries are
kept is the embedding application's business; :class:`ScoreRepository`
is an in-memory store with JSON import/export that serializes every
access behind one lock.
"""

from __future__ import annotations

import json
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .difficulty import GameDifficulty

MAX_RANKED_SCORES = 5


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScoreEntry:
    """Immutable result of one finished session."""

    score: int
    problems_solved: int
    difficulty: GameDifficulty = GameDifficulty.EASY
    date: datetime = field(default_factory=_utc_now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "score": self.score,
            "problems_solved": self.problems_solved,
            "date": self.date.isoformat(),
            "difficulty": GameDifficulty(self.difficulty).value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreEntry":
        """
        Rebuild an entry from :meth:`to_dict` output.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        try:
            return cls(
                id=str(data["id"]),
                score=int(data["score"]),
                problems_solved=int(data["problems_solved"]),
                date=datetime.fromisoformat(data["date"]),
                difficulty=GameDifficulty(data["difficulty"]),
            )
        except KeyError as exc:
            raise ValueError(f"Score entry is missing field {exc.args[0]!r}.") from exc


class ScoreRepository:
    """Top-N scores per difficulty, highest first."""

    def __init__(self, max_scores: int = MAX_RANKED_SCORES) -> None:
        if max_scores < 1:
            raise ValueError(f"max_scores must be >= 1, got {max_scores}.")
        self.max_scores = max_scores
        self._lock = threading.Lock()
        self._scores: Dict[GameDifficulty, List[ScoreEntry]] = {
            d: [] for d in GameDifficulty
        }

    def save_score(self, entry: ScoreEntry) -> Optional[int]:
        """Insert ``entry``; return its 1-based rank, or None if not ranked."""
        difficulty = GameDifficulty(entry.difficulty)
        with self._lock:
            # Stable sort: an equal later score ranks below earlier ones.
            ranked = sorted(
                self._scores[difficulty] + [entry], key=lambda e: e.score, reverse=True
            )[: self.max_scores]
            self._scores[difficulty] = ranked
            for rank, kept in enumerate(ranked, start=1):
                if kept.id == entry.id:
                    return rank
        return None

    def top_scores(self, difficulty: GameDifficulty) -> List[ScoreEntry]:
        with self._lock:
            return list(self._scores[GameDifficulty(difficulty)])

    def high_score(self, difficulty: GameDifficulty) -> int:
        scores = self.top_scores(difficulty)
        return scores[0].score if scores else 0

    def clear_scores(self, difficulty: GameDifficulty) -> None:
        with self._lock:
            self._scores[GameDifficulty(difficulty)] = []

    def clear_all_scores(self) -> None:
        with self._lock:
            for difficulty in GameDifficulty:
                self._scores[difficulty] = []

    def dump_json(self) -> str:
        """Serialize every ranking to a JSON document."""
        with self._lock:
            payload = {
                d.value: [e.to_dict() for e in entries]
                for d, entries in self._scores.items()
            }
        return json.dumps(payload, sort_keys=True)

    def load_json(self, text: str) -> None:
        """
        Replace the rankings with a document produced by :meth:`dump_json`.

        Raises:
            ValueError: If the document is not valid JSON or holds a
                malformed entry.
        """
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError("Score document must be a JSON object.")

        loaded = {d: [] for d in GameDifficulty}
        for key, entries in payload.items():
            difficulty = GameDifficulty(key)
            parsed = [ScoreEntry.from_dict(e) for e in entries]
            parsed.sort(key=lambda e: e.score, reverse=True)
            loaded[difficulty] = parsed[: self.max_scores]

        with self._lock:
            self._scores = loaded
