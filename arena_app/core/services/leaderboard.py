"""Ranking of tournament scores for the results screen."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from arena_app.core.models import ScoreRow

_LATEST = datetime.max.replace(tzinfo=timezone.utc)


@dataclass(slots=True)
class LeaderboardRow:
    """Immutable snapshot returned to consumers."""

    position: int
    username: str
    score: int
    total_questions: int | None
    completed_at: datetime | None


class Leaderboard:
    """Orders score rows by score, then by who finished first."""

    def __init__(self, rows: list[ScoreRow] | None = None) -> None:
        self._rows: list[ScoreRow] = []
        if rows:
            self.load(rows)

    def load(self, rows: list[ScoreRow]) -> None:
        self._rows = sorted(
            rows,
            key=lambda r: (-r.score, r.completed_at or _LATEST),
        )

    def get_top(self, limit: int | None = None) -> list[LeaderboardRow]:
        """Return ranked rows; equal scores share a position."""
        ranked: list[LeaderboardRow] = []
        position = 0
        previous_score: int | None = None
        for row in self._rows:
            if row.score != previous_score:
                position += 1
                previous_score = row.score
            ranked.append(
                LeaderboardRow(
                    position=position,
                    username=row.username,
                    score=row.score,
                    total_questions=row.total_questions,
                    completed_at=row.completed_at,
                )
            )
        return ranked if limit is None else ranked[:limit]

    def find(self, username: str) -> LeaderboardRow | None:
        return next((r for r in self.get_top() if r.username == username), None)

    def __len__(self) -> int:
        return len(self._rows)
