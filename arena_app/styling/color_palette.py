"""Color palette for QuizArena supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from arena_app.core.models import TournamentStatus
from arena_app.core.scoring import ScoreGrade


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F5F5F5")
    TEXT_SECONDARY = ThemeColors(light="#4B5563", dark="#AAAAAA")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F9FAFB", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#D1D5DB", dark="#555555")

    BUTTON_PRIMARY_BG = ThemeColors(light="#2563EB", dark="#4A9EFF")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F3F4F6", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E5E7EB", dark="#505050")

    # Tournament status badges
    STATUS_UPCOMING = ThemeColors(light="#92400E", dark="#FCD34D")
    STATUS_ONGOING = ThemeColors(light="#166534", dark="#86EFAC")
    STATUS_COMPLETED = ThemeColors(light="#374151", dark="#D1D5DB")

    # Score grades
    GRADE_EXCELLENT = ThemeColors(light="#16A34A", dark="#6FCF6F")
    GRADE_GOOD = ThemeColors(light="#2563EB", dark="#4A9EFF")
    GRADE_PASSED = ThemeColors(light="#CA8A04", dark="#FFC83D")
    GRADE_FAILED = ThemeColors(light="#DC2626", dark="#FF6B6B")

    @classmethod
    def for_status(cls, status: TournamentStatus) -> ThemeColors:
        return {
            TournamentStatus.UPCOMING: cls.STATUS_UPCOMING,
            TournamentStatus.ONGOING: cls.STATUS_ONGOING,
            TournamentStatus.COMPLETED: cls.STATUS_COMPLETED,
        }[status]

    @classmethod
    def for_grade(cls, grade: ScoreGrade) -> ThemeColors:
        return {
            ScoreGrade.EXCELLENT: cls.GRADE_EXCELLENT,
            ScoreGrade.GOOD: cls.GRADE_GOOD,
            ScoreGrade.PASSED: cls.GRADE_PASSED,
            ScoreGrade.FAILED: cls.GRADE_FAILED,
        }[grade]
