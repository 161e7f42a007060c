"""Tournament and scoring constants shared across UI and core layers."""

DEFAULT_PASSING_PERCENTAGE: int = 70
EXCELLENT_PERCENTAGE: float = 90.0
GOOD_PERCENTAGE: float = 80.0

TOURNAMENT_NAME_MIN_LENGTH: int = 3
TOURNAMENT_NAME_MAX_LENGTH: int = 100
MIN_TOURNAMENT_DURATION_MINUTES: int = 30
START_DATE_GRACE_MINUTES: int = 5

TOURNAMENT_ENDED_TEXT: str = "Tournament has ended"

FALLBACK_CATEGORIES: tuple[str, ...] = (
    "General Knowledge",
    "Science & Nature",
    "Sports",
    "History",
    "Entertainment",
    "Geography",
    "Art",
    "Politics",
)
