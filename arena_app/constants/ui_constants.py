"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizArena"
STATUS_REFRESH_INTERVAL_MS: int = 1000
COUNTDOWN_INTERVAL_MS: int = 250

MODE_BUTTON_TOURNAMENTS: str = "Tournaments"
MODE_BUTTON_PLAY: str = "Play"
MODE_BUTTON_RESULTS: str = "Results"
MODE_BUTTON_ADMIN: str = "Manage Tournaments"
MODE_BUTTON_SIGN_IN: str = "Sign In"
MODE_BUTTON_SIGN_OUT: str = "Sign Out"

LIST_FILTER_ALL: str = "All"
LIST_FILTER_PARTICIPATED: str = "My History"
LIST_PLAY_BUTTON: str = "Play Tournament"
LIST_RESULTS_BUTTON: str = "View Results"
LIST_LIKE_BUTTON: str = "Like"
LIST_REFRESH_BUTTON: str = "Refresh"
LIST_EMPTY_STATE: str = "No tournaments to show."

QUIZ_START_BUTTON: str = "Start Quiz"
QUIZ_PREV_BUTTON: str = "Previous"
QUIZ_NEXT_BUTTON: str = "Next"
QUIZ_SUBMIT_BUTTON: str = "Submit Quiz"
QUIZ_RETRY_SUBMIT_BUTTON: str = "Retry Submission"
QUIZ_NOT_STARTABLE_MESSAGE: str = "This tournament is not open for play right now."
QUIZ_UNPLAYABLE_MESSAGE: str = "This tournament cannot be played."
QUIZ_PROGRESS_TEMPLATE: str = "Question {current} of {total} · {answered} answered"

RESULT_LIKE_BUTTON: str = "Like This Tournament"
RESULT_BACK_BUTTON: str = "More Tournaments"

ADMIN_NEW_BUTTON: str = "New Tournament"
ADMIN_SAVE_BUTTON: str = "Save Tournament"
ADMIN_DELETE_BUTTON: str = "Delete Tournament"
ADMIN_COMPLETED_NOTICE: str = "This tournament has been completed and cannot be edited."

NOT_SIGNED_IN_MESSAGE: str = "Please sign in to continue."
