"""Static metadata describing QuizArena."""

APP_NAME = "QuizArena"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizArena is a desktop client for time-boxed quiz tournaments built with Qt. "
    "Players join ongoing tournaments and answer every question before the deadline; "
    "administrators create, schedule and edit tournaments."
)

HELP_TEXT = (
    "Sign in to see the tournament list. Only ongoing tournaments can be played.\n\n"
    "Your answer is saved when you move to another question. Use the numbered grid "
    "to jump around, and submit from the last question. Unanswered questions count "
    "as wrong.\n\n"
    "If the tournament ends while you are still answering, your quiz is submitted "
    "automatically."
)
