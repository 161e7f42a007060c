"""Component showing an attempt's verdict and the tournament leaderboard."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from arena_app.constants.ui_constants import RESULT_BACK_BUTTON, RESULT_LIKE_BUTTON
from arena_app.core.errors import ApiRequestError, ConfigurationError
from arena_app.core.models import AttemptResult, Tournament
from arena_app.core.scoring import Evaluation, evaluate
from arena_app.core.tournament_manager import TournamentManager
from arena_app.core.tournament_status import status_label
from arena_app.ui.dialog_helpers import show_error
from arena_app.styling.styles import Styles


class ResultPanel(QWidget):
    """UI component for the results screen."""

    def __init__(
        self,
        manager: TournamentManager,
        on_back: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.manager = manager
        self.on_back = on_back
        self._tournament: Tournament | None = None
        self._leaderboard_size: int = 10

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.verdict_label = QLabel("", self)
        self.verdict_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.verdict_label)

        self.summary_label = QLabel("", self)
        self.summary_label.setAlignment(Qt.AlignCenter)
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        self.message_label = QLabel("", self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        leaderboard_group = QGroupBox("Leaderboard", self)
        leaderboard_layout = QVBoxLayout()
        leaderboard_group.setLayout(leaderboard_layout)
        self.leaderboard_list = QListWidget(self)
        self.leaderboard_list.setAlternatingRowColors(True)
        leaderboard_layout.addWidget(self.leaderboard_list)
        layout.addWidget(leaderboard_group, stretch=1)

        button_row = QHBoxLayout()
        self.like_count_label = QLabel("", self)
        button_row.addWidget(self.like_count_label)
        button_row.addStretch()
        self.like_button = QPushButton(RESULT_LIKE_BUTTON, self)
        self.like_button.clicked.connect(self._handle_like)
        button_row.addWidget(self.like_button)
        self.back_button = QPushButton(RESULT_BACK_BUTTON, self)
        self.back_button.clicked.connect(lambda: self.on_back())
        button_row.addWidget(self.back_button)
        layout.addLayout(button_row)

    def show_attempt(self, tournament: Tournament, result: AttemptResult) -> None:
        """Display the verdict for an attempt that was just submitted."""
        self._tournament = tournament
        self.title_label.setText(f"{tournament.name} · Results")
        try:
            evaluation = self.manager.evaluate_result(tournament, result)
        except ConfigurationError as exc:
            self._show_unscored(str(exc))
        else:
            self._show_evaluation(evaluation)
        self.message_label.setText(result.message or "")
        self._load_social(tournament)

    def show_tournament(self, tournament: Tournament) -> None:
        """Display the leaderboard, plus the signed-in player's own score when present."""
        self._tournament = tournament
        self.title_label.setText(f"{tournament.name} · {status_label(self.manager.status_of(tournament))}")
        self.message_label.clear()
        self._show_unscored("")
        board = self._load_social(tournament)
        user = self.manager.session.user
        if board is None or user is None:
            return
        own = board.find(user.username)
        if own is None or not own.total_questions:
            return
        try:
            evaluation = evaluate(own.score, own.total_questions, self.manager.passing_percentage(tournament))
        except ConfigurationError as exc:
            self._show_unscored(str(exc))
            return
        self._show_evaluation(evaluation)
        self.message_label.setText(f"You placed #{own.position}.")

    def _show_evaluation(self, evaluation: Evaluation) -> None:
        self.verdict_label.setText(f"{evaluation.status_text} · {evaluation.grade.value.title()}")
        self.verdict_label.setStyleSheet(Styles.get_grade_style(evaluation.grade))
        self.summary_label.setText(
            f"Score {evaluation.score_text} ({evaluation.percentage_text}). "
            f"Needed {evaluation.requirement_text}."
        )

    def _show_unscored(self, message: str) -> None:
        self.verdict_label.clear()
        self.verdict_label.setStyleSheet("")
        self.summary_label.setText(message)

    def _load_social(self, tournament: Tournament):
        self.leaderboard_list.clear()
        self.like_button.setEnabled(True)
        try:
            board = self.manager.leaderboard(tournament.id)
            likes = self.manager.like_count(tournament.id)
        except ApiRequestError as exc:
            show_error(self, "Results", str(exc))
            return None
        for row in board.get_top(self._leaderboard_size):
            total = f"/{row.total_questions}" if row.total_questions else ""
            QListWidgetItem(f"#{row.position}  {row.username}  {row.score}{total}", self.leaderboard_list)
        if not len(board):
            QListWidgetItem("No one has played this tournament yet.", self.leaderboard_list)
        self.like_count_label.setText(f"{likes} like(s)")
        return board

    def _handle_like(self) -> None:
        if self._tournament is None:
            return
        try:
            count = self.manager.like(self._tournament.id)
        except ApiRequestError as exc:
            show_error(self, "Like", str(exc))
            return
        self._tournament.like_count = count
        self.like_count_label.setText(f"{count} like(s)")
        self.like_button.setEnabled(False)

    def set_leaderboard_size(self, size: int) -> None:
        self._leaderboard_size = size

    def apply_font_size(self, font_size: int) -> None:
        self.leaderboard_list.setStyleSheet(f"font-size: {font_size}pt;")
        self.summary_label.setStyleSheet(f"font-size: {font_size}pt;")
