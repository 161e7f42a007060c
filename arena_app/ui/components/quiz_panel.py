"""Component for playing one tournament attempt."""

from __future__ import annotations

import logging

from PySide6.QtCore import QTimer
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QButtonGroup,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from arena_app.constants.ui_constants import (
    COUNTDOWN_INTERVAL_MS,
    QUIZ_NEXT_BUTTON,
    QUIZ_NOT_STARTABLE_MESSAGE,
    QUIZ_PREV_BUTTON,
    QUIZ_PROGRESS_TEMPLATE,
    QUIZ_RETRY_SUBMIT_BUTTON,
    QUIZ_START_BUTTON,
    QUIZ_SUBMIT_BUTTON,
    QUIZ_UNPLAYABLE_MESSAGE,
)
from arena_app.core.errors import ApiRequestError, ConfigurationError
from arena_app.core.models import AttemptResult, Tournament
from arena_app.core.services.countdown import QuizCountdown
from arena_app.core.services.quiz_attempt import (
    ActionResult,
    AttemptState,
    QuizAttemptController,
    QuizSessionSnapshot,
)
from arena_app.core.tournament_manager import TournamentManager
from arena_app.ui.dialog_helpers import (
    confirm_leave_quiz,
    confirm_submit_quiz,
    show_error,
    show_warning,
)
from arena_app.ui.question_renderer import render_question
from arena_app.styling.styles import Styles

logger = logging.getLogger(__name__)


class QuizPanel(QWidget):
    """UI component driving a QuizAttemptController."""

    def __init__(
        self,
        manager: TournamentManager,
        on_finished: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.manager = manager
        self.on_finished = on_finished

        self._controller: QuizAttemptController | None = None
        self._countdown: QuizCountdown | None = None
        self._quiz_font_size: int = 14
        # Set while widgets are synced from a snapshot so their signals are ignored.
        self._syncing: bool = False
        self._rendered_index: int | None = None

        self._build_ui()
        self._configure_countdown_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label)
        header_row.addStretch()
        self.countdown_label = QLabel("", self)
        self.countdown_label.setStyleSheet("padding: 2px 6px; border-radius: 4px;")
        header_row.addWidget(self.countdown_label)
        layout.addLayout(header_row)

        progress_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        progress_row.addWidget(self.progress_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        progress_row.addWidget(self.progress_bar, stretch=1)
        layout.addLayout(progress_row)

        self.start_button = QPushButton(QUIZ_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start)
        layout.addWidget(self.start_button)

        body_row = QHBoxLayout()
        question_column = QVBoxLayout()
        self.question_view = QWebEngineView(self)
        question_column.addWidget(self.question_view, stretch=1)

        self.options_group = QGroupBox("Your answer", self)
        self.options_layout = QVBoxLayout()
        self.options_group.setLayout(self.options_layout)
        self.option_buttons = QButtonGroup(self)
        self.option_buttons.setExclusive(True)
        self.option_buttons.buttonClicked.connect(self._handle_option_clicked)
        question_column.addWidget(self.options_group)
        body_row.addLayout(question_column, stretch=3)

        self.navigator_group = QGroupBox("Questions", self)
        self.navigator_layout = QGridLayout()
        self.navigator_group.setLayout(self.navigator_layout)
        self.navigator_buttons: list[QPushButton] = []
        body_row.addWidget(self.navigator_group, stretch=1)
        layout.addLayout(body_row, stretch=1)

        self.error_label = QLabel("", self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #DC2626;")
        layout.addWidget(self.error_label)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(QUIZ_PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        nav_row.addStretch()
        self.next_button = QPushButton(QUIZ_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        self.submit_button = QPushButton(QUIZ_SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(self._handle_submit)
        nav_row.addWidget(self.submit_button)
        layout.addLayout(nav_row)

        self._show_idle("")

    def _configure_countdown_timer(self) -> None:
        self.countdown_timer = QTimer(self)
        self.countdown_timer.setInterval(COUNTDOWN_INTERVAL_MS)
        self.countdown_timer.timeout.connect(self._tick_countdown)

    # --- Session lifecycle ---

    def load(self, tournament: Tournament) -> bool:
        """Prepare an attempt for ``tournament``; False when it cannot be played."""
        self.discard()
        try:
            controller = self.manager.prepare_quiz(tournament.id, on_session_change=self._apply_snapshot)
        except ConfigurationError as exc:
            show_error(self, QUIZ_UNPLAYABLE_MESSAGE, str(exc))
            return False
        except ApiRequestError as exc:
            show_error(self, "Load failed", str(exc))
            return False

        self._controller = controller
        self._build_navigator(controller.question_count)
        self.title_label.setText(controller.tournament.name)
        startable = self.manager.can_start(controller.tournament)
        self._show_idle("" if startable else QUIZ_NOT_STARTABLE_MESSAGE)
        self.start_button.setEnabled(startable)
        return True

    def has_active_attempt(self) -> bool:
        return self._controller is not None and self._controller.state in (
            AttemptState.IN_PROGRESS,
            AttemptState.SUBMITTING,
            AttemptState.FAILED,
        )

    def leave(self) -> bool:
        """Ask before abandoning an attempt; True when the panel may be left."""
        if self._controller is None:
            return True
        state = self._controller.state
        if state is AttemptState.SUBMITTING:
            show_warning(self, "Submitting", "Please wait for the submission to finish.")
            return False
        if state in (AttemptState.IN_PROGRESS, AttemptState.FAILED) and not confirm_leave_quiz(self):
            return False
        self.discard()
        return True

    def discard(self) -> None:
        self.countdown_timer.stop()
        if self._controller is not None:
            self._controller.set_session_listener(None)
            self._controller.discard()
        self._controller = None
        self._countdown = None
        self._rendered_index = None

    # --- Handlers ---

    def _handle_start(self) -> None:
        if self._controller is None:
            return
        outcome = self._controller.start()
        if not outcome.ok:
            show_warning(self, "Quiz", str(outcome.error))
            return
        self._countdown = self.manager.create_countdown(self._controller)
        self.countdown_timer.start()
        self._tick_countdown()

    def _handle_option_clicked(self, button: QRadioButton) -> None:
        if self._syncing or self._controller is None:
            return
        self._run(self._controller.select_answer(button.property("option_text")))

    def _handle_previous(self) -> None:
        if self._controller is not None:
            self._run(self._controller.previous())

    def _handle_next(self) -> None:
        if self._controller is None:
            return
        snapshot = self._controller.snapshot()
        if snapshot.is_last_question and not self._confirm_submit(snapshot):
            return
        self._run(self._controller.next())

    def _handle_submit(self) -> None:
        if self._controller is None:
            return
        snapshot = self._controller.snapshot()
        if snapshot.state is AttemptState.IN_PROGRESS and not self._confirm_submit(snapshot):
            return
        self._run(self._controller.submit())

    def _handle_jump(self, index: int) -> None:
        if self._controller is not None:
            self._run(self._controller.jump_to(index))

    def _tick_countdown(self) -> None:
        if self._countdown is None:
            return
        self.countdown_label.setText(f"Time left: {self._countdown.label()}")
        outcome = self._countdown.tick()
        if outcome is not None:
            self.countdown_timer.stop()
            show_warning(self, "Time is up", "Time is up. Your answers have been submitted.")
            self._run(outcome)

    def _run(self, outcome: ActionResult) -> None:
        if outcome.error is not None and not outcome.is_duplicate:
            self.error_label.setText(str(outcome.error))
        if outcome.state is AttemptState.COMPLETED and outcome.result is not None:
            self._finish(outcome.result)

    def _finish(self, result: AttemptResult) -> None:
        controller = self._controller
        if controller is None:
            return
        self.countdown_timer.stop()
        tournament = controller.tournament
        logger.info("Showing result for tournament %s", tournament.id)
        controller.set_session_listener(None)
        self._controller = None
        self._countdown = None
        self.on_finished(tournament, result)

    def _confirm_submit(self, snapshot: QuizSessionSnapshot) -> bool:
        return confirm_submit_quiz(self, snapshot.total_questions - snapshot.answered_count)

    # --- Rendering ---

    def _apply_snapshot(self, snapshot: QuizSessionSnapshot) -> None:
        state = snapshot.state
        in_progress = state is AttemptState.IN_PROGRESS
        self.start_button.setVisible(state is AttemptState.NOT_STARTED)
        self.options_group.setEnabled(in_progress)
        self.navigator_group.setEnabled(in_progress)
        self.prev_button.setEnabled(in_progress and snapshot.current_index > 0)
        self.next_button.setEnabled(in_progress)
        self.next_button.setText(QUIZ_SUBMIT_BUTTON if snapshot.is_last_question else QUIZ_NEXT_BUTTON)
        self.submit_button.setEnabled(state in (AttemptState.IN_PROGRESS, AttemptState.FAILED))
        self.submit_button.setText(QUIZ_RETRY_SUBMIT_BUTTON if state is AttemptState.FAILED else QUIZ_SUBMIT_BUTTON)

        if state is AttemptState.FAILED and snapshot.error is not None:
            self.error_label.setText(f"Submission failed: {snapshot.error}")
        elif state is AttemptState.SUBMITTING:
            self.error_label.setText("Submitting…")
        else:
            self.error_label.clear()

        if snapshot.current_question is None:
            return

        self.progress_label.setText(
            QUIZ_PROGRESS_TEMPLATE.format(
                current=snapshot.current_index + 1,
                total=snapshot.total_questions,
                answered=snapshot.answered_count,
            )
        )
        self.progress_bar.setValue(round(snapshot.progress_percent))

        if snapshot.current_index != self._rendered_index:
            self._rendered_index = snapshot.current_index
            self.question_view.setHtml(
                render_question(
                    snapshot.current_question,
                    snapshot.current_index,
                    snapshot.total_questions,
                    font_size=self._quiz_font_size,
                )
            )
            self._build_options(snapshot.current_question.options)
        self._sync_selection(snapshot.pending_selection)
        self._sync_navigator(snapshot)

    def _build_options(self, options: list[str]) -> None:
        for button in self.option_buttons.buttons():
            self.option_buttons.removeButton(button)
            self.options_layout.removeWidget(button)
            button.deleteLater()
        for option in options:
            button = QRadioButton(option, self.options_group)
            button.setProperty("option_text", option)
            button.setStyleSheet(f"font-size: {self._quiz_font_size}pt;")
            self.option_buttons.addButton(button)
            self.options_layout.addWidget(button)

    def _sync_selection(self, selection: str) -> None:
        self._syncing = True
        try:
            self.option_buttons.setExclusive(False)
            for button in self.option_buttons.buttons():
                button.setChecked(button.property("option_text") == selection)
            self.option_buttons.setExclusive(True)
        finally:
            self._syncing = False

    def _build_navigator(self, count: int) -> None:
        for button in self.navigator_buttons:
            self.navigator_layout.removeWidget(button)
            button.deleteLater()
        self.navigator_buttons = []
        for index in range(count):
            button = QPushButton(str(index + 1), self.navigator_group)
            button.setFixedWidth(40)
            button.clicked.connect(lambda _checked=False, i=index: self._handle_jump(i))
            self.navigator_layout.addWidget(button, index // 5, index % 5)
            self.navigator_buttons.append(button)

    def _sync_navigator(self, snapshot: QuizSessionSnapshot) -> None:
        for index, button in enumerate(self.navigator_buttons):
            current = index == snapshot.current_index
            if current:
                answered = bool(snapshot.pending_selection)
            else:
                answered = index in snapshot.answers
            button.setStyleSheet(Styles.get_answered_cell_style(answered, current))

    def _show_idle(self, message: str) -> None:
        self.start_button.setVisible(True)
        self.options_group.setEnabled(False)
        self.navigator_group.setEnabled(False)
        self.prev_button.setEnabled(False)
        self.next_button.setEnabled(False)
        self.submit_button.setEnabled(False)
        self.countdown_label.clear()
        self.progress_label.clear()
        self.progress_bar.setValue(0)
        self.error_label.setText(message)
        self.question_view.setHtml("")
        self._build_options([])

    def set_quiz_font_size(self, font_size: int) -> None:
        self._quiz_font_size = font_size
        self._rendered_index = None
        if self._controller is not None and self._controller.state is AttemptState.IN_PROGRESS:
            self._apply_snapshot(self._controller.snapshot())
