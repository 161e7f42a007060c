"""Component for creating, editing and deleting tournaments."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging

from PySide6.QtCore import QDateTime
from PySide6.QtWidgets import (
    QComboBox,
    QDateTimeEdit,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from arena_app.constants.quiz_constants import (
    DEFAULT_PASSING_PERCENTAGE,
    FALLBACK_CATEGORIES,
    TOURNAMENT_NAME_MAX_LENGTH,
)
from arena_app.constants.ui_constants import (
    ADMIN_COMPLETED_NOTICE,
    ADMIN_DELETE_BUTTON,
    ADMIN_NEW_BUTTON,
    ADMIN_SAVE_BUTTON,
)
from arena_app.core.errors import ApiRequestError, InvalidState, ValidationError
from arena_app.core.models import Difficulty, Tournament
from arena_app.core.tournament_manager import TournamentManager
from arena_app.core.tournament_status import status_label
from arena_app.core.tournament_validation import TournamentForm
from arena_app.ui.dialog_helpers import (
    confirm_delete_tournament,
    show_error,
    show_info,
    show_warning,
)
from arena_app.styling.styles import Styles

logger = logging.getLogger(__name__)


def _to_qdatetime(value: datetime) -> QDateTime:
    return QDateTime.fromSecsSinceEpoch(int(value.timestamp()))


def _from_qdatetime(value: QDateTime) -> datetime:
    return datetime.fromtimestamp(value.toSecsSinceEpoch(), tz=timezone.utc)


class AdminPanel(QWidget):
    """UI component for tournament administration."""

    def __init__(self, manager: TournamentManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.manager = manager
        self._tournaments: list[Tournament] = []
        self._editing: Tournament | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        list_column = QVBoxLayout()
        self.tournament_list = QListWidget(self)
        self.tournament_list.currentRowChanged.connect(self._handle_selection)
        list_column.addWidget(self.tournament_list, stretch=1)
        self.new_button = QPushButton(ADMIN_NEW_BUTTON, self)
        self.new_button.clicked.connect(self.start_new)
        list_column.addWidget(self.new_button)
        layout.addLayout(list_column, stretch=1)

        form_column = QVBoxLayout()
        self.mode_label = QLabel("", self)
        self.mode_label.setStyleSheet(Styles.get_large_label_style())
        form_column.addWidget(self.mode_label)

        form = QFormLayout()
        self.name_edit = QLineEdit(self)
        self.name_edit.setMaxLength(TOURNAMENT_NAME_MAX_LENGTH)
        form.addRow("Name:", self.name_edit)

        self.category_combo = QComboBox(self)
        form.addRow("Category:", self.category_combo)

        self.difficulty_combo = QComboBox(self)
        for difficulty in Difficulty:
            self.difficulty_combo.addItem(difficulty.value.title(), userData=difficulty)
        form.addRow("Difficulty:", self.difficulty_combo)

        self.start_edit = QDateTimeEdit(self)
        self.start_edit.setCalendarPopup(True)
        self.start_edit.setDisplayFormat("yyyy-MM-dd HH:mm")
        form.addRow("Starts:", self.start_edit)

        self.end_edit = QDateTimeEdit(self)
        self.end_edit.setCalendarPopup(True)
        self.end_edit.setDisplayFormat("yyyy-MM-dd HH:mm")
        form.addRow("Ends:", self.end_edit)

        self.passing_spinbox = QSpinBox(self)
        self.passing_spinbox.setRange(0, 100)
        self.passing_spinbox.setSuffix(" %")
        form.addRow("Passing score:", self.passing_spinbox)
        form_column.addLayout(form)

        self.notice_label = QLabel("", self)
        self.notice_label.setWordWrap(True)
        form_column.addWidget(self.notice_label)
        form_column.addStretch()

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.delete_button = QPushButton(ADMIN_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete)
        button_row.addWidget(self.delete_button)
        self.save_button = QPushButton(ADMIN_SAVE_BUTTON, self)
        self.save_button.clicked.connect(self._handle_save)
        button_row.addWidget(self.save_button)
        form_column.addLayout(button_row)
        layout.addLayout(form_column, stretch=2)

    def reload(self) -> None:
        """Refresh the tournament list and the category choices."""
        try:
            self._tournaments = sorted(self.manager.list_tournaments(), key=lambda t: t.start_date)
        except ApiRequestError as exc:
            show_error(self, "Tournaments", str(exc))
            return
        self._load_categories()
        self.tournament_list.blockSignals(True)
        self.tournament_list.clear()
        for tournament in self._tournaments:
            status = self.manager.status_of(tournament)
            QListWidgetItem(f"{tournament.name} · {status_label(status)}", self.tournament_list)
        self.tournament_list.blockSignals(False)
        self.start_new()

    def _load_categories(self) -> None:
        try:
            categories = self.manager.list_categories() or list(FALLBACK_CATEGORIES)
        except ApiRequestError as exc:
            logger.warning("Falling back to built-in categories: %s", exc)
            categories = list(FALLBACK_CATEGORIES)
        self.category_combo.clear()
        self.category_combo.addItems(categories)

    def start_new(self) -> None:
        self._editing = None
        self.tournament_list.clearSelection()
        self.mode_label.setText(ADMIN_NEW_BUTTON)
        now = self.manager.now()
        self.name_edit.clear()
        self.category_combo.setCurrentIndex(0 if self.category_combo.count() else -1)
        self.difficulty_combo.setCurrentIndex(self.difficulty_combo.findData(Difficulty.MEDIUM))
        self.start_edit.setDateTime(_to_qdatetime(now + timedelta(hours=1)))
        self.end_edit.setDateTime(_to_qdatetime(now + timedelta(days=1, hours=1)))
        self.passing_spinbox.setValue(DEFAULT_PASSING_PERCENTAGE)
        self._set_editable(name_and_dates=True, create_only=True)
        self.delete_button.setEnabled(False)
        self.notice_label.clear()

    def _handle_selection(self, row: int) -> None:
        if not 0 <= row < len(self._tournaments):
            return
        tournament = self._tournaments[row]
        self._editing = tournament
        self.mode_label.setText(f"Edit: {tournament.name}")
        self.name_edit.setText(tournament.name)
        index = self.category_combo.findText(tournament.category)
        if index < 0:
            self.category_combo.addItem(tournament.category)
            index = self.category_combo.count() - 1
        self.category_combo.setCurrentIndex(index)
        self.difficulty_combo.setCurrentIndex(self.difficulty_combo.findData(tournament.difficulty))
        self.start_edit.setDateTime(_to_qdatetime(tournament.start_date))
        self.end_edit.setDateTime(_to_qdatetime(tournament.end_date))
        self.passing_spinbox.setValue(
            tournament.minimum_passing_score
            if tournament.minimum_passing_score is not None
            else DEFAULT_PASSING_PERCENTAGE
        )
        editable = self.manager.can_edit(tournament)
        self._set_editable(name_and_dates=editable, create_only=False)
        self.delete_button.setEnabled(True)
        self.notice_label.setText("" if editable else ADMIN_COMPLETED_NOTICE)

    def _set_editable(self, name_and_dates: bool, create_only: bool) -> None:
        for widget in (self.name_edit, self.start_edit, self.end_edit):
            widget.setEnabled(name_and_dates)
        for widget in (self.category_combo, self.difficulty_combo, self.passing_spinbox):
            widget.setEnabled(create_only)
        self.save_button.setEnabled(name_and_dates)

    def _current_form(self) -> TournamentForm:
        return TournamentForm(
            name=self.name_edit.text(),
            category=self.category_combo.currentText(),
            difficulty=self.difficulty_combo.currentData() or Difficulty.MEDIUM,
            start_date=_from_qdatetime(self.start_edit.dateTime()),
            end_date=_from_qdatetime(self.end_edit.dateTime()),
            minimum_passing_score=self.passing_spinbox.value(),
        )

    def _handle_save(self) -> None:
        form = self._current_form()
        try:
            if self._editing is None:
                saved = self.manager.create_tournament(form)
                message = f"Created {saved.name}."
            else:
                saved = self.manager.update_tournament(self._editing, form)
                message = f"Saved changes to {saved.name}."
        except ValidationError as exc:
            show_warning(self, "Invalid tournament", "\n".join(exc.messages))
            return
        except InvalidState as exc:
            show_warning(self, "Not allowed", str(exc))
            return
        except ApiRequestError as exc:
            show_error(self, "Save failed", str(exc))
            return
        show_info(self, "Tournament saved", message)
        self.reload()

    def _handle_delete(self) -> None:
        tournament = self._editing
        if tournament is None:
            return
        if not confirm_delete_tournament(self, tournament.name):
            return
        try:
            self.manager.delete_tournament(tournament.id)
        except (InvalidState, ApiRequestError) as exc:
            show_error(self, "Delete failed", str(exc))
            return
        self.reload()

    def apply_font_size(self, font_size: int) -> None:
        self.tournament_list.setStyleSheet(f"font-size: {font_size}pt;")
