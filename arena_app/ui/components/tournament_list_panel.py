"""Component listing tournaments with their live status."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from arena_app.constants.ui_constants import (
    LIST_EMPTY_STATE,
    LIST_FILTER_ALL,
    LIST_FILTER_PARTICIPATED,
    LIST_LIKE_BUTTON,
    LIST_PLAY_BUTTON,
    LIST_REFRESH_BUTTON,
    LIST_RESULTS_BUTTON,
)
from arena_app.core.errors import ApiRequestError
from arena_app.core.models import Tournament, TournamentStatus
from arena_app.core.tournament_manager import TournamentManager
from arena_app.core.tournament_status import format_time_remaining, status_label
from arena_app.ui.dialog_helpers import show_error, show_info
from arena_app.styling.styles import Styles

logger = logging.getLogger(__name__)


class TournamentListPanel(QWidget):
    """UI component for browsing tournaments and picking one to play."""

    def __init__(
        self,
        manager: TournamentManager,
        on_play: callable,
        on_show_results: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.manager = manager
        self.on_play = on_play
        self.on_show_results = on_show_results
        self._tournaments: list[Tournament] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Show:", self))
        self.filter_combo = QComboBox(self)
        self.filter_combo.addItem(LIST_FILTER_ALL, userData=None)
        for status in TournamentStatus:
            self.filter_combo.addItem(status_label(status), userData=status)
        self.filter_combo.addItem(LIST_FILTER_PARTICIPATED, userData=LIST_FILTER_PARTICIPATED)
        self.filter_combo.currentIndexChanged.connect(lambda _: self.reload())
        filter_row.addWidget(self.filter_combo)
        filter_row.addStretch()

        self.refresh_button = QPushButton(LIST_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.reload)
        filter_row.addWidget(self.refresh_button)
        layout.addLayout(filter_row)

        self.tournament_list = QListWidget(self)
        self.tournament_list.setAlternatingRowColors(True)
        self.tournament_list.currentRowChanged.connect(lambda _: self._update_buttons())
        self.tournament_list.itemDoubleClicked.connect(lambda _: self._handle_play())
        layout.addWidget(self.tournament_list, stretch=1)

        self.empty_label = QLabel(LIST_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        self.detail_label = QLabel("", self)
        self.detail_label.setWordWrap(True)
        layout.addWidget(self.detail_label)

        action_row = QHBoxLayout()
        self.play_button = QPushButton(LIST_PLAY_BUTTON, self)
        self.play_button.clicked.connect(self._handle_play)
        action_row.addWidget(self.play_button)

        self.results_button = QPushButton(LIST_RESULTS_BUTTON, self)
        self.results_button.clicked.connect(self._handle_results)
        action_row.addWidget(self.results_button)

        self.like_button = QPushButton(LIST_LIKE_BUTTON, self)
        self.like_button.clicked.connect(self._handle_like)
        action_row.addWidget(self.like_button)
        layout.addLayout(action_row)

        self._update_buttons()

    def reload(self) -> None:
        """Fetch the tournaments for the selected filter from the API."""
        selection = self.filter_combo.currentData()
        try:
            if selection == LIST_FILTER_PARTICIPATED:
                tournaments = self.manager.player_history()
            else:
                tournaments = self.manager.list_tournaments(selection)
        except ApiRequestError as exc:
            logger.warning("Could not load tournaments: %s", exc)
            show_error(self, "Tournaments", str(exc))
            return
        self._tournaments = sorted(tournaments, key=lambda t: t.start_date)
        self._rebuild_list()

    def refresh_status(self) -> None:
        """Re-evaluate status labels against the current time without refetching."""
        for row, tournament in enumerate(self._tournaments):
            item = self.tournament_list.item(row)
            if item is not None:
                item.setText(self._describe(tournament))
        self._update_buttons()

    def selected_tournament(self) -> Tournament | None:
        row = self.tournament_list.currentRow()
        if 0 <= row < len(self._tournaments):
            return self._tournaments[row]
        return None

    def _rebuild_list(self) -> None:
        current = self.selected_tournament()
        self.tournament_list.clear()
        for tournament in self._tournaments:
            item = QListWidgetItem(self._describe(tournament), self.tournament_list)
            item.setData(Qt.UserRole, tournament.id)
        self.empty_label.setVisible(not self._tournaments)
        if current is not None:
            for row, tournament in enumerate(self._tournaments):
                if tournament.id == current.id:
                    self.tournament_list.setCurrentRow(row)
                    break
        self._update_buttons()

    def _describe(self, tournament: Tournament) -> str:
        status = self.manager.status_of(tournament)
        text = f"{tournament.name} · {tournament.category} · {tournament.difficulty.value.title()} · {status_label(status)}"
        if status is TournamentStatus.ONGOING:
            text += f" · {format_time_remaining(self.manager.now(), tournament.end_date)} left"
        elif status is TournamentStatus.UPCOMING:
            text += f" · starts {tournament.start_date.astimezone():%Y-%m-%d %H:%M}"
        if self.manager.has_participated(tournament):
            text += " · played"
        return text

    def _update_buttons(self) -> None:
        tournament = self.selected_tournament()
        signed_in = self.manager.session.is_authenticated
        if tournament is None:
            self.play_button.setEnabled(False)
            self.results_button.setEnabled(False)
            self.like_button.setEnabled(False)
            self.detail_label.clear()
            return
        status = self.manager.status_of(tournament)
        self.play_button.setEnabled(
            signed_in and self.manager.can_start(tournament) and not self.manager.has_participated(tournament)
        )
        self.results_button.setEnabled(signed_in)
        self.like_button.setEnabled(signed_in)
        self.detail_label.setText(f"{tournament.name}: {status_label(status)} · {tournament.like_count} like(s)")
        self.detail_label.setStyleSheet(Styles.get_status_badge_style(status))

    def _handle_play(self) -> None:
        tournament = self.selected_tournament()
        if tournament is None or not self.play_button.isEnabled():
            return
        self.on_play(tournament)

    def _handle_results(self) -> None:
        tournament = self.selected_tournament()
        if tournament is not None:
            self.on_show_results(tournament)

    def _handle_like(self) -> None:
        tournament = self.selected_tournament()
        if tournament is None:
            return
        try:
            tournament.like_count = self.manager.like(tournament.id)
        except ApiRequestError as exc:
            show_error(self, "Like", str(exc))
            return
        self.refresh_status()
        show_info(self, "Like", f"You liked {tournament.name}. It now has {tournament.like_count} like(s).")

    def apply_font_size(self, font_size: int) -> None:
        self.tournament_list.setStyleSheet(f"font-size: {font_size}pt;")
        for button in (self.play_button, self.results_button, self.like_button, self.refresh_button):
            button.setStyleSheet(f"font-size: {font_size}pt;")
