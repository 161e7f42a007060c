"""Qt main window switching between browsing, playing, results and administration."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from arena_app.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from arena_app.constants.ui_constants import (
    MODE_BUTTON_ADMIN,
    MODE_BUTTON_PLAY,
    MODE_BUTTON_RESULTS,
    MODE_BUTTON_SIGN_IN,
    MODE_BUTTON_SIGN_OUT,
    MODE_BUTTON_TOURNAMENTS,
    NOT_SIGNED_IN_MESSAGE,
    STATUS_REFRESH_INTERVAL_MS,
    WINDOW_TITLE,
)
from arena_app.core.models import AttemptResult, Tournament
from arena_app.core.services.auth_session import AuthSession
from arena_app.core.tournament_manager import TournamentManager
from arena_app.ui.components.admin_panel import AdminPanel
from arena_app.ui.components.quiz_panel import QuizPanel
from arena_app.ui.components.result_panel import ResultPanel
from arena_app.ui.components.tournament_list_panel import TournamentListPanel
from arena_app.ui.dialog_helpers import show_info, show_warning
from arena_app.ui.login_dialog import LoginDialog
from arena_app.ui.settings_dialog import SettingsDialog
from arena_app.styling import Theme
from arena_app.styling.styles import Styles


class PlayerMode(Enum):
    """High-level UI mode for the main window."""

    TOURNAMENTS = auto()
    PLAY = auto()
    RESULTS = auto()
    ADMIN = auto()


class PlayerMainWindow(QMainWindow):
    """Main Qt window orchestrating the application modes."""

    def __init__(self, manager: TournamentManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.manager = manager

        self._mode = PlayerMode.TOURNAMENTS
        self._ui_font_size: int = 10
        self._quiz_font_size: int = 14
        self._theme = Theme.LIGHT
        self._leaderboard_size: int = 10

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()
        self.manager.session.add_listener(self._handle_session_changed)
        self._handle_session_changed(self.manager.session)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.user_label = QLabel("", self)
        root_layout.addWidget(self.user_label)

        self.mode_stack = QStackedWidget(self)
        self.list_panel = TournamentListPanel(
            self.manager,
            on_play=self._handle_play_tournament,
            on_show_results=self._handle_show_results,
            parent=self,
        )
        self.quiz_panel = QuizPanel(self.manager, on_finished=self._handle_quiz_finished, parent=self)
        self.result_panel = ResultPanel(self.manager, on_back=self._handle_back_to_list, parent=self)
        self.admin_panel = AdminPanel(self.manager, parent=self)

        self.mode_stack.addWidget(self.list_panel)
        self.mode_stack.addWidget(self.quiz_panel)
        self.mode_stack.addWidget(self.result_panel)
        self.mode_stack.addWidget(self.admin_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(PlayerMode.TOURNAMENTS)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.tournaments_button = QPushButton(MODE_BUTTON_TOURNAMENTS, self)
        self.tournaments_button.setCheckable(True)
        self.tournaments_button.clicked.connect(self._handle_back_to_list)
        button_row.addWidget(self.tournaments_button)

        self.play_button = QPushButton(MODE_BUTTON_PLAY, self)
        self.play_button.setCheckable(True)
        self.play_button.setEnabled(False)
        button_row.addWidget(self.play_button)

        self.results_button = QPushButton(MODE_BUTTON_RESULTS, self)
        self.results_button.setCheckable(True)
        self.results_button.setEnabled(False)
        button_row.addWidget(self.results_button)

        self.admin_button = QPushButton(MODE_BUTTON_ADMIN, self)
        self.admin_button.setCheckable(True)
        self.admin_button.clicked.connect(self._handle_admin_mode)
        button_row.addWidget(self.admin_button)

        button_row.addStretch()

        self.auth_button = QPushButton(MODE_BUTTON_SIGN_IN, self)
        self.auth_button.clicked.connect(self._handle_auth_button)
        button_row.addWidget(self.auth_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(STATUS_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        if self._mode == PlayerMode.TOURNAMENTS:
            self.list_panel.refresh_status()

    def _set_mode(self, mode: PlayerMode) -> None:
        self._mode = mode
        self.tournaments_button.setChecked(mode == PlayerMode.TOURNAMENTS)
        self.play_button.setChecked(mode == PlayerMode.PLAY)
        self.results_button.setChecked(mode == PlayerMode.RESULTS)
        self.admin_button.setChecked(mode == PlayerMode.ADMIN)

        index_map = {
            PlayerMode.TOURNAMENTS: 0,
            PlayerMode.PLAY: 1,
            PlayerMode.RESULTS: 2,
            PlayerMode.ADMIN: 3,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _leave_current_mode(self) -> bool:
        if self._mode == PlayerMode.PLAY:
            return self.quiz_panel.leave()
        return True

    # --- Mode handlers ---

    def _handle_back_to_list(self) -> None:
        if not self._leave_current_mode():
            self._set_mode(self._mode)
            return
        self._set_mode(PlayerMode.TOURNAMENTS)
        if self.manager.session.is_authenticated:
            self.list_panel.reload()

    def _handle_play_tournament(self, tournament: Tournament) -> None:
        if self.quiz_panel.load(tournament):
            self._set_mode(PlayerMode.PLAY)

    def _handle_quiz_finished(self, tournament: Tournament, result: AttemptResult) -> None:
        self.result_panel.show_attempt(tournament, result)
        self._set_mode(PlayerMode.RESULTS)

    def _handle_show_results(self, tournament: Tournament) -> None:
        self.result_panel.show_tournament(tournament)
        self._set_mode(PlayerMode.RESULTS)

    def _handle_admin_mode(self) -> None:
        if not self.manager.session.is_admin:
            show_warning(self, MODE_BUTTON_ADMIN, "Only administrators can manage tournaments.")
            self._set_mode(self._mode)
            return
        if not self._leave_current_mode():
            self._set_mode(self._mode)
            return
        self.admin_panel.reload()
        self._set_mode(PlayerMode.ADMIN)

    # --- Authentication ---

    def _handle_auth_button(self) -> None:
        if self.manager.session.is_authenticated:
            if not self._leave_current_mode():
                return
            self.manager.logout()
            return
        dialog = LoginDialog(self.manager, self)
        if dialog.exec():
            self._set_mode(PlayerMode.TOURNAMENTS)
            self.list_panel.reload()

    def _handle_session_changed(self, session: AuthSession) -> None:
        signed_in = session.is_authenticated
        self.auth_button.setText(MODE_BUTTON_SIGN_OUT if signed_in else MODE_BUTTON_SIGN_IN)
        self.admin_button.setVisible(session.is_admin)
        if signed_in and session.user is not None:
            self.user_label.setText(f"Signed in as {session.user.username} ({session.user.role.value})")
            return
        self.user_label.setText(NOT_SIGNED_IN_MESSAGE)
        if self._mode != PlayerMode.TOURNAMENTS:
            self.quiz_panel.discard()
            self._set_mode(PlayerMode.TOURNAMENTS)

    # --- Dialogs ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._quiz_font_size,
            self._theme == Theme.DARK,
            self._leaderboard_size,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._quiz_font_size = dialog.get_quiz_font_size()
            self._theme = Theme.DARK if dialog.get_dark_theme() else Theme.LIGHT
            self._leaderboard_size = dialog.get_leaderboard_size()
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style(self._theme))

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            self.tournaments_button,
            self.play_button,
            self.results_button,
            self.admin_button,
            self.auth_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.list_panel.apply_font_size(self._ui_font_size)
        self.admin_panel.apply_font_size(self._ui_font_size)
        self.result_panel.apply_font_size(self._ui_font_size)
        self.result_panel.set_leaderboard_size(self._leaderboard_size)
        self.quiz_panel.set_quiz_font_size(self._quiz_font_size)

    def closeEvent(self, event) -> None:
        if self.quiz_panel.has_active_attempt() and not self.quiz_panel.leave():
            event.ignore()
            return
        self.manager.session.remove_listener(self._handle_session_changed)
        super().closeEvent(event)
