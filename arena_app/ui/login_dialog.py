"""Sign-in and registration dialog."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from arena_app.core.account_validation import registration_errors
from arena_app.core.errors import ApiRequestError
from arena_app.core.models import UserRole
from arena_app.core.tournament_manager import TournamentManager
from arena_app.ui.dialog_helpers import show_error, show_info


class LoginDialog(QDialog):
    """Modal dialog that signs the user in or registers a new account."""

    def __init__(self, manager: TournamentManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Sign In")
        self.setModal(True)
        self.setMinimumWidth(380)
        self.manager = manager
        self._registering = False
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        self.username_edit = QLineEdit(self)
        self.username_edit.setPlaceholderText("Username or email")
        form.addRow("Username:", self.username_edit)

        self.email_label = QLabel("Email:", self)
        self.email_edit = QLineEdit(self)
        form.addRow(self.email_label, self.email_edit)

        self.password_edit = QLineEdit(self)
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Password:", self.password_edit)

        self.admin_checkbox = QCheckBox("Register as administrator", self)
        form.addRow("", self.admin_checkbox)
        layout.addLayout(form)

        self.error_label = QLabel("", self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #DC2626;")
        layout.addWidget(self.error_label)

        button_row = QHBoxLayout()
        self.toggle_mode_button = QPushButton("Create account", self)
        self.toggle_mode_button.clicked.connect(self._toggle_mode)
        button_row.addWidget(self.toggle_mode_button)

        self.forgot_button = QPushButton("Forgot password?", self)
        self.forgot_button.clicked.connect(self._handle_forgot_password)
        button_row.addWidget(self.forgot_button)

        button_row.addStretch()

        self.submit_button = QPushButton("Sign In", self)
        self.submit_button.setDefault(True)
        self.submit_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.submit_button)
        layout.addLayout(button_row)

        self._apply_mode()

    def _toggle_mode(self) -> None:
        self._registering = not self._registering
        self._apply_mode()

    def _apply_mode(self) -> None:
        self.email_label.setVisible(self._registering)
        self.email_edit.setVisible(self._registering)
        self.admin_checkbox.setVisible(self._registering)
        self.forgot_button.setVisible(not self._registering)
        self.username_edit.setPlaceholderText("Username" if self._registering else "Username or email")
        self.submit_button.setText("Register" if self._registering else "Sign In")
        self.toggle_mode_button.setText("Back to sign in" if self._registering else "Create account")
        self.setWindowTitle("Register" if self._registering else "Sign In")
        self.error_label.clear()

    def _handle_submit(self) -> None:
        username = self.username_edit.text().strip()
        password = self.password_edit.text()
        if self._registering:
            self._register(username, self.email_edit.text().strip(), password)
            return
        if not username or not password:
            self.error_label.setText("Enter your username and password.")
            return
        try:
            self.manager.login(username, password)
        except ApiRequestError as exc:
            self.error_label.setText(str(exc))
            return
        self.accept()

    def _register(self, username: str, email: str, password: str) -> None:
        errors = registration_errors(username, email, password)
        if errors:
            self.error_label.setText("\n".join(errors))
            return
        role = UserRole.ADMIN if self.admin_checkbox.isChecked() else UserRole.PLAYER
        try:
            self.manager.register(username, email, password, role=role)
        except ApiRequestError as exc:
            self.error_label.setText(str(exc))
            return
        show_info(self, "Registered", "Your account has been created. You can sign in now.")
        self._registering = False
        self._apply_mode()

    def _handle_forgot_password(self) -> None:
        email, accepted = QInputDialog.getText(self, "Reset Password", "Email address:")
        if not accepted or not email.strip():
            return
        try:
            self.manager.forgot_password(email.strip())
        except ApiRequestError as exc:
            show_error(self, "Reset Password", str(exc))
            return
        show_info(self, "Reset Password", "If the address is registered, a reset link has been sent.")
