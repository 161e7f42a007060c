"""Preferences dialog for font sizes, theme and leaderboard length."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

LEADERBOARD_SIZE_RANGE = (3, 50)


def _spin_row(caption: str, tooltip: str, bounds: tuple[int, int], value: int, suffix: str = "") -> tuple[QHBoxLayout, QSpinBox]:
    label = QLabel(caption)
    label.setToolTip(tooltip)
    spinbox = QSpinBox()
    spinbox.setRange(*bounds)
    spinbox.setValue(value)
    if suffix:
        spinbox.setSuffix(suffix)
    row = QHBoxLayout()
    row.addWidget(label)
    row.addStretch()
    row.addWidget(spinbox)
    return row, spinbox


class SettingsDialog(QDialog):
    """Modal editor for the player's display preferences."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        quiz_font_size: int = 14,
        dark_theme: bool = False,
        leaderboard_size: int = 10,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setModal(True)
        self.setMinimumWidth(420)

        low, high = LEADERBOARD_SIZE_RANGE
        self._initial = {
            "ui_font_size": ui_font_size,
            "quiz_font_size": quiz_font_size,
            "dark_theme": dark_theme,
            "leaderboard_size": max(low, min(high, leaderboard_size)),
        }
        self._build_ui()

    def _build_ui(self) -> None:
        appearance = QGroupBox("Appearance")
        appearance_layout = QVBoxLayout(appearance)
        row, self.ui_font_spinbox = _spin_row(
            "Interface text:",
            "Buttons, tournament list and forms",
            (8, 24),
            self._initial["ui_font_size"],
            " pt",
        )
        appearance_layout.addLayout(row)
        row, self.quiz_font_spinbox = _spin_row(
            "Question text:",
            "Question body and answer options while playing",
            (10, 32),
            self._initial["quiz_font_size"],
            " pt",
        )
        appearance_layout.addLayout(row)
        self.dark_theme_checkbox = QCheckBox("Dark theme")
        self.dark_theme_checkbox.setChecked(self._initial["dark_theme"])
        appearance_layout.addWidget(self.dark_theme_checkbox)

        results = QGroupBox("Results")
        results_layout = QVBoxLayout(results)
        row, self.leaderboard_spinbox = _spin_row(
            "Leaderboard entries:",
            "How many ranked players the results screen lists",
            LEADERBOARD_SIZE_RANGE,
            self._initial["leaderboard_size"],
        )
        results_layout.addLayout(row)

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        self.save_button = QPushButton("Save")
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(self.cancel_button)
        buttons.addWidget(self.save_button)

        layout = QVBoxLayout(self)
        layout.addWidget(appearance)
        layout.addWidget(results)
        layout.addLayout(buttons)

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()

    def get_quiz_font_size(self) -> int:
        return self.quiz_font_spinbox.value()

    def get_dark_theme(self) -> bool:
        return self.dark_theme_checkbox.isChecked()

    def get_leaderboard_size(self) -> int:
        """Number of leaderboard rows to show, clamped to the spinbox range."""
        return self.leaderboard_spinbox.value()
