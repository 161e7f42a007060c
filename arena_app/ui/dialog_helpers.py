"""Helper functions for common dialog patterns in the player and admin UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_delete_tournament(parent: QWidget, tournament_name: str) -> bool:
    """Show confirmation dialog for deleting a tournament.

    Args:
        parent: Parent widget for the dialog
        tournament_name: Name of the tournament to delete

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete \"{tournament_name}\"? This cannot be undone.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_submit_quiz(parent: QWidget, unanswered_count: int) -> bool:
    """Ask before submitting an attempt with unanswered questions."""
    if unanswered_count <= 0:
        return True
    reply = QMessageBox.question(
        parent,
        "Submit Quiz",
        f"You have {unanswered_count} unanswered question(s). Unanswered questions count as wrong. Submit anyway?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_leave_quiz(parent: QWidget) -> bool:
    """Ask before discarding an attempt that is in progress."""
    reply = QMessageBox.question(
        parent,
        "Leave Quiz",
        "Leaving now discards your answers. Continue?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
