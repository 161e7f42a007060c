"""Qt UI components for the tournament client.

Submodules are imported directly (``arena_app.ui.player_main_window``) so
that Qt-free helpers such as ``question_renderer`` load without PySide6.
"""
