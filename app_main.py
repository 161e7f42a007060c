"""Application entry point for the QuizArena client."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from arena_app.client.api_client import TournamentApiClient
from arena_app.core.config import load_settings
from arena_app.core.services.auth_session import AuthSession
from arena_app.core.tournament_manager import TournamentManager
from arena_app.server.sandbox_server import start_sandbox_server
from arena_app.ui.player_main_window import PlayerMainWindow
from arena_app.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging and settings, optionally start the sandbox API, and launch the Qt UI."""
    settings = load_settings()
    logger = configure_logging(settings.log_level)
    logger.info("Starting QuizArena…")

    if settings.use_sandbox:
        start_sandbox_server(host=settings.sandbox_host, port=settings.sandbox_port)

    base_url = settings.effective_api_base_url
    logger.info("Using tournament API at %s", base_url)

    session = AuthSession()
    api = TournamentApiClient(
        session,
        base_url=base_url,
        timeout=settings.request_timeout_seconds,
        retries=settings.request_retries,
    )
    manager = TournamentManager(
        api,
        session,
        default_passing_percentage=settings.default_passing_percentage,
        attempt_time_limit_seconds=settings.attempt_time_limit_seconds,
    )

    app = QApplication(sys.argv)
    window = PlayerMainWindow(manager)
    window.resize(1100, 760)
    window.show()
    exit_code = app.exec()
    api.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
