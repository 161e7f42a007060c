"""Network configuration constants for the tournament client."""

DEFAULT_API_BASE_URL: str = "https://quiz-tournament-api.onrender.com/api"
REQUEST_TIMEOUT_SECONDS: float = 15.0
REQUEST_RETRIES: int = 2

SANDBOX_HOST: str = "127.0.0.1"
SANDBOX_PORT: int = 8765
