import os
from dotenv import load_dotenv
from overlay_agent.core.logging import get_logger
_log = get_logger("config")

load_dotenv()


def _get_int_env(name: str, default: int) -> int:
    """Get integer value from environment variable.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Integer value from env or default
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        _log.warning("Invalid int env", env=name, value=raw)
        return default


APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _get_int_env("PORT", 8000)

CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "")

def get_cors_origins() -> list:
    """Get allowed CORS origins from environment or defaults.

    Returns:
        List of allowed origin URLs
    """
    if CORS_ALLOW_ORIGINS:
        return [origin.strip() for origin in CORS_ALLOW_ORIGINS.split(",") if origin.strip()]
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# =============================================================================
# Command parsing
# =============================================================================
# Instructions longer than this are truncated before any pattern runs.
MAX_COMMAND_CHARS = max(1, _get_int_env("MAX_COMMAND_CHARS", 2000))

# Channel used when a caller does not pass one (web/farcaster/frame/telegram/default).
DEFAULT_CHANNEL = os.getenv("DEFAULT_CHANNEL", "default").strip().lower() or "default"
