import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/matches.db"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MATCHES_PER_ATTENDEE = 5
MIN_MATCHES_PER_ATTENDEE = 1
MAX_MATCHES_PER_ATTENDEE = 20


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the working directory (or ``env_path``) if present.

    Existing environment variables win over values in the file.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


def validate_matches_per_attendee(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"matches per attendee must be an integer, got {value!r}")
    if not MIN_MATCHES_PER_ATTENDEE <= n <= MAX_MATCHES_PER_ATTENDEE:
        raise ValueError(
            f"matches per attendee must be between {MIN_MATCHES_PER_ATTENDEE} "
            f"and {MAX_MATCHES_PER_ATTENDEE}, got {n}"
        )
    return n


def get_settings() -> Dict[str, Any]:
    """Read eventmatch settings from the environment, falling back to defaults."""
    return {
        "db_path": Path(os.getenv("EVENTMATCH_DB_PATH", DEFAULT_DB_PATH)),
        "log_dir": Path(os.getenv("EVENTMATCH_LOG_DIR", DEFAULT_LOG_DIR)),
        "log_level": os.getenv("EVENTMATCH_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "matches_per_attendee": validate_matches_per_attendee(
            os.getenv("EVENTMATCH_MATCHES_PER_ATTENDEE", DEFAULT_MATCHES_PER_ATTENDEE)
        ),
    }
