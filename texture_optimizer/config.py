"""
Runtime configuration read from environment variables.
"""
import os

# Hard ceiling on uploaded archives, enforced before any processing
MAX_UPLOAD_SIZE = 150 * 1024 * 1024

API_VERSION = "1.0.0"


def get_environment() -> str:
    return os.environ.get("APP_ENV", "production").lower()


def is_development() -> bool:
    """Whether error responses may include exception details."""
    return get_environment() in ("development", "dev")
