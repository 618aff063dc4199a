import os
from dotenv import load_dotenv

from errors import ConfigurationError

load_dotenv()

MODEL_NAME = os.getenv("MODEL_NAME", "gemini-2.0-flash")
GEMINI_API_URL = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta/models")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "60"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

PLACEHOLDER_API_KEYS = {"YOUR_API_KEY_HERE", "your_api_key_here", "changeme"}


def check_api_key(key: str | None) -> str:
    """Return the stripped key, or raise ConfigurationError if it is blank or a placeholder."""
    key = (key or "").strip()
    if not key or key in PLACEHOLDER_API_KEYS:
        raise ConfigurationError("GEMINI_API_KEY is not set or still holds the placeholder value")
    return key


def get_api_key() -> str:
    """Return the Gemini API key, read at call time so .env edits apply without restart."""
    return check_api_key(os.getenv("GEMINI_API_KEY"))
