import os

API_TITLE = "Verse Lookup API"
API_VERSION = "0.1.0"

DEFAULT_CHAPTER = "1"
DEFAULT_VERSES = "-1"
DEFAULT_VERSION = "KJV"

ALL_VERSES_SENTINEL = "-1"
MAX_SELECTOR_VERSES = int(os.getenv("VERSE_MAX_SELECTOR", "200"))

EVENT_LOG_PATH = os.getenv("EVENT_LOG_PATH", "logs/events.log")
EVENT_LOG_RESET_ON_STARTUP = os.getenv("EVENT_LOG_RESET_ON_STARTUP", "0") == "1"
ALLOW_LOG_RESET = os.getenv("ALLOW_LOG_RESET", "0") == "1"

CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "1") == "1"
CORS_ALLOW_ORIGINS = os.getenv(
    "CORS_ALLOW_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173",
)
