# scraper/config.py
import os

# bible.com reader, chapter pages are addressed as {BASE_URL}/{version_id}/{USFM}.{chapter}.{CODE}
BASE_URL = os.getenv("VERSE_BASE_URL", "https://www.bible.com/bible").rstrip("/")

# retry attempts per chapter fetch
MAX_RETRY = int(os.getenv("VERSE_MAX_RETRY", "3"))

REQUEST_TIMEOUT_SEC = float(os.getenv("VERSE_REQUEST_TIMEOUT_SEC", "20"))

USER_AGENT = os.getenv(
    "VERSE_USER_AGENT",
    "Mozilla/5.0 (compatible; VerseLookup/1.0; +https://www.bible.com)",
)

ACCEPT_LANGUAGE = os.getenv("VERSE_ACCEPT_LANGUAGE", "en-US,en;q=0.9")

# (optional) dump fetched pages here, empty disables
RAW_HTML_DIR = os.getenv("VERSE_RAW_HTML_DIR", "")

# "CODE=ID,CODE=ID", overrides or extends the built-in version table
EXTRA_VERSION_IDS = os.getenv("VERSE_VERSION_IDS", "")
