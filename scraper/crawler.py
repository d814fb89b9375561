# scraper/crawler.py
from typing import NamedTuple, Optional

import requests
from tenacity import (
    RetryError,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from scraper.books import Book, build_chapter_url
from scraper.config import (
    ACCEPT_LANGUAGE,
    MAX_RETRY,
    RAW_HTML_DIR,
    REQUEST_TIMEOUT_SEC,
    USER_AGENT,
)
from scraper.utils import ensure_dir, raw_html_path

HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": ACCEPT_LANGUAGE,
}


class RawPassage(NamedTuple):
    book: Book
    chapter: int
    version: str
    url: str
    html: str


class FetchError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return False


@retry(
    stop=stop_after_attempt(MAX_RETRY),
    wait=wait_exponential(multiplier=1, min=2, max=8),
    retry=retry_if_exception(_is_retryable),
)
def fetch_chapter_html(url: str) -> str:
    r = requests.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT_SEC)
    r.raise_for_status()
    return r.text


def save_raw_html(passage: RawPassage):
    if not RAW_HTML_DIR:
        return
    ensure_dir(RAW_HTML_DIR)
    path = raw_html_path(RAW_HTML_DIR, passage.book.usfm, passage.chapter, passage.version)
    with open(path, "w", encoding="utf-8") as f:
        f.write(passage.html)


def fetch_passage(book: Book, chapter: int, version: str, version_id: int) -> RawPassage:
    """
    Fetch one chapter page.

    Upstream 404 keeps its status (unknown book/chapter/version); every other
    failure, including exhausted retries, is reported as 502.
    """
    url = build_chapter_url(book, chapter, version, version_id)
    try:
        html = fetch_chapter_html(url)
    except RetryError as e:
        last = e.last_attempt.exception()
        raise FetchError(f"Upstream unavailable after {MAX_RETRY} attempts: {last}", 502) from e
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        if status == 404:
            raise FetchError(f"{book.name} {chapter} ({version.upper()}) was not found upstream", 404) from e
        raise FetchError(f"Upstream responded with status {status}", 502) from e
    except requests.RequestException as e:
        raise FetchError(f"Upstream request failed: {e}", 502) from e

    if not html or not html.strip():
        raise FetchError("Upstream returned an empty page", 502)

    passage = RawPassage(book, chapter, version.upper(), url, html)
    try:
        save_raw_html(passage)
    except OSError:
        pass
    return passage
