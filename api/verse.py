import re
import time
from typing import Callable

from api.assembler import assemble
from api.errors import ExtractionFailed, FetchFailed, InvalidInput
from api.events import log_upstream_event
from api.models import VerseResult
from api.selector import parse_selector
from scraper.books import BookError, resolve_book, resolve_version
from scraper.crawler import FetchError, RawPassage, fetch_passage
from scraper.parser import ExtractionError, parse_chapter_html

INTEGER_RE = re.compile(r"^[+-]?\d+$")

Fetcher = Callable[..., RawPassage]


def parse_chapter(raw: str | None) -> int:
    value = (raw or "").strip()
    if not INTEGER_RE.match(value):
        raise InvalidInput("Chapter must be a number")
    chapter = int(value)
    if chapter <= 0:
        raise InvalidInput("Chapter must be greater than 0")
    return chapter


def _fetch(fetcher: Fetcher, book, chapter: int, version: str, version_id: int) -> RawPassage:
    start = time.perf_counter()
    try:
        passage = fetcher(book, chapter, version, version_id)
    except FetchError as e:
        log_upstream_event(
            "upstream_fetch_failed",
            {
                "book": book.usfm,
                "chapter": chapter,
                "version": version,
                "status": e.status_code,
                "elapsed_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        raise FetchFailed(e.message, e.status_code or 502) from e

    log_upstream_event(
        "upstream_fetch",
        {
            "url": passage.url,
            "bytes": len(passage.html),
            "elapsed_ms": int((time.perf_counter() - start) * 1000),
        },
    )
    return passage


def resolve_verse(
    book: str | None,
    chapter: str | None,
    verses: str | None,
    version: str | None,
    fetcher: Fetcher | None = None,
) -> VerseResult:
    """
    book/chapter/verses/version query values -> VerseResult.

    Input is validated before anything is fetched; each later stage raises
    its own VerseApiError subclass and nothing partial is ever returned.
    """
    if not book or not book.strip():
        raise InvalidInput("Missing field 'book'")
    chapter_no = parse_chapter(chapter)
    selector = parse_selector(verses)

    version_code = (version or "").strip().upper()
    if not version_code:
        raise InvalidInput("Missing field 'version'")
    version_id = resolve_version(version_code)
    if version_id is None:
        raise InvalidInput(f"Version '{version_code}' is not supported")

    try:
        resolved_book = resolve_book(book)
    except BookError as e:
        raise InvalidInput(str(e)) from e
    passage = _fetch(fetcher or fetch_passage, resolved_book, chapter_no, version_code, version_id)

    try:
        chapter_verses = parse_chapter_html(passage.html, chapter_no)
    except ExtractionError as e:
        raise ExtractionFailed(
            f"Could not read {resolved_book.name} {chapter_no} ({version_code}): {e}"
        ) from e

    return assemble(selector, chapter_verses, resolved_book.name, chapter_no, version_code)
