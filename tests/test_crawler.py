import pytest
import requests
from tenacity import wait_none

import scraper.crawler as crawler_mod
from scraper.books import Book
from scraper.config import MAX_RETRY
from scraper.crawler import FetchError, fetch_chapter_html, fetch_passage

JOHN = Book("JHN", "John")


def _response(status: int, body: str = "") -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = body.encode("utf-8")
    r.encoding = "utf-8"
    r.url = "https://www.bible.com/bible/1/JHN.3.KJV"
    return r


class FakeGet:
    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.calls = []

    def __call__(self, url, headers=None, timeout=None):
        self.calls.append(url)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def _no_retry_wait(monkeypatch):
    monkeypatch.setattr(fetch_chapter_html.retry, "wait", wait_none())


def test_fetch_passage_returns_raw_passage(monkeypatch, john_3_html):
    fake = FakeGet(_response(200, john_3_html))
    monkeypatch.setattr(crawler_mod.requests, "get", fake)

    passage = fetch_passage(JOHN, 3, "kjv", 1)

    assert passage.book == JOHN
    assert passage.chapter == 3
    assert passage.version == "KJV"
    assert passage.url.endswith("/1/JHN.3.KJV")
    assert passage.html == john_3_html
    assert len(fake.calls) == 1


def test_fetch_passage_upstream_404_is_not_retried(monkeypatch):
    fake = FakeGet(_response(404, "not found"))
    monkeypatch.setattr(crawler_mod.requests, "get", fake)

    with pytest.raises(FetchError) as exc:
        fetch_passage(JOHN, 99, "KJV", 1)

    assert exc.value.status_code == 404
    assert len(fake.calls) == 1


def test_fetch_passage_server_error_retries_then_fails(monkeypatch):
    fake = FakeGet(_response(503, "busy"))
    monkeypatch.setattr(crawler_mod.requests, "get", fake)

    with pytest.raises(FetchError) as exc:
        fetch_passage(JOHN, 3, "KJV", 1)

    assert exc.value.status_code == 502
    assert len(fake.calls) == MAX_RETRY


def test_fetch_passage_recovers_after_connection_error(monkeypatch, john_3_html):
    fake = FakeGet(requests.ConnectionError("reset"), _response(200, john_3_html))
    monkeypatch.setattr(crawler_mod.requests, "get", fake)

    passage = fetch_passage(JOHN, 3, "KJV", 1)

    assert passage.html == john_3_html
    assert len(fake.calls) == 2


def test_fetch_passage_empty_page_fails(monkeypatch):
    monkeypatch.setattr(crawler_mod.requests, "get", FakeGet(_response(200, "   ")))

    with pytest.raises(FetchError) as exc:
        fetch_passage(JOHN, 3, "KJV", 1)

    assert exc.value.status_code == 502


def test_fetch_passage_dumps_raw_html(monkeypatch, tmp_path):
    monkeypatch.setattr(crawler_mod, "RAW_HTML_DIR", str(tmp_path / "raw"))
    monkeypatch.setattr(crawler_mod.requests, "get", FakeGet(_response(200, "<html>ok</html>")))

    fetch_passage(JOHN, 3, "KJV", 1)

    assert (tmp_path / "raw" / "JHN_3_KJV.html").read_text(encoding="utf-8") == "<html>ok</html>"
