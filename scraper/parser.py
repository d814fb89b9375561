# scraper/parser.py
import re
from typing import List, NamedTuple

from bs4 import BeautifulSoup

from scraper.utils import normalize_whitespace

# bible.com class names carry a build hash suffix: ChapterContent_verse__57FIw
CHAPTER_CLASS = "ChapterContent_chapter"
VERSE_CLASS = "ChapterContent_verse"

SKIP_CLASSES = (
    "ChapterContent_label",
    "ChapterContent_note",
    "ChapterContent_x",
    "ChapterContent_cross",
    "ChapterContent_heading",
    "ChapterContent_s1",
    "ChapterContent_s2",
    "ChapterContent_ms",
    "ChapterContent_mr",
    "ChapterContent_r",
    "ChapterContent_d",
)

VERSE_USFM_RE = re.compile(r"^(?P<book>[0-9A-Z]+)\.(?P<chapter>\d+)\.(?P<verse>\d+)$")
UNAVAILABLE_MARKER = "No Available Verses"


class ExtractedVerse(NamedTuple):
    number: int
    text: str


class ExtractionError(ValueError):
    pass


def _class_names(tag) -> List[str]:
    # "ChapterContent_verse__57FIw" -> "ChapterContent_verse"
    return [c.split("__", 1)[0] for c in (tag.get("class") or [])]


def _has_class(tag, name: str) -> bool:
    return name in _class_names(tag)


def _is_skipped(tag) -> bool:
    names = _class_names(tag)
    return any(name in names for name in SKIP_CLASSES)


def _find_chapter_container(soup, chapter: int):
    suffix = f".{chapter}"
    candidates = soup.find_all(attrs={"data-usfm": True})

    for tag in candidates:
        if _has_class(tag, CHAPTER_CLASS) and tag["data-usfm"].endswith(suffix):
            return tag

    # class names changed upstream; the chapter node is still addressed by its usfm
    for tag in candidates:
        usfm = tag["data-usfm"]
        if usfm.count(".") == 1 and usfm.endswith(suffix):
            return tag
    return None


def _verse_number(tag, chapter: int):
    # merged verses carry "JHN.3.16+JHN.3.17", the first reference labels the node
    first = tag.get("data-usfm", "").split("+", 1)[0].strip()
    match = VERSE_USFM_RE.match(first)
    if not match or int(match.group("chapter")) != chapter:
        return None
    return int(match.group("verse"))


def _is_verse_node(tag) -> bool:
    if not getattr(tag, "name", None):
        return False
    if not tag.get("data-usfm"):
        return False
    return _has_class(tag, VERSE_CLASS) or VERSE_USFM_RE.match(
        tag["data-usfm"].split("+", 1)[0].strip()
    ) is not None


def parse_chapter_html(html: str, chapter: int) -> List[ExtractedVerse]:
    """
    bible.com chapter page -> [(verse_no, text)], ascending by verse number.

    - the chapter container is the [data-usfm="BOOK.CHAPTER"] node
    - each verse node is a span[data-usfm="BOOK.CHAPTER.VERSE"]; one verse may be
      split across paragraphs, so fragments sharing a number are joined in order
    - labels, footnotes, cross references and headings are removed first
    """
    soup = BeautifulSoup(html or "", "html.parser")

    container = _find_chapter_container(soup, chapter)
    if container is None:
        if UNAVAILABLE_MARKER in soup.get_text(" "):
            raise ExtractionError("No available verses for this reference.")
        raise ExtractionError(f"Chapter {chapter} was not found in the page.")

    skipped = [tag for tag in container.find_all(_is_skipped) if tag.find_parent(_is_skipped) is None]
    for tag in skipped:
        tag.decompose()

    verse_nodes = container.find_all(_is_verse_node)
    if not verse_nodes:
        raise ExtractionError("No verse nodes found in chapter (blocked page or DOM change).")

    fragments = {}
    order = []
    for node in verse_nodes:
        # nested verse nodes are read through their outermost ancestor
        if node.find_parent(_is_verse_node) is not None:
            continue
        verse_no = _verse_number(node, chapter)
        if verse_no is None or verse_no <= 0:
            continue
        if verse_no not in fragments:
            fragments[verse_no] = []
            order.append(verse_no)
        fragments[verse_no].append(node.get_text())

    verses = []
    for verse_no in order:
        text = normalize_whitespace(" ".join(fragments[verse_no]))
        if text:
            verses.append(ExtractedVerse(verse_no, text))

    if not verses:
        raise ExtractionError("Verse parsing produced no results.")

    verses.sort(key=lambda v: v.number)
    return verses
