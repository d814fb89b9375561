from typing import Sequence

from api.errors import VerseNotFound
from api.models import VerseItem, VerseResult
from api.selector import AllVerses, VerseSelector, format_verse_numbers
from scraper.parser import ExtractedVerse


def build_citation(book_name: str, chapter: int, numbers: Sequence[int], whole_chapter: bool) -> str:
    if whole_chapter:
        return f"{book_name} {chapter}"
    return f"{book_name} {chapter}:{format_verse_numbers(numbers)}"


def select_verses(selector: VerseSelector, chapter_verses: Sequence[ExtractedVerse]) -> list:
    if isinstance(selector, AllVerses):
        return list(chapter_verses)
    return [v for v in chapter_verses if v.number in selector]


def assemble(
    selector: VerseSelector,
    chapter_verses: Sequence[ExtractedVerse],
    book_name: str,
    chapter: int,
    version: str,
) -> VerseResult:
    """
    Restrict the extracted chapter to the selected verses and join their text.

    Order always follows the chapter (ascending verse numbers). Selected
    numbers the chapter does not have are dropped, but if none of them exist
    the lookup fails with VerseNotFound.
    """
    label = f"{book_name} {chapter}"
    selected = select_verses(selector, chapter_verses)
    if not selected:
        if isinstance(selector, AllVerses):
            raise VerseNotFound([], label)
        raise VerseNotFound(selector.numbers, label)

    numbers = [v.number for v in selected]
    return VerseResult(
        citation=build_citation(book_name, chapter, numbers, isinstance(selector, AllVerses)),
        book=book_name,
        chapter=chapter,
        version=version.upper(),
        verses=[VerseItem(verse=v.number, text=v.text) for v in selected],
        text=" ".join(v.text for v in selected),
    )
