import pytest

from api.assembler import assemble
from api.errors import VerseNotFound
from api.selector import AllVerses, VerseSet, parse_selector
from scraper.parser import ExtractedVerse


def _chapter(count=21):
    return [ExtractedVerse(n, f"verse {n} text.") for n in range(1, count + 1)]


def test_assemble_range_in_order():
    result = assemble(VerseSet((16, 17, 18)), _chapter(), "John", 3, "kjv")

    assert [v.verse for v in result.verses] == [16, 17, 18]
    assert result.text == "verse 16 text. verse 17 text. verse 18 text."
    assert result.citation == "John 3:16-18"
    assert result.version == "KJV"


def test_assemble_all_returns_chapter_unchanged():
    chapter = _chapter()
    result = assemble(AllVerses(), chapter, "John", 3, "KJV")

    assert [(v.verse, v.text) for v in result.verses] == [(v.number, v.text) for v in chapter]
    assert result.citation == "John 3"


def test_assemble_follows_chapter_order_not_input_order():
    result = assemble(parse_selector("18,2,9"), _chapter(), "John", 3, "KJV")

    assert [v.verse for v in result.verses] == [2, 9, 18]
    assert result.citation == "John 3:2,9,18"


def test_assemble_missing_verse_raises():
    with pytest.raises(VerseNotFound) as exc:
        assemble(VerseSet((999,)), _chapter(), "John", 3, "KJV")

    assert exc.value.code == 404
    assert exc.value.missing == [999]
    assert "999" in exc.value.message


def test_assemble_partial_overlap_keeps_existing_verses():
    result = assemble(parse_selector("20-23"), _chapter(), "John", 3, "KJV")

    assert [v.verse for v in result.verses] == [20, 21]
    assert result.citation == "John 3:20-21"


def test_assemble_respects_versification_gaps():
    chapter = [ExtractedVerse(20, "a"), ExtractedVerse(22, "b")]
    result = assemble(parse_selector("20-22"), chapter, "Matthew", 17, "NIV")

    assert [v.verse for v in result.verses] == [20, 22]
    assert result.text == "a b"
    assert result.citation == "Matthew 17:20,22"


def test_assemble_all_on_empty_chapter_raises():
    with pytest.raises(VerseNotFound):
        assemble(AllVerses(), [], "John", 3, "KJV")
