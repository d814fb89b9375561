import pytest

from api.errors import InvalidSelector
from api.selector import AllVerses, VerseSet, format_verse_numbers, parse_selector


def test_parse_selector_single():
    assert parse_selector("7") == VerseSet((7,))


def test_parse_selector_range():
    assert parse_selector("16-18") == VerseSet((16, 17, 18))


def test_parse_selector_list():
    assert parse_selector("5,10") == VerseSet((5, 10))


def test_parse_selector_mixed_dedupes_and_sorts():
    assert parse_selector("5,7-9,7") == VerseSet((5, 7, 8, 9))
    assert parse_selector("12,3-4,1") == VerseSet((1, 3, 4, 12))


def test_parse_selector_overlapping_ranges():
    assert parse_selector("1-3,2-5") == VerseSet((1, 2, 3, 4, 5))


def test_parse_selector_ignores_whitespace():
    assert parse_selector(" 5 , 10 - 12 ") == VerseSet((5, 10, 11, 12))


def test_parse_selector_sentinel_is_all():
    assert parse_selector("-1") == AllVerses()
    assert parse_selector(" -1 ") == AllVerses()


def test_parse_selector_single_verse_range():
    assert parse_selector("4-4") == VerseSet((4,))


@pytest.mark.parametrize("raw", ["", "  ", None, "abc", "0", "-5", "9-5", "5,,6", "1-2-3", "5-", "3.5", "1,x"])
def test_parse_selector_invalid(raw):
    with pytest.raises(InvalidSelector):
        parse_selector(raw)


def test_parse_selector_reversed_range_names_token():
    with pytest.raises(InvalidSelector) as exc:
        parse_selector("1,9-5")
    assert exc.value.token == "9-5"
    assert exc.value.code == 400
    assert "9-5" in exc.value.message


def test_parse_selector_non_numeric_message():
    with pytest.raises(InvalidSelector) as exc:
        parse_selector("abc")
    assert exc.value.message.startswith("Verses must be a number")


def test_parse_selector_empty_is_not_all():
    with pytest.raises(InvalidSelector) as exc:
        parse_selector("")
    assert exc.value.message.startswith("Verses must be a number")


def test_parse_selector_rejects_huge_range():
    with pytest.raises(InvalidSelector):
        parse_selector("1-100000000")


def test_verse_set_membership():
    selector = parse_selector("16-18")
    assert 17 in selector
    assert 19 not in selector


def test_format_verse_numbers_compacts_runs():
    assert format_verse_numbers([1, 2, 3, 5, 7, 8]) == "1-3,5,7-8"
    assert format_verse_numbers([16]) == "16"
    assert format_verse_numbers([]) == ""
