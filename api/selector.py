import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from api.config import ALL_VERSES_SENTINEL, MAX_SELECTOR_VERSES
from api.errors import InvalidSelector

NUMBER_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class AllVerses:
    """Every verse the chapter has; the count is only known after extraction."""


@dataclass(frozen=True)
class VerseSet:
    numbers: Tuple[int, ...]

    def __contains__(self, number: int) -> bool:
        return number in self.numbers


VerseSelector = Union[AllVerses, VerseSet]


def _parse_number(token: str, whole: str) -> int:
    if not NUMBER_RE.match(token):
        raise InvalidSelector(f"Verses must be a number, got '{whole}'", whole)
    value = int(token)
    if value <= 0:
        raise InvalidSelector(f"Verses must be greater than 0, got '{whole}'", whole)
    return value


def _parse_token(token: str) -> range:
    if "-" not in token:
        value = _parse_number(token, token)
        return range(value, value + 1)

    start_raw, _, end_raw = token.partition("-")
    start = _parse_number(start_raw.strip(), token)
    end = _parse_number(end_raw.strip(), token)
    if start > end:
        raise InvalidSelector(f"Verse range '{token}' starts after it ends", token)
    return range(start, end + 1)


def parse_selector(raw: str | None) -> VerseSelector:
    """
    "7" -> {7}, "16-18" -> {16, 17, 18}, "5,7-9,7" -> {5, 7, 8, 9}, "-1" -> all.

    Duplicates collapse and the result is always ascending, whatever order
    the tokens were given in.
    """
    value = (raw or "").strip()
    if value == ALL_VERSES_SENTINEL:
        return AllVerses()
    if not value:
        raise InvalidSelector(f"Verses must be a number, got '{value}'", value)

    numbers = set()
    for token in value.split(","):
        token = token.strip()
        if not token:
            raise InvalidSelector(f"Verses contains an empty item: '{value}'", value)
        span = _parse_token(token)
        if len(span) > MAX_SELECTOR_VERSES or len(numbers.union(span)) > MAX_SELECTOR_VERSES:
            raise InvalidSelector(
                f"Verses selects more than {MAX_SELECTOR_VERSES} verses: '{token}'", token
            )
        numbers.update(span)

    return VerseSet(tuple(sorted(numbers)))


def format_verse_numbers(numbers: Iterable[int]) -> str:
    """[1, 2, 3, 5, 7, 8] -> "1-3,5,7-8"."""
    ordered = sorted(set(numbers))
    parts = []
    start = prev = None
    for n in ordered:
        if start is None:
            start = prev = n
            continue
        if n == prev + 1:
            prev = n
            continue
        parts.append(f"{start}-{prev}" if prev != start else str(start))
        start = prev = n
    if start is not None:
        parts.append(f"{start}-{prev}" if prev != start else str(start))
    return ",".join(parts)
