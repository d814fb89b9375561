# scraper/books.py
import re
from typing import Dict, NamedTuple, Optional

from scraper.config import BASE_URL, EXTRA_VERSION_IDS


class Book(NamedTuple):
    usfm: str
    name: str


class BookError(ValueError):
    pass


# (usfm, display name, extra aliases). The usfm code and display name are aliases too.
BOOKS = [
    ("GEN", "Genesis", ("Gen", "Ge", "Gn")),
    ("EXO", "Exodus", ("Exod", "Ex")),
    ("LEV", "Leviticus", ("Lev", "Lv")),
    ("NUM", "Numbers", ("Num", "Nm")),
    ("DEU", "Deuteronomy", ("Deut", "Dt")),
    ("JOS", "Joshua", ("Josh", "Jos")),
    ("JDG", "Judges", ("Judg", "Jdg")),
    ("RUT", "Ruth", ("Ru",)),
    ("1SA", "1 Samuel", ("1 Sam", "1Sam", "I Samuel")),
    ("2SA", "2 Samuel", ("2 Sam", "2Sam", "II Samuel")),
    ("1KI", "1 Kings", ("1 Kgs", "1Kgs", "I Kings")),
    ("2KI", "2 Kings", ("2 Kgs", "2Kgs", "II Kings")),
    ("1CH", "1 Chronicles", ("1 Chr", "1Chr", "I Chronicles")),
    ("2CH", "2 Chronicles", ("2 Chr", "2Chr", "II Chronicles")),
    ("EZR", "Ezra", ("Ezr",)),
    ("NEH", "Nehemiah", ("Neh",)),
    ("EST", "Esther", ("Esth", "Est")),
    ("JOB", "Job", ()),
    ("PSA", "Psalms", ("Psalm", "Ps", "Psa")),
    ("PRO", "Proverbs", ("Prov", "Pr")),
    ("ECC", "Ecclesiastes", ("Eccl", "Ecc", "Qoheleth")),
    ("SNG", "Song of Solomon", ("Song of Songs", "Song", "Canticles", "SOS")),
    ("ISA", "Isaiah", ("Isa",)),
    ("JER", "Jeremiah", ("Jer",)),
    ("LAM", "Lamentations", ("Lam",)),
    ("EZK", "Ezekiel", ("Ezek", "Eze")),
    ("DAN", "Daniel", ("Dan", "Dn")),
    ("HOS", "Hosea", ("Hos",)),
    ("JOL", "Joel", ("Joe",)),
    ("AMO", "Amos", ("Am",)),
    ("OBA", "Obadiah", ("Obad", "Ob")),
    ("JON", "Jonah", ("Jnh",)),
    ("MIC", "Micah", ("Mic",)),
    ("NAM", "Nahum", ("Nah",)),
    ("HAB", "Habakkuk", ("Hab",)),
    ("ZEP", "Zephaniah", ("Zeph",)),
    ("HAG", "Haggai", ("Hag",)),
    ("ZEC", "Zechariah", ("Zech",)),
    ("MAL", "Malachi", ("Mal",)),
    ("MAT", "Matthew", ("Matt", "Mt")),
    ("MRK", "Mark", ("Mk", "Mar")),
    ("LUK", "Luke", ("Lk", "Luk")),
    ("JHN", "John", ("Jn", "Jhn", "Joh")),
    ("ACT", "Acts", ("Ac",)),
    ("ROM", "Romans", ("Rom", "Ro")),
    ("1CO", "1 Corinthians", ("1 Cor", "1Cor", "I Corinthians")),
    ("2CO", "2 Corinthians", ("2 Cor", "2Cor", "II Corinthians")),
    ("GAL", "Galatians", ("Gal",)),
    ("EPH", "Ephesians", ("Eph",)),
    ("PHP", "Philippians", ("Phil", "Php")),
    ("COL", "Colossians", ("Col",)),
    ("1TH", "1 Thessalonians", ("1 Thess", "1Thess", "I Thessalonians")),
    ("2TH", "2 Thessalonians", ("2 Thess", "2Thess", "II Thessalonians")),
    ("1TI", "1 Timothy", ("1 Tim", "1Tim", "I Timothy")),
    ("2TI", "2 Timothy", ("2 Tim", "2Tim", "II Timothy")),
    ("TIT", "Titus", ("Tit",)),
    ("PHM", "Philemon", ("Phlm", "Phm")),
    ("HEB", "Hebrews", ("Heb",)),
    ("JAS", "James", ("Jas", "Jm")),
    ("1PE", "1 Peter", ("1 Pet", "1Pet", "I Peter")),
    ("2PE", "2 Peter", ("2 Pet", "2Pet", "II Peter")),
    ("1JN", "1 John", ("1 Jn", "1Jn", "I John")),
    ("2JN", "2 John", ("2 Jn", "2Jn", "II John")),
    ("3JN", "3 John", ("3 Jn", "3Jn", "III John")),
    ("JUD", "Jude", ("Jud",)),
    ("REV", "Revelation", ("Rev", "Revelations", "Apocalypse")),
]

# bible.com numeric ids for common translations
VERSION_IDS: Dict[str, int] = {
    "KJV": 1,
    "ASV": 12,
    "ESV": 59,
    "GNT": 68,
    "MSG": 97,
    "NASB1995": 100,
    "NET": 107,
    "NIV": 111,
    "NKJV": 114,
    "NLT": 116,
    "WEB": 206,
    "AMP": 1588,
    "CSB": 1713,
    "NASB2020": 2692,
    "BSB": 3034,
}


def _alias_key(name: str) -> str:
    return re.sub(r"[\s.]+", "", name or "").upper()


def _build_alias_index() -> Dict[str, Book]:
    index = {}
    for usfm, name, aliases in BOOKS:
        book = Book(usfm, name)
        for alias in (usfm, name) + tuple(aliases):
            index[_alias_key(alias)] = book
    return index


BOOK_ALIASES = _build_alias_index()
USFM_CODE_RE = re.compile(r"^[0-9A-Z]+$")


def _parse_extra_version_ids(raw: str) -> Dict[str, int]:
    extra = {}
    for item in (raw or "").split(","):
        code, sep, version_id = item.partition("=")
        if not sep:
            continue
        code = code.strip().upper()
        version_id = version_id.strip()
        if code and version_id.isdigit():
            extra[code] = int(version_id)
    return extra


def version_table() -> Dict[str, int]:
    table = dict(VERSION_IDS)
    table.update(_parse_extra_version_ids(EXTRA_VERSION_IDS))
    return table


def resolve_book(name: str) -> Book:
    """
    Book name or alias -> Book.

    Names that are not in the table are passed through as an upper-cased
    code; the upstream site decides whether they exist. The code ends up in
    the chapter url and the raw dump filename, so it must look like a usfm code.
    """
    key = _alias_key(name)
    book = BOOK_ALIASES.get(key)
    if book is not None:
        return book
    display = (name or "").strip()
    if not USFM_CODE_RE.match(key):
        raise BookError(f"Book '{display}' is not valid")
    return Book(key, display)


def resolve_version(code: str) -> Optional[int]:
    return version_table().get((code or "").strip().upper())


def build_chapter_url(book: Book, chapter: int, version_code: str, version_id: int) -> str:
    return f"{BASE_URL}/{version_id}/{book.usfm}.{chapter}.{version_code.upper()}"
