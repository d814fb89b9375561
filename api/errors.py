from typing import Iterable


class VerseApiError(Exception):
    code = 500

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidInput(VerseApiError):
    code = 400


class InvalidSelector(InvalidInput):
    def __init__(self, message: str, token: str):
        super().__init__(message)
        self.token = token


class FetchFailed(VerseApiError):
    code = 502


class ExtractionFailed(VerseApiError):
    code = 404


class VerseNotFound(VerseApiError):
    code = 404

    def __init__(self, missing: Iterable[int], chapter_label: str = "this chapter"):
        self.missing = sorted(set(missing))
        if not self.missing:
            super().__init__(f"No verses found in {chapter_label}")
            return
        numbers = ", ".join(str(n) for n in self.missing)
        noun = "Verse" if len(self.missing) == 1 else "Verses"
        super().__init__(f"{noun} {numbers} not found in {chapter_label}")
