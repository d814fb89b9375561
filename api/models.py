from typing import List
from pydantic import BaseModel


class VerseItem(BaseModel):
    verse: int
    text: str


class VerseResult(BaseModel):
    citation: str
    book: str
    chapter: int
    version: str
    verses: List[VerseItem]
    text: str


class ErrorResponse(BaseModel):
    code: int
    message: str


class HealthResponse(BaseModel):
    status: str


class LogResetResponse(BaseModel):
    reset: bool
