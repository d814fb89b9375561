import time

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import (
    ALLOW_LOG_RESET,
    API_TITLE,
    API_VERSION,
    CORS_ALLOW_ALL,
    CORS_ALLOW_ORIGINS,
    DEFAULT_CHAPTER,
    DEFAULT_VERSES,
    DEFAULT_VERSION,
    EVENT_LOG_RESET_ON_STARTUP,
)
from api.errors import VerseApiError
from api.events import log_api_event, reset_event_log
from api.models import ErrorResponse, HealthResponse, LogResetResponse, VerseResult
from api.verse import resolve_verse

app = FastAPI(title=API_TITLE, version=API_VERSION)

if CORS_ALLOW_ALL:
    allow_origins = ["*"]
else:
    allow_origins = [origin.strip() for origin in CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _reset_event_log_on_startup() -> None:
    if EVENT_LOG_RESET_ON_STARTUP:
        reset_event_log("startup")


def _error_response(code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"code": code, "message": message},
        headers=headers,
    )


@app.exception_handler(VerseApiError)
def handle_verse_api_error(_request: Request, exc: VerseApiError):
    return _error_response(exc.code, exc.message)


@app.exception_handler(HTTPException)
def handle_http_exception(_request: Request, exc: HTTPException):
    return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
def handle_unexpected_exception(request: Request, exc: Exception):
    log_api_event(
        "api_error",
        {"path": request.url.path, "error": type(exc).__name__},
    )
    return _error_response(500, "internal server error")


@app.exception_handler(RequestValidationError)
def handle_validation_exception(_request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = ".".join(str(p) for p in errors[0].get("loc", ())[1:]) if errors else ""
    message = f"Invalid field '{field}'" if field else "invalid request"
    return _error_response(422, message)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok"}


@app.post("/api/v1/logs/reset", response_model=LogResetResponse)
def reset_logs():
    if not ALLOW_LOG_RESET:
        raise HTTPException(status_code=403, detail="log reset disabled")
    reset_event_log("client")
    log_api_event("api_log_reset", {"client": "app"})
    return {"reset": True}


@app.get(
    "/api/v1/verse",
    response_model=VerseResult,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    tags=["Bible"],
    summary="Gets a verse",
)
def get_verse(
    book: str | None = Query(None, description="The book, e.g. JOHN, John, Jn or JHN", examples=["JOHN"]),
    chapter: str = Query(DEFAULT_CHAPTER, description="The chapter", examples=["3"]),
    verses: str = Query(
        DEFAULT_VERSES,
        description="Single (5), range (5-10) or comma separated (5,10-12). -1 returns the whole chapter.",
        examples=["16-18"],
    ),
    version: str = Query(
        DEFAULT_VERSION,
        description="Translation code, see https://www.bible.com/versions",
        examples=["KJV"],
    ),
):
    start = time.perf_counter()
    try:
        result = resolve_verse(book, chapter, verses, version)
    except VerseApiError as e:
        log_api_event(
            "verse_lookup_failed",
            {
                "book": book,
                "chapter": chapter,
                "verses": verses,
                "version": version,
                "error": type(e).__name__,
                "code": e.code,
            },
        )
        raise

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    log_api_event(
        "verse_lookup",
        {
            "citation": result.citation,
            "version": result.version,
            "verses": len(result.verses),
            "elapsed_ms": elapsed_ms,
        },
    )
    return result
