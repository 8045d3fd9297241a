"""
api.py — FastAPI REST API for ytranscript.

Endpoints:
    GET /transcript/{video_id}  — Fetch a transcript (text, JSON, or markdown doc).
    GET /tracks/{video_id}      — List the caption languages a video offers.
    GET /health                 — Simple health-check for load balancers / monitoring.

Run with:
    pip install ytranscript[serve]
    uvicorn ytranscript.api:app

The global exception handler catches any TranscriptError and converts it to
the appropriate HTTP response using the status code stored on the exception.
Transcript endpoints are plain `def` handlers: the pipeline does blocking
I/O, so FastAPI runs them in its threadpool.
"""

from __future__ import annotations

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ytranscript import __version__
from ytranscript.errors import TranscriptError, TranscriptNotAvailableLanguageError
from ytranscript.extractor import extract, list_languages

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="ytranscript API",
    description="Fetch YouTube video transcripts as plain text, structured JSON, "
                "or a readable markdown document.",
    version=__version__,
)


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError (or subclass) into an HTTP error response.

    The language error also reports which languages the video does have, so
    clients can retry with one of them.
    """
    content: dict = {"error": exc.message}
    if isinstance(exc, TranscriptNotAvailableLanguageError):
        content["available_langs"] = exc.available_langs
    return JSONResponse(status_code=exc.http_status, content=content)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# response_model=None is required because we return different Response subclasses
# depending on the format param.
@app.get("/transcript/{video_id}", response_model=None)
def get_transcript(
    video_id: str,
    format: str = Query(
        default="text",
        description="Output format: 'text' for plain transcript, 'json' for structured data with timings, 'doc' for readable markdown document.",
        pattern="^(text|json|doc)$",
    ),
    lang: str = Query(
        default="",
        description="Caption language code (e.g. 'de').  Empty picks the first track YouTube lists.",
    ),
) -> PlainTextResponse | JSONResponse:
    """
    Fetch the transcript for a single YouTube video.

    **video_id** is the 11-character YouTube video identifier
    (e.g. `dQw4w9WgXcQ`).
    """
    result = extract(video_id, lang=lang or None, fmt=format)

    if isinstance(result, dict):
        return JSONResponse(content=result)
    return PlainTextResponse(content=result)


@app.get("/tracks/{video_id}")
def get_tracks(video_id: str) -> dict:
    """
    List the caption languages offered for a video, in page order.
    """
    resolved_id, languages = list_languages(video_id)
    return {"video_id": resolved_id, "languages": languages}


@app.get("/health")
async def health() -> dict:
    """
    Minimal health-check endpoint.

    Returns HTTP 200 with {"status": "ok"}.
    """
    return {"status": "ok"}
