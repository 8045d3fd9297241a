"""
extractor.py — Core transcript extraction logic.

This is the heart of ytranscript.  It scrapes YouTube directly (there is no
stable public transcript API) and exposes a clean, high-level interface for:

    1. Parsing YouTube URLs / IDs        → parse_video_id()
    2. Choosing a caption track          → select_track()
    3. Fetching + parsing the transcript → fetch_transcript_entries()
    4. The whole pipeline                → fetch_transcript()
    5. Formatting output                 → format_text(), format_json(), format_doc()
    6. One-call convenience              → extract()

The watch-page scraping step lives in watch_page.py.  Each stage raises a
TranscriptError subclass on failure; nothing is retried.
"""

from __future__ import annotations

import logging
import math
import re

import requests

from ytranscript.client import build_headers, fetch, new_session
from ytranscript.errors import (
    InvalidVideoIdError,
    TranscriptNotAvailableError,
    TranscriptNotAvailableLanguageError,
)
from ytranscript.models import CaptionTrack, TranscriptConfig, TranscriptEntry
from ytranscript.watch_page import scrape_caption_tracks

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# One pattern for every URL shape we accept:
#   - youtube.com/watch?v=VIDEO_ID (or any query string with v=VIDEO_ID)
#   - youtube.com/embed/VIDEO_ID, youtube.com/e/VIDEO_ID, youtube.com/v/VIDEO_ID
#   - youtube.com/<channel>/<anything>/VIDEO_ID
#   - youtu.be/VIDEO_ID
# The ID is exactly 11 characters other than quotes, &, ?, / and whitespace;
# a 12th such character means the ID is malformed, not that it was truncated.
_YOUTUBE_URL_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([^\"&?/\s]{11})(?![^\"&?/\s#])"
)

_VIDEO_ID_LENGTH = 11

# One timed-text element.  Captures start, dur, and the inner text verbatim.
_XML_TRANSCRIPT_PATTERN = re.compile(
    r'<text start="([^"]*)" dur="([^"]*)">([^<]*)</text>'
)


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL string, or pass through a raw ID.

    Any input that is exactly 11 characters long is taken to be an ID and
    returned as-is, without looking at which characters it contains.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        InvalidVideoIdError: If the string is not 11 characters and doesn't
                             match any known URL shape.
    """
    if len(url_or_id) == _VIDEO_ID_LENGTH:
        return url_or_id

    match = _YOUTUBE_URL_PATTERN.search(url_or_id)
    if match:
        return match.group(1)

    raise InvalidVideoIdError(url_or_id)


# ---------------------------------------------------------------------------
# Track selection
# ---------------------------------------------------------------------------

def select_track(
    tracks: list[CaptionTrack],
    config: TranscriptConfig,
    video_id: str,
) -> CaptionTrack:
    """
    Pick the caption track to download.

    With a language preference, the first track whose code matches exactly
    (case-sensitive) wins.  Without one, the first track YouTube listed is
    used, whatever its language.

    Raises:
        TranscriptNotAvailableLanguageError: No track matches config.lang.
        TranscriptNotAvailableError:         No track to pick, or the picked
                                             track has no URL.
    """
    if config.lang:
        available = [track.language_code for track in tracks if track.language_code]
        if config.lang not in available:
            raise TranscriptNotAvailableLanguageError(config.lang, available, video_id)
        selected = next(t for t in tracks if t.language_code == config.lang)
    elif tracks:
        selected = tracks[0]
    else:
        raise TranscriptNotAvailableError(video_id)

    if not selected.base_url:
        raise TranscriptNotAvailableError(video_id)

    logger.debug("Selected %r caption track for %s", selected.language_code, video_id)
    return selected


# ---------------------------------------------------------------------------
# Transcript document parsing
# ---------------------------------------------------------------------------

def _parse_seconds(raw: str) -> float:
    """Parse a start/dur attribute; anything unusable becomes 0.0."""
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_transcript_xml(body: str, lang: str) -> list[TranscriptEntry]:
    """
    Turn a timedtext document into TranscriptEntry records.

    Elements that don't have exactly the <text start=".." dur="..">..</text>
    shape are skipped.  Text is kept verbatim; HTML entities are not decoded.

    Args:
        body: The transcript document.
        lang: Language code to stamp on every entry.

    Returns:
        Entries in document order.
    """
    return [
        TranscriptEntry(
            text=text,
            offset=_parse_seconds(start),
            duration=_parse_seconds(dur),
            lang=lang,
        )
        for start, dur, text in _XML_TRANSCRIPT_PATTERN.findall(body)
    ]


def fetch_transcript_entries(
    track: CaptionTrack,
    video_id: str,
    config: TranscriptConfig,
    fallback_lang: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[TranscriptEntry]:
    """
    Download a caption track's transcript document and parse it.

    Entries are labelled with config.lang when the caller asked for a
    language, otherwise with fallback_lang.  fetch_transcript() passes the
    FIRST listed track's code as the fallback, not the selected track's.
    Both are the same track when no language is requested, so this only
    matters to callers that pick a track themselves.

    Raises:
        TranscriptNotAvailableError: Transport failure or non-2xx response.
    """
    headers = build_headers(config)

    owns_session = session is None
    if owns_session:
        session = new_session()
    try:
        status, body = fetch(session, track.base_url, headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Transcript fetch failed for %s: %s", video_id, exc)
        raise TranscriptNotAvailableError(video_id) from exc
    finally:
        if owns_session:
            session.close()

    if not 200 <= status < 300:
        logger.debug("Transcript fetch for %s returned HTTP %d", video_id, status)
        raise TranscriptNotAvailableError(video_id)

    entries = parse_transcript_xml(body, config.lang or fallback_lang)
    logger.debug("Parsed %d transcript entries for %s", len(entries), video_id)
    return entries


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def fetch_transcript(
    video_id_or_url: str,
    config: TranscriptConfig | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[TranscriptEntry]:
    """
    Fetch the transcript of a YouTube video.

    Runs resolve → scrape → select → fetch+parse in order and lets the first
    failure propagate.

    Args:
        video_id_or_url: A YouTube URL or raw 11-character video ID.
        config:          Request options.  None means no language preference.
        session:         Optional requests.Session to reuse across calls.
        timeout:         Optional per-request timeout in seconds.

    Returns:
        TranscriptEntry records in chronological order.

    Raises:
        TranscriptError: (or subclass) on any failure.
    """
    config = config or TranscriptConfig()
    video_id = parse_video_id(video_id_or_url)

    owns_session = session is None
    if owns_session:
        session = new_session()
    try:
        tracks = scrape_caption_tracks(video_id, config, session=session, timeout=timeout)
        track = select_track(tracks, config, video_id)
        return fetch_transcript_entries(
            track,
            video_id,
            config,
            fallback_lang=tracks[0].language_code,
            session=session,
            timeout=timeout,
        )
    finally:
        if owns_session:
            session.close()


def list_languages(
    video_id_or_url: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> tuple[str, list[str]]:
    """
    Return (video_id, language codes of every caption track in page order).

    Stops after the scrape stage; no transcript document is downloaded.
    """
    video_id = parse_video_id(video_id_or_url)
    tracks = scrape_caption_tracks(video_id, TranscriptConfig(), session=session, timeout=timeout)
    return video_id, [track.language_code for track in tracks if track.language_code]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(entries: list[TranscriptEntry]) -> str:
    """
    Convert transcript entries into plain text, one line per entry.

    Useful for feeding into summarisers, search indexes, or reading directly.
    """
    return "\n".join(entry.text for entry in entries)


def format_json(entries: list[TranscriptEntry], video_id: str) -> dict:
    """
    Build a JSON-serialisable dict from transcript entries.

    Returns:
        A dict with keys: video_id, entry_count, entries.
        Each entry has: text, offset, duration, lang.
    """
    return {
        "video_id": video_id,
        "entry_count": len(entries),
        "entries": [entry.to_dict() for entry in entries],
    }


# Paragraph boundary interval for the "doc" format.  A new paragraph starts
# whenever an entry's offset is this many seconds past the paragraph start.
_DOC_PARAGRAPH_INTERVAL_SECS = 30


def _seconds_to_mmss(seconds: float) -> str:
    """
    Convert a float timestamp (in seconds) to a MM:SS string.

    Values above 59:59 wrap naturally (e.g. 3661.0 → "61:01").
    """
    total = int(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def format_doc(entries: list[TranscriptEntry]) -> str:
    """
    Convert transcript entries into a readable markdown document.

    Entries are joined with spaces into flowing paragraphs, with a new
    paragraph starting every ~30 seconds.  Each paragraph is prefixed with
    a bold **[MM:SS]** timestamp marking the start of that time window.

    Returns:
        A markdown string, or an empty string if there are no entries.
    """
    paragraphs: list[str] = []
    current_texts: list[str] = []
    # Offset of the first entry in the current paragraph; None until the
    # first entry is seen.
    paragraph_start: float | None = None

    for entry in entries:
        # A new paragraph begins with the very first entry, or once an
        # entry's offset crosses into the next 30-second window.
        if paragraph_start is None:
            paragraph_start = entry.offset
            current_texts.append(entry.text)
        elif entry.offset - paragraph_start >= _DOC_PARAGRAPH_INTERVAL_SECS:
            timestamp = _seconds_to_mmss(paragraph_start)
            paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")
            paragraph_start = entry.offset
            current_texts = [entry.text]
        else:
            current_texts.append(entry.text)

    # Flush the last paragraph (if any entries existed).
    if current_texts and paragraph_start is not None:
        timestamp = _seconds_to_mmss(paragraph_start)
        paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")

    return "\n\n".join(paragraphs)


# ---------------------------------------------------------------------------
# High-level convenience function (main public API)
# ---------------------------------------------------------------------------

def extract(
    url_or_id: str,
    lang: str | None = None,
    fmt: str = "text",
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> str | dict:
    """
    One-call interface: parse URL → fetch transcript → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        lang:      Optional language code (e.g. "de").
        fmt:       "text" for plain text, "json" for a dict with timings,
                   "doc" for a markdown document with timestamped paragraphs.
        session:   Optional requests.Session to reuse.
        timeout:   Optional per-request timeout in seconds.

    Returns:
        A plain-text string (fmt="text"), a dict (fmt="json"), or a markdown
        string (fmt="doc").

    Raises:
        ValueError:      If fmt is not "text", "json", or "doc".
        TranscriptError: (or subclass) on any extraction failure.
    """
    if fmt not in ("text", "json", "doc"):
        raise ValueError(f"Unknown format {fmt!r}; expected 'text', 'json', or 'doc'")

    video_id = parse_video_id(url_or_id)
    entries = fetch_transcript(
        video_id,
        TranscriptConfig(lang=lang),
        session=session,
        timeout=timeout,
    )

    if fmt == "json":
        return format_json(entries, video_id)

    if fmt == "doc":
        return format_doc(entries)

    return format_text(entries)
