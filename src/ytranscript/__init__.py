"""
ytranscript — Fetch YouTube video transcripts by scraping the watch page.

Public API:
    fetch_transcript()      Fetch TranscriptEntry records for a video ID or URL.
    extract()               High-level one-call interface (URL → formatted output).
    parse_video_id()        Parse a YouTube URL or pass through a bare video ID.
    TranscriptConfig        Per-request options (language preference).
    TranscriptEntry         One timed transcript segment.

Exception hierarchy (all importable from this package):
    TranscriptError                      Base exception for all transcript errors.
    ├── InvalidVideoIdError              Input is not a video ID or YouTube URL.
    ├── TooManyRequestsError             YouTube answered with a CAPTCHA.
    ├── VideoUnavailableError            Video doesn't exist or was removed.
    ├── TranscriptDisabledError          Video has no captions (or page fetch failed).
    ├── TranscriptNotAvailableError      No usable track, or track download failed.
    └── TranscriptNotAvailableLanguageError  Requested language not offered.

Usage:
    from ytranscript import fetch_transcript, TranscriptConfig
    entries = fetch_transcript("https://youtu.be/dQw4w9WgXcQ", TranscriptConfig(lang="en"))
"""

__version__ = "0.1.0"

from ytranscript.errors import (
    InvalidVideoIdError,
    TooManyRequestsError,
    TranscriptDisabledError,
    TranscriptError,
    TranscriptNotAvailableError,
    TranscriptNotAvailableLanguageError,
    VideoUnavailableError,
)
from ytranscript.extractor import (
    extract,
    fetch_transcript,
    list_languages,
    parse_video_id,
)
from ytranscript.models import CaptionTrack, TranscriptConfig, TranscriptEntry

__all__ = [
    "__version__",
    "extract",
    "fetch_transcript",
    "list_languages",
    "parse_video_id",
    "CaptionTrack",
    "TranscriptConfig",
    "TranscriptEntry",
    "TranscriptError",
    "InvalidVideoIdError",
    "TooManyRequestsError",
    "VideoUnavailableError",
    "TranscriptDisabledError",
    "TranscriptNotAvailableError",
    "TranscriptNotAvailableLanguageError",
]
