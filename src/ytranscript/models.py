"""
models.py — Data structures that flow through the transcript pipeline.

None of these outlive a single fetch_transcript() call; they are plain
frozen dataclasses so they can be compared and hashed in tests.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TranscriptConfig:
    """
    Per-request options.

    Attributes:
        lang: Preferred caption language code (e.g. "en", "fr").  When set it
              is also sent as the Accept-Language header.  None means "take
              whatever track YouTube lists first".
    """
    lang: str | None = None


@dataclass(frozen=True)
class CaptionTrack:
    """One language variant of a video's captions, as listed on the watch page."""
    language_code: str
    base_url: str


@dataclass(frozen=True)
class TranscriptEntry:
    """
    A single timed text segment.

    Attributes:
        text:     Inner text of the <text> element, unmodified.
        offset:   Start time in seconds.
        duration: Display length in seconds.
        lang:     Language code the entry is reported under.
    """
    text: str
    offset: float
    duration: float
    lang: str

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "offset": self.offset,
            "duration": self.duration,
            "lang": self.lang,
        }
