"""
errors.py — Exception hierarchy for ytranscript.

Every exception carries an `http_status` attribute so the FastAPI error
handler can translate pipeline errors directly into the correct HTTP
response code without a separate mapping table.

Hierarchy:
    TranscriptError (base, 500)
    ├── InvalidVideoIdError (400)
    ├── TooManyRequestsError (429)
    ├── VideoUnavailableError (404)
    ├── TranscriptDisabledError (404)
    ├── TranscriptNotAvailableError (404)
    └── TranscriptNotAvailableLanguageError (400)
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for all transcript-related errors.

    Attributes:
        message:     Human-readable description of what went wrong.
        http_status: Suggested HTTP status code for the API layer.
    """

    def __init__(self, message: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status


# ---------------------------------------------------------------------------
# Specific error cases
# ---------------------------------------------------------------------------

class InvalidVideoIdError(TranscriptError):
    """
    Raised when the input is neither an 11-character ID nor a YouTube URL
    we know how to pull an ID out of.
    """

    def __init__(self, value: str) -> None:
        super().__init__(
            message="Impossible to retrieve Youtube video ID.",
            http_status=400,
        )
        self.value = value


class TooManyRequestsError(TranscriptError):
    """
    Raised when the watch page came back with a CAPTCHA challenge.

    YouTube does this once an IP has sent too many requests.  Maps to 429.
    """

    def __init__(self) -> None:
        super().__init__(
            message=(
                "YouTube is receiving too many requests from this IP and now "
                "requires solving a captcha to continue"
            ),
            http_status=429,
        )


class VideoUnavailableError(TranscriptError):
    """
    Raised when the watch page has no playability status at all, i.e. the
    video was removed, made private, or never existed.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            message=f"The video is no longer available ({video_id})",
            http_status=404,
        )
        self.video_id = video_id


class TranscriptDisabledError(TranscriptError):
    """
    Raised when the video plays but does not offer captions.

    Also raised for any transport failure while loading the watch page,
    since from the outside the two cannot be told apart.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            message=f"Transcript is disabled on this video ({video_id})",
            http_status=404,
        )
        self.video_id = video_id


class TranscriptNotAvailableError(TranscriptError):
    """
    Raised when captions metadata exists but yields no usable track, or when
    the transcript document itself could not be downloaded.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            message=f"No transcripts are available for this video ({video_id})",
            http_status=404,
        )
        self.video_id = video_id


class TranscriptNotAvailableLanguageError(TranscriptError):
    """
    Raised when the video has caption tracks, but none in the requested
    language.

    Attributes:
        lang:            The language code the caller asked for.
        available_langs: Language codes of every track, in page order.
        video_id:        The video the tracks belong to.
    """

    def __init__(self, lang: str, available_langs: list[str], video_id: str) -> None:
        super().__init__(
            message=(
                f"No transcripts are available in {lang} for this video "
                f"({video_id}). Available languages: {available_langs!r}"
            ),
            http_status=400,
        )
        self.lang = lang
        self.available_langs = available_langs
        self.video_id = video_id
