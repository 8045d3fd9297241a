"""
watch_page.py — Pull the caption track list out of a YouTube watch page.

YouTube has no public transcript API.  The watch page, however, embeds the
player response JSON in a script tag, and that JSON lists every caption
track with its language code and a timedtext URL.  Everything that depends
on the shape of that undocumented payload lives in this module, so a markup
change on YouTube's side should only ever need edits here.

The main entry point is scrape_caption_tracks().
"""

from __future__ import annotations

import json
import logging

import requests

from ytranscript.client import build_headers, fetch, new_session
from ytranscript.errors import (
    TooManyRequestsError,
    TranscriptDisabledError,
    TranscriptNotAvailableError,
    VideoUnavailableError,
)
from ytranscript.models import CaptionTrack, TranscriptConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# The captions JSON starts right after this key and ends where the
# videoDetails object begins.
_CAPTIONS_MARKER = '"captions":'
_VIDEO_DETAILS_MARKER = ',"videoDetails'

# Present on the "unusual traffic" interstitial instead of the player.
_RECAPTCHA_MARKER = 'class="g-recaptcha"'

# Every real, existing video's player response carries this key, even when
# captions are switched off.
_PLAYABILITY_MARKER = '"playabilityStatus":'


# ---------------------------------------------------------------------------
# Page parsing
# ---------------------------------------------------------------------------

def _classify_missing_captions(body: str, video_id: str) -> Exception:
    """
    Decide why a watch page has no captions block.

    Order matters: the CAPTCHA page also lacks a playability status, so it
    has to be checked first or a rate limit would look like a deleted video.
    """
    if _RECAPTCHA_MARKER in body:
        return TooManyRequestsError()
    if _PLAYABILITY_MARKER not in body:
        return VideoUnavailableError(video_id)
    return TranscriptDisabledError(video_id)


def _load_captions_json(fragment: str):
    """Parse the captions fragment, returning None when it isn't valid JSON."""
    raw = fragment.split(_VIDEO_DETAILS_MARKER)[0].replace("\n", "")
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, RecursionError):
        logger.debug("Captions fragment is not valid JSON")
        return None


def parse_caption_tracks(body: str, video_id: str) -> list[CaptionTrack]:
    """
    Extract the ordered caption track list from a watch-page body.

    Args:
        body:     Raw HTML of the watch page.
        video_id: The video the page belongs to (used in error messages).

    Returns:
        CaptionTrack records in the order YouTube listed them.

    Raises:
        TooManyRequestsError:        The page is a CAPTCHA challenge.
        VideoUnavailableError:       The video doesn't exist or was removed.
        TranscriptDisabledError:     The video has no captions block.
        TranscriptNotAvailableError: The captions block has no track list.
    """
    parts = body.split(_CAPTIONS_MARKER)
    if len(parts) <= 1:
        raise _classify_missing_captions(body, video_id)

    captions = _load_captions_json(parts[1])

    # A renderer key holding null still counts as present.
    if not isinstance(captions, dict) or "playerCaptionsTracklistRenderer" not in captions:
        raise TranscriptDisabledError(video_id)
    renderer = captions["playerCaptionsTracklistRenderer"]

    raw_tracks = renderer.get("captionTracks") if isinstance(renderer, dict) else None
    if not isinstance(raw_tracks, list):
        raise TranscriptNotAvailableError(video_id)

    tracks = []
    for raw in raw_tracks:
        if not isinstance(raw, dict):
            continue
        language_code = raw.get("languageCode")
        base_url = raw.get("baseUrl")
        tracks.append(CaptionTrack(
            language_code=language_code if isinstance(language_code, str) else "",
            base_url=base_url if isinstance(base_url, str) else "",
        ))

    logger.debug("Found %d caption track(s) for %s", len(tracks), video_id)
    return tracks


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def scrape_caption_tracks(
    video_id: str,
    config: TranscriptConfig,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[CaptionTrack]:
    """
    Download the watch page for a video and return its caption tracks.

    Args:
        video_id: The 11-character YouTube video ID.
        config:   Request options; config.lang is sent as Accept-Language.
        session:  Optional shared session.  A throwaway one is used otherwise.
        timeout:  Optional per-request timeout in seconds.

    Raises:
        TranscriptDisabledError: On any transport failure, in addition to the
                                 cases listed in parse_caption_tracks().
    """
    url = WATCH_URL.format(video_id=video_id)
    headers = build_headers(config)

    owns_session = session is None
    if owns_session:
        session = new_session()
    try:
        _, body = fetch(session, url, headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Watch page fetch failed for %s: %s", video_id, exc)
        raise TranscriptDisabledError(video_id) from exc
    finally:
        if owns_session:
            session.close()

    return parse_caption_tracks(body, video_id)
