"""
client.py — HTTP plumbing shared by both network stages.

Both the watch-page fetch and the transcript-document fetch send the same
headers through the same requests.Session, so that is built here once.
"""

from __future__ import annotations

import logging

import requests

from ytranscript.models import TranscriptConfig

logger = logging.getLogger(__name__)

# Fixed desktop-browser User-Agent.  YouTube serves the full watch page
# (including the captions JSON) to this string.
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/85.0.4183.83 Safari/537.36,gzip(gfe)"
)


def build_headers(config: TranscriptConfig) -> dict[str, str]:
    """
    Build request headers for a pipeline request.

    Accept-Language is only sent when the caller asked for a language.
    """
    headers = {"User-Agent": USER_AGENT}
    if config.lang:
        headers["Accept-Language"] = config.lang
    return headers


def new_session() -> requests.Session:
    """Create a session for connection reuse across the two pipeline calls."""
    return requests.Session()


def fetch(
    session: requests.Session,
    url: str,
    headers: dict[str, str],
    timeout: float | None = None,
) -> tuple[int, str]:
    """
    GET a URL and return (status_code, decoded body).

    Single attempt, no retries.  requests.RequestException propagates so each
    caller can classify the failure for its own stage.

    Raises:
        requests.RequestException: Connection, TLS, timeout, or body decoding
                                   failure.
    """
    logger.debug("GET %s", url)
    response = session.get(url, headers=headers, timeout=timeout)
    try:
        body = response.text
    except (UnicodeDecodeError, LookupError) as exc:
        raise requests.RequestException(f"Could not decode response from {url}") from exc
    logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(body))
    return response.status_code, body
