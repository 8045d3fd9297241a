"""
test_api.py — Tests for the FastAPI web API endpoints.

Uses FastAPI's TestClient (backed by httpx) so tests run in-process without
needing a live server.  The pipeline is mocked so these tests are fast and
don't require network access.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ytranscript.api import app
from ytranscript.errors import (
    InvalidVideoIdError,
    TooManyRequestsError,
    TranscriptDisabledError,
    TranscriptNotAvailableError,
    TranscriptNotAvailableLanguageError,
    VideoUnavailableError,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> TestClient:
    """Create a fresh TestClient for each test."""
    return TestClient(app)


_SAMPLE_TEXT = "Hello world\nSecond line"
_SAMPLE_JSON = {
    "video_id": "dQw4w9WgXcQ",
    "entry_count": 2,
    "entries": [
        {"text": "Hello world", "offset": 0.0, "duration": 1.5, "lang": "en"},
        {"text": "Second line", "offset": 1.5, "duration": 2.0, "lang": "en"},
    ],
}


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------

class TestHealth:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# Transcript endpoint — success cases
# ---------------------------------------------------------------------------

class TestTranscriptEndpoint:
    """Tests for GET /transcript/{video_id} with mocked extraction."""

    @patch("ytranscript.api.extract")
    def test_text_format(self, mock_extract: MagicMock, client: TestClient) -> None:
        """Default format=text returns plain text with 200."""
        mock_extract.return_value = _SAMPLE_TEXT

        resp = client.get("/transcript/dQw4w9WgXcQ")

        assert resp.status_code == 200
        assert resp.text == _SAMPLE_TEXT
        mock_extract.assert_called_once_with("dQw4w9WgXcQ", lang=None, fmt="text")

    @patch("ytranscript.api.extract")
    def test_json_format(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.return_value = _SAMPLE_JSON

        resp = client.get("/transcript/dQw4w9WgXcQ?format=json&lang=en")

        assert resp.status_code == 200
        assert resp.json() == _SAMPLE_JSON
        mock_extract.assert_called_once_with("dQw4w9WgXcQ", lang="en", fmt="json")

    def test_invalid_format_rejected(self, client: TestClient) -> None:
        """FastAPI validates the format pattern before our code runs."""
        resp = client.get("/transcript/dQw4w9WgXcQ?format=xml")
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Transcript endpoint — error mapping
# ---------------------------------------------------------------------------

class TestErrorMapping:
    """Each TranscriptError subclass maps to its own status code."""

    @pytest.mark.parametrize("error, status", [
        (InvalidVideoIdError("bad"), 400),
        (TooManyRequestsError(), 429),
        (VideoUnavailableError("dQw4w9WgXcQ"), 404),
        (TranscriptDisabledError("dQw4w9WgXcQ"), 404),
        (TranscriptNotAvailableError("dQw4w9WgXcQ"), 404),
    ])
    @patch("ytranscript.api.extract")
    def test_status_codes(
        self, mock_extract: MagicMock, error: Exception, status: int, client: TestClient,
    ) -> None:
        mock_extract.side_effect = error

        resp = client.get("/transcript/dQw4w9WgXcQ")

        assert resp.status_code == status
        assert resp.json() == {"error": error.message}

    @patch("ytranscript.api.extract")
    def test_language_error_lists_available(self, mock_extract: MagicMock, client: TestClient) -> None:
        mock_extract.side_effect = TranscriptNotAvailableLanguageError("pt", ["en", "de"], "dQw4w9WgXcQ")

        resp = client.get("/transcript/dQw4w9WgXcQ?lang=pt")

        assert resp.status_code == 400
        body = resp.json()
        assert body["available_langs"] == ["en", "de"]
        assert "pt" in body["error"]


# ---------------------------------------------------------------------------
# Tracks endpoint
# ---------------------------------------------------------------------------

class TestTracksEndpoint:
    """Tests for GET /tracks/{video_id}."""

    @patch("ytranscript.api.list_languages")
    def test_lists_languages(self, mock_list: MagicMock, client: TestClient) -> None:
        mock_list.return_value = ("dQw4w9WgXcQ", ["en", "ja"])

        resp = client.get("/tracks/dQw4w9WgXcQ")

        assert resp.status_code == 200
        assert resp.json() == {"video_id": "dQw4w9WgXcQ", "languages": ["en", "ja"]}

    @patch("ytranscript.api.list_languages")
    def test_disabled(self, mock_list: MagicMock, client: TestClient) -> None:
        mock_list.side_effect = TranscriptDisabledError("dQw4w9WgXcQ")

        resp = client.get("/tracks/dQw4w9WgXcQ")

        assert resp.status_code == 404
