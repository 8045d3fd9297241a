"""
test_client.py — Tests for the shared HTTP helpers.
"""

from __future__ import annotations

from unittest.mock import MagicMock, PropertyMock

import pytest
import requests

from conftest import make_response, make_session
from ytranscript.client import USER_AGENT, build_headers, fetch, new_session
from ytranscript.models import TranscriptConfig


class TestBuildHeaders:
    """Tests for build_headers()."""

    def test_user_agent_only(self) -> None:
        assert build_headers(TranscriptConfig()) == {"User-Agent": USER_AGENT}

    def test_accept_language_when_lang_set(self) -> None:
        assert build_headers(TranscriptConfig(lang="fr")) == {
            "User-Agent": USER_AGENT,
            "Accept-Language": "fr",
        }

    def test_empty_lang_is_unset(self) -> None:
        assert "Accept-Language" not in build_headers(TranscriptConfig(lang=""))


class TestFetch:
    """Tests for fetch()."""

    def test_returns_status_and_body(self) -> None:
        session = make_session(make_response("body", status_code=201))

        assert fetch(session, "https://example.test/", {"User-Agent": "x"}) == (201, "body")
        session.get.assert_called_once_with(
            "https://example.test/", headers={"User-Agent": "x"}, timeout=None,
        )

    def test_transport_errors_propagate(self) -> None:
        session = make_session(requests.ConnectionError("boom"))
        with pytest.raises(requests.ConnectionError):
            fetch(session, "https://example.test/", {})

    def test_undecodable_body_becomes_request_exception(self) -> None:
        response = MagicMock()
        response.status_code = 200
        type(response).text = PropertyMock(
            side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
        )
        session = make_session(response)

        with pytest.raises(requests.RequestException):
            fetch(session, "https://example.test/", {})


def test_new_session_is_requests_session() -> None:
    session = new_session()
    try:
        assert isinstance(session, requests.Session)
    finally:
        session.close()
