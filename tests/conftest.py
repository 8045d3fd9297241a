"""
conftest.py — Shared fixtures for the test suite.

The captured watch page and transcript document under tests/fixtures/ let
the full pipeline run offline: a MagicMock stands in for requests.Session
and hands back those documents in call order.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def make_response(text: str, status_code: int = 200) -> MagicMock:
    """Build a fake requests.Response with .text and .status_code."""
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    return response


def make_session(*responses) -> MagicMock:
    """
    Build a fake requests.Session whose get() returns (or raises) each of
    `responses` in turn.
    """
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


@pytest.fixture()
def watch_page() -> str:
    """A captured watch page offering en, de-DE and ja caption tracks."""
    return (FIXTURES / "watch_page.html").read_text(encoding="utf-8")


@pytest.fixture()
def transcript_xml() -> str:
    """A captured timedtext document with six entries."""
    return (FIXTURES / "transcript.xml").read_text(encoding="utf-8")
