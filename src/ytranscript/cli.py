"""
cli.py — Command-line interface for ytranscript.

Provides the `ytranscript` command group (registered as a console script
in pyproject.toml):

    get     Fetch a transcript from YouTube.
    tracks  List the caption languages a video offers.

Usage examples:
    ytranscript get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    ytranscript get dQw4w9WgXcQ --lang de --format json
    YTRANSCRIPT_LANG=fr ytranscript get dQw4w9WgXcQ -o transcript.md -f doc
    ytranscript tracks dQw4w9WgXcQ
"""

from __future__ import annotations

import json
import logging
import sys

import click

from ytranscript.errors import TranscriptError
from ytranscript.extractor import extract, list_languages


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Environment variable consulted when --lang isn't given.
_LANG_ENVVAR = "YTRANSCRIPT_LANG"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# CLI group — the top-level `ytranscript` command
# ---------------------------------------------------------------------------

# Shared by every subcommand so `-v` can go after the video argument.
_verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log every request and pipeline stage to stderr.",
)


@click.group()
def main() -> None:
    """
    ytranscript — fetch YouTube video transcripts by scraping the watch page.
    """
    # The group itself does nothing; each subcommand handles its own logic.
    pass


# ---------------------------------------------------------------------------
# Subcommand: get — fetch a transcript from YouTube
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--format", "-f",
    "fmt",                           # avoid shadowing the builtin "format"
    type=click.Choice(["text", "json", "doc"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: plain text, JSON with timings, or readable markdown document.",
)
@click.option(
    "--lang", "-l",
    default=None,
    envvar=_LANG_ENVVAR,
    help="Caption language code (e.g. 'de').  Defaults to the first track YouTube lists.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write output to a file instead of stdout.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-request timeout in seconds.  No timeout by default.",
)
@_verbose_option
def get(
    video: str,
    fmt: str,
    lang: str | None,
    output: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """
    Fetch a YouTube video transcript.

    URL_OR_ID can be a full YouTube URL or an 11-character video ID.
    """
    _configure_logging(verbose)
    try:
        result = extract(video, lang=lang or None, fmt=fmt.lower(), timeout=timeout)
    except TranscriptError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    if isinstance(result, dict):
        text = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        text = result

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Transcript written to {output}", err=True)
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# Subcommand: tracks — list available caption languages
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Request timeout in seconds.  No timeout by default.",
)
@_verbose_option
def tracks(video: str, timeout: float | None, verbose: bool) -> None:
    """
    List the caption languages a video offers, in the order YouTube lists them.

    The first one is what `get` uses when no --lang is given.
    """
    _configure_logging(verbose)
    try:
        video_id, languages = list_languages(video, timeout=timeout)
    except TranscriptError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    if not languages:
        click.echo(f"No caption tracks found for {video_id}.")
        return

    for code in languages:
        click.echo(code)
